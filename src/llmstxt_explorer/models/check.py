from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class LinkedContent(BaseModel):
    """One ``@``-referenced URL from an llms.txt body and its fetch outcome."""

    model_config = _CONFIG

    url: str
    content: str | None = None
    error: str | None = None


class WebsiteCheckResult(BaseModel):
    """Outcome of a single website check. Immutable once returned."""

    model_config = _CONFIG

    has_llms_txt: bool = False
    has_llms_full_txt: bool = False
    llms_txt_url: str | None = None
    llms_full_txt_url: str | None = None
    llms_txt_content: str | None = None
    llms_full_txt_content: str | None = None
    linked_contents: list[LinkedContent] | None = None
    error: str | None = None

    def to_json_dict(self) -> dict:
        """Camel-cased dict with unset optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
