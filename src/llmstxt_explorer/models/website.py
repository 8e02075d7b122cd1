from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Website(BaseModel):
    """Single entry in the known-websites index (llms-txt-hub websites.json)."""

    # Fields beyond the known ones (tags, dates, ...) are kept and served back as-is
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    name: str
    domain: str
    description: str
    llms_txt_url: str | None = None
    llms_full_txt_url: str | None = None
    category: str | None = None
    favicon: str | None = None

    def to_json_dict(self) -> dict:
        """Camel-cased dict with unset optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class WebsiteIndex:
    """In-memory lookups built from the known-websites list at startup."""

    # registry order, as served by list_websites and resource listing
    websites: list[Website] = field(default_factory=list)

    # hostname → website  e.g. "supabase.com" → Supabase
    by_hostname: dict[str, Website] = field(default_factory=dict)
