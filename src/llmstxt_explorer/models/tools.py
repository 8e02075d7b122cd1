from __future__ import annotations

from pydantic import BaseModel, field_validator


class CheckWebsiteInput(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v:
            raise ValueError("URL is required")
        return v


class ListWebsitesInput(BaseModel):
    filter_llms_txt: bool = False
    filter_llms_full_txt: bool = False
