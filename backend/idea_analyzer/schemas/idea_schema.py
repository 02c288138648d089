from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import MAX_KEYWORDS


class AnalyzeRequest(BaseModel):
    """Request body for ``POST /api/analyze``."""

    idea: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        description="Free-text product idea to analyze.",
        examples=["Build a recipe sharing app for home cooks"],
    )
    keywords: Optional[list[str]] = Field(
        None,
        max_length=MAX_KEYWORDS,
        description="Search keywords. Extracted from the idea when omitted.",
    )
    genre: Optional[str] = Field(
        None,
        max_length=100,
        description="Store category the idea targets, e.g. 'Food & Drink'.",
    )
    country: Optional[str] = Field(
        None,
        min_length=2,
        max_length=2,
        description="Two-letter store country code. Defaults to DEFAULT_COUNTRY.",
    )

    @field_validator("idea")
    @classmethod
    def idea_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please provide an app idea to analyze")
        return v

    @field_validator("keywords", mode="before")
    @classmethod
    def drop_blank_keywords(cls, v):
        # Runs ahead of the length cap so blank entries never count against it.
        if not isinstance(v, list):
            return v
        cleaned = [
            k.strip() if isinstance(k, str) else k
            for k in v
            if not (isinstance(k, str) and not k.strip())
        ]
        return cleaned or None

    @field_validator("genre")
    @classmethod
    def blank_genre_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class IdeaInput(BaseModel):
    """The idea as the engine sees it, after keyword resolution."""

    model_config = ConfigDict(frozen=True)

    raw_text: str = Field(..., min_length=1)
    keywords: list[str] = Field(default_factory=list, max_length=MAX_KEYWORDS)
    genre: Optional[str] = None
    locale: Optional[str] = None
