from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompetitorRecord(BaseModel):
    """A product listing returned by the store catalog.

    Immutable once fetched; the engine only derives new values from it.
    ``released`` keeps the store's own date text (e.g. ``"Mar 4, 2015"``)
    and is parsed lazily so a malformed date never rejects the record.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Store package id, unique per listing")
    title: str = ""
    summary: str = ""
    description: str = ""
    developer_name: str = ""
    developer_id: Optional[str] = None
    genre: Optional[str] = None
    genre_id: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0.0, le=5.0)
    ratings_count: int = Field(0, ge=0)
    review_count: int = Field(0, ge=0)
    total_installs: int = Field(0, ge=0, description="Lifetime installs lower bound")
    installs_text: Optional[str] = None
    released: Optional[str] = None
    price: float = 0.0
    free: bool = True
    currency: Optional[str] = None
    icon: Optional[str] = None
    content_rating: Optional[str] = None
    version: Optional[str] = None
    ad_supported: bool = False
    contains_ads: bool = False
    offers_iap: bool = False
    url: Optional[str] = None

    @property
    def monetized(self) -> bool:
        """True if the listing shows ads or sells in-app purchases."""
        return self.ad_supported or self.contains_ads or self.offers_iap

    @property
    def text_blob(self) -> str:
        """Title, summary and description joined for lexical matching."""
        return f"{self.title} {self.summary} {self.description}"


class ScoredCompetitor(CompetitorRecord):
    """A catalog record plus the values derived for one idea."""

    similarity_index: int = Field(..., ge=0, le=100)
    estimated_recent_installs: int = Field(
        ...,
        ge=0,
        description="Modelled installs over the trailing 30 days",
    )


class AppDetail(CompetitorRecord):
    """Full store page for one app, as served by the detail endpoint."""

    score_text: Optional[str] = None
    max_installs: Optional[int] = Field(None, ge=0)
    size: Optional[str] = None
    android_version: Optional[str] = None
    android_version_text: Optional[str] = None
    updated: Optional[int] = Field(None, description="Last update, epoch seconds")
    family_genre: Optional[str] = None
    family_genre_id: Optional[str] = None
    content_rating_description: Optional[str] = None
    screenshots: list[str] = Field(default_factory=list)
    video: Optional[str] = None
    video_image: Optional[str] = None
    recent_changes: str = ""
    histogram: list[int] = Field(
        default_factory=list,
        description="Rating counts for 1 to 5 stars",
    )


class SearchHit(BaseModel):
    """Slim store search result (no detail page fetched)."""

    id: str
    title: str = ""
    summary: str = ""
    developer: str = ""
    icon: Optional[str] = None
    rating: Optional[float] = None
    ratings: int = Field(0, ge=0)
    price: float = 0.0
    free: bool = True
    url: Optional[str] = None
    genre: Optional[str] = None
    genre_id: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    count: int = Field(..., ge=0)
    results: list[SearchHit]
