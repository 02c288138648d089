"""Google Play catalog adapter.

Wraps ``google-play-scraper`` behind two async operations, ``search`` and
``fetch_detail``, and maps raw store dicts onto ``CompetitorRecord``.

Rules
-----
- NO retries, timeouts or caching (owned by the scraper / callers)
- Every scraper failure surfaces as ``CatalogError``; an unknown app id as
  ``CatalogNotFoundError``
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import google_play_scraper as gps
from google_play_scraper.exceptions import NotFoundError

from ..constants import PLAY_STORE_APP_URL
from ..schemas.competitor_schema import AppDetail, CompetitorRecord, SearchHit

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """The store catalog could not serve a request."""


class CatalogNotFoundError(CatalogError):
    """The requested app id does not exist in the store."""

    def __init__(self, app_id: str):
        super().__init__(f"App not found: {app_id}")
        self.app_id = app_id


# ===================================================================== #
#  Internal helpers                                                       #
# ===================================================================== #

def _parse_installs(installs: Any) -> int:
    """Convert an installs string like '100,000,000+' to an integer."""
    if isinstance(installs, (int, float)):
        return max(0, int(installs))
    if not installs:
        return 0
    digits = str(installs).replace(",", "").replace("+", "").strip()
    return int(digits) if digits.isdigit() else 0


def _text(value: Any) -> str:
    return str(value) if value is not None else ""


def _count(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return None


def _optional_text(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def _rating(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return None
    return min(5.0, max(0.0, rating))


def _app_url(raw: Dict[str, Any], app_id: str) -> str:
    return raw.get("url") or PLAY_STORE_APP_URL.format(app_id=app_id)


def to_record(raw: Dict[str, Any]) -> CompetitorRecord:
    """Map a store dict (search hit or detail page) to a ``CompetitorRecord``."""
    app_id = raw["appId"]
    total = raw.get("minInstalls")
    if total is None:
        total = _parse_installs(raw.get("installs"))

    return CompetitorRecord(
        id=app_id,
        title=_text(raw.get("title")),
        summary=_text(raw.get("summary")),
        description=_text(raw.get("description")),
        developer_name=_text(raw.get("developer")),
        developer_id=raw.get("developerId"),
        genre=raw.get("genre"),
        genre_id=raw.get("genreId"),
        rating=_rating(raw.get("score")),
        ratings_count=_count(raw.get("ratings")),
        review_count=_count(raw.get("reviews")),
        total_installs=_count(total),
        installs_text=raw.get("installs") if isinstance(raw.get("installs"), str) else None,
        released=raw.get("released"),
        price=float(raw.get("price") or 0.0),
        free=bool(raw.get("free", True)),
        currency=raw.get("currency"),
        icon=raw.get("icon"),
        content_rating=raw.get("contentRating"),
        version=raw.get("version"),
        ad_supported=bool(raw.get("adSupported")),
        contains_ads=bool(raw.get("containsAds")),
        offers_iap=bool(raw.get("offersIAP")),
        url=_app_url(raw, app_id),
    )


def to_app_detail(raw: Dict[str, Any]) -> AppDetail:
    """Map a store detail page to an ``AppDetail``, keeping the display-only fields."""
    record = to_record(raw)
    return AppDetail(
        **record.model_dump(),
        score_text=_optional_text(raw.get("scoreText")),
        max_installs=_optional_int(raw.get("maxInstalls")),
        size=_optional_text(raw.get("size")),
        android_version=_optional_text(raw.get("androidVersion")),
        android_version_text=_optional_text(raw.get("androidVersionText")),
        updated=_optional_int(raw.get("updated")),
        family_genre=raw.get("familyGenre"),
        family_genre_id=raw.get("familyGenreId"),
        content_rating_description=raw.get("contentRatingDescription"),
        screenshots=[str(s) for s in (raw.get("screenshots") or []) if s],
        video=raw.get("video"),
        video_image=raw.get("videoImage"),
        recent_changes=_text(raw.get("recentChanges")),
        histogram=[_count(v) for v in (raw.get("histogram") or [])],
    )


def to_search_hit(raw: Dict[str, Any]) -> SearchHit:
    app_id = raw["appId"]
    return SearchHit(
        id=app_id,
        title=_text(raw.get("title")),
        summary=_text(raw.get("summary")),
        developer=_text(raw.get("developer")),
        icon=raw.get("icon"),
        rating=_rating(raw.get("score")),
        ratings=_count(raw.get("ratings")),
        price=float(raw.get("price") or 0.0),
        free=bool(raw.get("free", True)),
        url=_app_url(raw, app_id),
        genre=raw.get("genre"),
        genre_id=raw.get("genreId"),
    )


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

class PlayStoreCatalog:
    """Async facade over the blocking ``google-play-scraper`` calls."""

    def __init__(self, lang: str = "en", country: str = "us"):
        self.lang = lang
        self.country = country

    async def _raw_search(self, term: str, limit: int, country: str) -> List[Dict[str, Any]]:
        logger.info("[CATALOG] Searching %r (country=%s, n=%d)", term, country, limit)
        try:
            hits = await asyncio.to_thread(
                gps.search, term, lang=self.lang, country=country, n_hits=limit,
            )
        except Exception as exc:
            logger.warning("[CATALOG] Search failed for %r: %s", term, exc)
            raise CatalogError(f"Search failed for {term!r}: {exc}") from exc
        # The store occasionally returns promoted cards without a package id.
        return [h for h in (hits or []) if h.get("appId")][:limit]

    async def _raw_detail(self, app_id: str, country: str) -> Dict[str, Any]:
        try:
            return await asyncio.to_thread(
                gps.app, app_id, lang=self.lang, country=country,
            )
        except NotFoundError as exc:
            raise CatalogNotFoundError(app_id) from exc
        except Exception as exc:
            logger.warning("[CATALOG] Detail failed for %s: %s", app_id, exc)
            raise CatalogError(f"Detail lookup failed for {app_id}: {exc}") from exc

    async def search(
        self,
        term: str,
        limit: int,
        full_detail: bool = True,
        country: Optional[str] = None,
    ) -> List[CompetitorRecord]:
        """Search the store; with *full_detail* every hit's page is fetched."""
        country = country or self.country
        hits = await self._raw_search(term, limit, country)
        if not full_detail:
            return [to_record(h) for h in hits]

        details = await asyncio.gather(
            *(self._raw_detail(h["appId"], country) for h in hits)
        )
        logger.info("[CATALOG] %d detailed results for %r", len(details), term)
        return [to_record(d) for d in details]

    async def search_hits(
        self,
        term: str,
        limit: int,
        country: Optional[str] = None,
    ) -> List[SearchHit]:
        """Lightweight search used by the browse endpoint."""
        hits = await self._raw_search(term, limit, country or self.country)
        return [to_search_hit(h) for h in hits]

    async def fetch_detail(self, app_id: str, country: Optional[str] = None) -> AppDetail:
        raw = await self._raw_detail(app_id, country or self.country)
        return to_app_detail(raw)
