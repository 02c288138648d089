"""FastAPI dependency providing the store catalog."""

from __future__ import annotations

from ..config import default_country, default_lang
from .catalog_provider import PlayStoreCatalog


def get_catalog() -> PlayStoreCatalog:
    """Return a catalog bound to the configured default language and country.

    Overridden in tests with an in-memory fake.
    """
    return PlayStoreCatalog(lang=default_lang(), country=default_country())
