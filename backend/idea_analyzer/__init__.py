"""Play Store idea analyzer: competitor discovery and opportunity scoring."""

__version__ = "0.1.0"
