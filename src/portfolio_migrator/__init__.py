"""Portfolio Migrator - move a legacy portfolio site's content into structured data."""

__version__ = "0.1.0"
