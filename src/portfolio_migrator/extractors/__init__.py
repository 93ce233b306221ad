"""Content extraction components for the legacy portfolio page."""

from .content_extractor import ContentExtractor
from .fetcher import FetchResult, HtmlFetcher
from .personal_info import extract_personal_info, first_match

__all__ = [
    "ContentExtractor",
    "FetchResult",
    "HtmlFetcher",
    "extract_personal_info",
    "first_match",
]
