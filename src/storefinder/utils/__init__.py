"""
Utility modules for Store Finder.
"""
from .validators import validate_keywords, validate_single_keyword
from .text_cleaning import normalize_whitespace, strip_html_tags
from .cache import MemoryCache, naver_api_cache
from .rate_limit import FixedWindowRateLimiter, RateLimitStatus

__all__ = [
    "validate_keywords",
    "validate_single_keyword",
    "normalize_whitespace",
    "strip_html_tags",
    "MemoryCache",
    "naver_api_cache",
    "FixedWindowRateLimiter",
    "RateLimitStatus",
]
