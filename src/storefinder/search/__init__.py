"""
Shopping API access and progressive search orchestration.
"""
from .naver_client import NaverShoppingClient, make_cache_key
from .progressive import MultiSortSearch, SearchOutcome, SearchSettings

__all__ = [
    "NaverShoppingClient",
    "make_cache_key",
    "MultiSortSearch",
    "SearchOutcome",
    "SearchSettings",
]
