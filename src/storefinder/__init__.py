"""
Store Finder - Smart Store intersection search.

Finds Naver Smart Stores that sell products for every one of several
keywords, using a progressive multi-sort search over the Naver Shopping API.
"""

__version__ = "1.0.0"

from .models import ShoppingItem, SmartStore, StoreProduct, StoreSearchResult
from .search import MultiSortSearch, NaverShoppingClient, SearchSettings
from .services.store_search import search_stores

__all__ = [
    "ShoppingItem",
    "SmartStore",
    "StoreProduct",
    "StoreSearchResult",
    "MultiSortSearch",
    "NaverShoppingClient",
    "SearchSettings",
    "search_stores",
]
