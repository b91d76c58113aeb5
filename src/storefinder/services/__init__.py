"""
Business logic services for store search.

Provides modular components for:
- Smart Store classification and per-store grouping
- Store intersection across keywords
- The top-level store search (services.store_search)
"""

from .store_extractor import (
    group_by_store,
    generate_store_id,
    is_smart_store_product,
    is_smart_store_url,
    merge_store_maps,
    merge_store_products,
    to_store_product,
)
from .intersection import count_keyword_appearances, find_intersection, get_all_stores

__all__ = [
    'group_by_store',
    'generate_store_id',
    'is_smart_store_product',
    'is_smart_store_url',
    'merge_store_maps',
    'merge_store_products',
    'to_store_product',
    'count_keyword_appearances',
    'find_intersection',
    'get_all_stores',
]
