"""
Pydantic schemas for API validation and data contracts.
"""

from .search import (
    SearchRequest,
    StoreProductSchema,
    SmartStoreSchema,
    SearchStatsSchema,
    SearchData,
    SearchResponse,
)

__all__ = [
    'SearchRequest',
    'StoreProductSchema',
    'SmartStoreSchema',
    'SearchStatsSchema',
    'SearchData',
    'SearchResponse',
]
