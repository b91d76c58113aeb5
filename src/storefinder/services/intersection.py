"""
Store intersection across per-keyword search results.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..models import SmartStore
from .store_extractor import merge_store_products

StoreMap = Dict[str, SmartStore]


def _rank(stores: List[SmartStore]) -> List[SmartStore]:
    # Stable: ties keep first-map key order
    return sorted(stores, key=lambda s: s.product_count, reverse=True)


def find_intersection(stores_by_keyword: Sequence[StoreMap]) -> List[SmartStore]:
    """
    Find stores that appear in every keyword's result map.

    Each surviving store is merged across all maps, so its product list
    carries the products (and keyword tags) found for every keyword.

    Returns:
        Stores sorted by product count, most products first
    """
    if not stores_by_keyword:
        return []

    if len(stores_by_keyword) == 1:
        return _rank(list(stores_by_keyword[0].values()))

    intersection_ids = set(stores_by_keyword[0].keys())
    for stores in stores_by_keyword[1:]:
        intersection_ids &= set(stores.keys())

    result: List[SmartStore] = []
    # Iterate the first map to keep a deterministic order before ranking
    for store_id in stores_by_keyword[0]:
        if store_id not in intersection_ids:
            continue

        merged: Optional[SmartStore] = None
        for stores in stores_by_keyword:
            store = stores[store_id]
            merged = store.copy() if merged is None else merge_store_products(merged, store)

        result.append(merged)

    return _rank(result)


def get_all_stores(stores_by_keyword: Sequence[StoreMap]) -> StoreMap:
    """Union of all keyword maps, with stores present in several maps merged."""
    all_stores: StoreMap = {}

    for stores in stores_by_keyword:
        for store_id, store in stores.items():
            existing = all_stores.get(store_id)
            if existing is None:
                all_stores[store_id] = store.copy()
            else:
                all_stores[store_id] = merge_store_products(existing, store)

    return all_stores


def count_keyword_appearances(stores_by_keyword: Sequence[StoreMap]) -> Dict[str, int]:
    """Count in how many keyword maps each store appears."""
    counts: Dict[str, int] = {}

    for stores in stores_by_keyword:
        for store_id in stores:
            counts[store_id] = counts.get(store_id, 0) + 1

    return counts
