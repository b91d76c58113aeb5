"""
Smart Store classification and per-store aggregation.

Naver Shopping returns product links like
``https://smartstore.naver.com/main/products/{id}`` with no store identifier
in the URL, so the store is identified by the item's ``mallName``.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable

from ..models import ShoppingItem, SmartStore, StoreProduct
from ..utils.text_cleaning import strip_html_tags

# Smart Store and Brand Store domains
SMART_STORE_URL_PATTERNS = [
    re.compile(r'smartstore\.naver\.com'),
    re.compile(r'brand\.naver\.com'),
]

# Mall name Naver uses for its own listings; never a third-party store
FIRST_PARTY_MALL_NAME = "네이버"


def is_smart_store_url(link: str) -> bool:
    """Check whether a product link points at a Smart Store or Brand Store."""
    if not link:
        return False
    return any(pattern.search(link) for pattern in SMART_STORE_URL_PATTERNS)


def is_smart_store_product(item: ShoppingItem) -> bool:
    """
    Classify a search result item.

    Only Smart Store / Brand Store URLs pass; price-comparison pages and
    other open markets (Coupang, 11st, Gmarket, ...) are rejected.
    """
    return is_smart_store_url(item.link)


def generate_store_id(mall_name: str) -> str:
    """
    Normalize a mall name into the store identity.

    Examples:
        >>> generate_store_id("  STORE Name ")
        'store name'
    """
    return mall_name.strip().casefold()


def to_store_product(item: ShoppingItem, keyword: str) -> StoreProduct:
    """Convert a raw item into a StoreProduct tagged with the matching keyword."""
    return StoreProduct(
        title=strip_html_tags(item.title),
        link=item.link,
        image=item.image,
        price=item.lprice,
        keywords=[keyword],
    )


def group_by_store(items: Iterable[ShoppingItem], keyword: str) -> Dict[str, SmartStore]:
    """
    Group Smart Store items by store identity.

    Items outside the storefront program, items without a mall name and
    first-party listings are skipped. A product is added to its store only
    once per link.

    Args:
        items: Raw items from one or more search pages
        keyword: Keyword the items were searched with

    Returns:
        Mapping of store_id -> SmartStore
    """
    stores: Dict[str, SmartStore] = {}

    for item in items:
        if not is_smart_store_product(item):
            continue

        mall_name = item.mall_name
        if not mall_name or not mall_name.strip() or mall_name.strip() == FIRST_PARTY_MALL_NAME:
            continue

        store_id = generate_store_id(mall_name)
        product = to_store_product(item, keyword)
        store = stores.get(store_id)

        if store is None:
            stores[store_id] = SmartStore(
                store_id=store_id,
                store_name=mall_name,
                products=[product],
            )
        elif not store.has_product(product.link):
            store.products.append(product)

    return stores


def merge_store_products(existing: SmartStore, new_store: SmartStore) -> SmartStore:
    """
    Merge two aggregates of the same store into a new one.

    Products are unioned by link. When both sides hold the same link the
    result keeps one product whose keywords are the union of both, in order
    of first appearance. Neither input is modified.

    The resulting product order is `existing` first, then products only
    present in `new_store`; callers must not rely on it.
    """
    products: Dict[str, StoreProduct] = {}

    for product in existing.products:
        if product.link not in products:
            products[product.link] = product.copy()
        else:
            _merge_keywords(products[product.link], product)

    for product in new_store.products:
        current = products.get(product.link)
        if current is None:
            products[product.link] = product.copy()
        else:
            _merge_keywords(current, product)

    return SmartStore(
        store_id=existing.store_id,
        store_name=existing.store_name,
        products=list(products.values()),
    )


def _merge_keywords(target: StoreProduct, source: StoreProduct) -> None:
    for keyword in source.keywords:
        if keyword not in target.keywords:
            target.keywords.append(keyword)


def merge_store_maps(
    existing: Dict[str, SmartStore],
    incoming: Dict[str, SmartStore],
) -> Dict[str, SmartStore]:
    """
    Fold a freshly grouped store map into a running per-keyword map.

    `existing` is updated in place and returned.
    """
    for store_id, store in incoming.items():
        current = existing.get(store_id)
        if current is None:
            existing[store_id] = store
        else:
            existing[store_id] = merge_store_products(current, store)
    return existing
