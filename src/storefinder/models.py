"""
Data models for Store Finder.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True, frozen=True)
class ShoppingItem:
    """
    One item from a Naver Shopping search page, as returned by the API.

    Attributes:
        title: Product title (may contain <b> markup around matched terms)
        link: Product URL
        image: Thumbnail URL
        lprice: Lowest price as a numeric string
        hprice: Highest price as a numeric string (often empty)
        mall_name: Seller/mall name, the basis for store identity
        product_id: Naver product identifier
        product_type: Naver product-type code
    """

    title: str = ""
    link: str = ""
    image: str = ""
    lprice: str = ""
    hprice: str = ""
    mall_name: str = ""
    product_id: str = ""
    product_type: str = ""
    brand: str = ""
    maker: str = ""
    category1: str = ""
    category2: str = ""
    category3: str = ""
    category4: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ShoppingItem:
        """Build an item from the API's camelCase JSON object."""
        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            title=text("title"),
            link=text("link"),
            image=text("image"),
            lprice=text("lprice"),
            hprice=text("hprice"),
            mall_name=text("mallName"),
            product_id=text("productId"),
            product_type=text("productType"),
            brand=text("brand"),
            maker=text("maker"),
            category1=text("category1"),
            category2=text("category2"),
            category3=text("category3"),
            category4=text("category4"),
        )


@dataclass(slots=True)
class SearchPage:
    """A single page of search results."""

    last_build_date: str = ""
    total: int = 0
    start: int = 1
    display: int = 0
    items: List[ShoppingItem] = field(default_factory=list)
    cached: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SearchPage:
        return cls(
            last_build_date=str(data.get("lastBuildDate") or ""),
            total=int(data.get("total") or 0),
            start=int(data.get("start") or 1),
            display=int(data.get("display") or 0),
            items=[ShoppingItem.from_dict(item) for item in data.get("items") or []],
        )


@dataclass(slots=True)
class StoreProduct:
    """
    A normalized product belonging to a store.

    Attributes:
        title: Title with markup stripped
        link: Product URL, unique within a store
        image: Thumbnail URL
        price: Lowest price as a numeric string
        keywords: Keywords that matched this product, first-seen order, no duplicates
    """

    title: str
    link: str
    image: str = ""
    price: str = ""
    keywords: List[str] = field(default_factory=list)

    def copy(self) -> StoreProduct:
        return StoreProduct(
            title=self.title,
            link=self.link,
            image=self.image,
            price=self.price,
            keywords=list(self.keywords),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "link": self.link,
            "image": self.image,
            "price": self.price,
            "keywords": list(self.keywords),
        }


@dataclass(slots=True)
class SmartStore:
    """
    One storefront and the products found for it.

    Attributes:
        store_id: Trimmed, case-folded mall name (the business key)
        store_name: Mall name in its original casing
        products: Products in first-seen order
    """

    store_id: str
    store_name: str
    products: List[StoreProduct] = field(default_factory=list)

    @property
    def product_count(self) -> int:
        return len(self.products)

    def has_product(self, link: str) -> bool:
        return any(p.link == link for p in self.products)

    def copy(self) -> SmartStore:
        return SmartStore(
            store_id=self.store_id,
            store_name=self.store_name,
            products=[p.copy() for p in self.products],
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "storeId": self.store_id,
            "storeName": self.store_name,
            "products": [p.to_dict() for p in self.products],
        }


@dataclass(slots=True)
class SearchStats:
    """Per-request counters reported alongside the search result."""

    api_calls: int = 0
    pages_searched: int = 0
    cache_hits: int = 0
    stopped_early: bool = False
    cancelled: bool = False
    sort_options_used: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "apiCalls": self.api_calls,
            "pagesSearched": self.pages_searched,
            "cacheHits": self.cache_hits,
            "stoppedEarly": self.stopped_early,
            "cancelled": self.cancelled,
            "sortOptionsUsed": list(self.sort_options_used),
        }
        if self.error:
            result["error"] = self.error
        return result


@dataclass(slots=True)
class StoreSearchResult:
    """Outcome of one top-level store search."""

    intersection_stores: List[SmartStore] = field(default_factory=list)
    total_stores_found: int = 0
    keyword_count: int = 0
    search_stats: SearchStats = field(default_factory=SearchStats)

    def to_dict(self) -> dict:
        """Convert to the API response payload."""
        return {
            "intersectionStores": [s.to_dict() for s in self.intersection_stores],
            "keywordCount": self.keyword_count,
            "totalStoresFound": self.total_stores_found,
            "searchStats": self.search_stats.to_dict(),
        }
