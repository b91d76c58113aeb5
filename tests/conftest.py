"""
Pytest configuration and fixtures for Store Finder tests.
"""
import sys
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest
from storefinder.models import SearchPage, ShoppingItem
from storefinder.search.progressive import SearchSettings


def make_item(
    mall_name: str,
    product_id: str,
    *,
    title: str = None,
    domain: str = "smartstore.naver.com",
    price: str = "10000",
) -> ShoppingItem:
    """Build a search result item with a link on the given domain."""
    return ShoppingItem(
        title=title or f"<b>Product</b> {product_id}",
        link=f"https://{domain}/main/products/{product_id}",
        image=f"https://shopping-phinf.pstatic.net/{product_id}.jpg",
        lprice=price,
        hprice="",
        mall_name=mall_name,
        product_id=product_id,
        product_type="2",
    )


class FakeShoppingClient:
    """
    Stand-in for NaverShoppingClient.

    `pages` maps (keyword, sort, start) to the items of that page; unknown
    pages are empty. Every request is recorded in `calls`.
    """

    def __init__(self, pages=None, fail_on=None, error=None):
        self.pages = pages or {}
        self.fail_on = fail_on
        self.error = error
        self.calls = []

    def fetch_page(self, keyword, display=100, start=1, sort="sim"):
        self.calls.append((keyword, start, sort))
        if self.fail_on is not None and (keyword, start, sort) == self.fail_on:
            raise self.error
        items = self.pages.get((keyword, sort, start), [])
        return SearchPage(total=len(items), start=start, display=display, items=list(items))


@pytest.fixture
def item_factory():
    """Factory for ShoppingItem instances."""
    return make_item


@pytest.fixture
def fake_client_cls():
    return FakeShoppingClient


@pytest.fixture
def no_delay_settings():
    """Search settings with pacing disabled."""
    return SearchSettings(
        display=100,
        max_pages_per_sort=10,
        pages_per_batch=2,
        min_intersection=10,
        sort_options=("sim", "date"),
        delay_between_api_calls=0,
        delay_between_batches=0,
        delay_between_sorts=0,
    )


@pytest.fixture
def sample_api_payload():
    """Sample Naver Shopping API response body."""
    return {
        "lastBuildDate": "Fri, 16 Oct 2026 10:00:00 +0900",
        "total": 3,
        "start": 1,
        "display": 3,
        "items": [
            {
                "title": "<b>단백질</b> 바 12개입",
                "link": "https://smartstore.naver.com/main/products/111",
                "image": "https://shopping-phinf.pstatic.net/111.jpg",
                "lprice": "15900",
                "hprice": "",
                "mallName": "헬시오",
                "productId": "111",
                "productType": "2",
                "brand": "",
                "maker": "",
                "category1": "식품",
                "category2": "건강식품",
                "category3": "",
                "category4": "",
            },
            {
                "title": "단백질 쉐이크",
                "link": "https://search.shopping.naver.com/catalog/222",
                "image": "https://shopping-phinf.pstatic.net/222.jpg",
                "lprice": "29000",
                "hprice": "",
                "mallName": "네이버",
                "productId": "222",
                "productType": "1",
                "brand": "",
                "maker": "",
                "category1": "식품",
                "category2": "",
                "category3": "",
                "category4": "",
            },
            {
                "title": "Protein <b>Bar</b>",
                "link": "https://www.coupang.com/vp/products/333",
                "image": "",
                "lprice": "9900",
                "hprice": "",
                "mallName": "쿠팡",
                "productId": "333",
                "productType": "2",
                "brand": "",
                "maker": "",
                "category1": "식품",
                "category2": "",
                "category3": "",
                "category4": "",
            },
        ],
    }
