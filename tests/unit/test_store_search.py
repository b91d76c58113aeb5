"""
Unit tests for the top-level store search.
"""
from dataclasses import replace
from unittest.mock import patch

import pytest

from storefinder.config import Config
from storefinder.exceptions import ConfigurationError
from storefinder.services.store_search import search_stores


class TestSearchStores:

    def test_builds_intersection_result(self, fake_client_cls, item_factory, no_delay_settings):
        pages = {
            ("protein", "sim", 1): [
                item_factory("Healthy Shop", "p1"),
                item_factory("Gym Mart", "p2"),
            ],
            ("vegan", "sim", 1): [
                item_factory("HEALTHY SHOP", "v1"),
                item_factory("Green Table", "v2"),
            ],
        }
        settings = replace(no_delay_settings, max_pages_per_sort=2, sort_options=("sim",))

        result = search_stores(["protein", "vegan"], client=fake_client_cls(pages), settings=settings)

        assert result.keyword_count == 2
        assert result.total_stores_found == 3
        assert [s.store_id for s in result.intersection_stores] == ["healthy shop"]
        store = result.intersection_stores[0]
        assert store.store_name == "Healthy Shop"
        assert [p.keywords for p in store.products] == [["protein"], ["vegan"]]
        assert result.search_stats.api_calls == 4

    def test_result_payload_shape(self, fake_client_cls, no_delay_settings):
        settings = replace(no_delay_settings, max_pages_per_sort=1, sort_options=("sim",))

        payload = search_stores(["a", "b"], client=fake_client_cls(), settings=settings).to_dict()

        assert payload == {
            "intersectionStores": [],
            "keywordCount": 2,
            "totalStoresFound": 0,
            "searchStats": {
                "apiCalls": 2,
                "pagesSearched": 1,
                "cacheHits": 0,
                "stoppedEarly": False,
                "cancelled": False,
                "sortOptionsUsed": ["sim"],
            },
        }

    def test_missing_credentials_fail_before_any_fetch(self, monkeypatch):
        monkeypatch.setattr(Config, "NAVER_CLIENT_ID", None)
        monkeypatch.setattr(Config, "NAVER_CLIENT_SECRET", None)

        with patch("storefinder.services.store_search.NaverShoppingClient") as client_cls:
            with pytest.raises(ConfigurationError):
                search_stores(["protein", "vegan"])

        client_cls.assert_not_called()
