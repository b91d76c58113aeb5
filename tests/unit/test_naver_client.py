"""
Unit tests for the Naver Shopping API client.

The HTTP session is mocked; no network access is needed.
"""
from unittest.mock import Mock

import pytest
import requests

from storefinder.config import Config
from storefinder.exceptions import ConfigurationError, RemoteServiceError
from storefinder.search.naver_client import NaverShoppingClient, make_cache_key
from storefinder.utils.cache import MemoryCache


def mock_response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def cache():
    return MemoryCache(ttl_seconds=300)


@pytest.fixture
def client(session, cache):
    return NaverShoppingClient("test-id", "test-secret", cache=cache, session=session, timeout_s=5)


class TestMakeCacheKey:

    def test_format(self):
        assert make_cache_key("protein bar", 100, 101, "date") == "naver:protein bar:100:101:date"

    def test_defaults(self):
        assert make_cache_key("kw", 100) == "naver:kw:100:1:sim"


class TestClientConstruction:

    def test_missing_credentials(self, monkeypatch):
        monkeypatch.setattr(Config, "NAVER_CLIENT_ID", None)
        monkeypatch.setattr(Config, "NAVER_CLIENT_SECRET", None)

        with pytest.raises(ConfigurationError):
            NaverShoppingClient()

    def test_missing_secret(self, monkeypatch):
        monkeypatch.setattr(Config, "NAVER_CLIENT_SECRET", None)

        with pytest.raises(ConfigurationError):
            NaverShoppingClient(client_id="test-id")

    def test_credentials_from_config(self, monkeypatch, session):
        monkeypatch.setattr(Config, "NAVER_CLIENT_ID", "env-id")
        monkeypatch.setattr(Config, "NAVER_CLIENT_SECRET", "env-secret")

        client = NaverShoppingClient(session=session)

        assert client.client_id == "env-id"
        assert client.client_secret == "env-secret"


class TestFetchPage:
    """Tests for fetch_page."""

    def test_sends_request(self, client, session, sample_api_payload):
        session.get.return_value = mock_response(payload=sample_api_payload)

        page = client.fetch_page("단백질", display=100, start=101, sort="date")

        session.get.assert_called_once_with(
            Config.NAVER_API_URL,
            params={"query": "단백질", "display": "100", "start": "101", "sort": "date"},
            headers={
                "X-Naver-Client-Id": "test-id",
                "X-Naver-Client-Secret": "test-secret",
            },
            timeout=5,
        )
        assert page.total == 3
        assert len(page.items) == 3
        assert page.items[0].mall_name == "헬시오"
        assert page.cached is False

    def test_second_request_is_served_from_cache(self, client, session, sample_api_payload):
        session.get.return_value = mock_response(payload=sample_api_payload)

        first = client.fetch_page("단백질")
        second = client.fetch_page("단백질")

        assert session.get.call_count == 1
        assert second.cached is True
        assert second.items == first.items

    def test_cache_key_includes_sort_and_start(self, client, session, sample_api_payload):
        session.get.return_value = mock_response(payload=sample_api_payload)

        client.fetch_page("단백질", start=1, sort="sim")
        client.fetch_page("단백질", start=1, sort="date")
        client.fetch_page("단백질", start=101, sort="sim")

        assert session.get.call_count == 3

    def test_stores_page_in_cache(self, client, session, cache, sample_api_payload):
        session.get.return_value = mock_response(payload=sample_api_payload)

        client.fetch_page("단백질", start=1, sort="sim")

        assert cache.has(make_cache_key("단백질", 100, 1, "sim"))

    def test_non_200_raises_remote_error(self, client, session, cache):
        session.get.return_value = mock_response(status_code=401, text='{"errorMessage":"Authentication failed"}')

        with pytest.raises(RemoteServiceError) as exc_info:
            client.fetch_page("단백질")

        error = exc_info.value
        assert error.upstream_status == 401
        assert error.status_code == 502
        assert "401" in error.message
        assert "Authentication failed" in error.message
        assert cache.size() == 0

    def test_timeout_raises_remote_error(self, client, session):
        session.get.side_effect = requests.Timeout("timed out")

        with pytest.raises(RemoteServiceError) as exc_info:
            client.fetch_page("단백질")

        assert exc_info.value.upstream_status is None

    def test_connection_error_raises_remote_error(self, client, session):
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(RemoteServiceError):
            client.fetch_page("단백질")

    def test_invalid_json_raises_remote_error(self, client, session):
        response = mock_response(text="<html>")
        response.json.side_effect = ValueError("no json")
        session.get.return_value = response

        with pytest.raises(RemoteServiceError):
            client.fetch_page("단백질")

    @pytest.mark.parametrize("start", [0, 1001])
    def test_rejects_start_out_of_range(self, client, session, start):
        with pytest.raises(ValueError):
            client.fetch_page("단백질", start=start)

        session.get.assert_not_called()

    def test_rejects_display_over_limit(self, client, session):
        with pytest.raises(ValueError):
            client.fetch_page("단백질", display=101)

        session.get.assert_not_called()

    def test_rejects_unknown_sort(self, client, session):
        with pytest.raises(ValueError):
            client.fetch_page("단백질", sort="popular")

    def test_last_allowed_offset(self, client, session, sample_api_payload):
        session.get.return_value = mock_response(payload=sample_api_payload)

        client.fetch_page("단백질", start=1000)

        assert session.get.call_args.kwargs["params"]["start"] == "1000"
