"""Single-page client for the Naver Shopping search API."""
from __future__ import annotations

from typing import Optional

import requests

from ..config import Config
from ..exceptions import ConfigurationError, RemoteServiceError
from ..logger import get_logger
from ..models import SearchPage
from ..utils.cache import MemoryCache, naver_api_cache

logger = get_logger(__name__)

MAX_DISPLAY = 100
MAX_START = 1000
SORT_OPTIONS = ("sim", "date", "asc", "dsc")


def make_cache_key(keyword: str, display: int, start: int = 1, sort: str = "sim") -> str:
    """Cache key for one page request."""
    return f"naver:{keyword}:{display}:{start}:{sort}"


class NaverShoppingClient:
    """
    Fetches single pages of Naver Shopping results.

    Pages are served from the response cache when an identical request was
    made within the TTL. Failed requests are never retried.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        *,
        cache: Optional[MemoryCache] = None,
        timeout_s: Optional[int] = None,
        session: Optional[requests.Session] = None,
        api_url: Optional[str] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            client_id: Naver client id (defaults to NAVER_CLIENT_ID)
            client_secret: Naver client secret (defaults to NAVER_CLIENT_SECRET)
            cache: Response cache (defaults to the shared naver_api_cache)
            timeout_s: Request timeout in seconds
            session: requests session to reuse connections

        Raises:
            ConfigurationError: If either credential is missing
        """
        self.client_id = client_id or Config.NAVER_CLIENT_ID
        self.client_secret = client_secret or Config.NAVER_CLIENT_SECRET
        if not self.client_id or not self.client_secret:
            raise ConfigurationError("Naver API credentials not configured")

        self.cache = cache if cache is not None else naver_api_cache
        self.timeout_s = timeout_s or Config.NAVER_TIMEOUT_S
        self.session = session or requests.Session()
        self.api_url = api_url or Config.NAVER_API_URL

    def fetch_page(
        self,
        keyword: str,
        display: int = MAX_DISPLAY,
        start: int = 1,
        sort: str = "sim",
    ) -> SearchPage:
        """
        Fetch one page of results for a keyword.

        Args:
            keyword: Search query
            display: Items per page (1-100)
            start: 1-based offset of the first item (1-1000)
            sort: Sort option: sim, date, asc or dsc

        Returns:
            SearchPage; `cached` is True when no remote call was made

        Raises:
            ValueError: If the page parameters are outside the API limits
            RemoteServiceError: If the API answers with a non-200 status or
                the request fails
        """
        if not 1 <= display <= MAX_DISPLAY:
            raise ValueError(f"display must be between 1 and {MAX_DISPLAY}, got {display}")
        if not 1 <= start <= MAX_START:
            raise ValueError(f"start must be between 1 and {MAX_START}, got {start}")
        if sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort}")

        cache_key = make_cache_key(keyword, display, start, sort)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit: keyword={keyword}, start={start}, sort={sort}, items={len(cached.items)}")
            return SearchPage(
                last_build_date=cached.last_build_date,
                total=cached.total,
                start=cached.start,
                display=cached.display,
                items=list(cached.items),
                cached=True,
            )

        params = {
            "query": keyword,
            "display": str(display),
            "start": str(start),
            "sort": sort,
        }
        headers = {
            "X-Naver-Client-Id": self.client_id,
            "X-Naver-Client-Secret": self.client_secret,
        }

        logger.info(f"NAVER Request: keyword={keyword}, display={display}, start={start}, sort={sort}")

        try:
            response = self.session.get(
                self.api_url,
                params=params,
                headers=headers,
                timeout=self.timeout_s,
            )
        except requests.Timeout as e:
            logger.error(f"NAVER Timeout after {self.timeout_s}s for keyword={keyword}")
            raise RemoteServiceError(f"Naver API timeout after {self.timeout_s}s") from e
        except requests.RequestException as e:
            logger.error(f"NAVER Request error for keyword={keyword}: {type(e).__name__}: {e}")
            raise RemoteServiceError(f"Naver API request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"NAVER API error: status={response.status_code}, response={response.text[:500]}")
            raise RemoteServiceError(
                f"Naver API error: {response.status_code} - {response.text}",
                upstream_status=response.status_code,
            )

        try:
            page = SearchPage.from_dict(response.json())
        except ValueError as e:
            logger.error(f"NAVER Invalid JSON for keyword={keyword}: {e}")
            raise RemoteServiceError("Naver API returned an invalid response") from e
        logger.debug(f"NAVER Response: keyword={keyword}, start={start}, items={len(page.items)}, total={page.total}")

        self.cache.set(cache_key, page)
        return page
