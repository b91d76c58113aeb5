"""
Top-level store search: find Smart Stores that sell products for every keyword.
"""
from __future__ import annotations

import threading
from typing import Optional, Sequence

from ..config import Config
from ..exceptions import ConfigurationError
from ..logger import get_logger
from ..models import StoreSearchResult
from ..search.naver_client import NaverShoppingClient
from ..search.progressive import MultiSortSearch, SearchSettings
from .intersection import find_intersection, get_all_stores

logger = get_logger(__name__)


def search_stores(
    keywords: Sequence[str],
    *,
    client: Optional[NaverShoppingClient] = None,
    settings: Optional[SearchSettings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> StoreSearchResult:
    """
    Run the progressive multi-sort search and build the intersection result.

    Args:
        keywords: Validated, normalized keywords (2-5)
        client: Shopping API client (built from configuration if omitted)
        settings: Search policy (built from configuration if omitted)
        cancel_event: Optional cancellation flag checked between pages

    Returns:
        StoreSearchResult; an empty intersection is a valid result

    Raises:
        ConfigurationError: If Naver credentials are missing (nothing is fetched)
        RemoteServiceError: If a remote call fails
    """
    if client is None:
        if not Config.has_naver_credentials():
            raise ConfigurationError("Naver API credentials not configured")
        client = NaverShoppingClient()

    keywords = list(keywords)
    logger.info(f"Searching stores for {len(keywords)} keywords: {keywords}")

    outcome = MultiSortSearch(client, settings).run(keywords, cancel_event=cancel_event)

    intersection_stores = find_intersection(outcome.stores_by_keyword)
    all_stores = get_all_stores(outcome.stores_by_keyword)

    stats = outcome.stats
    logger.info(
        f"Search complete: {len(intersection_stores)} intersection stores, "
        f"{len(all_stores)} stores total, api_calls={stats.api_calls}, "
        f"pages={stats.pages_searched}, cache_hits={stats.cache_hits}"
    )

    return StoreSearchResult(
        intersection_stores=intersection_stores,
        total_stores_found=len(all_stores),
        keyword_count=len(keywords),
        search_stats=stats,
    )
