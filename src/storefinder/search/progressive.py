"""
Progressive multi-sort search across several keywords.

For each sort option (relevance first, then recency):
1. Fetch pages in small batches for every keyword
2. Group each page by store and fold it into that keyword's store map
3. Check the intersection after each batch and stop as soon as it is large enough
4. Otherwise continue up to the per-sort page cap, then try the next sort option

Relevance-sorted results reach a plausible intersection quickly but favour
stores with very broad catalogues; recency-sorted pages surface newer and
smaller shops. The early-stop check keeps the extra sort options cheap.
"""
from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import Config
from ..exceptions import ConfigurationError, RemoteServiceError
from ..logger import get_logger
from ..models import SearchPage, SearchStats, SmartStore
from ..services.intersection import find_intersection
from ..services.store_extractor import group_by_store, merge_store_maps
from .naver_client import MAX_DISPLAY, MAX_START, NaverShoppingClient

logger = get_logger(__name__)

StoreMap = Dict[str, SmartStore]


@dataclass
class SearchSettings:
    """
    Tunable search policy.

    Attributes:
        display: Items requested per page (API limit: 100)
        max_pages_per_sort: Page cap for each sort option
        pages_per_batch: Pages fetched per keyword before re-checking the intersection
        min_intersection: Intersection size that stops the search
        sort_options: Sort options tried in order
        max_start: Highest offset the API accepts; pages beyond it are skipped
        delay_between_api_calls: Seconds between calls inside a batch
        delay_between_batches: Seconds between batches of the same sort option
        delay_between_sorts: Seconds before switching sort option
        parallel_keywords: Fetch different keywords concurrently within a batch
        max_workers: Thread pool size when parallel_keywords is on
        partial_on_error: Return the accumulated result instead of raising on
            a remote failure
    """

    display: int = 100
    max_pages_per_sort: int = 10
    pages_per_batch: int = 2
    min_intersection: int = 10
    sort_options: Tuple[str, ...] = ("sim", "date")
    max_start: int = 1000
    delay_between_api_calls: float = 0.05
    delay_between_batches: float = 0.1
    delay_between_sorts: float = 0.5
    parallel_keywords: bool = False
    max_workers: int = 5
    partial_on_error: bool = False

    def __post_init__(self) -> None:
        if self.pages_per_batch < 1:
            raise ValueError("pages_per_batch must be at least 1")
        if not 1 <= self.display <= MAX_DISPLAY:
            raise ValueError(f"display must be between 1 and {MAX_DISPLAY}, got {self.display}")
        if not 1 <= self.max_start <= MAX_START:
            raise ValueError(f"max_start must be between 1 and {MAX_START}, got {self.max_start}")
        self.sort_options = tuple(self.sort_options)

    @classmethod
    def from_config(cls) -> SearchSettings:
        """
        Create settings from environment configuration.

        Raises:
            ConfigurationError: If a SEARCH_* value is outside the API limits
        """
        try:
            return cls(
                display=Config.SEARCH_DISPLAY,
                max_pages_per_sort=Config.SEARCH_MAX_PAGES_PER_SORT,
                pages_per_batch=Config.SEARCH_PAGES_PER_BATCH,
                min_intersection=Config.SEARCH_MIN_INTERSECTION,
                sort_options=Config.SEARCH_SORT_OPTIONS,
                max_start=Config.SEARCH_MAX_START,
                delay_between_api_calls=Config.SEARCH_DELAY_BETWEEN_API_CALLS,
                delay_between_batches=Config.SEARCH_DELAY_BETWEEN_BATCHES,
                delay_between_sorts=Config.SEARCH_DELAY_BETWEEN_SORTS,
                parallel_keywords=Config.SEARCH_PARALLEL_KEYWORDS,
                max_workers=Config.SEARCH_MAX_WORKERS,
                partial_on_error=Config.SEARCH_PARTIAL_ON_ERROR,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid search settings: {e}") from e


@dataclass(slots=True)
class SearchOutcome:
    """Per-keyword store maps plus the counters of the run that built them."""

    stores_by_keyword: List[StoreMap] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)


@dataclass(slots=True)
class _KeywordBatch:
    pages: List[SearchPage] = field(default_factory=list)
    cancelled: bool = False


class MultiSortSearch:
    """Runs the progressive multi-sort search for one request."""

    def __init__(
        self,
        client: NaverShoppingClient,
        settings: Optional[SearchSettings] = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.settings = settings or SearchSettings.from_config()
        self._sleep = sleep
        self._stats_lock = threading.Lock()

    def run(
        self,
        keywords: Sequence[str],
        cancel_event: Optional[threading.Event] = None,
    ) -> SearchOutcome:
        """
        Search every keyword and accumulate per-keyword store maps.

        Args:
            keywords: Validated keywords
            cancel_event: When set, no further page is requested and the
                accumulated result is returned

        Returns:
            SearchOutcome with one store map per keyword, in keyword order

        Raises:
            RemoteServiceError: If a page fetch fails and partial_on_error is off
        """
        settings = self.settings
        outcome = SearchOutcome(stores_by_keyword=[{} for _ in keywords])
        stats = outcome.stats

        try:
            for sort_index, sort in enumerate(settings.sort_options):
                logger.info(f"Starting sort={sort}")
                stats.sort_options_used.append(sort)
                current_page = 0

                while current_page < settings.max_pages_per_sort:
                    last_page = min(current_page + settings.pages_per_batch, settings.max_pages_per_sort)
                    page_numbers = list(range(current_page, last_page))

                    logger.info(f"sort={sort}, fetching pages {page_numbers}")
                    batches = self._fetch_batch(keywords, page_numbers, sort, cancel_event, stats)
                    cancelled = self._merge_batch(outcome, keywords, batches, len(page_numbers))

                    if cancelled:
                        stats.cancelled = True
                        logger.info(f"Search cancelled during sort={sort}")
                        return outcome

                    intersection_count = len(find_intersection(outcome.stores_by_keyword))
                    logger.info(f"sort={sort}, pages {page_numbers[0]}-{page_numbers[-1]}, "
                                f"intersection: {intersection_count} stores")

                    if intersection_count >= settings.min_intersection:
                        logger.info(f"Found {intersection_count} intersections "
                                    f"(>= {settings.min_intersection}), stopping early")
                        stats.stopped_early = True
                        return outcome

                    current_page += settings.pages_per_batch

                    if current_page < settings.max_pages_per_sort:
                        self._sleep(settings.delay_between_batches)

                logger.info(f"sort={sort} completed")

                if sort_index < len(settings.sort_options) - 1:
                    self._sleep(settings.delay_between_sorts)

        except RemoteServiceError as e:
            if not settings.partial_on_error:
                raise
            logger.warning(f"Remote failure, returning partial result: {e.message}")
            stats.error = e.message

        return outcome

    def _merge_batch(
        self,
        outcome: SearchOutcome,
        keywords: Sequence[str],
        batches: List[_KeywordBatch],
        batch_size: int,
    ) -> bool:
        """Fold fetched pages into the keyword maps. Returns True if the batch was cancelled."""
        stats = outcome.stats
        cancelled = any(b.cancelled for b in batches)

        for index, keyword in enumerate(keywords):
            stores = outcome.stores_by_keyword[index]
            for page in batches[index].pages:
                merge_store_maps(stores, group_by_store(page.items, keyword))
            logger.debug(f"keyword={keyword}, stores: {len(stores)}")

        if cancelled:
            stats.pages_searched += max((len(b.pages) for b in batches), default=0)
        else:
            stats.pages_searched += batch_size

        return cancelled

    def _fetch_batch(
        self,
        keywords: Sequence[str],
        page_numbers: List[int],
        sort: str,
        cancel_event: Optional[threading.Event],
        stats: SearchStats,
    ) -> List[_KeywordBatch]:
        """Fetch the given page numbers for every keyword, one result per keyword."""
        if self.settings.parallel_keywords and len(keywords) > 1:
            # Set by the first failing worker so the others stop requesting pages
            abort_event = threading.Event()

            def fetch(keyword: str) -> _KeywordBatch:
                try:
                    return self._fetch_keyword_pages(
                        keyword, page_numbers, sort, cancel_event, [0], stats, abort_event
                    )
                except Exception:
                    abort_event.set()
                    raise

            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
                futures = [executor.submit(fetch, keyword) for keyword in keywords]
                return [future.result() for future in futures]

        call_count = [0]
        batches: List[_KeywordBatch] = []
        for keyword in keywords:
            batch = self._fetch_keyword_pages(keyword, page_numbers, sort, cancel_event, call_count, stats)
            batches.append(batch)
            if batch.cancelled:
                batches.extend(_KeywordBatch(cancelled=True) for _ in keywords[len(batches):])
                break
        return batches

    def _fetch_keyword_pages(
        self,
        keyword: str,
        page_numbers: List[int],
        sort: str,
        cancel_event: Optional[threading.Event],
        call_count: List[int],
        stats: SearchStats,
        abort_event: Optional[threading.Event] = None,
    ) -> _KeywordBatch:
        settings = self.settings
        batch = _KeywordBatch()

        for page_number in page_numbers:
            start = 1 + page_number * settings.display
            if start > settings.max_start:
                logger.debug(f"Skipping page {page_number} for keyword={keyword}: "
                             f"start {start} exceeds {settings.max_start}")
                continue

            if cancel_event is not None and cancel_event.is_set():
                batch.cancelled = True
                return batch

            if abort_event is not None and abort_event.is_set():
                return batch

            if call_count[0] > 0:
                self._sleep(settings.delay_between_api_calls)
            call_count[0] += 1

            # Counted when issued
            with self._stats_lock:
                stats.api_calls += 1
            page = self.client.fetch_page(keyword, settings.display, start, sort)
            if page.cached:
                with self._stats_lock:
                    stats.cache_hits += 1

            batch.pages.append(page)

        return batch
