"""
Command-line store search.

Usage:
    python scripts/find_stores.py "protein bar" "vegan snack"
    python scripts/find_stores.py "protein bar" "vegan snack" --min-intersection 5 --sort sim
"""
import argparse
import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storefinder.exceptions import StoreFinderError
from storefinder.logger import get_logger
from storefinder.search.progressive import SearchSettings
from storefinder.services.store_search import search_stores
from storefinder.utils.validators import validate_keywords

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find Smart Stores selling every keyword")
    parser.add_argument("keywords", nargs="+", help="2-5 search keywords")
    parser.add_argument("--min-intersection", type=int, help="Stop once this many stores match")
    parser.add_argument("--max-pages", type=int, help="Page cap per sort option")
    parser.add_argument("--sort", action="append", choices=["sim", "date", "asc", "dsc"],
                        help="Sort option to try (repeatable, in order)")
    parser.add_argument("--parallel", action="store_true", help="Fetch keywords concurrently")
    parser.add_argument("--top", type=int, default=10, help="Number of stores to print")
    return parser


def main() -> int:
    args = build_parser().parse_args()

    settings = SearchSettings.from_config()
    if args.min_intersection is not None:
        settings.min_intersection = args.min_intersection
    if args.max_pages is not None:
        settings.max_pages_per_sort = args.max_pages
    if args.sort:
        settings.sort_options = tuple(args.sort)
    if args.parallel:
        settings.parallel_keywords = True

    try:
        keywords = validate_keywords(args.keywords)
        result = search_stores(keywords, settings=settings)
    except StoreFinderError as e:
        logger.error(f"{e.__class__.__name__}: {e.message}")
        return 1

    payload = result.to_dict()
    payload["intersectionStores"] = payload["intersectionStores"][:args.top]
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
