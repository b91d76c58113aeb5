"""
Configuration management for Store Finder.
"""
import os
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


class Config:
    """Application configuration."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    SRC_DIR = PROJECT_ROOT / "src"

    # Naver Open API credentials
    NAVER_CLIENT_ID: Optional[str] = os.getenv("NAVER_CLIENT_ID")
    NAVER_CLIENT_SECRET: Optional[str] = os.getenv("NAVER_CLIENT_SECRET")
    NAVER_API_URL: str = "https://openapi.naver.com/v1/search/shop.json"
    NAVER_TIMEOUT_S: int = _env_int("NAVER_TIMEOUT_S", 10)

    # Search strategy (see search.progressive.SearchSettings)
    SEARCH_DISPLAY: int = _env_int("SEARCH_DISPLAY", 100)  # API limit: 100
    SEARCH_MAX_START: int = _env_int("SEARCH_MAX_START", 1000)  # API limit: start <= 1000
    SEARCH_MAX_PAGES_PER_SORT: int = _env_int("SEARCH_MAX_PAGES_PER_SORT", 10)
    SEARCH_PAGES_PER_BATCH: int = _env_int("SEARCH_PAGES_PER_BATCH", 2)
    SEARCH_MIN_INTERSECTION: int = _env_int("SEARCH_MIN_INTERSECTION", 10)
    SEARCH_SORT_OPTIONS: tuple = tuple(
        s.strip() for s in os.getenv("SEARCH_SORT_OPTIONS", "sim,date").split(",") if s.strip()
    )
    SEARCH_DELAY_BETWEEN_API_CALLS: float = _env_float("SEARCH_DELAY_BETWEEN_API_CALLS", 0.05)
    SEARCH_DELAY_BETWEEN_BATCHES: float = _env_float("SEARCH_DELAY_BETWEEN_BATCHES", 0.1)
    SEARCH_DELAY_BETWEEN_SORTS: float = _env_float("SEARCH_DELAY_BETWEEN_SORTS", 0.5)
    SEARCH_PARALLEL_KEYWORDS: bool = os.getenv("SEARCH_PARALLEL_KEYWORDS", "False").lower() == "true"
    SEARCH_MAX_WORKERS: int = _env_int("SEARCH_MAX_WORKERS", 5)
    SEARCH_PARTIAL_ON_ERROR: bool = os.getenv("SEARCH_PARTIAL_ON_ERROR", "False").lower() == "true"

    # Response cache
    CACHE_TTL_SECONDS: int = _env_int("CACHE_TTL_SECONDS", 300)

    # Rate limiting (fixed window, per client)
    RATE_LIMIT_MAX_REQUESTS: int = _env_int("RATE_LIMIT_MAX_REQUESTS", 10)
    RATE_LIMIT_WINDOW_SECONDS: int = _env_int("RATE_LIMIT_WINDOW_SECONDS", 60)

    # Flask settings
    FLASK_ENV: str = os.getenv("FLASK_ENV", "development")
    FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "True").lower() == "true"
    FLASK_HOST: str = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT: int = _env_int("FLASK_PORT", 5000)
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def has_naver_credentials(cls) -> bool:
        return bool(cls.NAVER_CLIENT_ID) and bool(cls.NAVER_CLIENT_SECRET)

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not cls.NAVER_CLIENT_ID:
            errors.append("NAVER_CLIENT_ID not set in environment")
        if not cls.NAVER_CLIENT_SECRET:
            errors.append("NAVER_CLIENT_SECRET not set in environment")

        if not 1 <= cls.SEARCH_DISPLAY <= 100:
            errors.append(f"Invalid SEARCH_DISPLAY: {cls.SEARCH_DISPLAY}. Must be between 1 and 100")

        if not 1 <= cls.SEARCH_MAX_START <= 1000:
            errors.append(f"Invalid SEARCH_MAX_START: {cls.SEARCH_MAX_START}. Must be between 1 and 1000")

        if cls.SEARCH_PAGES_PER_BATCH < 1:
            errors.append("SEARCH_PAGES_PER_BATCH must be at least 1")

        if not cls.SEARCH_SORT_OPTIONS:
            errors.append("SEARCH_SORT_OPTIONS must name at least one sort option")

        invalid_sorts = [s for s in cls.SEARCH_SORT_OPTIONS if s not in ("sim", "date", "asc", "dsc")]
        if invalid_sorts:
            errors.append(f"Invalid SEARCH_SORT_OPTIONS: {invalid_sorts}. Must be sim, date, asc or dsc")

        return errors

    @classmethod
    def is_valid(cls) -> bool:
        """Check if configuration is valid."""
        return len(cls.validate()) == 0

    @classmethod
    def get_cors_origins(cls) -> list[str]:
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @classmethod
    def get_summary(cls) -> dict:
        """Get configuration summary (safe for logging)."""
        return {
            "flask_env": cls.FLASK_ENV,
            "flask_debug": cls.FLASK_DEBUG,
            "naver_api_configured": cls.has_naver_credentials(),
            "sort_options": list(cls.SEARCH_SORT_OPTIONS),
            "max_pages_per_sort": cls.SEARCH_MAX_PAGES_PER_SORT,
            "pages_per_batch": cls.SEARCH_PAGES_PER_BATCH,
            "min_intersection": cls.SEARCH_MIN_INTERSECTION,
            "cache_ttl_seconds": cls.CACHE_TTL_SECONDS,
            "rate_limit": f"{cls.RATE_LIMIT_MAX_REQUESTS}/{cls.RATE_LIMIT_WINDOW_SECONDS}s",
            "log_level": cls.LOG_LEVEL,
        }
