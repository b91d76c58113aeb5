"""
API routes for Store Finder.
"""
from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError as SchemaValidationError
from typing import Any, Dict

from ..config import Config
from ..exceptions import RateLimitError, StoreFinderError, ValidationError
from ..logger import get_logger
from ..schemas.search import SearchData, SearchRequest, SearchResponse
from ..services.store_search import search_stores
from ..utils.rate_limit import FixedWindowRateLimiter
from ..utils.validators import validate_keywords

logger = get_logger(__name__)

# Create blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')

rate_limiter = FixedWindowRateLimiter(
    max_requests=Config.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=Config.RATE_LIMIT_WINDOW_SECONDS,
)


def get_client_id() -> str:
    """Identify the caller by forwarded IP, real IP or socket address."""
    forwarded = request.headers.get('X-Forwarded-For')
    if forwarded:
        return forwarded.split(',')[0].strip()

    real_ip = request.headers.get('X-Real-IP')
    if real_ip:
        return real_ip

    return request.remote_addr or 'unknown'


def error_response(error: StoreFinderError) -> tuple[Response, int]:
    return jsonify(SearchResponse(success=False, error=error.message).model_dump(exclude_none=True)), error.status_code


@api_bp.before_request
def apply_rate_limit():
    """Refuse requests beyond the client's fixed-window budget."""
    client_id = get_client_id()
    status = rate_limiter.check(client_id)
    g.rate_limit_status = status

    if not status.allowed:
        logger.warning(f"Rate limit blocked request: client={client_id}, path={request.path}, reset={status.reset_time}")
        return error_response(RateLimitError("Too many requests. Please try again later."))

    return None


@api_bp.after_request
def add_rate_limit_headers(response: Response) -> Response:
    status = g.get('rate_limit_status')
    if status is None:
        return response

    response.headers['X-RateLimit-Limit'] = str(status.limit)
    response.headers['X-RateLimit-Remaining'] = str(status.remaining)
    response.headers['X-RateLimit-Reset'] = str(status.reset_time)

    if not status.allowed:
        response.headers['Retry-After'] = str(status.retry_after(rate_limiter.now()))

    return response


def parse_search_request(payload: Any) -> list[str]:
    """Parse the JSON body and return validated keywords."""
    if not isinstance(payload, dict) or payload.get('keywords') is None:
        raise ValidationError("Keywords are required")

    try:
        search_request = SearchRequest.model_validate(payload)
    except SchemaValidationError as e:
        raise ValidationError("Keywords must be a list of strings", detail={"errors": e.errors()}) from e

    return validate_keywords(search_request.keywords)


@api_bp.route('/search', methods=['POST'])
def search() -> tuple[Response, int]:
    """
    Find Smart Stores that sell products for every keyword.

    Expected JSON:
    {
        "keywords": ["protein bar", "vegan snack"]
    }

    Returns:
    {
        "success": true,
        "data": {
            "intersectionStores": [...],
            "keywordCount": 2,
            "totalStoresFound": 57,
            "searchStats": {"apiCalls": 8, "pagesSearched": 4, ...}
        }
    }
    """
    try:
        keywords = parse_search_request(request.get_json(silent=True))
        logger.info(f"Store search request: {keywords}")

        result = search_stores(keywords)

        response = SearchResponse(
            success=True,
            data=SearchData.model_validate(result.to_dict()),
        )
        return jsonify(response.model_dump(exclude_none=True)), 200

    except ValidationError as e:
        logger.info(f"Rejected search request: {e.message}")
        return error_response(e)

    except StoreFinderError as e:
        logger.error(f"Search failed: {e.__class__.__name__}: {e.message}")
        return error_response(e)

    except Exception as e:
        logger.error(f"Error in search endpoint: {e}", exc_info=True)
        body: Dict[str, Any] = {'success': False, 'error': str(e) or 'Unknown error occurred'}
        return jsonify(body), 500
