"""
Input validation utilities for search keywords.
"""
import re
from typing import Any, List, Optional

from ..exceptions import ValidationError
from .text_cleaning import normalize_whitespace

MIN_KEYWORDS = 2
MAX_KEYWORDS = 5
MAX_KEYWORD_LENGTH = 100

# Hangul, Latin letters, digits, whitespace and hyphen
KEYWORD_PATTERN = re.compile(r'^[a-zA-Z0-9가-힣\s\-]+$')


def _preview(keyword: str) -> str:
    return keyword[:20] + "..." if len(keyword) > 20 else keyword


def validate_keywords(keywords: Any) -> List[str]:
    """
    Validate and normalize a list of search keywords.

    Whitespace is collapsed, empty entries are dropped and case-insensitive
    duplicates are removed (the last spelling wins).

    Args:
        keywords: Raw keyword list from user input

    Returns:
        Cleaned keyword list

    Raises:
        ValidationError: If the input is not a list, has too few or too many
            keywords, or a keyword is too long or contains special characters

    Examples:
        >>> validate_keywords(["  protein  bar ", "vegan"])
        ['protein bar', 'vegan']
    """
    if not isinstance(keywords, (list, tuple)):
        raise ValidationError("Keywords must be a list")

    normalized = [
        normalize_whitespace(k) for k in keywords if isinstance(k, str)
    ]
    normalized = [k for k in normalized if k]

    if len(normalized) < MIN_KEYWORDS:
        raise ValidationError(f"At least {MIN_KEYWORDS} keywords are required")

    if len(normalized) > MAX_KEYWORDS:
        raise ValidationError(f"At most {MAX_KEYWORDS} keywords are allowed")

    for keyword in normalized:
        if len(keyword) > MAX_KEYWORD_LENGTH:
            raise ValidationError(
                f"Keywords must be at most {MAX_KEYWORD_LENGTH} characters (\"{_preview(keyword)}\")",
                detail={"keyword": keyword},
            )
        if not KEYWORD_PATTERN.match(keyword):
            raise ValidationError(
                f"Keywords cannot contain special characters (\"{_preview(keyword)}\")",
                detail={"keyword": keyword},
            )

    unique = {}
    for keyword in normalized:
        unique[keyword.lower()] = keyword
    cleaned = list(unique.values())

    if len(cleaned) < MIN_KEYWORDS:
        raise ValidationError(
            f"At least {MIN_KEYWORDS} distinct keywords are required after removing duplicates"
        )

    return cleaned


def validate_single_keyword(keyword: str) -> Optional[str]:
    """
    Validate one keyword as it is typed.

    Returns:
        Error message, or None if the keyword is acceptable (empty is acceptable)
    """
    normalized = normalize_whitespace(keyword)

    if not normalized:
        return None

    if len(normalized) > MAX_KEYWORD_LENGTH:
        return f"Keywords must be at most {MAX_KEYWORD_LENGTH} characters"

    if not KEYWORD_PATTERN.match(normalized):
        return "Only Hangul, letters, digits, spaces and '-' are allowed"

    return None
