"""
Text cleaning and normalization utilities.
"""
import re

_TAG_PATTERN = re.compile(r'<[^>]*>')
_WHITESPACE_PATTERN = re.compile(r'\s+')


def normalize_whitespace(text: str) -> str:
    """
    Normalize whitespace in text.

    Args:
        text: Text to normalize

    Returns:
        Text with normalized whitespace

    Examples:
        >>> normalize_whitespace("  hello    world  ")
        'hello world'
    """
    if not text:
        return ""

    return _WHITESPACE_PATTERN.sub(' ', text).strip()


def strip_html_tags(text: str) -> str:
    """
    Remove inline markup tags from text.

    Only `<...>` sequences are removed; entities are left as they are, since
    the shopping API only wraps matched terms in <b> tags.

    Examples:
        >>> strip_html_tags("<b>Protein</b> Bar")
        'Protein Bar'
    """
    if not text:
        return ""

    return _TAG_PATTERN.sub('', text)
