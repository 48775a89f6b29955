"""
Input Validators and Sanitizers

This module provides validation and sanitization functions for user inputs.
"""

import re
from typing import Optional

from urlpresser.services.keygen import BASE62_CHARS, MAX_KEY_LENGTH

_SHORT_CODE_RE = re.compile(f"[{re.escape(BASE62_CHARS)}]+")


def sanitize_short_code(short_code: str) -> Optional[str]:
    """
    Sanitize and validate short code format.

    Short codes only contain base62 characters: [0-9a-zA-Z]. Anything else
    can never have been issued, so it is rejected before touching the store.

    Args:
        short_code: The short code to sanitize

    Returns:
        Sanitized short code if valid, None otherwise
    """
    if not short_code or not isinstance(short_code, str):
        return None

    if len(short_code) > MAX_KEY_LENGTH:
        return None

    if not _SHORT_CODE_RE.fullmatch(short_code):
        return None

    return short_code


def normalize_original_url(url: Optional[str]) -> str:
    """
    Trim surrounding whitespace from a submitted URL.

    Returns:
        The trimmed URL, or "" for None
    """
    if url is None:
        return ""
    return url.strip()
