"""
Input Sanitization Utilities

Strips markup from values submitted through the admin screens before they
are stored.
"""

import html
import re
from typing import Optional

import bleach

_INVALID_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def sanitize_meta_value(text: Optional[str]) -> str:
    """
    Strip HTML tags and control characters from a meta value.

    Unlike sanitize_plain_text, inner whitespace and line breaks are kept so
    multi-line values and JSON documents survive an edit unchanged.
    """
    if text is None:
        return ""

    # bleach escapes bare "&", "<" and ">"; the stored value is plain text
    cleaned = html.unescape(bleach.clean(text, tags=[], strip=True))

    return _INVALID_CONTROL_CHARS.sub("", cleaned)
