"""URL shortening utilities module.

This module handles the validation of short ids and target URLs.
"""

import re
from urllib.parse import urlsplit
import logging

logger = logging.getLogger(__name__)


# Characters allowed in short ids (lowercase base32hex)
ALPHABET = "0123456789abcdefghijklmnopqrstuv"
SHORT_ID_PATTERN = "[0-9a-v]{20}"

_SHORT_ID_RE = re.compile(rf"^{SHORT_ID_PATTERN}$")
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")


def validate_short_code(code: str) -> bool:
    """Validate short id format.

    Args:
        code: Short id to validate.

    Returns:
        True if valid, False otherwise.
    """
    if not code:
        return False
    return _SHORT_ID_RE.match(code) is not None


def is_valid_url(url: str) -> bool:
    """Check that a URL is absolute and usable as a request URI.

    The URL needs a scheme, and what follows the scheme must be either an
    authority (``//host``) or an absolute path. Whitespace and control
    characters are rejected.

    Args:
        url: URL to validate.

    Returns:
        True if valid, False otherwise.
    """
    if not url or any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return False
    try:
        parts = urlsplit(url)
        # Accessing port parses it and raises on garbage
        parts.port
    except ValueError:
        logger.debug(f"Unparseable url: {url!r}")
        return False
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False
    if parts.netloc:
        return True
    return parts.path.startswith("/")
