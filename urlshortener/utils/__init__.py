"""Utils package for URL Shortener Service."""

from .shortener import (
    ALPHABET,
    SHORT_ID_PATTERN,
    validate_short_code,
    is_valid_url,
)
from .xid import XIDGenerator, generate_id, id_timestamp

__all__ = [
    "ALPHABET",
    "SHORT_ID_PATTERN",
    "validate_short_code",
    "is_valid_url",
    "XIDGenerator",
    "generate_id",
    "id_timestamp",
]
