"""Globally unique, sortable short identifiers.

Each identifier packs 12 bytes:

    4 bytes  seconds since the Unix epoch (big endian)
    3 bytes  machine id (first bytes of the MD5 of the host name)
    2 bytes  process id
    3 bytes  counter, seeded randomly and incremented per id

and encodes them as lowercase base32hex without padding, giving 20
characters from ``[0-9a-v]``. Ids sort by creation second and are unique per
process; no coordination between processes is needed.
"""

import base64
import hashlib
import os
import secrets
import socket
import threading
import time
from datetime import datetime, timezone
from typing import Optional

ID_LENGTH = 20
RAW_LENGTH = 12

_COUNTER_MASK = 0xFFFFFF


def _machine_id() -> bytes:
    hostname = socket.gethostname().encode()
    if not hostname:
        return secrets.token_bytes(3)
    return hashlib.md5(hostname).digest()[:3]


class XIDGenerator:
    """Thread-safe generator of 20-character sortable ids."""

    def __init__(self, machine_id: Optional[bytes] = None, pid: Optional[int] = None):
        self._machine_id = machine_id or _machine_id()
        self._pid = (os.getpid() if pid is None else pid) & 0xFFFF
        self._counter = secrets.randbits(24)
        self._lock = threading.Lock()

    def _next_counter(self) -> int:
        with self._lock:
            self._counter = (self._counter + 1) & _COUNTER_MASK
            return self._counter

    def generate(self, now: Optional[float] = None) -> str:
        """Mint a new id.

        Args:
            now: Optional Unix timestamp to embed instead of the current time.

        Returns:
            20-character lowercase base32hex id.
        """
        timestamp = int(time.time() if now is None else now)
        raw = (
            timestamp.to_bytes(4, "big")
            + self._machine_id
            + self._pid.to_bytes(2, "big")
            + self._next_counter().to_bytes(3, "big")
        )
        return encode(raw)


def encode(raw: bytes) -> str:
    """Encode 12 raw bytes as a 20-character id."""
    return base64.b32hexencode(raw).decode("ascii").rstrip("=").lower()


def decode(short_id: str) -> bytes:
    """Decode a 20-character id back into its 12 raw bytes."""
    if len(short_id) != ID_LENGTH:
        raise ValueError(f"Invalid id length: {short_id!r}")
    padded = short_id.upper() + "===="
    return base64.b32hexdecode(padded)[:RAW_LENGTH]


def id_timestamp(short_id: str) -> datetime:
    """Return the creation time embedded in an id."""
    seconds = int.from_bytes(decode(short_id)[:4], "big")
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


_default_generator = XIDGenerator()


def generate_id() -> str:
    """Mint an id with the process-wide default generator."""
    return _default_generator.generate()
