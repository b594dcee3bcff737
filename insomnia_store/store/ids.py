"""Identifier and timestamp helpers for on-disk records."""

from __future__ import annotations

import time
import uuid
from datetime import UTC, datetime


def create_id(prefix: str) -> str:
    """Return a new ``{prefix}_{32 hex chars}`` identifier (uuid4, secure random)."""
    return f"{prefix}_{uuid.uuid4().hex}"


def now_millis() -> int:
    """Current epoch time in milliseconds, the unit of ``created`` / ``modified``."""
    return time.time_ns() // 1_000_000


def to_iso(millis: int) -> str:
    """Render epoch milliseconds as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    seconds, ms = divmod(int(millis), 1000)
    stamp = datetime.fromtimestamp(seconds, tz=UTC).replace(microsecond=ms * 1000)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_iso(stamp: str) -> int:
    """Inverse of ``to_iso``: parse an ISO-8601 string back to epoch milliseconds."""
    parsed = datetime.fromisoformat(stamp)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    seconds = int(parsed.replace(microsecond=0).timestamp())
    return seconds * 1000 + parsed.microsecond // 1000
