"""
Canonical timestamp codec.

Timestamps are the join key between transcripts, image descriptions and
images. Format: ``YYYY-MM-DD-HH-MM-SS`` in local time, e.g.
``2025-05-17-02-40-24``. Fixed width and zero padded, so lexicographic
order equals chronological order.

Two instants within the same second encode to the same value; a second
write in that second overwrites the first.
"""

from __future__ import annotations

import re
from datetime import datetime

TEXT_EXTENSION = ".txt"
TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"
TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2}$")


def encode(instant: datetime | None = None) -> str:
    """Render ``instant`` (default: now, local clock) as a canonical timestamp."""
    if instant is None:
        instant = datetime.now()
    return instant.strftime(TIMESTAMP_FORMAT)


def decode(timestamp: str) -> datetime:
    """Parse a canonical timestamp back into a naive local datetime."""
    return datetime.strptime(timestamp, TIMESTAMP_FORMAT)


def is_canonical(value: str) -> bool:
    return bool(TIMESTAMP_PATTERN.match(value))


def is_text_filename(filename: str) -> bool:
    return filename.endswith(TEXT_EXTENSION)


def strip_extension(filename: str) -> str:
    """
    Recover the timestamp from a text artifact filename.

    Args:
        filename: e.g. ``"2025-05-17-02-40-24.txt"``

    Returns:
        The base name, e.g. ``"2025-05-17-02-40-24"``

    Raises:
        ValueError: If the filename does not end in the text extension
    """
    if not is_text_filename(filename):
        raise ValueError(f"Not a text artifact filename: {filename!r}")
    return filename[: -len(TEXT_EXTENSION)]


__all__ = [
    "TEXT_EXTENSION",
    "TIMESTAMP_FORMAT",
    "decode",
    "encode",
    "is_canonical",
    "is_text_filename",
    "strip_extension",
]
