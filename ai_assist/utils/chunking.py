"""Utilities for splitting ingested text into fixed-size chunks."""

from __future__ import annotations

import math
from typing import Iterable, List

DEFAULT_CHUNK_SIZE = 800
DEFAULT_CHUNK_OVERLAP = 0


def chunk_text(
    text: str,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> List[str]:
    """Split ``text`` into character windows of at most ``chunk_size``."""

    if not text:
        return []
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if not 0 <= chunk_overlap < chunk_size:
        raise ValueError("chunk_overlap must be in [0, chunk_size)")

    chunks: List[str] = []
    step = chunk_size - chunk_overlap
    start = 0
    while start < len(text):
        chunks.append(text[start : start + chunk_size])
        if start + chunk_size >= len(text):
            break
        start += step
    return chunks


def enumerate_chunks(chunks: Iterable[str], prefix: str) -> List[str]:
    """Attach monotonically increasing suffixes to chunk identifiers."""

    chunk_list = list(chunks)
    total_digits = max(4, math.ceil(math.log10(len(chunk_list) + 1))) if chunk_list else 4
    return [f"{prefix}-{str(idx).zfill(total_digits)}" for idx, _ in enumerate(chunk_list, start=1)]
