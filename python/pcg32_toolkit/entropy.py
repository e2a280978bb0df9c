"""OS entropy collaborator used by entropy-seeded construction."""

from __future__ import annotations

import os
from collections.abc import Callable

import numpy as np

from .constants import ENTROPY_BYTES
from .errors import EntropyUnavailableError

EntropySource = Callable[[int], bytes]


def read_os_entropy(size: int = ENTROPY_BYTES) -> bytes:
    try:
        buf = os.urandom(size)
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailableError(f"OS entropy source unavailable: {exc}") from exc
    return buf


def seed_pair_from_bytes(buf: bytes) -> tuple[int, int]:
    """Decode a 16-byte buffer into a little-endian ``(seed, stream)`` pair."""
    if not isinstance(buf, (bytes, bytearray, memoryview)):
        raise EntropyUnavailableError(
            f"entropy source returned {type(buf).__name__}, expected bytes"
        )
    if len(buf) != ENTROPY_BYTES:
        raise EntropyUnavailableError(
            f"expected {ENTROPY_BYTES} entropy bytes, got {len(buf)}"
        )

    words = np.frombuffer(bytes(buf), dtype="<u8", count=2)
    return int(words[0]), int(words[1])


def draw_seed_pair(source: EntropySource | None = None) -> tuple[int, int]:
    read = read_os_entropy if source is None else source
    try:
        buf = read(ENTROPY_BYTES)
    except EntropyUnavailableError:
        raise
    except Exception as exc:
        raise EntropyUnavailableError(f"OS entropy source unavailable: {exc}") from exc
    return seed_pair_from_bytes(buf)
