"""PCG XSH-RR 64/32 generator with reproducible bounded and float draws."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from .constants import (
    DEFAULT_STREAM,
    DOUBLE_MANTISSA_BITS,
    INT32_MAX,
    INT32_MIN,
    MASK32,
    MASK64,
    PCG32_MULTIPLIER,
    SINGLE_MANTISSA_BITS,
    UINT32_MAX,
)
from .entropy import EntropySource, draw_seed_pair
from .errors import ArgumentMissingError, ArgumentOutOfRangeError

_SINGLE_SCALE = np.float32(1.0 / (1 << SINGLE_MANTISSA_BITS))
_DOUBLE_SCALE = 1.0 / (1 << DOUBLE_MANTISSA_BITS)

_READ_ONLY_FIELDS = frozenset(("seed", "stream"))


def _as_integral(value: Any, name: str) -> int:
    try:
        coerced = int(value)
    except (TypeError, ValueError) as exc:
        raise ArgumentOutOfRangeError(name, f"{name} must be an integer.") from exc
    if coerced != value:
        raise ArgumentOutOfRangeError(name, f"{name} must be an integer.")
    return coerced


def next_bounded_core(bound: int, next_uint: Callable[[], int] | None) -> int:
    """Draw from ``next_uint`` until a value clears the rejection threshold.

    ``threshold`` is ``2**32 mod bound``; values below it are discarded so
    that ``value % bound`` is unbiased over the full 32-bit output range.
    """
    if next_uint is None:
        raise ArgumentMissingError("next_uint")
    bound = _as_integral(bound, "bound")
    if bound == 0:
        raise ArgumentOutOfRangeError("bound", "Bound must be greater than zero.")
    if bound < 0 or bound > UINT32_MAX:
        raise ArgumentOutOfRangeError("bound", "Bound must fit in an unsigned 32-bit integer.")

    threshold = ((-bound) & MASK32) % bound
    while True:
        value = next_uint()
        if value >= threshold:
            return value % bound


@dataclass(frozen=True)
class Pcg32Config:
    seed: int
    stream: int = DEFAULT_STREAM

    @classmethod
    def from_entropy(cls, source: EntropySource | None = None) -> Pcg32Config:
        seed, stream = draw_seed_pair(source)
        return cls(seed=seed, stream=stream)


@dataclass(eq=False)
class Pcg32Rng:
    """PCG32 generator; ``(seed, stream)`` fully determines the output sequence."""

    seed: int
    stream: int = DEFAULT_STREAM

    def __post_init__(self) -> None:
        self.seed = int(self.seed) & MASK64
        self.stream = int(self.stream) & MASK64
        self._inc = ((self.stream << 1) | 1) & MASK64
        self._state = 0
        self.next_uint()
        self._state = (self._state + self.seed) & MASK64
        self.next_uint()

    def __setattr__(self, name: str, value: Any) -> None:
        # seed and stream are fixed once the increment has been derived from them
        if name in _READ_ONLY_FIELDS and "_inc" in self.__dict__:
            raise AttributeError(f"{name} is read-only after construction")
        super().__setattr__(name, value)

    @classmethod
    def from_config(cls, config: Pcg32Config) -> Pcg32Rng:
        return cls(config.seed, config.stream)

    @classmethod
    def from_os_entropy(cls, source: EntropySource | None = None) -> Pcg32Rng:
        return cls.from_config(Pcg32Config.from_entropy(source))

    @property
    def increment(self) -> int:
        return self._inc

    def next_uint(self) -> int:
        oldstate = self._state
        self._state = (oldstate * PCG32_MULTIPLIER + self._inc) & MASK64

        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & MASK32
        rot = oldstate >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & MASK32

    def next_bounded(self, bound: int) -> int:
        return next_bounded_core(bound, self.next_uint)

    def next_int(self, min_inclusive: int, max_exclusive: int) -> int:
        lo = _as_integral(min_inclusive, "minInclusive")
        hi = _as_integral(max_exclusive, "maxExclusive")
        if not INT32_MIN <= lo <= INT32_MAX:
            raise ArgumentOutOfRangeError(
                "minInclusive", "minInclusive must fit in a signed 32-bit integer."
            )
        if not INT32_MIN <= hi <= INT32_MAX:
            raise ArgumentOutOfRangeError(
                "maxExclusive", "maxExclusive must fit in a signed 32-bit integer."
            )
        if lo >= hi:
            raise ArgumentOutOfRangeError(
                "minInclusive", "minInclusive must be less than maxExclusive."
            )

        span = (hi - lo) & MASK32
        return lo + self.next_bounded(span)

    def next_single(self) -> float:
        top24 = np.float32(self.next_uint() >> 8)
        return float(top24 * _SINGLE_SCALE)

    def next_double(self) -> float:
        high = self.next_uint() >> 5
        low = self.next_uint() >> 6
        combined = (high << 26) | low
        return combined * _DOUBLE_SCALE

    def next_uints(self, count: int) -> np.ndarray:
        count = _as_integral(count, "count")
        if count < 0:
            raise ArgumentOutOfRangeError("count", "count must be non-negative.")

        out = np.empty((count,), dtype=np.uint32)
        for i in range(out.size):
            out[i] = self.next_uint()
        return out

    def _sample_scalar(self, draw_fn, size: int | tuple[int, ...], dtype) -> np.ndarray:
        shape = (size,) if isinstance(size, int) else tuple(size)
        arr = np.empty(shape, dtype=dtype)
        flat = arr.reshape(-1)
        for i in range(flat.size):
            flat[i] = draw_fn()
        return arr

    def random(self, size: int | tuple[int, ...] | None = None) -> float | np.ndarray:
        if size is None:
            return self.next_double()
        return self._sample_scalar(self.next_double, size, np.float64)

    def integers(
        self,
        low: int,
        high: int | None = None,
        size: int | tuple[int, ...] | None = None,
    ) -> int | np.ndarray:
        lo = int(low)
        hi = int(high) if high is not None else lo
        if high is None:
            lo = 0

        def draw() -> int:
            return self.next_int(lo, hi)

        if size is None:
            return draw()
        return self._sample_scalar(draw, size, np.int64)

    def uniform(
        self,
        low: float = 0.0,
        high: float = 1.0,
        size: int | tuple[int, ...] | None = None,
    ) -> float | np.ndarray:
        lo = float(low)
        hi = float(high)

        def draw() -> float:
            return lo + (hi - lo) * self.next_double()

        if size is None:
            return draw()
        return self._sample_scalar(draw, size, np.float64)
