from .constants import DEFAULT_STREAM, PCG32_MULTIPLIER
from .entropy import read_os_entropy, seed_pair_from_bytes
from .errors import (
    ArgumentError,
    ArgumentMissingError,
    ArgumentOutOfRangeError,
    EntropyUnavailableError,
)
from .pcg32_rng import Pcg32Config, Pcg32Rng, next_bounded_core

__all__ = [
    "Pcg32Rng",
    "Pcg32Config",
    "next_bounded_core",
    "read_os_entropy",
    "seed_pair_from_bytes",
    "ArgumentError",
    "ArgumentMissingError",
    "ArgumentOutOfRangeError",
    "EntropyUnavailableError",
    "DEFAULT_STREAM",
    "PCG32_MULTIPLIER",
]
