"""Frozen algorithm constants for the PCG XSH-RR 64/32 generator."""

PCG32_MULTIPLIER = 6364136223846793005
DEFAULT_STREAM = 54

ENTROPY_BYTES = 16

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1

UINT32_MAX = MASK32
INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

SINGLE_MANTISSA_BITS = 24
DOUBLE_MANTISSA_BITS = 53
