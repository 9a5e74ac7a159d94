"""
SplitMix64 pseudo-random stream.

The probe statistics must be exactly reproducible from a seed, so every
draw is computed in exact 64-bit integer arithmetic and converted to a
double with an exact division by 2^53.
"""

import numpy as np

MASK64 = (1 << 64) - 1
GOLDEN_GAMMA = 0x9E3779B97F4A7C15
MIX_1 = 0xBF58476D1CE4E5B9
MIX_2 = 0x94D049BB133111EB
TWO_POW_53 = float(1 << 53)


class SplitMix64:
    """Deterministic generator whose whole state is one unsigned 64-bit word."""

    def __init__(self, seed: int = 0):
        self.state = int(seed) & MASK64

    def next_u64(self) -> int:
        self.state = (self.state + GOLDEN_GAMMA) & MASK64
        z = self.state
        z = ((z ^ (z >> 30)) * MIX_1) & MASK64
        z = ((z ^ (z >> 27)) * MIX_2) & MASK64
        return z ^ (z >> 31)

    def uniform(self) -> float:
        """Uniform on [0, 1) from the top 53 bits of one draw."""
        return (self.next_u64() >> 11) / TWO_POW_53

    def signed(self) -> float:
        """Uniform on [-1, 1) as 2u - 1."""
        return 2.0 * self.uniform() - 1.0

    def signed_vector(self, n: int) -> np.ndarray:
        """
        n successive signed draws, in draw order.

        Draw i sees state seed + i * GOLDEN_GAMMA, so the whole batch is
        mixed at once in uint64 arrays, which wrap modulo 2^64.
        """
        steps = np.arange(1, n + 1, dtype=np.uint64)
        z = np.uint64(self.state) + steps * np.uint64(GOLDEN_GAMMA)
        z = (z ^ (z >> np.uint64(30))) * np.uint64(MIX_1)
        z = (z ^ (z >> np.uint64(27))) * np.uint64(MIX_2)
        z = z ^ (z >> np.uint64(31))
        self.state = (self.state + n * GOLDEN_GAMMA) & MASK64
        u = (z >> np.uint64(11)).astype(np.float64) / TWO_POW_53
        return 2.0 * u - 1.0
