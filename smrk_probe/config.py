"""
Probe configuration and input guardrails.

The guardrails cap the cost of a call, which grows as
N x pi(prime_cutoff) x trials. Calls outside them are rejected outright,
never clamped.
"""

import warnings
from dataclasses import dataclass, asdict

import numpy as np

MAX_MATVEC_N = 50_000
MAX_PROBE_N = 20_000
MAX_PRIME_CUTOFF = 1_000_000
MAX_TRIALS = 200
MAX_SEED = (1 << 64) - 1

# Above this many shift-term updates a probe takes noticeable time.
WORK_WARNING_THRESHOLD = 5e8


class InvalidArgument(ValueError):
    """Raised when a size, range or length check fails at the boundary."""
    pass


class ArithmeticDegenerate(ArithmeticError):
    """Raised when a prime weight 1/p would be formed with p < 2."""
    pass


def _check_unsigned(name: str, value, upper: int, lower: int = 0) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if value < lower or value > upper:
        raise InvalidArgument(f"{name} must be in {lower}..={upper}, got {value}")


def validate_matvec_args(n, prime_cutoff, x) -> None:
    _check_unsigned("N", n, MAX_MATVEC_N, lower=1)
    _check_unsigned("prime_cutoff", prime_cutoff, MAX_PRIME_CUTOFF)
    shape = np.shape(x)
    if len(shape) != 1 or shape[0] != n:
        raise InvalidArgument(f"x length must equal N={n}, got shape {shape}")


def validate_probe_args(n, prime_cutoff, seed, trials) -> None:
    _check_unsigned("N", n, MAX_PROBE_N, lower=1)
    _check_unsigned("prime_cutoff", prime_cutoff, MAX_PRIME_CUTOFF)
    _check_unsigned("seed", seed, MAX_SEED)
    _check_unsigned("trials", trials, MAX_TRIALS, lower=1)


@dataclass(frozen=True)
class ProbeConfig:
    n: int = 2_000
    prime_cutoff: int = 100
    alpha: float = 1.0
    beta: float = 0.0
    seed: int = 42
    trials: int = 20

    def __post_init__(self):
        validate_probe_args(self.n, self.prime_cutoff, self.seed, self.trials)
        # numpy integers pass validation; keep plain ints for 64-bit masking
        for name in ("n", "prime_cutoff", "seed", "trials"):
            object.__setattr__(self, name, int(getattr(self, name)))
        work = self.work_estimate()
        if work > WORK_WARNING_THRESHOLD:
            warnings.warn(
                f"Probe cost is high: ~{work:.2e} shift-term updates for "
                f"N={self.n}, prime_cutoff={self.prime_cutoff}, "
                f"trials={self.trials}. Lower trials or prime_cutoff for a "
                f"faster run.",
                stacklevel=2,
            )

    def num_primes(self) -> int:
        from .primes import primes_up_to
        return len(primes_up_to(self.prime_cutoff))

    def num_active_primes(self) -> int:
        """Primes that have a multiple <= N; larger ones add no terms."""
        from .primes import primes_up_to
        return len(primes_up_to(min(self.prime_cutoff, self.n)))

    def work_estimate(self) -> float:
        """Shift-term updates for a full probe: two matvecs per trial."""
        return float(self.n) * self.num_active_primes() * 2 * self.trials

    def replace(self, **changes) -> "ProbeConfig":
        params = asdict(self)
        params.update(changes)
        return ProbeConfig(**params)

    @classmethod
    def quick(cls) -> "ProbeConfig":
        return cls(n=200, prime_cutoff=30, trials=5)

    @classmethod
    def default(cls) -> "ProbeConfig":
        return cls()

    @classmethod
    def large(cls) -> "ProbeConfig":
        return cls(n=20_000, prime_cutoff=1_000, trials=50)
