"""
Symmetry probe -- the Monte-Carlo aggregation pipeline.

Each trial draws two random vectors x, y from a seeded SplitMix64
stream, applies H to both, and records the symmetry defect

    |<x, Hy> - <Hx, y>|

together with ||Hx|| and ||x||. The report averages these over trials.
For a fixed seed and parameters the report is bit-for-bit reproducible.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Iterator, List, Sequence

import numpy as np

from .config import (
    ProbeConfig,
    validate_matvec_args,
)
from .operators import PrimeShiftOperator, h_matvec
from .rng import SplitMix64

logger = logging.getLogger(__name__)

VERSION_STRING = "smrk_probe v0.1 (matvec + symmetry_probe)"


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.dot(a, b))


def norm2(a: np.ndarray) -> float:
    return float(np.sqrt(dot(a, a)))


@dataclass(frozen=True)
class TrialResult:
    index: int
    defect: float
    hx_norm: float
    x_norm: float


@dataclass(frozen=True)
class SymmetryReport:
    n: int
    p_max: int
    alpha: float
    beta: float
    seed: int
    trials: int

    sym_abs_mean: float
    sym_abs_max: float
    hx_norm_mean: float
    x_norm_mean: float

    @property
    def relative_defect(self) -> float:
        """Mean defect scaled by the mean operand norms."""
        scale = self.hx_norm_mean * self.x_norm_mean
        return self.sym_abs_mean / scale if scale > 0 else 0.0

    def to_dict(self) -> dict:
        return asdict(self)


class SymmetryProbe:
    """
    Runs symmetry trials against one truncation of H.

    Usage:
        probe = SymmetryProbe(ProbeConfig(n=1000, prime_cutoff=50))
        report = probe.run()
    """

    def __init__(self, config: ProbeConfig):
        self.config = config
        # Construction is pure, so one operator serves every trial.
        self._operator = PrimeShiftOperator(
            config.n, config.prime_cutoff, config.alpha, config.beta)

    @property
    def operator(self) -> PrimeShiftOperator:
        return self._operator

    def iter_trials(self) -> Iterator[TrialResult]:
        """Yield one TrialResult per trial, in draw order."""
        cfg = self.config
        rng = SplitMix64(cfg.seed)
        for t in range(cfg.trials):
            # x is drawn in full before y; the draw order fixes the report
            x = rng.signed_vector(cfg.n)
            y = rng.signed_vector(cfg.n)

            hx = self._operator.apply(x)
            hy = self._operator.apply(y)

            defect = abs(dot(x, hy) - dot(hx, y))
            logger.debug("trial %d: defect=%.3e", t, defect)
            yield TrialResult(index=t, defect=defect,
                              hx_norm=norm2(hx), x_norm=norm2(x))

    def aggregate(self, trials: Sequence[TrialResult]) -> SymmetryReport:
        cfg = self.config
        sym_abs_sum = 0.0
        sym_abs_max = 0.0
        hx_norm_sum = 0.0
        x_norm_sum = 0.0
        for tr in trials:
            sym_abs_sum += tr.defect
            if tr.defect > sym_abs_max:
                sym_abs_max = tr.defect
            hx_norm_sum += tr.hx_norm
            x_norm_sum += tr.x_norm

        t = float(cfg.trials)
        return SymmetryReport(
            n=cfg.n,
            p_max=cfg.prime_cutoff,
            alpha=cfg.alpha,
            beta=cfg.beta,
            seed=cfg.seed,
            trials=cfg.trials,
            sym_abs_mean=sym_abs_sum / t,
            sym_abs_max=sym_abs_max,
            hx_norm_mean=hx_norm_sum / t,
            x_norm_mean=x_norm_sum / t,
        )

    def run(self) -> SymmetryReport:
        report = self.aggregate(list(self.iter_trials()))
        logger.info("Probe N=%d p_max=%d trials=%d: mean defect %.3e, max %.3e",
                    report.n, report.p_max, report.trials,
                    report.sym_abs_mean, report.sym_abs_max)
        return report


def get_version() -> str:
    return VERSION_STRING


def matvec(n: int, prime_cutoff: int, alpha: float, beta: float, x) -> np.ndarray:
    """
    y = Hx for the truncation (N, prime_cutoff).

    Raises InvalidArgument unless 1 <= N <= 50,000, prime_cutoff <= 1,000,000
    and len(x) == N.
    """
    validate_matvec_args(n, prime_cutoff, x)
    return h_matvec(n, prime_cutoff, float(alpha), float(beta), x)


def symmetry_probe(n: int, prime_cutoff: int, alpha: float, beta: float,
                   seed: int, trials: int) -> SymmetryReport:
    """
    Estimate how far H is from self-adjoint with `trials` random probes.

    Raises InvalidArgument unless 1 <= N <= 20,000 and 1 <= trials <= 200.
    """
    config = ProbeConfig(n=n, prime_cutoff=prime_cutoff, alpha=float(alpha),
                         beta=float(beta), seed=seed, trials=trials)
    return SymmetryProbe(config).run()


def size_sweep(sizes: Sequence[int], prime_cutoff: int, alpha: float = 1.0,
               beta: float = 0.0, seed: int = 42, trials: int = 10
               ) -> List[SymmetryReport]:
    """
    Run one probe per truncation size, same seed throughout, to show
    how the defect scales with N.
    """
    return [symmetry_probe(n, prime_cutoff, alpha, beta, seed, trials)
            for n in sizes]
