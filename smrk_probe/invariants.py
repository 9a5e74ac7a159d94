"""
Self-checks for the probe engine.

These pin down the arithmetic the statistics rest on. If any check
fails, reported defects cannot be trusted.

1. Sieve: primes up to 30 and the empty range below 2.
2. Von Mangoldt: values on primes, prime powers and composites.
3. Prime weights: every shift weight 1/p has p >= 2.
4. Structural symmetry: the assembled H equals its transpose.
5. Unit scenario: H e_1 at N=10, cutoff 5 is known exactly.
6. Reproducibility: two probes with one seed give identical reports.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .config import ProbeConfig, ArithmeticDegenerate
from .engine import SymmetryProbe, matvec
from .operators import PrimeShiftOperator
from .primes import primes_up_to, von_mangoldt


@dataclass
class InvariantResult:
    name: str
    passed: bool
    details: Dict[str, float]
    message: str


def check_sieve() -> InvariantResult:
    got = primes_up_to(30).tolist()
    expected = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    empty = len(primes_up_to(1)) == 0
    passed = got == expected and empty
    return InvariantResult(
        name="Prime Sieve",
        passed=passed,
        details={"count_30": len(got)},
        message=f"primes <= 30: {got}; primes <= 1 empty: {empty}",
    )


def check_von_mangoldt() -> InvariantResult:
    cases = {1: 0.0, 2: math.log(2), 4: math.log(2), 6: 0.0,
             9: math.log(3), 7: math.log(7), 12: 0.0, 32: math.log(2)}
    max_error = max(abs(von_mangoldt(n) - v) for n, v in cases.items())
    passed = max_error < 1e-15
    return InvariantResult(
        name="Von Mangoldt",
        passed=passed,
        details={"max_error": max_error},
        message=f"max deviation on {len(cases)} reference values: {max_error:.2e}",
    )


def check_prime_weights(config: ProbeConfig) -> InvariantResult:
    """
    Every shift weight 1/p must be well defined. A prime below 2 means the
    sieve is broken; this is a HARD FAILURE.
    """
    primes = primes_up_to(config.prime_cutoff)
    if len(primes) and primes[0] < 2:
        raise ArithmeticDegenerate(
            f"Degenerate prime weight: sieve produced p={primes[0]} < 2 "
            f"for prime_cutoff={config.prime_cutoff}.")
    ascending = bool(np.all(np.diff(primes) > 0))
    bounded = bool(len(primes) == 0 or primes[-1] <= config.prime_cutoff)
    passed = ascending and bounded
    return InvariantResult(
        name="Prime Weights",
        passed=passed,
        details={"num_primes": len(primes)},
        message=(
            f"{len(primes)} primes <= {config.prime_cutoff}, "
            f"{'strictly ascending' if ascending else 'NOT ASCENDING'}, "
            f"{'within cutoff' if bounded else 'EXCEEDS CUTOFF'}"
        ),
    )


def check_structural_symmetry(config: ProbeConfig) -> InvariantResult:
    """H assembled as a sparse matrix must equal its transpose exactly."""
    H = PrimeShiftOperator(config.n, config.prime_cutoff,
                           config.alpha, config.beta).to_sparse()
    diff = abs(H - H.T)
    max_asym = float(diff.max()) if diff.nnz else 0.0
    passed = max_asym == 0.0
    return InvariantResult(
        name="Structural Symmetry",
        passed=passed,
        details={"nnz": float(H.nnz), "max_asymmetry": max_asym},
        message=f"nnz(H) = {H.nnz}, max |H - H^T| = {max_asym:.2e}",
    )


def check_unit_scenario() -> InvariantResult:
    x = np.zeros(10)
    x[0] = 1.0
    y = matvec(10, 5, 0.0, 0.0, x)
    expected = np.array([0, 0.5, 1 / 3, 0, 0.2, 0, 0, 0, 0, 0])
    max_error = float(np.max(np.abs(y - expected)))
    passed = max_error == 0.0
    return InvariantResult(
        name="Unit Scenario",
        passed=passed,
        details={"max_error": max_error},
        message=f"H e_1 (N=10, cutoff=5) deviation: {max_error:.2e}",
    )


def check_reproducibility(config: ProbeConfig) -> InvariantResult:
    cfg = config.replace(trials=min(config.trials, 3))
    first = SymmetryProbe(cfg).run()
    second = SymmetryProbe(cfg).run()
    passed = first == second
    return InvariantResult(
        name="Reproducibility",
        passed=passed,
        details={"sym_abs_mean": first.sym_abs_mean},
        message=(
            f"seed={cfg.seed}, trials={cfg.trials}: reports "
            f"{'identical' if passed else 'DIFFER'}"
        ),
    )


def run_all_invariants(config: Optional[ProbeConfig] = None) -> list:
    """
    Run all invariant checks. Returns list of InvariantResult.
    Raises ArithmeticDegenerate if a prime weight is ill-defined.
    """
    if config is None:
        config = ProbeConfig.quick()

    results = []
    results.append(check_sieve())
    results.append(check_von_mangoldt())
    results.append(check_prime_weights(config))  # Raises on failure
    results.append(check_structural_symmetry(config))
    results.append(check_unit_scenario())
    results.append(check_reproducibility(config))
    return results
