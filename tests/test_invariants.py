"""
Tests for the invariant suite.
"""

import pytest

from smrk_probe.config import ProbeConfig
from smrk_probe.invariants import (
    run_all_invariants,
    check_prime_weights,
    check_structural_symmetry,
)


class TestInvariants:

    def test_all_pass_on_quick_preset(self):
        results = run_all_invariants(ProbeConfig.quick())
        assert len(results) == 6
        failed = [r.name for r in results if not r.passed]
        assert failed == []

    def test_default_config_used_when_none(self):
        results = run_all_invariants()
        assert all(r.passed for r in results)

    def test_prime_weights_without_primes(self):
        r = check_prime_weights(ProbeConfig(n=10, prime_cutoff=1, trials=1))
        assert r.passed
        assert r.details["num_primes"] == 0

    def test_structural_symmetry_reports_nnz(self):
        r = check_structural_symmetry(ProbeConfig(n=50, prime_cutoff=7, trials=1))
        assert r.passed
        assert r.details["max_asymmetry"] == 0.0
        assert r.details["nnz"] > 50
