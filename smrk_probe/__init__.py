"""
SMRK Spectral Probe.

Evaluates a truncated prime-shift operator H on integer-indexed vectors
and measures, by seeded random probing, how close H is to self-adjoint.
"""

__version__ = "0.1.0"

from .config import ProbeConfig, InvalidArgument, ArithmeticDegenerate
from .engine import (
    SymmetryProbe,
    SymmetryReport,
    get_version,
    matvec,
    symmetry_probe,
    size_sweep,
)
from .operators import PrimeShiftOperator, h_matvec
from .primes import primes_up_to, von_mangoldt, log_weight
from .rng import SplitMix64
from .invariants import run_all_invariants
