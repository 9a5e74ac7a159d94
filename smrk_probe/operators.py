"""
The truncated prime-shift operator H.

Integers 1..N live at positions 0..N-1. For every prime p <= cutoff:

    (Hx)(n) = (alpha * Lambda(n) + beta * log n) * x(n)
            + sum_p (1/p) * [ x(pn) if pn <= N ] + (1/p) * [ x(n/p) if p | n ]

The forward entry (n, pn) and backward entry (pn, n) carry the same
weight 1/p, so H is structurally symmetric at every truncation. Any
measured asymmetry comes from floating-point rounding.
"""

import logging

import numpy as np
from scipy.sparse import coo_matrix, diags

from .config import InvalidArgument
from .primes import primes_up_to, diagonal_weights

logger = logging.getLogger(__name__)


class PrimeShiftOperator:
    """
    H truncated to N indices and primes <= prime_cutoff.
    The prime list and diagonal are computed once on construction.
    """

    def __init__(self, n: int, prime_cutoff: int, alpha: float, beta: float):
        self.n = n
        self.prime_cutoff = prime_cutoff
        self.alpha = alpha
        self.beta = beta
        self._primes = primes_up_to(prime_cutoff)
        self._diag = diagonal_weights(n, alpha, beta)
        logger.debug("Built H: N=%d, prime_cutoff=%d, %d primes",
                     n, prime_cutoff, len(self._primes))

    @property
    def primes(self) -> np.ndarray:
        return self._primes

    @property
    def diagonal(self) -> np.ndarray:
        return self._diag

    def _active_primes(self):
        """(p, floor(N/p)) for primes with at least one multiple <= N."""
        for p in self._primes:
            p = int(p)
            m = self.n // p
            if m == 0:
                # primes ascend, so no later prime reaches N either
                break
            yield p, m

    def apply(self, x) -> np.ndarray:
        """y = Hx. x must have exactly N entries."""
        x = np.asarray(x, dtype=np.float64)
        if x.shape != (self.n,):
            raise InvalidArgument(
                f"x length must equal N={self.n}, got shape {x.shape}")

        y = np.zeros(self.n, dtype=np.float64)
        y += self._diag * x

        for p, m in self._active_primes():
            inv_p = 1.0 / p
            # forward: y(k) += x(pk)/p for k = 1..m, ascending; pk > N past m
            y[:m] += inv_p * x[p - 1 : p * m : p]
            # backward: y(pk) += x(k)/p for every multiple pk <= N
            y[p - 1 :: p] += inv_p * x[:m]

        return y

    __matmul__ = apply

    def to_sparse(self):
        """Assemble H as an N x N CSR matrix."""
        rows, cols, vals = [], [], []
        for p, m in self._active_primes():
            k = np.arange(1, m + 1)
            w = np.full(m, 1.0 / p)
            rows += [k - 1, p * k - 1]
            cols += [p * k - 1, k - 1]
            vals += [w, w]

        D = diags(self._diag, 0, shape=(self.n, self.n), format="csr")
        if not rows:
            return D
        off = coo_matrix(
            (np.concatenate(vals), (np.concatenate(rows), np.concatenate(cols))),
            shape=(self.n, self.n),
        ).tocsr()
        return D + off


def h_matvec(n: int, prime_cutoff: int, alpha: float, beta: float, x) -> np.ndarray:
    """Apply a freshly built H to x. Assumes validated inputs."""
    return PrimeShiftOperator(n, prime_cutoff, alpha, beta).apply(x)
