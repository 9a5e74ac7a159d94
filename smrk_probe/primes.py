"""
Prime sieve and arithmetic weights.

Provides the arithmetic input channel of the operator: the primes that
index the shift terms, and the von Mangoldt / log weights that make up
its diagonal.
"""

import math
import numpy as np


def primes_up_to(cutoff: int) -> np.ndarray:
    """Sieve of Eratosthenes returning the ascending primes <= cutoff."""
    if cutoff < 2:
        return np.zeros(0, dtype=np.int64)
    is_prime = np.ones(cutoff + 1, dtype=bool)
    is_prime[0:2] = False
    p = 2
    while p * p <= cutoff:
        if is_prime[p]:
            is_prime[p * p :: p] = False
        p += 1
    return np.nonzero(is_prime)[0].astype(np.int64)


def von_mangoldt(n: int) -> float:
    """
    Lambda(n) = log(p) if n = p^k for some prime p and k >= 1, else 0.

    Trial division finds the smallest prime factor p; n is a prime power
    exactly when dividing out p leaves 1.
    """
    if n < 2:
        return 0.0
    m = n
    p = 2
    while p * p <= m:
        if m % p == 0:
            while m % p == 0:
                m //= p
            return math.log(p) if m == 1 else 0.0
        p += 1 if p == 2 else 2
    # no factor up to sqrt(n): n is prime
    return math.log(n)


def log_weight(n: int) -> float:
    """log(n) for n > 1, else 0."""
    return math.log(n) if n > 1 else 0.0


def diagonal_weights(n: int, alpha: float, beta: float) -> np.ndarray:
    """
    Diagonal of H at integers 1..n, stored at positions 0..n-1:
        d(k) = alpha * Lambda(k) + beta * log(k)
    """
    lam = np.fromiter((von_mangoldt(k) for k in range(1, n + 1)),
                      dtype=np.float64, count=n)
    # log(1) = 0 matches log_weight at k = 1
    logs = np.log(np.arange(1, n + 1, dtype=np.float64))
    return alpha * lam + beta * logs
