from abc import ABC, abstractmethod

import numpy as np
from scipy.stats import loguniform, rv_discrete

from .allocation import increment_zeros, shift_to_positive


class DaughterCountDistribution(ABC):
    """Draws relative cluster sizes for a parent-daughter process."""

    @abstractmethod
    def draw_raw_weights(self, rng: np.random.Generator, n_clusters: int) -> np.ndarray: ...

    @abstractmethod
    def make_positive(self, weights: np.ndarray) -> np.ndarray: ...


class PoissonDaughterCounts(DaughterCountDistribution):
    """Poisson(lambda_daughter) daughter counts (Thomas process)."""

    def __init__(self, lambda_daughter: float) -> None:
        if not lambda_daughter > 0:
            raise ValueError(f"lambda_daughter must be positive, got {lambda_daughter!r}")
        self.lambda_daughter = float(lambda_daughter)

    def draw_raw_weights(self, rng: np.random.Generator, n_clusters: int) -> np.ndarray:
        return rng.poisson(self.lambda_daughter, size=n_clusters).astype(float)

    def make_positive(self, weights: np.ndarray) -> np.ndarray:
        return increment_zeros(weights)

    def __repr__(self) -> str:
        return f"PoissonDaughterCounts(lambda_daughter={self.lambda_daughter})"


class NormalDaughterCounts(DaughterCountDistribution):
    """Standard normal relative sizes, shifted so the smallest cluster weighs 1."""

    def draw_raw_weights(self, rng: np.random.Generator, n_clusters: int) -> np.ndarray:
        return rng.standard_normal(n_clusters)

    def make_positive(self, weights: np.ndarray) -> np.ndarray:
        return shift_to_positive(weights)

    def __repr__(self) -> str:
        return "NormalDaughterCounts()"


def make_truncated_zipf(k_min: int = 2, k_max: int = 15, alpha: float = 1.6) -> rv_discrete:
    if k_min < 1 or k_max < k_min:
        raise ValueError("Require 1 <= k_min <= k_max.")
    ks = np.arange(k_min, k_max + 1, dtype=int)
    pmf = 1.0 / (ks.astype(float) ** alpha)
    pmf /= pmf.sum()
    return rv_discrete(name="trunc_zipf", values=(ks, pmf))


def zipf_quantile(u: np.ndarray, dist: rv_discrete) -> np.ndarray:
    u = np.clip(u, 0.0, 1.0 - 1e-12)
    return dist.ppf(u).astype(int)


def loguniform_quantile(u: np.ndarray, n_lo: int, n_hi: int) -> np.ndarray:
    """Map uniform samples to log-uniform integers."""
    if n_lo <= 0 or n_hi <= n_lo:
        raise ValueError("Require 0 < n_lo < n_hi.")
    u = np.clip(u, 0.0, 1.0 - 1e-12)
    n_cont = loguniform(a=n_lo, b=n_hi).ppf(u)
    n = np.rint(n_cont).astype(int)
    return np.clip(n, n_lo, n_hi)
