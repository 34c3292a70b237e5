import numpy as np

from .core import PatternConfig
from .distributions import (
    loguniform_quantile,
    make_truncated_zipf,
    zipf_quantile,
)
from .sampling import lhs


def generate_configs(
    n_configs: int,
    k_min: int = 1,
    k_max: int = 15,
    n_low: int = 100,
    n_high: int = 2500,
    d_low: int = 2,
    d_high: int = 3,
    extent: float = 1.0,
    zipf_alpha: float = 1.6,
    seed: int = 42,
) -> list[PatternConfig]:
    """Map LHS samples to (k, n, d) over the cube [0, extent]^d."""
    if extent <= 0:
        raise ValueError("extent must be positive")
    rng = np.random.default_rng(seed)

    U = lhs(n_configs, 3, rng)  # columns: u_k, u_n, u_d
    u_k, u_n, u_d = U[:, 0], U[:, 1], U[:, 2]

    zipf_dist = make_truncated_zipf(k_min=k_min, k_max=k_max, alpha=zipf_alpha)
    num_clusters = zipf_quantile(u_k, zipf_dist)

    num_points = loguniform_quantile(u_n, n_low, n_high)

    # Uniform integers in [d_low, d_high]
    if d_low > d_high:
        raise ValueError("Require d_low <= d_high.")
    if d_low == d_high:
        num_dimensions = np.full(n_configs, d_low, dtype=int)
    else:
        num_dimensions = d_low + np.floor(u_d * (d_high - d_low + 1)).astype(int)
        num_dimensions = np.clip(num_dimensions, d_low, d_high)

    return [
        PatternConfig(
            study_area=((0.0, float(extent)),) * int(d),
            num_points=int(n),
            num_clusters=int(k),
        )
        for k, n, d in zip(num_clusters, num_points, num_dimensions)
    ]
