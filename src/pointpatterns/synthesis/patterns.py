import logging

import numpy as np

from .allocation import allocate_counts, round_half_away
from .core import (
    AllocationUnderflowError,
    ShapeMismatchError,
    as_generator,
    as_study_area,
    check_count,
)
from .distributions import DaughterCountDistribution, NormalDaughterCounts, PoissonDaughterCounts

logger = logging.getLogger(__name__)


def poisson_point_pattern(
    study_area,
    num_points: int,
    rng: np.random.Generator | int | None = None,
) -> np.ndarray:
    """
    Homogeneous Poisson (uniform) pattern of exactly ``num_points`` points.

    Args:
        study_area: d-by-2 bounds matrix, row i holding (min, max) of axis i.
        num_points: sample size.
        rng: generator, integer seed, or None for a fresh unseeded generator.

    Returns:
        (num_points, d) array with every coordinate in [min_i, max_i).
    """
    area = as_study_area(study_area)
    n = check_count(num_points, "num_points")
    rng = as_generator(rng)

    lo, hi = area[:, 0], area[:, 1]
    return rng.random((n, area.shape[0])) * (hi - lo) + lo


def gaussian_point_pattern(
    num_points: int,
    radius,
    center,
    rng: np.random.Generator | int | None = None,
) -> np.ndarray:
    """
    One Gaussian cluster: ``standard_normal((n, d)) * radius + center``.

    ``radius`` is used as the per-axis scale and may be a scalar or a vector
    with one entry per dimension of ``center``. It is not clamped, so a
    negative radius mirrors the sample through ``center``.
    """
    center = np.asarray(center, dtype=float).ravel()
    radius = np.asarray(radius, dtype=float)
    n_dims = center.size
    if n_dims == 0:
        raise ShapeMismatchError("cluster center must have at least one coordinate")
    if radius.size != 1 and radius.size != n_dims:
        raise ShapeMismatchError(
            f"cluster radius must be a scalar or have {n_dims} entries, got {radius.size}"
        )
    radius = radius.reshape(()) if radius.size == 1 else radius.ravel()
    n = check_count(num_points, "num_points")
    rng = as_generator(rng)

    return rng.standard_normal((n, n_dims)) * radius + center


def grid_shape(study_area, num_points: int) -> tuple[np.ndarray, float]:
    """Per-axis point counts and spacing of the grid closest to ``num_points``."""
    area = as_study_area(study_area)
    n = check_count(num_points, "num_points")
    if n == 0:
        raise ValueError("num_points must be >= 1 for a regular grid")

    extent = area[:, 1] - area[:, 0]
    spacing = float((np.prod(extent) / n) ** (1.0 / extent.size))
    counts = np.maximum(round_half_away(extent / spacing), 1).astype(np.int64)
    return counts, spacing


def regular_point_pattern(
    study_area,
    num_points: int,
    jitter_stdev: float | None = None,
    rng: np.random.Generator | int | None = None,
) -> tuple[np.ndarray, float]:
    """
    Regular grid spanning the study area, optionally jittered.

    The grid holds ``prod(counts)`` points, which is the closest a product of
    per-axis integers gets to ``num_points`` and need not equal it. The first
    axis varies fastest. With ``jitter_stdev`` set, independent
    N(0, jitter_stdev) noise is added to every coordinate.

    Returns:
        (points, spacing) where spacing is the nominal grid step before jitter.
    """
    if jitter_stdev is not None and (np.ndim(jitter_stdev) != 0 or not jitter_stdev >= 0):
        raise ValueError(f"jitter_stdev must be a non-negative scalar, got {jitter_stdev!r}")
    area = as_study_area(study_area)
    counts, spacing = grid_shape(area, num_points)

    axes = [np.linspace(lo, hi, m) for (lo, hi), m in zip(area, counts)]
    grids = np.meshgrid(*axes, indexing="ij")
    points = np.column_stack([g.ravel(order="F") for g in grids])

    if points.shape[0] != num_points:
        logger.debug(
            f"Grid {counts.tolist()} holds {points.shape[0]} points (requested {num_points})"
        )

    if jitter_stdev is not None:
        rng = as_generator(rng)
        points = points + jitter_stdev * rng.standard_normal(points.shape)

    return points, spacing


def cluster_point_pattern(
    study_area,
    num_points: int,
    num_clusters: int,
    distribution: DaughterCountDistribution,
    radius_mean: float,
    radius_stdev: float,
    rng: np.random.Generator | int | None = None,
    return_counts: bool = False,
):
    """
    Two-level parent-daughter cluster process with an exact sample size.

    Parents are placed uniformly in the study area. ``distribution`` gives
    each cluster a relative size, which ``allocate_counts`` turns into integer
    counts summing to ``num_points``. Cluster radii are drawn as
    ``N(radius_mean, radius_stdev)`` and daughters are placed around their
    parent by ``gaussian_point_pattern``.

    Draw order on ``rng``: parents, raw weights, radii, then daughters
    cluster by cluster.

    Returns:
        (points, labels), or (points, labels, counts) with ``return_counts``.
        Points are grouped by cluster in ascending order and labels run from 1
        to ``num_clusters``.

    Raises:
        AllocationUnderflowError: the allocation left a negative count, which
            can happen when ``num_points`` is smaller than ``num_clusters``.
    """
    area = as_study_area(study_area)
    n = check_count(num_points, "num_points")
    k = check_count(num_clusters, "num_clusters")
    if k < 1:
        raise ValueError("num_clusters must be >= 1")
    rng = as_generator(rng)

    centers = poisson_point_pattern(area, k, rng)

    raw_weights = distribution.draw_raw_weights(rng, k)
    counts = allocate_counts(raw_weights, n, distribution.make_positive)
    if (counts < 0).any():
        raise AllocationUnderflowError(
            f"{distribution!r} allocated negative counts {counts.tolist()} "
            f"for {n} points over {k} clusters"
        )
    n_empty = int((counts == 0).sum())
    if n_empty:
        logger.warning(f"{n_empty} of {k} clusters received no points")

    radii = rng.standard_normal(k) * radius_stdev + radius_mean

    logger.debug(f"Placing {n} daughters over {k} clusters with {distribution!r}")
    points = np.empty((n, area.shape[0]), dtype=float)
    labels = np.empty(n, dtype=np.int64)
    start = 0
    for i, (count, radius, center) in enumerate(zip(counts, radii, centers)):
        stop = start + int(count)
        points[start:stop] = gaussian_point_pattern(count, radius, center, rng)
        labels[start:stop] = i + 1
        start = stop

    if return_counts:
        return points, labels, counts
    return points, labels


def thomas_point_pattern(
    study_area,
    num_points: int,
    num_clusters: int,
    lambda_daughter: float,
    radius_mean: float,
    radius_stdev: float,
    rng: np.random.Generator | int | None = None,
    return_counts: bool = False,
):
    """Thomas-style process: cluster sizes proportional to Poisson(lambda_daughter) draws."""
    return cluster_point_pattern(
        study_area,
        num_points,
        num_clusters,
        PoissonDaughterCounts(lambda_daughter),
        radius_mean,
        radius_stdev,
        rng=rng,
        return_counts=return_counts,
    )


def soltisz_point_pattern(
    study_area,
    num_points: int,
    num_clusters: int,
    radius_mean: float,
    radius_stdev: float,
    rng: np.random.Generator | int | None = None,
    return_counts: bool = False,
):
    """Cluster process with normally distributed cluster sizes."""
    return cluster_point_pattern(
        study_area,
        num_points,
        num_clusters,
        NormalDaughterCounts(),
        radius_mean,
        radius_stdev,
        rng=rng,
        return_counts=return_counts,
    )
