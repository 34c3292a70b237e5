import logging
from collections.abc import Callable

import numpy as np

from .core import (
    AllocationUnderflowError,
    PointPatternStrategy,
    ShapeMismatchError,
    StrategyConfig,
)
from .patterns import (
    gaussian_point_pattern,
    poisson_point_pattern,
    regular_point_pattern,
    soltisz_point_pattern,
    thomas_point_pattern,
)

logger = logging.getLogger(__name__)

MAX_ALLOCATION_ATTEMPTS = 100


def _redraw_on_underflow(
    generate: Callable[[np.random.Generator], tuple[np.ndarray, np.ndarray]],
    rng: np.random.Generator,
    max_attempts: int = MAX_ALLOCATION_ATTEMPTS,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Run a cluster process, redrawing it from the same generator while the
    allocation leaves a negative cluster count. The last attempt propagates
    AllocationUnderflowError.
    """
    for attempt in range(1, max_attempts):
        try:
            return generate(rng)
        except AllocationUnderflowError as e:
            logger.debug(f"Redrawing cluster process (attempt {attempt}): {e}")
    return generate(rng)


class UniformStrategy(PointPatternStrategy):
    """Homogeneous Poisson pattern. All points carry label 0 (no cluster)."""

    def generate(
        self,
        strategy_config: StrategyConfig,
        rng: np.random.Generator,
    ) -> tuple[np.ndarray, np.ndarray]:
        cfg = self.pattern_config
        X = poisson_point_pattern(cfg.study_area, cfg.num_points, rng)
        return X, np.zeros(X.shape[0], dtype=np.int64)


class RegularGridStrategy(PointPatternStrategy):
    """
    Regular grid over the study area.

    strategy_config keys:
        jitter_stdev: float | None   # Gaussian positional jitter (default: none)

    The number of returned points is the grid size closest to num_points.
    """

    def generate(
        self,
        strategy_config: StrategyConfig,
        rng: np.random.Generator,
    ) -> tuple[np.ndarray, np.ndarray]:
        cfg = self.pattern_config
        X, _spacing = regular_point_pattern(
            cfg.study_area,
            cfg.num_points,
            jitter_stdev=strategy_config.get("jitter_stdev"),
            rng=rng,
        )
        return X, np.zeros(X.shape[0], dtype=np.int64)


class GaussianClusterStrategy(PointPatternStrategy):
    """
    A single Gaussian cluster labelled 1.

    strategy_config keys:
        radius: float | list[float]   # required; scalar or one stdev per axis
        center: list[float] | None    # default: midpoint of the study area
    """

    def generate(
        self,
        strategy_config: StrategyConfig,
        rng: np.random.Generator,
    ) -> tuple[np.ndarray, np.ndarray]:
        cfg = self.pattern_config
        if cfg.num_clusters != 1:
            raise ValueError("GaussianClusterStrategy only supports num_clusters == 1.")
        radius = strategy_config["radius"]  # required
        center = strategy_config.get("center")
        if center is None:
            center = cfg.bounds.mean(axis=1)
        elif np.size(center) != cfg.num_dimensions:
            raise ShapeMismatchError(
                f"center has {np.size(center)} coordinates, study area has {cfg.num_dimensions}"
            )

        X = gaussian_point_pattern(cfg.num_points, radius, center, rng)
        return X, np.ones(X.shape[0], dtype=np.int64)


class ThomasStrategy(PointPatternStrategy):
    """
    Thomas-style parent-daughter process.

    strategy_config keys (all required):
        lambda_daughter: float   # Poisson mean of the relative cluster sizes
        radius_mean: float       # mean cluster radius
        radius_stdev: float      # stdev of cluster radius

    Allocations that leave a cluster with a negative count are redrawn.
    """

    def generate(
        self,
        strategy_config: StrategyConfig,
        rng: np.random.Generator,
    ) -> tuple[np.ndarray, np.ndarray]:
        cfg = self.pattern_config
        lambda_daughter = strategy_config["lambda_daughter"]
        radius_mean = strategy_config["radius_mean"]
        radius_stdev = strategy_config["radius_stdev"]
        return _redraw_on_underflow(
            lambda r: thomas_point_pattern(
                cfg.study_area,
                cfg.num_points,
                cfg.num_clusters,
                lambda_daughter=lambda_daughter,
                radius_mean=radius_mean,
                radius_stdev=radius_stdev,
                rng=r,
            ),
            rng,
        )


class SoltiszStrategy(PointPatternStrategy):
    """
    Parent-daughter process with normally distributed cluster sizes.

    strategy_config keys (all required):
        radius_mean: float
        radius_stdev: float

    Allocations that leave a cluster with a negative count are redrawn.
    """

    def generate(
        self,
        strategy_config: StrategyConfig,
        rng: np.random.Generator,
    ) -> tuple[np.ndarray, np.ndarray]:
        cfg = self.pattern_config
        radius_mean = strategy_config["radius_mean"]
        radius_stdev = strategy_config["radius_stdev"]
        return _redraw_on_underflow(
            lambda r: soltisz_point_pattern(
                cfg.study_area,
                cfg.num_points,
                cfg.num_clusters,
                radius_mean=radius_mean,
                radius_stdev=radius_stdev,
                rng=r,
            ),
            rng,
        )
