from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from .core import PointPatternStrategy
from .sampling import (
    gaussian_cluster_sampler,
    regular_grid_sampler,
    soltisz_sampler,
    thomas_sampler,
    uniform_sampler,
)
from .strategies import (
    GaussianClusterStrategy,
    RegularGridStrategy,
    SoltiszStrategy,
    ThomasStrategy,
    UniformStrategy,
)


@dataclass(frozen=True, slots=True)
class StrategySpec:
    name: str
    strategy_cls: type[PointPatternStrategy]
    sampler: Callable[[np.random.Generator, Any], dict]
    supports_cfg: Callable[[Any], bool]


def _clusters_fit(cfg: Any) -> bool:
    return cfg.num_points >= cfg.num_clusters


def default_registry() -> list[StrategySpec]:
    return [
        StrategySpec(
            "Uniform",
            UniformStrategy,
            lambda rng, cfg: uniform_sampler(rng),
            lambda cfg: True,
        ),
        StrategySpec(
            "RegularGrid",
            RegularGridStrategy,
            regular_grid_sampler,
            lambda cfg: cfg.num_points >= 1,
        ),
        StrategySpec(
            "GaussianCluster",
            GaussianClusterStrategy,
            gaussian_cluster_sampler,
            lambda cfg: cfg.num_clusters == 1,
        ),
        StrategySpec(
            "Thomas",
            ThomasStrategy,
            thomas_sampler,
            _clusters_fit,
        ),
        StrategySpec(
            "Soltisz",
            SoltiszStrategy,
            soltisz_sampler,
            _clusters_fit,
        ),
    ]
