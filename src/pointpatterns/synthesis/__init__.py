from .allocation import allocate_counts, increment_zeros, round_half_away, shift_to_positive
from .config_generator import generate_configs
from .core import (
    AllocationUnderflowError,
    PatternConfig,
    PatternError,
    PointPatternGenerator,
    PointPatternStrategy,
    ShapeMismatchError,
)
from .distributions import DaughterCountDistribution, NormalDaughterCounts, PoissonDaughterCounts
from .patterns import (
    cluster_point_pattern,
    gaussian_point_pattern,
    grid_shape,
    poisson_point_pattern,
    regular_point_pattern,
    soltisz_point_pattern,
    thomas_point_pattern,
)
from .registry import StrategySpec, default_registry
from .strategies import (
    GaussianClusterStrategy,
    RegularGridStrategy,
    SoltiszStrategy,
    ThomasStrategy,
    UniformStrategy,
)

__all__ = [
    "AllocationUnderflowError",
    "DaughterCountDistribution",
    "GaussianClusterStrategy",
    "NormalDaughterCounts",
    "PatternConfig",
    "PatternError",
    "PointPatternGenerator",
    "PointPatternStrategy",
    "PoissonDaughterCounts",
    "RegularGridStrategy",
    "ShapeMismatchError",
    "SoltiszStrategy",
    "StrategySpec",
    "ThomasStrategy",
    "UniformStrategy",
    "allocate_counts",
    "cluster_point_pattern",
    "default_registry",
    "gaussian_point_pattern",
    "generate_configs",
    "grid_shape",
    "increment_zeros",
    "poisson_point_pattern",
    "regular_point_pattern",
    "round_half_away",
    "shift_to_positive",
    "soltisz_point_pattern",
    "thomas_point_pattern",
]
