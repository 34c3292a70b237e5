from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

StrategyConfig = dict[str, object]


class PatternError(ValueError):
    """Base class for invalid point pattern requests."""


class ShapeMismatchError(PatternError):
    """Array argument has the wrong shape for the pattern dimensionality."""


class AllocationUnderflowError(PatternError):
    """A cluster was allocated a negative number of points."""


def as_study_area(study_area) -> np.ndarray:
    """Validate a d-by-2 (min, max) bounds matrix and return it as floats."""
    area = np.asarray(study_area, dtype=float)
    if area.ndim != 2 or area.shape[1] != 2 or area.shape[0] < 1:
        raise ShapeMismatchError(
            f"study area must be a d-by-2 matrix of (min, max) bounds, got shape {area.shape}"
        )
    if not np.isfinite(area).all():
        raise ShapeMismatchError("study area bounds must be finite")
    extent = area[:, 1] - area[:, 0]
    if (extent <= 0).any():
        bad = np.flatnonzero(extent <= 0).tolist()
        raise ShapeMismatchError(f"study area has non-positive extent on axes {bad}")
    return area


def check_count(value, name: str) -> int:
    if isinstance(value, bool) or not float(value).is_integer() or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return int(value)


def as_generator(rng: np.random.Generator | int | None) -> np.random.Generator:
    """Pass generators through; seed a new one from an int or from OS entropy."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


@dataclass(frozen=True)
class PatternConfig:
    """Study area, sample size and cluster count of a point pattern."""

    study_area: tuple[tuple[float, float], ...]
    num_points: int
    num_clusters: int = 1

    @property
    def num_dimensions(self) -> int:
        return len(self.study_area)

    @property
    def bounds(self) -> np.ndarray:
        return as_study_area(self.study_area)

    def validate(self) -> "PatternConfig":
        as_study_area(self.study_area)
        check_count(self.num_points, "num_points")
        if self.num_clusters < 1:
            raise ValueError("num_clusters must be >= 1")
        return self


class PointPatternStrategy(ABC):
    def __init__(self, pattern_config: PatternConfig) -> None:
        self.pattern_config = pattern_config

    @abstractmethod
    def generate(
        self,
        strategy_config: StrategyConfig,
        rng: np.random.Generator,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Return (points, labels) arrays."""
        ...


class PointPatternGenerator:
    def __init__(self, strategy: PointPatternStrategy) -> None:
        """Create a generator with a strategy."""
        self.strategy = strategy

    def generate_pattern(
        self,
        strategy_config: StrategyConfig,
        seed: int | None = None,
        shuffle: bool = False,
    ) -> tuple[np.ndarray, np.ndarray]:
        rng = np.random.default_rng(seed)
        points, labels = self.strategy.generate(strategy_config, rng)
        if shuffle:
            idx = rng.permutation(points.shape[0])
            points, labels = points[idx], labels[idx]
        return points, labels
