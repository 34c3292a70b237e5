import json
from pathlib import Path

import numpy as np
from scipy.stats import qmc

from .core import PatternConfig
from .patterns import grid_shape, poisson_point_pattern

PATTERN_PARAMS_PATH = Path(__file__).parent / "pattern_params.json"


def _load_params() -> dict:
    """Load sampling parameters from JSON file."""
    with open(PATTERN_PARAMS_PATH) as f:
        return json.load(f)


PARAMS = _load_params()


def sample_loguniform(rng: np.random.Generator, low: float, high: float) -> float:
    return float(np.exp(rng.uniform(np.log(low), np.log(high))))


def _min_extent(cfg: PatternConfig) -> float:
    bounds = cfg.bounds
    return float((bounds[:, 1] - bounds[:, 0]).min())


def uniform_sampler(rng: np.random.Generator) -> dict:
    return {}


def regular_grid_sampler(rng: np.random.Generator, cfg: PatternConfig) -> dict:
    params = PARAMS["RegularGrid"]
    _counts, spacing = grid_shape(cfg.study_area, cfg.num_points)
    fraction = rng.uniform(params["jitter_fraction"]["low"], params["jitter_fraction"]["high"])
    return {"jitter_stdev": float(fraction * spacing)}


def gaussian_cluster_sampler(rng: np.random.Generator, cfg: PatternConfig) -> dict:
    params = PARAMS["GaussianCluster"]
    radius = _min_extent(cfg) * sample_loguniform(
        rng, params["radius_fraction"]["low"], params["radius_fraction"]["high"]
    )
    center = poisson_point_pattern(cfg.study_area, 1, rng)[0]
    return {"radius": radius, "center": center.tolist()}


def _radius_params(rng: np.random.Generator, cfg: PatternConfig, params: dict) -> dict:
    # radii scale with the study area; stdev is a fraction of the mean
    radius_mean = _min_extent(cfg) * sample_loguniform(
        rng, params["radius_mean_fraction"]["low"], params["radius_mean_fraction"]["high"]
    )
    cv = rng.uniform(params["radius_cv"]["low"], params["radius_cv"]["high"])
    return {"radius_mean": radius_mean, "radius_stdev": float(cv * radius_mean)}


def thomas_sampler(rng: np.random.Generator, cfg: PatternConfig) -> dict:
    params = PARAMS["Thomas"]
    lam = params["lambda_daughter"]
    return {
        "lambda_daughter": sample_loguniform(rng, lam["low"], lam["high"]),
        **_radius_params(rng, cfg, params),
    }


def soltisz_sampler(rng: np.random.Generator, cfg: PatternConfig) -> dict:
    return _radius_params(rng, cfg, PARAMS["Soltisz"])


def lhs(n: int, d: int, rng: np.random.Generator) -> np.ndarray:
    """Latin hypercube samples in [0,1)^d."""
    sampler = qmc.LatinHypercube(d=d, rng=rng)
    return sampler.random(n=n)
