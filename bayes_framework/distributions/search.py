"""
Best-fit distribution search.
Fits every candidate family to a sample and keeps the one with the best goodness-of-fit score.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np
from scipy import stats

from bayes_framework.exceptions import FitFailureError

from .base import ContinuousDistribution
from .point_mass import PointMassDistribution
from .scipy_family import DISTRIBUTION_REGISTRY, ScipyDistribution, fit_family

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATES: tuple[str, ...] = (
    "normal",
    "lognormal",
    "exponential",
    "gamma",
    "laplace",
    "weibull",
    "uniform",
    "logistic",
)


def _ks_score(dist: ScipyDistribution, sample: np.ndarray) -> float:
    return float(stats.kstest(sample, dist.frozen.cdf).statistic)


def _aic_score(dist: ScipyDistribution, sample: np.ndarray) -> float:
    return 2.0 * dist.n_params - 2.0 * dist.log_likelihood(sample)


SELECTION_CRITERIA: dict[str, Callable[[ScipyDistribution, np.ndarray], float]] = {
    "ks": _ks_score,
    "aic": _aic_score,
}


def get_best_distribution(
    sample: np.ndarray,
    candidates: Sequence[str] | None = None,
    criterion: str = "ks",
) -> ContinuousDistribution:
    """
    Return the candidate family that best fits ``sample`` (lowest score wins, ties keep the earlier candidate).
    A constant sample yields a PointMassDistribution. Raises FitFailureError for an empty or
    non-finite sample, or when no candidate could be fitted.
    """
    if criterion not in SELECTION_CRITERIA:
        raise ValueError(f"Unknown criterion '{criterion}'. Available: {list(SELECTION_CRITERIA)}")
    names = list(candidates) if candidates else list(DEFAULT_CANDIDATES)
    for name in names:
        if name not in DISTRIBUTION_REGISTRY:
            raise ValueError(f"Unknown distribution family '{name}'. Available: {DISTRIBUTION_REGISTRY.list_names()}")

    x = np.asarray(sample, dtype=np.float64).ravel()
    if x.size == 0:
        raise FitFailureError("Cannot select a distribution for an empty sample")
    if not np.all(np.isfinite(x)):
        raise FitFailureError("Cannot select a distribution: sample contains non-finite values")
    if np.ptp(x) == 0:
        logger.debug("Constant sample (value=%g, n=%d): using point mass", x[0], x.size)
        return PointMassDistribution(float(x[0]))

    score_fn = SELECTION_CRITERIA[criterion]
    best: ScipyDistribution | None = None
    best_score = np.inf
    for name in names:
        try:
            dist = fit_family(name, x)
            with np.errstate(all="ignore"):
                score = score_fn(dist, x)
        except FitFailureError as exc:
            logger.debug("Skipping %s: %s", name, exc)
            continue
        if np.isfinite(score) and score < best_score:
            best, best_score = dist, score

    if best is None:
        raise FitFailureError(f"No candidate distribution could be fitted (tried {names})")
    logger.debug("Selected %s (%s=%.4g, n=%d)", best.descriptive_name(), criterion, best_score, x.size)
    return best
