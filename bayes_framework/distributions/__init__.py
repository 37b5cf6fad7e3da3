"""Continuous feature models: fitted distributions and best-fit selection."""

from .base import ContinuousDistribution
from .point_mass import PointMassDistribution
from .scipy_family import DISTRIBUTION_REGISTRY, ScipyDistribution, fit_family
from .search import SELECTION_CRITERIA, get_best_distribution

__all__ = [
    "ContinuousDistribution",
    "PointMassDistribution",
    "ScipyDistribution",
    "DISTRIBUTION_REGISTRY",
    "fit_family",
    "SELECTION_CRITERIA",
    "get_best_distribution",
]
