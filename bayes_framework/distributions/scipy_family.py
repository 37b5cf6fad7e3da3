"""Parametric families backed by frozen scipy.stats distributions."""

from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass, field
from typing import Any, Callable

import numpy as np
from scipy import stats

from bayes_framework.exceptions import FitFailureError
from bayes_framework.utils.registry import Registry

from .base import ContinuousDistribution

logger = logging.getLogger(__name__)


def _loc_mode(params: tuple[float, ...]) -> float:
    return params[-2]


def _lognormal_mode(params: tuple[float, ...]) -> float:
    s, loc, scale = params
    return loc + scale * math.exp(-s * s)


def _gamma_mode(params: tuple[float, ...]) -> float:
    a, loc, scale = params
    return loc + max(a - 1.0, 0.0) * scale


def _weibull_mode(params: tuple[float, ...]) -> float:
    c, loc, scale = params
    if c <= 1.0:
        return loc
    return loc + scale * ((c - 1.0) / c) ** (1.0 / c)


def _no_mode(params: tuple[float, ...]) -> float:
    return float("nan")


@dataclass(frozen=True)
class FamilySpec:
    """How to fit one scipy family: fixed fit kwargs, whether it needs x > 0, and its mode."""

    rv: Any
    shape_names: tuple[str, ...] = ()
    fit_kwargs: dict[str, float] = field(default_factory=dict)
    positive_only: bool = False
    mode: Callable[[tuple[float, ...]], float] = _loc_mode


DISTRIBUTION_REGISTRY: Registry[FamilySpec] = Registry("distribution family")

_FAMILIES: dict[str, FamilySpec] = {
    "normal": FamilySpec(stats.norm),
    "exponential": FamilySpec(stats.expon),
    "lognormal": FamilySpec(stats.lognorm, ("s",), {"floc": 0.0}, positive_only=True, mode=_lognormal_mode),
    "gamma": FamilySpec(stats.gamma, ("a",), {"floc": 0.0}, positive_only=True, mode=_gamma_mode),
    "laplace": FamilySpec(stats.laplace),
    "uniform": FamilySpec(stats.uniform, mode=_no_mode),
    "weibull": FamilySpec(stats.weibull_min, ("c",), {"floc": 0.0}, positive_only=True, mode=_weibull_mode),
    "logistic": FamilySpec(stats.logistic),
}
for _name, _spec in _FAMILIES.items():
    DISTRIBUTION_REGISTRY.add(_name, _spec)


class ScipyDistribution(ContinuousDistribution):
    """A fitted member of a registered scipy.stats family."""

    def __init__(self, family: str, params: tuple[float, ...]) -> None:
        spec = DISTRIBUTION_REGISTRY.get(family)
        self.name = family
        self.params = tuple(float(p) for p in params)
        self._spec = spec
        self._frozen = spec.rv(*self.params)

    @classmethod
    def fit(cls, sample: np.ndarray, family: str = "normal") -> ScipyDistribution:
        return fit_family(family, sample)

    @property
    def frozen(self) -> Any:
        """The underlying frozen scipy.stats distribution (vectorized pdf/cdf)."""
        return self._frozen

    @property
    def n_params(self) -> int:
        """Free parameters estimated from data (fixed loc excluded)."""
        return len(self.params) - len(self._spec.fit_kwargs)

    def pdf(self, x: float) -> float:
        return float(self._frozen.pdf(x))

    def logpdf(self, x: float) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(self._frozen.logpdf(x))

    def cdf(self, x: float) -> float:
        return float(self._frozen.cdf(x))

    def inv_cdf(self, q: float) -> float:
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"q must be in [0, 1], got {q}")
        return float(self._frozen.ppf(q))

    def median(self) -> float:
        return float(self._frozen.median())

    def mode(self) -> float:
        return float(self._spec.mode(self.params))

    def skewness(self) -> float:
        return float(self._frozen.stats(moments="s"))

    def log_likelihood(self, sample: np.ndarray) -> float:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.sum(self._frozen.logpdf(np.asarray(sample, dtype=np.float64))))

    def copy(self) -> ScipyDistribution:
        return ScipyDistribution(self.name, self.params)

    def parameters(self) -> dict[str, float]:
        names = self._spec.shape_names + ("loc", "scale")
        return dict(zip(names, self.params))

    def support(self) -> tuple[float, float]:
        lo, hi = self._frozen.support()
        return float(lo), float(hi)

    def mean(self) -> float:
        return float(self._frozen.mean())

    def variance(self) -> float:
        return float(self._frozen.var())

    def sample(self, n: int, random_state: int | np.random.Generator | None = None) -> np.ndarray:
        return np.asarray(self._frozen.rvs(size=n, random_state=random_state), dtype=np.float64)


def fit_family(family: str, sample: np.ndarray) -> ScipyDistribution:
    """
    Maximum-likelihood fit of ``family`` to ``sample``.
    Raises FitFailureError when the family cannot describe the sample (domain, degenerate scale, solver error).
    """
    spec = DISTRIBUTION_REGISTRY.get(family)
    x = np.asarray(sample, dtype=np.float64).ravel()
    if x.size == 0:
        raise FitFailureError(f"Cannot fit {family} to an empty sample")
    if not np.all(np.isfinite(x)):
        raise FitFailureError(f"Cannot fit {family}: sample contains non-finite values")
    if spec.positive_only and np.any(x <= 0):
        raise FitFailureError(f"{family} requires strictly positive data")
    try:
        with warnings.catch_warnings(), np.errstate(all="ignore"):
            warnings.simplefilter("ignore")
            params = spec.rv.fit(x, **spec.fit_kwargs)
    except (ValueError, RuntimeError, FloatingPointError) as exc:
        raise FitFailureError(f"{family} fit failed: {exc}") from exc
    scale = params[-1]
    if not all(math.isfinite(p) for p in params) or scale <= 0:
        raise FitFailureError(f"{family} fit gave degenerate parameters {params}")
    return ScipyDistribution(family, params)
