"""Base class for continuous distributions. Unified API: fit, pdf, logpdf, cdf, copy."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np


class ContinuousDistribution(ABC):
    """
    A fitted univariate density. The Naive Bayes core only needs pdf/logpdf/copy;
    the remaining members describe the fitted family for reporting.
    Density queries must accept any real x, returning 0 (logpdf -inf) outside the support.
    """

    name: str = "base"

    @classmethod
    @abstractmethod
    def fit(cls, sample: np.ndarray) -> ContinuousDistribution:
        """Estimate parameters from a 1-D sample and return a fitted instance."""

    @abstractmethod
    def pdf(self, x: float) -> float:
        pass

    def logpdf(self, x: float) -> float:
        """log(pdf(x)); -inf where the density is 0."""
        p = self.pdf(x)
        if p <= 0.0:
            return float("-inf")
        return math.log(p)

    @abstractmethod
    def cdf(self, x: float) -> float:
        pass

    @abstractmethod
    def inv_cdf(self, q: float) -> float:
        """Quantile function; q must be in [0, 1]."""

    def median(self) -> float:
        return self.inv_cdf(0.5)

    @abstractmethod
    def mode(self) -> float:
        """nan when the density has no single mode (e.g. uniform)."""

    @abstractmethod
    def skewness(self) -> float:
        pass

    @abstractmethod
    def copy(self) -> ContinuousDistribution:
        """Independent copy sharing no mutable state."""

    @abstractmethod
    def parameters(self) -> dict[str, float]:
        """Current parameter values by name."""

    @abstractmethod
    def support(self) -> tuple[float, float]:
        """(min, max) of x for which pdf may be non-zero; infinities are valid."""

    @abstractmethod
    def mean(self) -> float:
        pass

    @abstractmethod
    def variance(self) -> float:
        """May be nan or inf when undefined for the current parameters."""

    def std(self) -> float:
        return math.sqrt(self.variance())

    @abstractmethod
    def sample(self, n: int, random_state: int | np.random.Generator | None = None) -> np.ndarray:
        pass

    def descriptive_name(self) -> str:
        params = ", ".join(f"{k} = {v:.6g}" for k, v in self.parameters().items())
        return f"{self.name}({params})"

    def __repr__(self) -> str:
        return self.descriptive_name()
