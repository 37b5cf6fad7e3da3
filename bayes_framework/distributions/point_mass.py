"""Degenerate distribution for zero-variance samples."""

from __future__ import annotations

import numpy as np

from bayes_framework.exceptions import FitFailureError

from .base import ContinuousDistribution


class PointMassDistribution(ContinuousDistribution):
    """
    All mass at a single value. pdf is 1 at the value (within tolerance) and 0 elsewhere,
    so a matching query contributes log(1) = 0 and anything else falls to the log floor.
    """

    name = "point_mass"

    def __init__(self, value: float, tolerance: float = 0.0) -> None:
        if tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {tolerance}")
        self.value = float(value)
        self.tolerance = float(tolerance)

    @classmethod
    def fit(cls, sample: np.ndarray) -> PointMassDistribution:
        sample = np.asarray(sample, dtype=np.float64).ravel()
        if sample.size == 0:
            raise FitFailureError("Cannot fit point mass to an empty sample")
        if np.ptp(sample) != 0:
            raise FitFailureError("Point mass requires a constant sample")
        return cls(float(sample[0]))

    def _matches(self, x: float) -> bool:
        return abs(float(x) - self.value) <= self.tolerance

    def pdf(self, x: float) -> float:
        return 1.0 if self._matches(x) else 0.0

    def logpdf(self, x: float) -> float:
        return 0.0 if self._matches(x) else float("-inf")

    def cdf(self, x: float) -> float:
        return 1.0 if float(x) >= self.value else 0.0

    def inv_cdf(self, q: float) -> float:
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"q must be in [0, 1], got {q}")
        return self.value

    def mode(self) -> float:
        return self.value

    def skewness(self) -> float:
        return float("nan")

    def copy(self) -> PointMassDistribution:
        return PointMassDistribution(self.value, self.tolerance)

    def parameters(self) -> dict[str, float]:
        return {"value": self.value}

    def support(self) -> tuple[float, float]:
        return self.value - self.tolerance, self.value + self.tolerance

    def mean(self) -> float:
        return self.value

    def variance(self) -> float:
        return 0.0

    def sample(self, n: int, random_state: int | np.random.Generator | None = None) -> np.ndarray:
        return np.full(n, self.value, dtype=np.float64)
