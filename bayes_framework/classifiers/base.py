"""Base class for classifiers. Unified API: train, classify, predict, predict_proba, copy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np

from bayes_framework.datasets import ClassificationDataset, DataPoint


@dataclass(frozen=True, eq=False)
class ClassProbabilities:
    """
    Per-class probabilities for one query. Sums to 1, except the indeterminate case where every
    class underflowed to exactly 0 and the all-zero vector is returned unnormalized.
    """

    probabilities: np.ndarray  # (n_classes,)

    @property
    def is_indeterminate(self) -> bool:
        return float(np.sum(self.probabilities)) == 0.0

    def most_likely(self) -> int:
        """Index of the most probable class, or -1 when indeterminate."""
        if self.is_indeterminate:
            return -1
        return int(np.argmax(self.probabilities))

    def as_dict(self) -> dict[int, float]:
        return {c: float(p) for c, p in enumerate(self.probabilities)}

    def __len__(self) -> int:
        return len(self.probabilities)

    def __getitem__(self, c: int) -> float:
        return float(self.probabilities[c])


class ClassifierBase(ABC):
    """Abstract base for classifiers. train(dataset), classify(point), predict(dataset), predict_proba(dataset)."""

    name: str = "base"

    def __init__(self, **kwargs: Any) -> None:
        self.params = kwargs

    @abstractmethod
    def train(self, dataset: ClassificationDataset, engine: Any = None) -> ClassifierBase:
        """Fit on a labeled dataset; ``engine`` runs the fitting work when the classifier supports it."""
        return self

    @abstractmethod
    def classify(self, point: DataPoint) -> ClassProbabilities:
        pass

    @abstractmethod
    def copy(self) -> ClassifierBase:
        """Independent deep clone, trained state included."""

    @property
    @abstractmethod
    def is_trained(self) -> bool:
        pass

    def supports_weighted_data(self) -> bool:
        return False

    def predict_proba(self, dataset: ClassificationDataset) -> np.ndarray:
        """(n_samples, n_classes) probabilities; indeterminate rows are all zero."""
        rows = [self.classify(point).probabilities for point, _ in dataset.iter_points()]
        if not rows:
            return np.zeros((0, dataset.n_classes), dtype=np.float64)
        return np.vstack(rows).astype(np.float64)

    def predict(self, dataset: ClassificationDataset) -> np.ndarray:
        """(n_samples,) class indices; -1 where the prediction is indeterminate."""
        proba = self.predict_proba(dataset)
        pred = np.argmax(proba, axis=1).astype(np.int64) if proba.size else np.zeros(0, dtype=np.int64)
        pred[proba.sum(axis=1) == 0] = -1
        return pred
