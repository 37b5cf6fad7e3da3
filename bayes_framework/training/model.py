"""
Fitted model state. A TrainedModel is built once by the Trainer and never mutated:
categorical tables are read-only arrays and every container is a tuple, so one instance
can be shared by concurrent classify() calls.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from bayes_framework.distributions import ContinuousDistribution
from bayes_framework.exceptions import DegenerateNormalizationError


def _readonly(arr: np.ndarray) -> np.ndarray:
    out = np.array(arr, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


def fit_categorical_table(values: np.ndarray, n_categories: int, alpha: float = 1.0) -> np.ndarray:
    """
    Laplace-smoothed PMF of ``values`` over categories 0..n_categories-1.
    Every category starts at ``alpha`` pseudo-counts, so an unseen category gets alpha / (N + alpha*K) > 0.
    """
    if alpha <= 0:
        raise ValueError(f"alpha must be > 0, got {alpha}")
    values = np.asarray(values, dtype=np.int64).ravel()
    if values.size and (values.min() < 0 or values.max() >= n_categories):
        raise ValueError(f"category codes must be in [0, {n_categories})")
    counts = np.full(n_categories, float(alpha), dtype=np.float64)
    np.add.at(counts, values, 1.0)
    total = counts.sum()
    if not np.isfinite(total) or total <= 0:
        raise DegenerateNormalizationError(
            f"Categorical counts sum to {total} over {n_categories} categories; cannot normalize"
        )
    return _readonly(counts / total)


@dataclass(frozen=True, eq=False)
class ClassModel:
    """Everything learned for one class: one PMF per categorical feature, one density per continuous feature."""

    categorical_tables: tuple[np.ndarray, ...]
    continuous_models: tuple[ContinuousDistribution, ...]
    n_samples: int

    def copy(self) -> ClassModel:
        return ClassModel(
            categorical_tables=tuple(_readonly(t) for t in self.categorical_tables),
            continuous_models=tuple(d.copy() for d in self.continuous_models),
            n_samples=self.n_samples,
        )


@dataclass(frozen=True, eq=False)
class TrainedModel:
    """Per-class models indexed by class. Table lengths and model counts are identical across classes."""

    class_models: tuple[ClassModel, ...]
    category_counts: tuple[int, ...]
    n_numerical: int

    def __post_init__(self) -> None:
        for c, cm in enumerate(self.class_models):
            if len(cm.continuous_models) != self.n_numerical:
                raise ValueError(
                    f"class {c}: {len(cm.continuous_models)} continuous models, expected {self.n_numerical}"
                )
            lengths = tuple(len(t) for t in cm.categorical_tables)
            if lengths != tuple(self.category_counts):
                raise ValueError(f"class {c}: categorical table lengths {lengths} != {self.category_counts}")

    @property
    def n_classes(self) -> int:
        return len(self.class_models)

    @property
    def n_categorical(self) -> int:
        return len(self.category_counts)

    @property
    def class_sample_counts(self) -> tuple[int, ...]:
        return tuple(cm.n_samples for cm in self.class_models)

    def categorical_table(self, c: int, f: int) -> np.ndarray:
        return self.class_models[c].categorical_tables[f]

    def continuous_model(self, c: int, g: int) -> ContinuousDistribution:
        return self.class_models[c].continuous_models[g]

    def copy(self) -> TrainedModel:
        """Deep copy: no array or distribution object is shared with this model."""
        return TrainedModel(
            class_models=tuple(cm.copy() for cm in self.class_models),
            category_counts=tuple(self.category_counts),
            n_numerical=self.n_numerical,
        )

    def describe(self) -> list[dict]:
        """Per-class summary: sample count and the chosen continuous family per feature."""
        return [
            {
                "class": c,
                "n_samples": cm.n_samples,
                "continuous": [d.descriptive_name() for d in cm.continuous_models],
            }
            for c, cm in enumerate(self.class_models)
        ]
