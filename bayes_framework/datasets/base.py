"""Containers for labeled examples with categorical and continuous features."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

import numpy as np


def _as_2d(arr: Any, n: int, dtype: Any, what: str) -> np.ndarray:
    """Coerce to (n, d); a 1-D array of length n is one column, an empty input is zero columns."""
    arr = np.asarray(arr, dtype=dtype)
    if arr.ndim == 2 and arr.shape[0] == n:
        return arr
    if arr.size == 0:
        return np.zeros((n, 0), dtype=dtype)
    if arr.ndim == 1 and arr.shape[0] == n:
        return arr[:, None]
    raise ValueError(f"{what} must have shape (n_samples={n}, n_features), got {arr.shape}")


@dataclass(frozen=True)
class CategoricalFeature:
    """A categorical feature whose categories are coded 0..n_categories-1."""

    name: str
    n_categories: int
    category_names: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.n_categories < 1:
            raise ValueError(f"Categorical feature '{self.name}' needs at least one category")
        if self.category_names and len(self.category_names) != self.n_categories:
            raise ValueError(
                f"Categorical feature '{self.name}': {len(self.category_names)} names for "
                f"{self.n_categories} categories"
            )


@dataclass
class DataPoint:
    """One example (or query): continuous values and integer-coded categories."""

    numerical: np.ndarray  # (n_numerical,) float
    categorical: np.ndarray  # (n_categorical,) int

    def __post_init__(self) -> None:
        self.numerical = np.asarray(self.numerical, dtype=np.float64).ravel()
        self.categorical = np.asarray(self.categorical, dtype=np.int64).ravel()

    def get_numerical_value(self, j: int) -> float:
        return float(self.numerical[j])

    def get_categorical_value(self, j: int) -> int:
        return int(self.categorical[j])


@dataclass
class ClassificationDataset:
    """Labeled samples grouped by integer class index. Validated on construction."""

    numerical: np.ndarray  # (n_samples, n_numerical)
    categorical: np.ndarray  # (n_samples, n_categorical) category codes
    labels: np.ndarray  # (n_samples,) class indices in [0, n_classes)
    n_classes: int
    categories: list[CategoricalFeature] = field(default_factory=list)
    class_names: list[str] | None = None
    numerical_names: list[str] | None = None

    def __post_init__(self) -> None:
        self.labels = np.asarray(self.labels, dtype=np.int64).ravel()
        n = self.labels.shape[0]
        self.numerical = _as_2d(self.numerical, n, np.float64, "numerical")
        self.categorical = _as_2d(self.categorical, n, np.int64, "categorical")
        if self.n_classes < 1:
            raise ValueError(f"n_classes must be >= 1, got {self.n_classes}")
        if n and (self.labels.min() < 0 or self.labels.max() >= self.n_classes):
            raise ValueError(f"labels must be in [0, {self.n_classes})")
        if self.categorical.shape[1] != len(self.categories):
            raise ValueError(
                f"{self.categorical.shape[1]} categorical columns but {len(self.categories)} "
                "categorical feature descriptions"
            )
        for j, feat in enumerate(self.categories):
            col = self.categorical[:, j]
            if n and (col.min() < 0 or col.max() >= feat.n_categories):
                raise ValueError(
                    f"categorical feature '{feat.name}' has codes outside [0, {feat.n_categories})"
                )
        if self.class_names is not None and len(self.class_names) != self.n_classes:
            raise ValueError(f"{len(self.class_names)} class names for {self.n_classes} classes")

    @classmethod
    def from_arrays(
        cls,
        X_numerical: np.ndarray | None,
        y: np.ndarray,
        X_categorical: np.ndarray | None = None,
        category_counts: Sequence[int] | None = None,
        n_classes: int | None = None,
        **kwargs: Any,
    ) -> ClassificationDataset:
        """
        Build a dataset from plain arrays. Category counts default to max code + 1 per column,
        n_classes to max label + 1.
        """
        y = np.asarray(y, dtype=np.int64).ravel()
        n = y.shape[0]
        num = _as_2d(np.zeros((n, 0)) if X_numerical is None else X_numerical, n, np.float64, "X_numerical")
        cat = _as_2d(np.zeros((n, 0)) if X_categorical is None else X_categorical, n, np.int64, "X_categorical")
        if category_counts is None:
            category_counts = [int(cat[:, j].max()) + 1 if n else 1 for j in range(cat.shape[1])]
        categories = [CategoricalFeature(f"cat{j}", int(k)) for j, k in enumerate(category_counts)]
        if n_classes is None:
            n_classes = int(y.max()) + 1 if n else 1
        return cls(numerical=num, categorical=cat, labels=y, n_classes=n_classes, categories=categories, **kwargs)

    @property
    def n_samples(self) -> int:
        return self.labels.shape[0]

    @property
    def n_numerical(self) -> int:
        return self.numerical.shape[1]

    @property
    def n_categorical(self) -> int:
        return self.categorical.shape[1]

    @property
    def category_counts(self) -> tuple[int, ...]:
        return tuple(f.n_categories for f in self.categories)

    def __len__(self) -> int:
        return self.n_samples

    def class_counts(self) -> np.ndarray:
        """(n_classes,) number of samples per class."""
        return np.bincount(self.labels, minlength=self.n_classes)

    def class_indices(self, c: int) -> np.ndarray:
        return np.where(self.labels == c)[0]

    def get_sample_variable_vector(self, c: int, j: int) -> np.ndarray:
        """Observed values of continuous feature j within class c (a copy)."""
        return self.numerical[self.labels == c, j].copy()

    def get_categorical_vector(self, c: int, j: int) -> np.ndarray:
        """Observed codes of categorical feature j within class c (a copy)."""
        return self.categorical[self.labels == c, j].copy()

    def data_point(self, i: int) -> DataPoint:
        if i < 0 or i >= self.n_samples:
            raise IndexError(f"sample {i} out of range [0, {self.n_samples})")
        return DataPoint(self.numerical[i], self.categorical[i])

    def get_samples(self, c: int) -> list[DataPoint]:
        return [self.data_point(int(i)) for i in self.class_indices(c)]

    def iter_points(self) -> Iterator[tuple[DataPoint, int]]:
        """Yield (data_point, label) for each sample."""
        for i in range(self.n_samples):
            yield self.data_point(i), int(self.labels[i])

    def subset(self, indices: np.ndarray) -> ClassificationDataset:
        """Samples at ``indices``, same feature descriptions and class count."""
        idx = np.asarray(indices, dtype=np.int64)
        return ClassificationDataset(
            numerical=self.numerical[idx],
            categorical=self.categorical[idx],
            labels=self.labels[idx],
            n_classes=self.n_classes,
            categories=list(self.categories),
            class_names=self.class_names,
            numerical_names=self.numerical_names,
        )


class DatasetLoader(ABC):
    """Abstract base for dataset loaders. Add new sources by implementing this interface."""

    name: str = "base"

    @abstractmethod
    def load(self, **kwargs: Any) -> ClassificationDataset:
        pass
