"""
Configurable synthetic mixed-feature data for tests, demos and CI.
Each class gets its own continuous location/shape and a preferred category per categorical feature.
"""

import logging
from typing import Any, Sequence

import numpy as np

from .base import CategoricalFeature, ClassificationDataset, DatasetLoader

logger = logging.getLogger(__name__)


def generate_synthetic_mixed(
    n_samples: int = 300,
    n_classes: int = 3,
    n_numerical: int = 3,
    category_counts: Sequence[int] = (3, 4),
    class_separation: float = 2.0,
    category_bias: float = 0.6,
    class_balance: bool = True,
    random_state: int | None = 42,
) -> ClassificationDataset:
    """
    Continuous features alternate between normal (even columns) and exponential (odd columns)
    draws whose location/scale depend on the class. Categorical feature j favours category
    (c + j) % K with probability ``category_bias``; the rest is uniform.
    """
    if not 0.0 <= category_bias <= 1.0:
        raise ValueError(f"category_bias must be in [0, 1], got {category_bias}")
    rng = np.random.default_rng(random_state)
    if class_balance:
        y = np.repeat(np.arange(n_classes), n_samples // n_classes)
        if len(y) < n_samples:
            y = np.concatenate([y, rng.integers(0, n_classes, size=n_samples - len(y))])
        rng.shuffle(y)
    else:
        y = rng.integers(0, n_classes, size=n_samples)

    numerical = np.zeros((n_samples, n_numerical), dtype=np.float64)
    for j in range(n_numerical):
        for c in range(n_classes):
            mask = y == c
            m = int(mask.sum())
            if j % 2 == 0:
                numerical[mask, j] = rng.normal(class_separation * c, 1.0 + 0.25 * j, size=m)
            else:
                numerical[mask, j] = rng.exponential(1.0 + class_separation * c, size=m)

    categorical = np.zeros((n_samples, len(category_counts)), dtype=np.int64)
    for j, k in enumerate(category_counts):
        favoured = (y + j) % k
        uniform = rng.integers(0, k, size=n_samples)
        categorical[:, j] = np.where(rng.random(n_samples) < category_bias, favoured, uniform)

    return ClassificationDataset(
        numerical=numerical,
        categorical=categorical,
        labels=y.astype(np.int64),
        n_classes=n_classes,
        categories=[CategoricalFeature(f"cat{j}", int(k)) for j, k in enumerate(category_counts)],
        class_names=[f"class_{c}" for c in range(n_classes)],
        numerical_names=[f"num{j}" for j in range(n_numerical)],
    )


class SyntheticMixedLoader(DatasetLoader):
    """Config-driven synthetic dataset; no files required."""

    name = "synthetic_mixed"

    def load(self, **kwargs: Any) -> ClassificationDataset:
        dataset = generate_synthetic_mixed(**kwargs)
        logger.info(
            "Synthetic dataset: %d samples, %d classes, %d continuous, %d categorical",
            dataset.n_samples, dataset.n_classes, dataset.n_numerical, dataset.n_categorical,
        )
        return dataset
