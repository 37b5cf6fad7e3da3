"""Shared fixtures: the two-class mixed-feature scenario and a synthetic dataset."""

import numpy as np
import pytest

from bayes_framework.datasets import CategoricalFeature, ClassificationDataset, generate_synthetic_mixed


@pytest.fixture
def two_class_dataset():
    """Class 0: three samples, category 0, value 1. Class 1: one sample, category 1, value 10."""
    return ClassificationDataset(
        numerical=np.array([[1.0], [1.0], [1.0], [10.0]]),
        categorical=np.array([[0], [0], [0], [1]]),
        labels=np.array([0, 0, 0, 1]),
        n_classes=2,
        categories=[CategoricalFeature("color", 2)],
    )


@pytest.fixture
def synthetic_dataset():
    return generate_synthetic_mixed(
        n_samples=240,
        n_classes=3,
        n_numerical=3,
        category_counts=(3, 4),
        random_state=7,
    )
