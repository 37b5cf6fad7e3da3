"""Datasets with mixed categorical and continuous features."""

from .base import CategoricalFeature, ClassificationDataset, DataPoint, DatasetLoader
from .synthetic import SyntheticMixedLoader, generate_synthetic_mixed

__all__ = [
    "CategoricalFeature",
    "ClassificationDataset",
    "DataPoint",
    "DatasetLoader",
    "SyntheticMixedLoader",
    "generate_synthetic_mixed",
]

DATASET_REGISTRY: dict[str, type] = {
    "synthetic_mixed": SyntheticMixedLoader,
}


def get_dataset_loader(name: str) -> type[DatasetLoader]:
    """Get dataset loader class by name."""
    if name not in DATASET_REGISTRY:
        raise KeyError(f"Unknown dataset '{name}'. Available: {list(DATASET_REGISTRY.keys())}")
    return DATASET_REGISTRY[name]
