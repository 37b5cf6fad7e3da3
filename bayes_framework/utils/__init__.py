"""Utility functions and helpers for the Naive Bayes framework."""

from .config_loader import load_config, get_config
from .registry import Registry
from .splits import holdout_split
from .metrics import (
    accuracy,
    balanced_accuracy,
    f1_macro,
    log_loss,
    indeterminate_rate,
    compute_all_metrics,
)

__all__ = [
    "load_config",
    "get_config",
    "Registry",
    "holdout_split",
    "accuracy",
    "balanced_accuracy",
    "f1_macro",
    "log_loss",
    "indeterminate_rate",
    "compute_all_metrics",
]
