"""
Classification metrics: accuracy, balanced accuracy, macro F1, log loss, indeterminate rate.
Rows of predict_proba that are all zero (underflow) count as indeterminate, not as predictions.
"""

from typing import Any

import numpy as np


def accuracy(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    y_true = np.asarray(y_true)
    if y_true.size == 0:
        return 0.0
    return float(np.mean(y_true == np.asarray(y_pred)))


def balanced_accuracy(y_true: np.ndarray, y_pred: np.ndarray, n_classes: int) -> float:
    """Per-class recall averaged (macro); robust to class imbalance."""
    from sklearn.metrics import recall_score
    return float(
        recall_score(y_true, y_pred, average="macro", zero_division=0, labels=list(range(n_classes)))
    )


def f1_macro(y_true: np.ndarray, y_pred: np.ndarray, n_classes: int) -> float:
    from sklearn.metrics import f1_score
    return float(f1_score(y_true, y_pred, average="macro", zero_division=0, labels=list(range(n_classes))))


def indeterminate_rate(y_proba: np.ndarray) -> float:
    """Fraction of rows whose probabilities are all zero."""
    y_proba = np.asarray(y_proba, dtype=np.float64)
    if y_proba.size == 0:
        return 0.0
    return float(np.mean(y_proba.sum(axis=1) == 0))


def log_loss(y_true: np.ndarray, y_proba: np.ndarray, n_classes: int) -> float:
    """Cross-entropy over determinate rows only; nan when every row is indeterminate."""
    from sklearn.metrics import log_loss as _sk_log_loss
    y_true = np.asarray(y_true)
    y_proba = np.asarray(y_proba, dtype=np.float64)
    mask = y_proba.sum(axis=1) > 0
    if not np.any(mask):
        return float("nan")
    proba = np.clip(y_proba[mask], 1e-15, 1.0)
    proba /= proba.sum(axis=1, keepdims=True)
    return float(_sk_log_loss(y_true[mask], proba, labels=list(range(n_classes))))


def compute_all_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_proba: np.ndarray | None,
    n_classes: int,
) -> dict[str, Any]:
    """Compute accuracy, balanced accuracy, macro F1 and, when probabilities are given, log loss."""
    out: dict[str, Any] = {
        "accuracy": accuracy(y_true, y_pred),
        "balanced_accuracy": balanced_accuracy(y_true, y_pred, n_classes),
        "f1_macro": f1_macro(y_true, y_pred, n_classes),
    }
    if y_proba is not None and y_proba.shape[1] >= n_classes:
        out["log_loss"] = log_loss(y_true, y_proba, n_classes)
        out["indeterminate_rate"] = indeterminate_rate(y_proba)
    else:
        out["log_loss"] = float("nan")
        out["indeterminate_rate"] = 0.0
    return out
