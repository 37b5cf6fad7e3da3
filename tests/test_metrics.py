"""Unit tests for classification metrics (accuracy, balanced accuracy, F1, log loss)."""

import math

import numpy as np

from bayes_framework.utils.metrics import (
    accuracy,
    balanced_accuracy,
    compute_all_metrics,
    f1_macro,
    indeterminate_rate,
    log_loss,
)


def test_accuracy():
    y_true = np.array([0, 1, 2, 1, 0])
    y_pred = np.array([0, 1, 1, 1, 0])
    assert accuracy(y_true, y_pred) == 0.8
    assert accuracy(np.array([]), np.array([])) == 0.0


def test_balanced_accuracy_and_f1():
    y_true = np.array([0, 0, 0, 1])
    y_pred = np.array([0, 0, 0, 0])
    assert balanced_accuracy(y_true, y_pred, n_classes=2) == 0.5
    assert 0 <= f1_macro(y_true, y_pred, n_classes=2) <= 1


def test_indeterminate_rows_are_counted_and_skipped():
    y_true = np.array([0, 1, 1])
    proba = np.array([[0.9, 0.1], [0.0, 0.0], [0.2, 0.8]])
    assert indeterminate_rate(proba) == 1 / 3
    assert math.isfinite(log_loss(y_true, proba, n_classes=2))
    assert math.isnan(log_loss(y_true[1:2], proba[1:2], n_classes=2))


def test_compute_all_metrics():
    y_true = np.array([0, 1, 1, 0])
    y_pred = np.array([0, 1, -1, 0])
    proba = np.array([[0.9, 0.1], [0.3, 0.7], [0.0, 0.0], [0.6, 0.4]])
    out = compute_all_metrics(y_true, y_pred, proba, n_classes=2)
    for key in ("accuracy", "balanced_accuracy", "f1_macro", "log_loss", "indeterminate_rate"):
        assert key in out
    assert out["accuracy"] == 0.75
    assert out["indeterminate_rate"] == 0.25
