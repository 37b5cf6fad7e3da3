"""Unit tests for Laplace-smoothed categorical tables."""

import numpy as np
import pytest

from bayes_framework.exceptions import DegenerateNormalizationError
from bayes_framework.training import fit_categorical_table


def test_laplace_counts_match_worked_example():
    np.testing.assert_allclose(fit_categorical_table(np.array([0, 0, 0]), 2), [0.8, 0.2])
    np.testing.assert_allclose(fit_categorical_table(np.array([1]), 2), [1 / 3, 2 / 3])


def test_unseen_category_gets_one_over_n_plus_k():
    values = np.array([0, 1, 1, 2, 0])
    table = fit_categorical_table(values, n_categories=5)
    assert table[3] == pytest.approx(1 / (5 + 5))
    assert table[4] == pytest.approx(1 / (5 + 5))
    assert np.all(table > 0)
    assert table.sum() == pytest.approx(1.0)


def test_empty_slice_is_uniform():
    table = fit_categorical_table(np.array([], dtype=np.int64), n_categories=4)
    np.testing.assert_allclose(table, np.full(4, 0.25))


def test_custom_alpha():
    table = fit_categorical_table(np.array([0, 0]), n_categories=2, alpha=0.5)
    np.testing.assert_allclose(table, [2.5 / 3.0, 0.5 / 3.0])


def test_table_is_read_only():
    table = fit_categorical_table(np.array([0]), 2)
    with pytest.raises(ValueError):
        table[0] = 0.5


def test_zero_categories_is_degenerate():
    with pytest.raises(DegenerateNormalizationError):
        fit_categorical_table(np.array([], dtype=np.int64), n_categories=0)


def test_invalid_inputs():
    with pytest.raises(ValueError):
        fit_categorical_table(np.array([0, 3]), n_categories=3)
    with pytest.raises(ValueError):
        fit_categorical_table(np.array([0]), n_categories=2, alpha=0.0)
