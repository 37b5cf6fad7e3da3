"""
Trainer: fans out one fitting unit per (class, feature) cell and blocks on a single
completion barrier before handing back a TrainedModel.

Cells are allocated before dispatch and each unit writes exactly one of them, so units
share no mutable state. The barrier is a join over every unit future; a unit failure,
a timeout or an interrupt aborts train() with a TrainingError instead of returning a
partially filled model.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ALL_COMPLETED, Future, wait
from functools import partial
from typing import Any, Callable, Sequence

import numpy as np

from bayes_framework.datasets import ClassificationDataset
from bayes_framework.distributions import ContinuousDistribution, get_best_distribution
from bayes_framework.exceptions import (
    EmptyClassError,
    FitFailureError,
    TrainingError,
    TrainingInterruptedError,
    TrainingTimeoutError,
)

from .engine import ExecutionEngine, SerialEngine
from .model import ClassModel, TrainedModel, fit_categorical_table

logger = logging.getLogger(__name__)

DistributionFitter = Callable[[np.ndarray], ContinuousDistribution]

# Unit keys sort categorical before continuous within a class.
_CATEGORICAL = 0
_CONTINUOUS = 1
_KIND_NAMES = {_CATEGORICAL: "categorical", _CONTINUOUS: "continuous"}


class Trainer:
    """
    Fits every class's categorical tables and continuous distributions.

    fit_distribution: sample -> fitted distribution; defaults to best-fit search over ``candidates``.
    alpha: Laplace pseudo-count per category.
    timeout: seconds to wait on the barrier; None waits until every unit finishes.
    """

    def __init__(
        self,
        fit_distribution: DistributionFitter | None = None,
        alpha: float = 1.0,
        timeout: float | None = None,
        candidates: Sequence[str] | None = None,
        criterion: str = "ks",
    ) -> None:
        if alpha <= 0:
            raise ValueError(f"alpha must be > 0, got {alpha}")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be > 0 or None, got {timeout}")
        if fit_distribution is None:
            fit_distribution = partial(get_best_distribution, candidates=candidates, criterion=criterion)
        self.fit_distribution = fit_distribution
        self.alpha = float(alpha)
        self.timeout = timeout

    def train(
        self,
        dataset: ClassificationDataset,
        engine: ExecutionEngine | None = None,
    ) -> TrainedModel:
        """
        Fit all C x (F_cont + F_cat) units and return the trained model.
        A caller-supplied engine is left running; SerialEngine is used when none is given.
        """
        empty = [c for c, n in enumerate(dataset.class_counts()) if n == 0]
        if empty:
            raise EmptyClassError(empty)

        n_classes = dataset.n_classes
        n_num = dataset.n_numerical
        category_counts = dataset.category_counts
        n_units = n_classes * (n_num + len(category_counts))

        tables: list[list[np.ndarray | None]] = [[None] * len(category_counts) for _ in range(n_classes)]
        dists: list[list[ContinuousDistribution | None]] = [[None] * n_num for _ in range(n_classes)]

        engine = engine or SerialEngine()
        t0 = time.perf_counter()
        futures: dict[Future[None], tuple[int, int, int]] = {}
        try:
            self._dispatch(dataset, engine, tables, dists, futures)
            logger.info("Dispatched %d fitting units (%d classes) on %s engine", n_units, n_classes, engine.name)
            self._await_barrier(futures)
        except KeyboardInterrupt as exc:
            pending = self._cancel(futures)
            raise TrainingInterruptedError(
                f"Interrupted while waiting for fitting units ({pending} of {n_units} not finished)"
            ) from exc
        self._raise_unit_failures(futures)

        class_counts = dataset.class_counts()
        class_models = []
        for c in range(n_classes):
            if any(t is None for t in tables[c]) or any(d is None for d in dists[c]):
                raise TrainingError(f"class {c} has unfilled model cells after all units completed")
            class_models.append(
                ClassModel(
                    categorical_tables=tuple(tables[c]),
                    continuous_models=tuple(dists[c]),
                    n_samples=int(class_counts[c]),
                )
            )
        model = TrainedModel(
            class_models=tuple(class_models),
            category_counts=tuple(category_counts),
            n_numerical=n_num,
        )
        logger.info("Training finished: %d units in %.1f ms", n_units, (time.perf_counter() - t0) * 1000.0)
        return model

    def _dispatch(
        self,
        dataset: ClassificationDataset,
        engine: ExecutionEngine,
        tables: list[list[Any]],
        dists: list[list[Any]],
        futures: dict[Future[None], tuple[int, int, int]],
    ) -> None:
        for c in range(dataset.n_classes):
            for j in range(dataset.n_numerical):
                sample = dataset.get_sample_variable_vector(c, j)
                fut = engine.submit(self._fit_continuous_unit, dists[c], j, sample)
                futures[fut] = (c, _CONTINUOUS, j)
            for j, k in enumerate(dataset.category_counts):
                values = dataset.get_categorical_vector(c, j)
                fut = engine.submit(self._fit_categorical_unit, tables[c], j, values, k)
                futures[fut] = (c, _CATEGORICAL, j)

    def _fit_continuous_unit(self, cells: list[Any], j: int, sample: np.ndarray) -> None:
        cells[j] = self.fit_distribution(sample)

    def _fit_categorical_unit(self, cells: list[Any], j: int, values: np.ndarray, n_categories: int) -> None:
        cells[j] = fit_categorical_table(values, n_categories, self.alpha)

    def _await_barrier(self, futures: dict[Future[None], tuple[int, int, int]]) -> None:
        _, not_done = wait(futures, timeout=self.timeout, return_when=ALL_COMPLETED)
        if not_done:
            self._cancel(not_done)
            raise TrainingTimeoutError(
                f"{len(not_done)} of {len(futures)} fitting units did not finish within {self.timeout}s"
            )

    @staticmethod
    def _cancel(futures: Any) -> int:
        pending = [f for f in futures if not f.done()]
        for f in pending:
            f.cancel()
        return len(pending)

    @staticmethod
    def _raise_unit_failures(futures: dict[Future[None], tuple[int, int, int]]) -> None:
        failures: list[tuple[tuple[int, int, int], BaseException]] = []
        for fut, key in futures.items():
            exc = fut.exception()
            if exc is not None:
                failures.append((key, exc))
        if not failures:
            return
        failures.sort(key=lambda item: item[0])
        for (c, kind, j), exc in failures:
            logger.error("Fitting unit failed: class=%d %s feature=%d: %s", c, _KIND_NAMES[kind], j, exc)
        (c, kind, j), exc = failures[0]
        if isinstance(exc, TrainingError):
            if isinstance(exc, FitFailureError) and exc.class_index is None:
                exc.class_index, exc.feature_index = c, j
            raise exc
        if kind == _CONTINUOUS:
            raise FitFailureError(
                f"Distribution fit failed for class {c}, continuous feature {j}: {exc}",
                class_index=c,
                feature_index=j,
            ) from exc
        raise TrainingError(f"Categorical fit failed for class {c}, categorical feature {j}: {exc}") from exc
