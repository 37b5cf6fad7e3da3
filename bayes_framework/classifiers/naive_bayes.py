"""
Naive Bayes over mixed features.

Categorical features use Laplace-smoothed frequency tables; continuous features use the
best-fitting distribution chosen per (class, feature). Posteriors are accumulated in the
log domain and normalized across classes.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

import numpy as np

from bayes_framework.datasets import ClassificationDataset, DataPoint
from bayes_framework.exceptions import NotTrainedError
from bayes_framework.training import ExecutionEngine, TrainedModel, Trainer, get_engine

from .base import ClassifierBase, ClassProbabilities

logger = logging.getLogger(__name__)

DEFAULT_LOG_FLOOR = 1e-16


class NaiveBayesClassifier(ClassifierBase):
    """
    Mixed categorical/continuous Naive Bayes.

    The log-likelihood of each class starts at 0 (not the class log-prior); the smoothed
    categorical tables are the only place class frequency enters. A continuous feature whose
    log-density is not finite contributes log(log_floor) instead, so one out-of-support value
    penalizes a class without zeroing it.
    """

    name = "naive_bayes"

    def __init__(
        self,
        alpha: float = 1.0,
        candidates: Sequence[str] | None = None,
        criterion: str = "ks",
        log_floor: float = DEFAULT_LOG_FLOOR,
        engine: str = "serial",
        max_workers: int | None = None,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            alpha=alpha,
            candidates=list(candidates) if candidates else None,
            criterion=criterion,
            log_floor=log_floor,
            engine=engine,
            max_workers=max_workers,
            timeout=timeout,
            **kwargs,
        )
        if not 0.0 < log_floor < 1.0:
            raise ValueError(f"log_floor must be in (0, 1), got {log_floor}")
        self.alpha = alpha
        self.candidates = list(candidates) if candidates else None
        self.criterion = criterion
        self.log_floor = log_floor
        self.engine = engine
        self.max_workers = max_workers
        self.timeout = timeout
        self._log_floor_value = math.log(log_floor)
        self._model: TrainedModel | None = None

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> NaiveBayesClassifier:
        """Build from the ``training``, ``distributions`` and ``classifier`` config sections."""
        training = config.get("training", {}) or {}
        dists = config.get("distributions", {}) or {}
        clf = config.get("classifier", {}) or {}
        return cls(
            alpha=float(training.get("alpha", 1.0)),
            candidates=dists.get("candidates"),
            criterion=dists.get("criterion", "ks"),
            log_floor=float(clf.get("log_floor", DEFAULT_LOG_FLOOR)),
            engine=training.get("engine", "serial"),
            max_workers=training.get("max_workers"),
            timeout=training.get("timeout_sec"),
        )

    @property
    def is_trained(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> TrainedModel:
        if self._model is None:
            raise NotTrainedError("NaiveBayes not trained")
        return self._model

    @property
    def n_classes(self) -> int:
        return self.model.n_classes

    def _make_trainer(self) -> Trainer:
        return Trainer(
            alpha=self.alpha,
            timeout=self.timeout,
            candidates=self.candidates,
            criterion=self.criterion,
        )

    def train(
        self,
        dataset: ClassificationDataset,
        engine: ExecutionEngine | None = None,
    ) -> NaiveBayesClassifier:
        """
        Fit every (class, feature) unit. With no ``engine`` one is built from the configured
        name and shut down afterwards. The previous model stays unusable if training fails.
        """
        self._model = None
        trainer = self._make_trainer()
        if engine is not None:
            self._model = trainer.train(dataset, engine)
            return self
        kwargs = {"max_workers": self.max_workers} if self.engine != "serial" else {}
        with get_engine(self.engine, **kwargs) as owned:
            self._model = trainer.train(dataset, owned)
        return self

    def fit(
        self,
        X_numerical: np.ndarray | None,
        y: np.ndarray,
        X_categorical: np.ndarray | None = None,
        category_counts: Sequence[int] | None = None,
        sample_weight: np.ndarray | None = None,
    ) -> NaiveBayesClassifier:
        """Array convenience around train(). Per-sample weights are not supported."""
        if sample_weight is not None:
            raise ValueError("NaiveBayesClassifier does not support sample weights")
        dataset = ClassificationDataset.from_arrays(X_numerical, y, X_categorical, category_counts)
        return self.train(dataset)

    def supports_weighted_data(self) -> bool:
        return False

    def _class_log_likelihood(self, c: int, point: DataPoint) -> float:
        class_model = self.model.class_models[c]
        log_prob = 0.0
        for j, dist in enumerate(class_model.continuous_models):
            log_pdf = dist.logpdf(point.get_numerical_value(j))
            if math.isfinite(log_pdf):
                log_prob += log_pdf
            else:
                log_prob += self._log_floor_value
        for f, table in enumerate(class_model.categorical_tables):
            log_prob += math.log(table[point.get_categorical_value(f)])
        return log_prob

    def log_likelihoods(self, point: DataPoint) -> np.ndarray:
        """(n_classes,) unnormalized log-likelihoods."""
        model = self.model
        if len(point.numerical) != model.n_numerical or len(point.categorical) != model.n_categorical:
            raise ValueError(
                f"Expected {model.n_numerical} continuous and {model.n_categorical} categorical values, "
                f"got {len(point.numerical)} and {len(point.categorical)}"
            )
        for f, k in enumerate(model.category_counts):
            code = point.get_categorical_value(f)
            if code < 0 or code >= k:
                raise ValueError(f"categorical feature {f}: code {code} outside [0, {k})")
        return np.array(
            [self._class_log_likelihood(c, point) for c in range(model.n_classes)],
            dtype=np.float64,
        )

    def classify(self, point: DataPoint) -> ClassProbabilities:
        log_probs = self.log_likelihoods(point)
        with np.errstate(over="ignore", under="ignore"):
            probs = np.exp(log_probs)
            total = float(np.sum(probs))
        if not math.isfinite(total):
            # Overflow in an exponent or in the sum: normalize in shifted space.
            probs = np.exp(log_probs - np.max(log_probs))
            total = float(np.sum(probs))
        if total != 0.0:
            probs = probs / total
        return ClassProbabilities(probabilities=probs)

    def copy(self) -> NaiveBayesClassifier:
        clone = NaiveBayesClassifier(
            alpha=self.alpha,
            candidates=self.candidates,
            criterion=self.criterion,
            log_floor=self.log_floor,
            engine=self.engine,
            max_workers=self.max_workers,
            timeout=self.timeout,
        )
        if self._model is not None:
            clone._model = self._model.copy()
        return clone
