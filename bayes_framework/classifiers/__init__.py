"""Classifiers with unified API: train(dataset), classify(point), predict(dataset), predict_proba(dataset)."""

from .base import ClassifierBase, ClassProbabilities
from .naive_bayes import NaiveBayesClassifier

CLASSIFIER_REGISTRY: dict[str, type[ClassifierBase]] = {
    "naive_bayes": NaiveBayesClassifier,
}

__all__ = [
    "ClassifierBase",
    "ClassProbabilities",
    "NaiveBayesClassifier",
    "CLASSIFIER_REGISTRY",
]
