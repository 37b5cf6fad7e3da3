"""Mixed-feature Naive Bayes: categorical frequency tables plus best-fit continuous distributions."""

from .classifiers import ClassProbabilities, ClassifierBase, NaiveBayesClassifier
from .datasets import CategoricalFeature, ClassificationDataset, DataPoint
from .exceptions import (
    DegenerateNormalizationError,
    EmptyClassError,
    FitFailureError,
    NotTrainedError,
    TrainingError,
    TrainingInterruptedError,
    TrainingTimeoutError,
)
from .training import SerialEngine, ThreadPoolEngine, TrainedModel, Trainer

__version__ = "0.1.0"

__all__ = [
    "ClassProbabilities",
    "ClassifierBase",
    "NaiveBayesClassifier",
    "CategoricalFeature",
    "ClassificationDataset",
    "DataPoint",
    "TrainedModel",
    "Trainer",
    "SerialEngine",
    "ThreadPoolEngine",
    "TrainingError",
    "DegenerateNormalizationError",
    "EmptyClassError",
    "FitFailureError",
    "NotTrainedError",
    "TrainingInterruptedError",
    "TrainingTimeoutError",
]
