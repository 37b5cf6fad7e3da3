"""Concurrent fitting of per-class, per-feature models into an immutable trained model."""

from .engine import ENGINE_REGISTRY, ExecutionEngine, SerialEngine, ThreadPoolEngine, get_engine
from .model import ClassModel, TrainedModel, fit_categorical_table
from .trainer import Trainer

__all__ = [
    "ENGINE_REGISTRY",
    "ExecutionEngine",
    "SerialEngine",
    "ThreadPoolEngine",
    "get_engine",
    "ClassModel",
    "TrainedModel",
    "fit_categorical_table",
    "Trainer",
]
