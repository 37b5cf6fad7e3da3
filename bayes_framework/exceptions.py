"""Error taxonomy for training and classification."""


class NotTrainedError(RuntimeError):
    """Raised when a classifier is queried before train() completed."""


class TrainingError(RuntimeError):
    """Base for every failure that aborts train()."""


class EmptyClassError(TrainingError):
    """A declared class has no training samples."""

    def __init__(self, class_indices: list[int]) -> None:
        self.class_indices = list(class_indices)
        super().__init__(f"No training samples for class(es) {self.class_indices}")


class DegenerateNormalizationError(TrainingError):
    """A categorical table has a zero (or non-finite) total mass and cannot be normalized."""


class FitFailureError(TrainingError):
    """Continuous distribution fitting failed for one (class, feature) unit."""

    def __init__(
        self,
        message: str,
        class_index: int | None = None,
        feature_index: int | None = None,
    ) -> None:
        self.class_index = class_index
        self.feature_index = feature_index
        super().__init__(message)


class TrainingInterruptedError(TrainingError):
    """The completion barrier wait was interrupted before every unit finished."""


class TrainingTimeoutError(TrainingError):
    """The completion barrier did not release within the configured timeout."""
