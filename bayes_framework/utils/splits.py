"""Holdout splitting for evaluating a trained classifier on unseen samples."""

import logging

import numpy as np

logger = logging.getLogger(__name__)


def holdout_split(
    labels: np.ndarray,
    train_ratio: float = 0.8,
    random_state: int | None = 42,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Stratified train/test split over sample indices. Returns (train_indices, test_indices).
    Every class keeps at least one training sample so no class model is fitted on nothing.
    """
    if not 0.0 < train_ratio < 1.0:
        raise ValueError(f"train_ratio must be in (0, 1), got {train_ratio}")
    labels = np.asarray(labels).ravel()
    rng = np.random.default_rng(random_state)
    train_parts: list[np.ndarray] = []
    test_parts: list[np.ndarray] = []
    for label in np.unique(labels):
        idx = rng.permutation(np.where(labels == label)[0])
        n_train = int(round(len(idx) * train_ratio))
        n_train = max(1, min(n_train, len(idx) - 1)) if len(idx) > 1 else len(idx)
        train_parts.append(idx[:n_train])
        test_parts.append(idx[n_train:])
    train_idx = np.sort(np.concatenate(train_parts)) if train_parts else np.array([], dtype=np.int64)
    test_idx = np.sort(np.concatenate(test_parts)) if test_parts else np.array([], dtype=np.int64)
    logger.debug("Holdout split: %d train / %d test", len(train_idx), len(test_idx))
    return train_idx.astype(np.int64), test_idx.astype(np.int64)
