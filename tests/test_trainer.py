"""Trainer tests: completion barrier, engine equivalence and failure propagation."""

import threading

import numpy as np
import pytest

from bayes_framework.distributions import get_best_distribution
from bayes_framework.exceptions import (
    EmptyClassError,
    FitFailureError,
    TrainingInterruptedError,
    TrainingTimeoutError,
)
from bayes_framework.datasets import CategoricalFeature, ClassificationDataset
from bayes_framework.training import SerialEngine, ThreadPoolEngine, Trainer, get_engine
from bayes_framework.training import trainer as trainer_module


def test_model_shape_matches_dataset(synthetic_dataset):
    model = Trainer().train(synthetic_dataset)
    assert model.n_classes == 3
    assert model.n_numerical == 3
    assert model.category_counts == (3, 4)
    for cm in model.class_models:
        assert [len(t) for t in cm.categorical_tables] == [3, 4]
        assert len(cm.continuous_models) == 3
    assert sum(model.class_sample_counts) == synthetic_dataset.n_samples


def test_tables_are_probability_mass_functions(synthetic_dataset):
    model = Trainer().train(synthetic_dataset)
    for c in range(model.n_classes):
        for f in range(model.n_categorical):
            table = model.categorical_table(c, f)
            assert table.sum() == pytest.approx(1.0)
            assert np.all(table > 0)
            assert not table.flags.writeable


def test_thread_pool_and_serial_engines_agree(synthetic_dataset):
    serial = Trainer().train(synthetic_dataset, SerialEngine())
    with ThreadPoolEngine(max_workers=4) as engine:
        threaded = Trainer().train(synthetic_dataset, engine)
    for c in range(serial.n_classes):
        for f in range(serial.n_categorical):
            np.testing.assert_array_equal(serial.categorical_table(c, f), threaded.categorical_table(c, f))
        for g in range(serial.n_numerical):
            a, b = serial.continuous_model(c, g), threaded.continuous_model(c, g)
            assert a.name == b.name
            assert a.parameters() == pytest.approx(b.parameters())


def test_unit_failure_is_raised_not_swallowed(two_class_dataset):
    def broken_fit(sample):
        raise ValueError("solver exploded")

    with ThreadPoolEngine(max_workers=2) as engine:
        with pytest.raises(FitFailureError) as info:
            Trainer(fit_distribution=broken_fit).train(two_class_dataset, engine)
    assert info.value.class_index == 0
    assert info.value.feature_index == 0
    assert isinstance(info.value.__cause__, ValueError)


def test_fit_failure_from_fitter_gets_cell_indices():
    dataset = ClassificationDataset(
        numerical=np.array([[1.0], [2.0], [np.nan]]),
        categorical=np.zeros((3, 0)),
        labels=np.array([0, 0, 1]),
        n_classes=2,
    )
    with pytest.raises(FitFailureError) as info:
        Trainer().train(dataset)
    assert info.value.class_index == 1
    assert info.value.feature_index == 0


def test_every_unit_runs_before_failure_is_raised(synthetic_dataset):
    calls = []

    def flaky_fit(sample):
        calls.append(len(sample))
        if np.mean(sample) > 3.0:
            raise RuntimeError("refusing large means")
        return get_best_distribution(sample, candidates=["normal"])

    with pytest.raises(FitFailureError):
        Trainer(fit_distribution=flaky_fit).train(synthetic_dataset)
    assert len(calls) == synthetic_dataset.n_classes * synthetic_dataset.n_numerical


def test_barrier_timeout_raises():
    release = threading.Event()

    def slow_fit(sample):
        release.wait(5.0)
        return get_best_distribution(sample, candidates=["normal"])

    dataset = ClassificationDataset.from_arrays(np.array([[1.0], [2.0], [3.0], [4.0]]), np.array([0, 0, 1, 1]))
    engine = ThreadPoolEngine(max_workers=1)
    try:
        with pytest.raises(TrainingTimeoutError):
            Trainer(fit_distribution=slow_fit, timeout=0.05).train(dataset, engine)
    finally:
        release.set()
        engine.shutdown(wait=True, cancel_futures=True)


def test_interrupted_wait_raises(monkeypatch, two_class_dataset):
    def interrupted_wait(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(trainer_module, "wait", interrupted_wait)
    with pytest.raises(TrainingInterruptedError) as info:
        Trainer().train(two_class_dataset)
    assert isinstance(info.value.__cause__, KeyboardInterrupt)


def test_empty_class_rejected_before_dispatch():
    dataset = ClassificationDataset(
        numerical=np.array([[1.0], [2.0]]),
        categorical=np.array([[0], [1]]),
        labels=np.array([0, 0]),
        n_classes=3,
        categories=[CategoricalFeature("flag", 2)],
    )
    with pytest.raises(EmptyClassError) as info:
        Trainer().train(dataset)
    assert info.value.class_indices == [1, 2]


def test_categorical_only_dataset():
    dataset = ClassificationDataset.from_arrays(None, np.array([0, 1, 1]), np.array([[0], [1], [1]]))
    model = Trainer().train(dataset)
    assert model.n_numerical == 0
    np.testing.assert_allclose(model.categorical_table(1, 0), [1 / 4, 3 / 4])


def test_invalid_trainer_settings():
    with pytest.raises(ValueError):
        Trainer(alpha=0)
    with pytest.raises(ValueError):
        Trainer(timeout=0)


def test_get_engine_by_name():
    assert isinstance(get_engine("serial"), SerialEngine)
    engine = get_engine("threads", max_workers=2)
    try:
        assert isinstance(engine, ThreadPoolEngine)
        assert engine.max_workers == 2
    finally:
        engine.shutdown()
    with pytest.raises(KeyError):
        get_engine("gpu")


def test_serial_engine_captures_exceptions():
    def boom():
        raise RuntimeError("x")

    future = SerialEngine().submit(boom)
    assert future.done()
    assert isinstance(future.exception(), RuntimeError)
    assert SerialEngine().submit(lambda a, b: a + b, 2, 3).result() == 5
