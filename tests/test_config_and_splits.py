"""Config loading, registry behaviour and stratified holdout splits."""

import numpy as np
import pytest

from bayes_framework.utils.config_loader import get_config, load_config
from bayes_framework.utils.registry import Registry
from bayes_framework.utils.splits import holdout_split


def test_packaged_config_has_sections():
    config = load_config()
    for section in ("training", "distributions", "classifier", "data", "evaluation", "logging"):
        assert section in config
    assert get_config() is config


def test_custom_config(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("training:\n  engine: serial\n  alpha: 2.0\n")
    config = load_config(path)
    assert config["training"]["alpha"] == 2.0
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")
    bad = tmp_path / "list.yaml"
    bad.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_config(bad)
    load_config()


def test_registry():
    reg = Registry("widget")

    @reg.register("double")
    def double(x):
        return 2 * x

    assert "double" in reg
    assert reg.create("double", 4) == 8
    assert reg.list_names() == ["double"]
    with pytest.raises(KeyError):
        reg.get("triple")


def test_holdout_split_is_stratified_and_disjoint():
    labels = np.repeat([0, 1, 2], [10, 20, 1])
    train_idx, test_idx = holdout_split(labels, train_ratio=0.8, random_state=0)
    assert len(set(train_idx) & set(test_idx)) == 0
    assert len(train_idx) + len(test_idx) == len(labels)
    assert set(labels[train_idx]) == {0, 1, 2}
    assert np.sum(labels[test_idx] == 1) == 4
    with pytest.raises(ValueError):
        holdout_split(labels, train_ratio=1.0)


def test_command_line_overrides_leave_loaded_config_untouched():
    from main import main

    assert main(["--engine", "serial", "--workers", "2", "--n-samples", "150"]) == 0
    training = get_config()["training"]
    assert training["engine"] == "threads"
    assert training["max_workers"] == 4
