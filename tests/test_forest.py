"""
Tests for the forest run configuration and pipeline builder.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from sklearn.ensemble import RandomForestClassifier

from spam_filter.data.datasets import load_email_dataset
from spam_filter.models.forest import (
    PREDICTION_COLUMNS,
    ForestConfig,
    build_forest_classifier,
    build_forest_configs,
    build_forest_pipeline,
    load_forest_config,
    predict_with_scores,
)


CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


def test_forest_config_is_immutable():
    """
    A run configuration cannot be changed once built.
    """
    config = ForestConfig("emails.csv", 0.2, 2, 5)
    with pytest.raises(AttributeError):
        config.number_of_trees = 10  # type: ignore[misc]


def test_forest_config_name():
    """
    The run name encodes leaves and trees.
    """
    assert ForestConfig("emails.csv", 0.2, 10, 20).name == "forest_10_20"


@pytest.mark.parametrize(
    "test_fraction, leaves, trees",
    [(0.0, 2, 5), (1.0, 2, 5), (0.2, 1, 5), (0.2, 2, 0)],
)
def test_forest_config_rejects_invalid_values(test_fraction, leaves, trees):
    """
    Out-of-range fractions, leaf counts or tree counts are rejected.
    """
    with pytest.raises(ValueError):
        ForestConfig("emails.csv", test_fraction, leaves, trees)


def test_load_forest_config_default_sweep():
    """
    config/forest.yaml describes the (2, 5), (5, 10), (10, 20) sweep.
    """
    cfg = load_forest_config(str(CONFIG_DIR / "forest.yaml"))
    configs = build_forest_configs(cfg, data_path="emails.csv", test_fraction=0.2)

    assert [(c.number_of_leaves, c.number_of_trees) for c in configs] == [
        (2, 5),
        (5, 10),
        (10, 20),
    ]
    assert all(c.data_path == "emails.csv" for c in configs)
    assert all(c.test_fraction == pytest.approx(0.2) for c in configs)


def test_load_forest_config_missing_section(tmp_path):
    """
    A forest config without a "general" section is rejected.
    """
    path = tmp_path / "forest.yaml"
    path.write_text("forests: []\n", encoding="utf-8")
    with pytest.raises(KeyError):
        load_forest_config(str(path))


def test_build_forest_configs_defaults_when_section_absent():
    """
    Without a "forests" section the default sweep is used.
    """
    configs = build_forest_configs(None, data_path="emails.csv")
    assert len(configs) == 3
    assert configs[0] == ForestConfig("emails.csv", 0.2, 2, 5)


def test_build_forest_classifier_sizes():
    """
    Leaves and trees map onto max_leaf_nodes and n_estimators.
    """
    config = ForestConfig("emails.csv", 0.2, 5, 10)
    clf = build_forest_classifier(config, {"general": {"random_state": 3}})

    assert isinstance(clf, RandomForestClassifier)
    assert clf.n_estimators == 10
    assert clf.max_leaf_nodes == 5
    assert clf.random_state == 3


def test_pipeline_stage_names():
    """
    The pipeline exposes featurize, normalize and forest stages in order.
    """
    pipeline = build_forest_pipeline(ForestConfig("emails.csv", 0.2, 2, 5))
    assert [name for name, _ in pipeline.steps] == ["featurize", "normalize", "forest"]


def test_normalized_features_are_in_unit_range(toy_csv):
    """
    After the normalize stage every feature lies in [0, 1].
    """
    df = load_email_dataset(toy_csv)
    pipeline = build_forest_pipeline(ForestConfig(toy_csv, 0.2, 2, 5))
    pipeline.fit(df, df["label"].values)

    features = pipeline[:-1].transform(df)
    assert features.min() >= 0.0
    assert features.max() <= 1.0 + 1e-9


def test_predict_with_scores(toy_csv, forest_cfg):
    """
    Predictions carry a label, a score in [-1, 1] and a probability in [0, 1].
    """
    df = load_email_dataset(toy_csv)
    pipeline = build_forest_pipeline(ForestConfig(toy_csv, 0.2, 5, 10), forest_cfg)
    pipeline.fit(df, df["label"].values)

    predictions = predict_with_scores(pipeline, df)

    assert list(predictions.columns) == list(PREDICTION_COLUMNS)
    assert len(predictions) == len(df)
    assert predictions["predicted_label"].dtype == bool
    assert ((predictions["probability"] >= 0) & (predictions["probability"] <= 1)).all()
    assert ((predictions["score"] >= -1) & (predictions["score"] <= 1)).all()
    assert (
        predictions["predicted_label"] == (predictions["score"] > 0)
    ).all()
    np.testing.assert_allclose(
        predictions["score"], 2 * predictions["probability"] - 1
    )


def test_build_forest_classifier_accepts_null_seed():
    """
    random_state null in config/forest.yaml leaves the forest unseeded.
    """
    config = ForestConfig("emails.csv", 0.2, 2, 5)
    clf = build_forest_classifier(config, {"general": {"random_state": None}})
    assert clf.random_state is None
