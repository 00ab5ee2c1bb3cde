"""
Random forest spam classifier: configuration and pipeline builder.

A forest run is described by a small immutable value, ``ForestConfig``
(dataset path, test fraction, number of leaves, number of trees). The
list of runs to sweep is read from config/forest.yaml, together with the
estimator settings shared by every run.

The pipeline itself is a scikit-learn ``Pipeline`` of three stages:

- "featurize": subject and message text -> concatenated n-gram vector
- "normalize": rescale every feature into [0, 1]
- "forest":    RandomForestClassifier sized by leaves and trees

The training loop (split, fit, predict, report) lives in
spam_filter/training/train_forest.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import MaxAbsScaler

from spam_filter.features.text_featurizer import build_feature_concatenator
from spam_filter.utils.training_utils import load_yaml_config


DEFAULT_FOREST_CONFIG_PATH = "config/forest.yaml"

DEFAULT_FORESTS = ((2, 5), (5, 10), (10, 20))

PREDICTION_COLUMNS = ("predicted_label", "score", "probability")


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ForestConfig:
    """One training run: where the data is and how big the forest grows."""

    data_path: str
    test_fraction: float
    number_of_leaves: int
    number_of_trees: int

    def __post_init__(self) -> None:
        if not 0.0 < self.test_fraction < 1.0:
            raise ValueError(
                f"test_fraction must be in (0, 1), got {self.test_fraction}"
            )
        if self.number_of_leaves < 2:
            raise ValueError(
                f"number_of_leaves must be at least 2, got {self.number_of_leaves}"
            )
        if self.number_of_trees < 1:
            raise ValueError(
                f"number_of_trees must be at least 1, got {self.number_of_trees}"
            )

    @property
    def name(self) -> str:
        return f"forest_{self.number_of_leaves}_{self.number_of_trees}"


def load_forest_config(config_path: str = DEFAULT_FOREST_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load and return the forest configuration dictionary.

    Parameters
    ----------
    config_path : str
        Path to the forest YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Parsed configuration with "general" and "forests" sections.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    KeyError
        If required sections are missing.
    """
    cfg = load_yaml_config(config_path)

    for section in ("general", "forests"):
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in forest config: {config_path}')

    return cfg


def build_forest_configs(
    forest_cfg: Optional[Dict[str, Any]],
    data_path: str,
    test_fraction: float = 0.2,
) -> List[ForestConfig]:
    """
    Build the list of runs from the "forests" section of the forest config.

    Each entry is a mapping with "leaves" and "trees". When the section is
    absent, the default sweep (2, 5), (5, 10), (10, 20) is used.
    """
    entries = (forest_cfg or {}).get("forests")
    if entries is None:
        entries = [{"leaves": leaves, "trees": trees} for leaves, trees in DEFAULT_FORESTS]

    return [
        ForestConfig(
            data_path=data_path,
            test_fraction=float(test_fraction),
            number_of_leaves=int(entry["leaves"]),
            number_of_trees=int(entry["trees"]),
        )
        for entry in entries
    ]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def build_forest_classifier(
    config: ForestConfig,
    forest_cfg: Optional[Dict[str, Any]] = None,
) -> RandomForestClassifier:
    general_cfg = (forest_cfg or {}).get("general", {}) or {}
    return RandomForestClassifier(
        n_estimators=config.number_of_trees,
        max_leaf_nodes=config.number_of_leaves,
        max_features=general_cfg.get("max_features", "sqrt"),
        bootstrap=bool(general_cfg.get("bootstrap", True)),
        n_jobs=general_cfg.get("n_jobs", None),
        random_state=general_cfg.get("random_state", 42),
    )


def build_forest_pipeline(
    config: ForestConfig,
    forest_cfg: Optional[Dict[str, Any]] = None,
    preprocessing_cfg: Optional[Dict[str, Any]] = None,
) -> Pipeline:
    """
    Assemble the featurize -> normalize -> forest pipeline for one run.

    Text features are non-negative, so max-abs scaling maps each of them
    into [0, 1] while keeping zeros at zero and the matrix sparse.

    Parameters
    ----------
    config : ForestConfig
        Run configuration (leaves and trees are used here).
    forest_cfg : Optional[Dict[str, Any]]
        Forest YAML configuration, for the shared estimator settings.
    preprocessing_cfg : Optional[Dict[str, Any]]
        "preprocessing" section of the data config, for the featurizer.

    Returns
    -------
    Pipeline
        Unfitted scikit-learn pipeline expecting a DataFrame with
        "subject" and "message" columns.
    """
    return Pipeline(
        [
            ("featurize", build_feature_concatenator(preprocessing_cfg)),
            ("normalize", MaxAbsScaler()),
            ("forest", build_forest_classifier(config, forest_cfg)),
        ]
    )


def predict_with_scores(pipeline: Pipeline, records: pd.DataFrame) -> pd.DataFrame:
    """
    Apply a fitted pipeline and return one prediction per record.

    Returns
    -------
    pd.DataFrame
        Columns:
            - "predicted_label": bool, True for spam
            - "score": vote margin in [-1, 1], positive means spam
            - "probability": share of tree votes for spam, in [0, 1]
    """
    proba = pipeline.predict_proba(records)
    classes = list(pipeline.named_steps["forest"].classes_)

    if 1 in classes:
        spam_proba = proba[:, classes.index(1)]
    else:
        spam_proba = np.zeros(len(records))

    values = (spam_proba > 0.5, 2.0 * spam_proba - 1.0, spam_proba)
    return pd.DataFrame(
        dict(zip(PREDICTION_COLUMNS, values)),
        index=records.index,
    )
