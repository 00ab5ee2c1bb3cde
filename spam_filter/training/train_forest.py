"""
Training and evaluation pipeline for the random forest spam filter.

For every configured (leaves, trees) pair this module:

- loads the labeled email dataset
- performs a seeded train/test split
- featurizes subject and message text and rescales features to [0, 1]
- trains a random forest with the requested number of leaves and trees
- evaluates it on the test set (accuracy, F1, positive/negative
  precision and recall)
- prints the metrics report to stdout
- optionally saves metrics to CSV/JSON and the fitted pipeline to disk

Runs are executed one after another; nothing is shared between them
except the dataset file.

This module is designed to be callable both as a library function and
as a standalone script (via `python -m spam_filter.training.train_forest`).
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Iterable, Optional, TextIO

import joblib
import pandas as pd

from spam_filter.data.datasets import (
    DEFAULT_DATA_CONFIG_PATH,
    DEFAULT_SPAM_MARKER,
    load_data_config,
    load_email_dataset,
)
from spam_filter.data.split import train_test_split_df
from spam_filter.evaluation.metrics import compute_binary_report, format_report
from spam_filter.models.forest import (
    DEFAULT_FOREST_CONFIG_PATH,
    ForestConfig,
    build_forest_configs,
    build_forest_pipeline,
    load_forest_config,
    predict_with_scores,
)
from spam_filter.utils.training_utils import (
    DEFAULT_TRAIN_CONFIG_PATH,
    ensure_dir_exists,
    get_logger,
    load_train_config,
    seed_everything,
)


# ---------------------------------------------------------------------------
# Single run
# ---------------------------------------------------------------------------


def grow_forest(
    config: ForestConfig,
    data_cfg: Optional[Dict[str, Any]] = None,
    forest_cfg: Optional[Dict[str, Any]] = None,
    train_cfg: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
    stream: Optional[TextIO] = None,
) -> Dict[str, Any]:
    """
    Train and evaluate one forest, then print its metrics report.

    Parameters
    ----------
    config : ForestConfig
        Dataset path, test fraction, leaves and trees for this run.
    data_cfg : Optional[Dict[str, Any]]
        Data configuration ("dataset", "split", "preprocessing").
    forest_cfg : Optional[Dict[str, Any]]
        Forest configuration ("general" estimator settings).
    train_cfg : Optional[Dict[str, Any]]
        Global training configuration ("paths", "save", "logging").
    logger : Optional[logging.Logger]
        Progress logger; built from train_cfg when omitted.
    stream : Optional[TextIO]
        Where the report is printed; defaults to sys.stdout.

    Returns
    -------
    Dict[str, Any]
        The metrics report plus "model", "leaves" and "trees".
    """
    data_cfg = data_cfg or {}
    train_cfg = train_cfg or {}
    dataset_cfg = data_cfg.get("dataset", {}) or {}
    split_cfg = data_cfg.get("split", {}) or {}
    save_cfg = train_cfg.get("save", {}) or {}
    paths_cfg = train_cfg.get("paths", {}) or {}

    if logger is None:
        logger = get_logger(name="train_forest", config=train_cfg, log_file_suffix="forest")

    # Load records and derive labels
    df = load_email_dataset(
        config.data_path,
        separator=str(dataset_cfg.get("separator", ",")),
        spam_marker=str(dataset_cfg.get("spam_marker", DEFAULT_SPAM_MARKER)),
    )
    logger.info("Loaded dataset with %d records from %s.", len(df), config.data_path)

    train_df, test_df = train_test_split_df(
        df,
        test_fraction=config.test_fraction,
        random_state=split_cfg.get("random_state", 42),
        stratify=bool(split_cfg.get("stratify", False)),
    )
    logger.info("Train size: %d, Test size: %d", len(train_df), len(test_df))

    pipeline = build_forest_pipeline(
        config,
        forest_cfg=forest_cfg,
        preprocessing_cfg=data_cfg.get("preprocessing"),
    )

    logger.info(
        "Training forest with %d leaves and %d trees...",
        config.number_of_leaves,
        config.number_of_trees,
    )
    pipeline.fit(train_df, train_df["label"].values)
    logger.info("Forest '%s' trained.", config.name)

    predictions = predict_with_scores(pipeline, test_df)
    report = compute_binary_report(
        y_true=test_df["label"].values,
        y_pred=predictions["predicted_label"].values,
    )
    logger.info(
        "Metrics for %s - acc: %.4f, f1: %.4f",
        config.name,
        report["accuracy"],
        report["f1_score"],
    )

    print(
        format_report(config.number_of_leaves, config.number_of_trees, report),
        file=stream if stream is not None else sys.stdout,
    )

    result = {
        "model": config.name,
        "leaves": config.number_of_leaves,
        "trees": config.number_of_trees,
        **report,
    }

    if bool(save_cfg.get("save_results", False)):
        results_dir = paths_cfg.get("results_dir", "experiments/results")
        ensure_dir_exists(results_dir)
        metrics_json_path = os.path.join(results_dir, f"metrics_{config.name}.json")
        with open(metrics_json_path, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2)
        logger.info("Saved metrics JSON for %s to %s", config.name, metrics_json_path)

    if bool(save_cfg.get("save_models", False)):
        models_dir = paths_cfg.get("models_dir", "experiments/models")
        ensure_dir_exists(models_dir)
        model_path = os.path.join(models_dir, f"{config.name}.joblib")
        overwrite = bool(save_cfg.get("overwrite_existing", False))
        if not os.path.exists(model_path) or overwrite:
            joblib.dump(pipeline, model_path)
            logger.info("Saved trained pipeline '%s' to %s", config.name, model_path)
        else:
            logger.info(
                "Model file already exists and overwrite_existing is False: %s",
                model_path,
            )

    return result


# ---------------------------------------------------------------------------
# Sweep
# ---------------------------------------------------------------------------


def run_experiments(
    configs: Iterable[ForestConfig],
    data_cfg: Optional[Dict[str, Any]] = None,
    forest_cfg: Optional[Dict[str, Any]] = None,
    train_cfg: Optional[Dict[str, Any]] = None,
    stream: Optional[TextIO] = None,
) -> pd.DataFrame:
    """
    Run every configuration in order and collect the reports.

    Returns
    -------
    pd.DataFrame
        One row per configuration with columns ["model", "leaves", "trees",
        "accuracy", "f1_score", "positive_precision", "negative_precision",
        "positive_recall", "negative_recall"].
    """
    train_cfg = train_cfg or {}
    logger = get_logger(name="train_forest", config=train_cfg, log_file_suffix="forest")

    seed = (train_cfg.get("general", {}) or {}).get("random_state", 42)
    if seed is not None:
        seed_everything(int(seed))
        logger.info("Seeded global RNGs with %d.", int(seed))

    records = [
        grow_forest(
            config,
            data_cfg=data_cfg,
            forest_cfg=forest_cfg,
            train_cfg=train_cfg,
            logger=logger,
            stream=stream,
        )
        for config in configs
    ]
    metrics_df = pd.DataFrame(records)

    save_cfg = train_cfg.get("save", {}) or {}
    if bool(save_cfg.get("save_results", False)) and not metrics_df.empty:
        results_dir = (train_cfg.get("paths", {}) or {}).get("results_dir", "experiments/results")
        ensure_dir_exists(results_dir)
        csv_path = os.path.join(results_dir, "forest_results.csv")
        metrics_df.to_csv(csv_path, index=False)
        logger.info("Saved aggregated forest metrics to %s", csv_path)

    return metrics_df


def train_and_evaluate_forests(
    data_config_path: str = DEFAULT_DATA_CONFIG_PATH,
    forest_config_path: str = DEFAULT_FOREST_CONFIG_PATH,
    train_config_path: str = DEFAULT_TRAIN_CONFIG_PATH,
    stream: Optional[TextIO] = None,
) -> pd.DataFrame:
    """
    End-to-end sweep driven by the three YAML configuration files.

    Parameters
    ----------
    data_config_path : str
        Path to config/data.yaml.
    forest_config_path : str
        Path to config/forest.yaml.
    train_config_path : str
        Path to config/train.yaml.
    stream : Optional[TextIO]
        Where reports are printed; defaults to sys.stdout.

    Returns
    -------
    pd.DataFrame
        Metrics of every configured forest, one row each.
    """
    data_cfg = load_data_config(data_config_path)
    forest_cfg = load_forest_config(forest_config_path)
    train_cfg = load_train_config(train_config_path)

    configs = build_forest_configs(
        forest_cfg,
        data_path=data_cfg["dataset"]["path"],
        test_fraction=float(data_cfg["split"].get("test_fraction", 0.2)),
    )

    return run_experiments(
        configs,
        data_cfg=data_cfg,
        forest_cfg=forest_cfg,
        train_cfg=train_cfg,
        stream=stream,
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main() -> int:
    """
    Main entry point when running this module as a script.
    """
    train_and_evaluate_forests()
    return 0


if __name__ == "__main__":
    sys.exit(main())
