"""
Run the random forest sweep for spam detection.

This script is a convenience wrapper around
`spam_filter.training.train_forest.train_and_evaluate_forests`, which:

- loads the configured email dataset
- trains one forest per (leaves, trees) entry in config/forest.yaml
- evaluates each forest on the held-out test set
- prints a metrics report per forest
- writes metrics under experiments/results/ when enabled

Usage (from project root):

    python -m scripts.run_forests
    # or
    python scripts/run_forests.py
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from spam_filter.training.train_forest import train_and_evaluate_forests
from spam_filter.utils.training_utils import load_train_config, get_logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    All flags are optional; the defaults reproduce the standard sweep.
    """
    parser = argparse.ArgumentParser(
        description="Train and evaluate random forest spam filters."
    )
    parser.add_argument(
        "--data-config",
        type=str,
        default="config/data.yaml",
        help="Path to data config YAML (default: config/data.yaml).",
    )
    parser.add_argument(
        "--forest-config",
        type=str,
        default="config/forest.yaml",
        help="Path to forest config YAML (default: config/forest.yaml).",
    )
    parser.add_argument(
        "--train-config",
        type=str,
        default="config/train.yaml",
        help="Path to global train config YAML (default: config/train.yaml).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # Load training config for logging / paths
    train_cfg = load_train_config(args.train_config)
    logger = get_logger(
        name="run_forests",
        config=train_cfg,
        log_file_suffix="forests",
    )

    logger.info("=" * 80)
    logger.info("Starting random forest sweep.")
    logger.info(
        "Configs: data=%s, forest=%s, train=%s",
        args.data_config,
        args.forest_config,
        args.train_config,
    )

    metrics_df = train_and_evaluate_forests(
        data_config_path=args.data_config,
        forest_config_path=args.forest_config,
        train_config_path=args.train_config,
    )

    if not metrics_df.empty:
        logger.info("Completed forest sweep. Metrics:")
        logger.info("\n%s", metrics_df.sort_values("f1_score", ascending=False))
    else:
        logger.warning("Forest sweep finished, but metrics DataFrame is empty.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
