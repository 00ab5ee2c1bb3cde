"""
Dataset loading utilities for the labeled email (Enron spam) dataset.

This module is responsible for:
- reading the dataset configuration from config/data.yaml
- loading the raw CSV file into a pandas DataFrame
- normalizing the five record columns to standard names
  ("id", "subject", "message", "raw_label", "date")
- deriving the boolean spam label from the raw label string

The resulting DataFrame is ready to be split and fed to the
forest pipeline in spam_filter.models.forest.
"""

from __future__ import annotations

import os
from functools import partial
from typing import Any, Dict, Sequence

import pandas as pd

from spam_filter.utils.training_utils import load_yaml_config


DEFAULT_DATA_CONFIG_PATH = "config/data.yaml"

RECORD_COLUMNS = ("id", "subject", "message", "raw_label", "date")
TEXT_COLUMNS = ("message", "subject")
DEFAULT_SPAM_MARKER = "spam"


def load_data_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load and return the full data configuration dictionary.

    Parameters
    ----------
    config_path : str, optional
        Path to the data YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing the "dataset", "split", and "preprocessing" sections.
    """
    cfg = load_yaml_config(config_path)

    # Provide helpful errors if sections are missing.
    for section in ("dataset", "split", "preprocessing"):
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in data config: {config_path}')

    return cfg


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def is_spam(raw_label: Any, spam_marker: str = DEFAULT_SPAM_MARKER) -> bool:
    """
    Map a raw label string to the boolean spam label.

    The comparison is exact and case-sensitive: "spam" is spam, while
    "Spam", " spam" and "ham" are not.
    """
    return raw_label == spam_marker


def derive_labels(
    raw_labels: pd.Series,
    spam_marker: str = DEFAULT_SPAM_MARKER,
) -> pd.Series:
    """
    Apply :func:`is_spam` to every raw label, returning integer labels
    (1 for spam, 0 otherwise).
    """
    return raw_labels.map(partial(is_spam, spam_marker=spam_marker)).astype(int)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_email_records(
    csv_path: str,
    separator: str = ",",
    columns: Sequence[str] = RECORD_COLUMNS,
) -> pd.DataFrame:
    """
    Read the raw email CSV into a DataFrame of records.

    Columns are mapped by position, so the header names in the file do not
    matter; only their count does. Every cell is read as a string and empty
    cells stay empty strings rather than NaN.

    Parameters
    ----------
    csv_path : str
        Path to the dataset CSV (header row + five columns).
    separator : str
        Field separator.
    columns : Sequence[str]
        Canonical column names in file order.

    Returns
    -------
    pd.DataFrame
        Records with the canonical column names.

    Raises
    ------
    FileNotFoundError
        If the dataset CSV file cannot be found.
    ValueError
        If the file does not have the expected number of columns.
    """
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Dataset CSV not found at: {csv_path}")

    df = pd.read_csv(
        csv_path,
        sep=separator,
        header=0,
        dtype=str,
        keep_default_na=False,
    )

    if len(df.columns) != len(columns):
        raise ValueError(
            f"Expected {len(columns)} columns in dataset CSV, found "
            f"{len(df.columns)}: {list(df.columns)}"
        )

    df.columns = list(columns)
    return df


def load_email_dataset(
    csv_path: str,
    separator: str = ",",
    spam_marker: str = DEFAULT_SPAM_MARKER,
) -> pd.DataFrame:
    """
    Load the email records and attach the derived integer "label" column.

    Parameters
    ----------
    csv_path : str
        Path to the dataset CSV.
    separator : str
        Field separator.
    spam_marker : str
        Raw label value that marks a spam record.

    Returns
    -------
    pd.DataFrame
        DataFrame with columns ["id", "subject", "message", "raw_label",
        "date", "label"].
    """
    df = load_email_records(csv_path, separator=separator)
    df["label"] = derive_labels(df["raw_label"], spam_marker=spam_marker)
    return df
