"""
Train/test splitting utilities for the email dataset.

This module provides a simple interface to split a pre-loaded DataFrame
into training and test sets. Split settings live in the "split" section
of config/data.yaml.

We rely on scikit-learn's train_test_split and support:
- a plain pseudo-random split (the default) or a stratified one
- configurable test fraction and random_state
"""

from __future__ import annotations

from typing import Optional, Tuple

import pandas as pd
from sklearn.model_selection import train_test_split


def train_test_split_df(
    df: pd.DataFrame,
    test_fraction: float = 0.2,
    random_state: Optional[int] = 42,
    stratify: bool = False,
    label_column: str = "label",
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Split a DataFrame into train and test sets.

    Parameters
    ----------
    df : pd.DataFrame
        Input DataFrame containing at least the label_column.
    test_fraction : float
        Proportion of rows withheld for evaluation.
    random_state : Optional[int]
        Seed for the shuffle; the same seed yields the same partition.
        None draws an unseeded split.
    stratify : bool
        Preserve the label proportions in both partitions.
    label_column : str
        Name of the label column to use for stratification.

    Returns
    -------
    Tuple[pd.DataFrame, pd.DataFrame]
        (train_df, test_df)

    Raises
    ------
    KeyError
        If the label_column is missing.
    ValueError
        If the split is degenerate (e.g., stratifying a single class).
    """
    if label_column not in df.columns:
        raise KeyError(
            f"Label column '{label_column}' not found in DataFrame. "
            f"Available columns: {list(df.columns)}"
        )

    stratify_labels = df[label_column] if stratify else None

    train_df, test_df = train_test_split(
        df,
        test_size=float(test_fraction),
        random_state=random_state,
        stratify=stratify_labels,
        shuffle=True,
    )

    # Reset indices for neatness
    train_df = train_df.reset_index(drop=True)
    test_df = test_df.reset_index(drop=True)

    return train_df, test_df
