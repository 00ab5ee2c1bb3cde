"""
Shared fixtures: a small labeled email CSV and matching config dicts.
"""

from __future__ import annotations

import pandas as pd
import pytest


SPAM_ROWS = [
    ("Win a free prize now", "Click here to claim your free cash prize today"),
    ("Cheap meds online", "Buy cheap pills online, no prescription, free shipping"),
    ("You are a winner", "Congratulations winner, claim your free lottery money now"),
    ("Limited offer", "Free offer, act now, limited time discount on cheap watches"),
    ("Make money fast", "Earn cash fast from home, free money, click now"),
]

HAM_ROWS = [
    ("Meeting tomorrow", "Can we move the project meeting to 10am tomorrow?"),
    ("Quarterly report", "Attached is the quarterly report for your review."),
    ("Lunch", "Are you free for lunch on Thursday with the team?"),
    ("Gas contract", "Please review the gas contract draft before Friday."),
    ("Schedule update", "The pipeline schedule was updated, see the notes."),
]


def _toy_frame() -> pd.DataFrame:
    rows = []
    for i, (subject, message) in enumerate(SPAM_ROWS):
        rows.append((i, subject, message, "spam", "2001-01-0%d" % (i + 1)))
    for i, (subject, message) in enumerate(HAM_ROWS, start=len(SPAM_ROWS)):
        rows.append((i, subject, message, "ham", "2001-02-0%d" % (i - 4)))
    return pd.DataFrame(
        rows, columns=["Message ID", "Subject", "Message", "Spam/Ham", "Date"]
    )


@pytest.fixture
def toy_csv(tmp_path):
    """A 10-record CSV (5 spam, 5 ham) with the Enron header layout."""
    path = tmp_path / "emails.csv"
    _toy_frame().to_csv(path, index=False)
    return str(path)


@pytest.fixture
def data_cfg(toy_csv):
    return {
        "dataset": {"path": toy_csv, "separator": ",", "spam_marker": "spam"},
        "split": {"test_fraction": 0.2, "random_state": 42, "stratify": False},
        "preprocessing": {},
    }


@pytest.fixture
def forest_cfg():
    return {
        "general": {"random_state": 42, "n_jobs": 1},
        "forests": [
            {"leaves": 2, "trees": 5},
            {"leaves": 5, "trees": 10},
            {"leaves": 10, "trees": 20},
        ],
    }


@pytest.fixture
def train_cfg(tmp_path):
    return {
        "general": {"random_state": 42},
        "paths": {
            "results_dir": str(tmp_path / "results"),
            "models_dir": str(tmp_path / "models"),
            "logs_dir": str(tmp_path / "logs"),
        },
        "logging": {"level": "WARNING", "to_file": False},
        "save": {"save_results": False, "save_models": False},
    }
