"""
Evaluation metrics for spam detection experiments.

This module centralizes the computation of the binary metrics report
printed after every forest run:

- accuracy
- F1-score (spam as the positive class)
- positive / negative precision
- positive / negative recall
- confusion matrix (optional)

and the plain-text rendering of that report.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence, Union

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    f1_score,
    precision_recall_fscore_support,
)


ArrayLike = Union[Sequence[int], np.ndarray]

REPORT_FIELDS = (
    ("accuracy", "Accuracy"),
    ("f1_score", "F1 Score"),
    ("positive_precision", "Positive Precision"),
    ("negative_precision", "Negative Precision"),
    ("positive_recall", "Positive Recall"),
    ("negative_recall", "Negative Recall"),
)

REPORT_SEPARATOR = "-" * 102


def compute_binary_report(
    y_true: ArrayLike,
    y_pred: ArrayLike,
    output_confusion_matrix: bool = False,
) -> Dict[str, Any]:
    """
    Compute the binary metrics report for a predicted label set.

    Label 1 (spam) is the positive class, label 0 (ham) the negative one.
    Undefined ratios (e.g. precision when nothing was predicted positive)
    are reported as 0.0, so every value stays in [0, 1].

    Parameters
    ----------
    y_true : ArrayLike
        Ground-truth labels (0 for ham, 1 for spam). Booleans are accepted.
    y_pred : ArrayLike
        Predicted labels, same shape as y_true.
    output_confusion_matrix : bool
        If True, also compute and include the 2x2 confusion matrix
        (rows/columns ordered ham, spam).

    Returns
    -------
    Dict[str, Any]
        Dictionary with the keys:
            - "accuracy"
            - "f1_score"
            - "positive_precision"
            - "negative_precision"
            - "positive_recall"
            - "negative_recall"
    """
    y_true_arr = np.asarray(y_true).astype(int)
    y_pred_arr = np.asarray(y_pred).astype(int)

    acc = accuracy_score(y_true_arr, y_pred_arr)

    # Index 0 is the spam class, index 1 the ham class.
    prec, rec, _, _ = precision_recall_fscore_support(
        y_true_arr,
        y_pred_arr,
        labels=[1, 0],
        average=None,
        zero_division=0,
    )
    f1 = f1_score(y_true_arr, y_pred_arr, pos_label=1, zero_division=0)

    report: Dict[str, Any] = {
        "accuracy": float(acc),
        "f1_score": float(f1),
        "positive_precision": float(prec[0]),
        "negative_precision": float(prec[1]),
        "positive_recall": float(rec[0]),
        "negative_recall": float(rec[1]),
    }

    if output_confusion_matrix:
        cm = confusion_matrix(y_true_arr, y_pred_arr, labels=[0, 1])
        # Convert numpy array to plain list for JSON/CSV friendliness
        report["confusion_matrix"] = cm.tolist()

    return report


def format_report(
    number_of_leaves: int,
    number_of_trees: int,
    report: Mapping[str, Any],
) -> str:
    """
    Render a metrics report the way it is printed to the console.

    The text is a "Forest: (leaves-trees)" header, one "Label: value" line
    per metric, a blank line and a dashed separator.
    """
    lines = [f"Forest: ({number_of_leaves}-{number_of_trees})"]
    lines.extend(f"{label}: {report[key]}" for key, label in REPORT_FIELDS)
    lines.append("")
    lines.append(REPORT_SEPARATOR)
    return "\n".join(lines)
