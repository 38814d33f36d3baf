#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Binary classification metrics for recommended / not-recommended reviews.

The positive class is 1 (recommended). Implemented directly on the
confusion matrix:
- Confusion Matrix (rows = actual, columns = predicted)
- Accuracy
- Precision, Recall, F1 of the positive class
- Classification Report
"""

from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..config import LABEL_NAMES

LABELS = [0, 1]


def _check_lengths(y_true: np.ndarray, y_pred: np.ndarray) -> None:
    if len(y_true) != len(y_pred):
        raise ValueError(
            f"y_true and y_pred must have the same length ({len(y_true)} != {len(y_pred)})"
        )


def confusion_matrix(
    y_true: Sequence[int], y_pred: Sequence[int], labels: Optional[List[int]] = None
) -> np.ndarray:
    """
    Compute the confusion matrix.

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        labels: Label order for rows/columns (defaults to [0, 1])

    Returns:
        2D array; cell [i, j] counts rows with actual labels[i] predicted as labels[j]
    """
    y_true = np.asarray(y_true).astype(int)
    y_pred = np.asarray(y_pred).astype(int)
    _check_lengths(y_true, y_pred)

    labels = LABELS if labels is None else labels
    label_to_idx = {label: i for i, label in enumerate(labels)}

    cm = np.zeros((len(labels), len(labels)), dtype=int)
    for true_label, pred_label in zip(y_true, y_pred):
        if true_label not in label_to_idx or pred_label not in label_to_idx:
            raise ValueError(f"Unexpected label pair ({true_label}, {pred_label})")
        cm[label_to_idx[true_label], label_to_idx[pred_label]] += 1
    return cm


def _counts(y_true, y_pred):
    cm = confusion_matrix(y_true, y_pred)
    tn, fp, fn, tp = (int(v) for v in cm.ravel())
    return tn, fp, fn, tp


def accuracy_score(y_true: Sequence[int], y_pred: Sequence[int]) -> float:
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    _check_lengths(y_true, y_pred)
    if len(y_true) == 0:
        return 0.0
    return float(np.sum(y_true == y_pred) / len(y_true))


def precision_score(y_true: Sequence[int], y_pred: Sequence[int]) -> float:
    """Share of predicted-recommended reviews that are recommended. 0.0 if none predicted."""
    _, fp, _, tp = _counts(y_true, y_pred)
    return tp / (tp + fp) if tp + fp else 0.0


def recall_score(y_true: Sequence[int], y_pred: Sequence[int]) -> float:
    """Share of recommended reviews that were found. 0.0 if there are none."""
    _, _, fn, tp = _counts(y_true, y_pred)
    return tp / (tp + fn) if tp + fn else 0.0


def f1_score(y_true: Sequence[int], y_pred: Sequence[int]) -> float:
    p = precision_score(y_true, y_pred)
    r = recall_score(y_true, y_pred)
    return 2 * p * r / (p + r) if p + r else 0.0


def compute_all_metrics(y_true: Sequence[int], y_pred: Sequence[int]) -> Dict[str, object]:
    """
    Compute all reported metrics.

    Returns:
        Dictionary with accuracy, precision, recall, f1, support and the
        confusion matrix (as nested lists, JSON-ready)
    """
    cm = confusion_matrix(y_true, y_pred)
    return {
        "accuracy": accuracy_score(y_true, y_pred),
        "precision": precision_score(y_true, y_pred),
        "recall": recall_score(y_true, y_pred),
        "f1": f1_score(y_true, y_pred),
        "support": int(cm.sum()),
        "confusion_matrix": cm.tolist(),
    }


def confusion_matrix_frame(
    cm: Sequence[Sequence[int]], target_names: Optional[List[str]] = None
) -> pd.DataFrame:
    """Labelled confusion matrix for printing."""
    target_names = LABEL_NAMES if target_names is None else target_names
    return pd.DataFrame(
        np.asarray(cm, dtype=int),
        index=pd.Index([f"Actual: {n}" for n in target_names]),
        columns=pd.Index([f"Predicted: {n}" for n in target_names]),
    )


def classification_report(
    y_true: Sequence[int],
    y_pred: Sequence[int],
    target_names: Optional[List[str]] = None,
    digits: int = 4,
) -> str:
    """
    Per-class precision/recall/F1 report.

    Each class is scored as if it were the positive one.
    """
    y_true = np.asarray(y_true).astype(int)
    y_pred = np.asarray(y_pred).astype(int)
    target_names = LABEL_NAMES if target_names is None else target_names

    rows = []
    for label, name in zip(LABELS, target_names):
        yt = (y_true == label).astype(int)
        yp = (y_pred == label).astype(int)
        rows.append((name, precision_score(yt, yp), recall_score(yt, yp), f1_score(yt, yp), int(yt.sum())))

    width = max(len("accuracy"), *(len(n) for n in target_names))
    report = f"{'':>{width}} {'precision':>9} {'recall':>9} {'f1-score':>9} {'support':>9}\n\n"
    for name, p, r, f, s in rows:
        report += f"{name:>{width}} {p:>9.{digits}f} {r:>9.{digits}f} {f:>9.{digits}f} {s:>9}\n"
    report += "\n"
    report += f"{'accuracy':>{width}} {'':>9} {'':>9} {accuracy_score(y_true, y_pred):>9.{digits}f} {len(y_true):>9}\n"
    return report
