# visualization.py
import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from ..config import LABEL_COL, LABEL_NAMES

logger = logging.getLogger(__name__)


def plot_training_history(history: dict, save_dir: Path, name: str = "lstm"):
    """Loss (and accuracy, when recorded) per epoch for training and validation."""
    if not history or not history.get("loss"):
        logger.warning("No training history to plot")
        return None
    epochs = np.arange(1, len(history["loss"]) + 1)
    has_acc = bool(history.get("accuracy"))

    fig, axes = plt.subplots(1, 2 if has_acc else 1, figsize=(12 if has_acc else 6, 4))
    axes = np.atleast_1d(axes)

    axes[0].plot(epochs, history["loss"], marker="o", label="train")
    if history.get("val_loss"):
        axes[0].plot(epochs, history["val_loss"], marker="o", label="validation")
    axes[0].set_xlabel("Epoch")
    axes[0].set_ylabel("Loss")
    axes[0].set_title("Training Loss")
    axes[0].legend()
    axes[0].grid(True, alpha=0.3)

    if has_acc:
        axes[1].plot(epochs, history["accuracy"], marker="o", label="train")
        if history.get("val_accuracy"):
            axes[1].plot(epochs, history["val_accuracy"], marker="o", label="validation")
        axes[1].set_xlabel("Epoch")
        axes[1].set_ylabel("Accuracy")
        axes[1].set_title("Training Accuracy")
        axes[1].legend()
        axes[1].grid(True, alpha=0.3)

    plt.tight_layout()
    out = save_dir / f"{name}_training_history.png"
    plt.savefig(out, dpi=200, bbox_inches="tight")
    plt.close(fig)
    logger.info(f"Training history saved to {out}")
    return out


def plot_confusion_matrices(results: dict, save_dir: Path):
    """Plot one confusion-matrix heatmap per model."""
    models = [(m, r) for m, r in results.items() if r.get("metrics", {}).get("confusion_matrix")]
    if not models:
        logger.warning("No confusion matrices to plot")
        return None

    fig, axes = plt.subplots(1, len(models), figsize=(5 * len(models), 4))
    axes = np.atleast_1d(axes)

    for ax, (model_name, res) in zip(axes, models):
        cm = np.asarray(res["metrics"]["confusion_matrix"], dtype=int)
        sns.heatmap(cm, annot=True, fmt="d", cmap="Blues", ax=ax, cbar=True, square=True)
        ax.set_title(f"{res.get('display_name', model_name)}\nConfusion Matrix")
        ax.set_xlabel("Predicted")
        ax.set_ylabel("Actual")
        ax.set_xticklabels(LABEL_NAMES)
        ax.set_yticklabels(LABEL_NAMES)

    plt.tight_layout()
    out = save_dir / "confusion_matrices.png"
    plt.savefig(out, dpi=200, bbox_inches="tight")
    plt.close(fig)
    logger.info(f"Confusion matrices saved to {out}")
    return out


def plot_label_distribution(df: pd.DataFrame, save_dir: Path):
    counts = df[LABEL_COL].value_counts().reindex([0, 1], fill_value=0)
    fig, ax = plt.subplots(figsize=(6, 4))
    sns.barplot(x=LABEL_NAMES, y=counts.values, ax=ax)
    ax.set_ylabel("Reviews")
    ax.set_title("Label Distribution")
    plt.tight_layout()
    out = save_dir / "label_distribution.png"
    plt.savefig(out, dpi=200)
    plt.close(fig)
    return out


def summary_frame(results: dict) -> pd.DataFrame:
    rows = []
    for model, res in results.items():
        m = res.get("metrics", {})
        rows.append(
            {
                "Model": res.get("display_name", model),
                "Accuracy": m.get("accuracy"),
                "Recall": m.get("recall"),
                "Precision": m.get("precision"),
                "F1": m.get("f1"),
            }
        )
    return pd.DataFrame(rows)


def export_summary_table(results: dict, save_dir: Path) -> pd.DataFrame:
    df = summary_frame(results)
    df.to_csv(save_dir / "model_summary.csv", index=False)
    (save_dir / "model_summary.md").write_text(
        df.to_markdown(index=False, floatfmt=".4f"), encoding="utf-8"
    )
    return df
