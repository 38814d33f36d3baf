# Core components: text cleaning, parallel map, artifact cache, metrics

from .text_cleaning import clean_text, clean_texts
from .parallel import parallel_map
from .cache import ArtifactCache
from .metrics import (
    accuracy_score,
    precision_score,
    recall_score,
    f1_score,
    confusion_matrix,
    confusion_matrix_frame,
    classification_report,
    compute_all_metrics,
)

__all__ = [
    "clean_text",
    "clean_texts",
    "parallel_map",
    "ArtifactCache",
    "accuracy_score",
    "precision_score",
    "recall_score",
    "f1_score",
    "confusion_matrix",
    "confusion_matrix_frame",
    "classification_report",
    "compute_all_metrics",
]
