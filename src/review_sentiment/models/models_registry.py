# models_registry.py
from typing import Any, Dict, Tuple

from .lstm_sentiment import create_lstm_factory
from .naive_bayes import create_naive_bayes_factory

MODEL_NAMES = {
    "lstm": "Embedding + LSTM",
    "nb": "Naive Bayes (Boolean DTM)",
}


def canonical_name(model: str) -> str:
    model = model.lower()
    if model in {"lstm", "rnn"}:
        return "lstm"
    if model in {"nb", "naive_bayes", "naivebayes", "bayes"}:
        return "nb"
    raise ValueError(f"Unknown model: {model}")


def get_factory_and_params(model: str, fast: bool = False) -> Tuple:
    """
    Return (factory, params). factory: params(dict) -> estimator.

    ``fast`` shrinks the LSTM (fewer epochs, shorter sequences) for smoke runs.
    """
    model = canonical_name(model)

    if model == "lstm":
        factory = create_lstm_factory()
        if fast:
            params: Dict[str, Any] = {
                "num_words": 5000,
                "max_len": 64,
                "embedding_dim": 16,
                "units": 16,
                "l1": 1e-4,
                "l2": 1e-4,
                "optimizer": "adam",
                "lr": 2e-3,
                "epochs": 2,
                "batch_size": 128,
                "validation_split": 0.2,
            }
        else:
            params = {
                "num_words": 10000,
                "max_len": 100,
                "embedding_dim": 32,
                "units": 32,
                "l1": 1e-4,
                "l2": 1e-4,
                "optimizer": "adam",
                "lr": 1e-3,
                "epochs": 10,
                "batch_size": 128,
                "validation_split": 0.2,
            }
        return factory, params

    factory = create_naive_bayes_factory()
    params = {"max_df": 0.8, "min_df": 5, "alpha": 1.0}
    return factory, params
