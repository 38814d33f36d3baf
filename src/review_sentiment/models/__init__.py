# Model implementations for review sentiment classification

from .sequences import Tokenizer, pad_sequences
from .lstm_sentiment import LSTMSentiment, create_lstm_factory
from .naive_bayes import (
    DictionaryStemmer,
    DocumentTermMatrix,
    NaiveBayesSentiment,
    create_naive_bayes_factory,
)
from .models_registry import get_factory_and_params

__all__ = [
    "Tokenizer",
    "pad_sequences",
    "LSTMSentiment",
    "create_lstm_factory",
    "DictionaryStemmer",
    "DocumentTermMatrix",
    "NaiveBayesSentiment",
    "create_naive_bayes_factory",
    "get_factory_and_params",
]
