"""
Sentiment classification of Steam game reviews.

A recommended / not-recommended label is predicted from the review text by
two models trained on the same random split:

Key modules:
- prepare_dataset: CSV loading, cleaning and the train/test split
- core.text_cleaning: Fixed text-cleaning chain
- core.metrics: Binary classification metrics
- models.lstm_sentiment: Embedding + LSTM classifier (PyTorch)
- models.naive_bayes: Stemmed Boolean bag-of-words + Naive Bayes benchmark
- experiments.experimental_pipeline: End-to-end run with cached artifacts
"""

__version__ = "0.1.0"
