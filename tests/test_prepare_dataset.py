"""
Unit tests for loading, cleaning and splitting the review dataset.
"""

import numpy as np
import pandas as pd
import pytest

from review_sentiment import config
from review_sentiment.prepare_dataset import (
    load_reviews,
    prepare_dataset,
    prepare_frame,
    split_dataset,
)


def test_load_reviews_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_reviews(tmp_path / "nope.csv")


def test_load_reviews_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"review_id": [1], "user_review": ["fun"]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="missing required columns"):
        load_reviews(path)


def test_prepare_frame_drops_and_labels():
    df = pd.DataFrame(
        {
            "review_id": [1, 2, 2, 3, 4, 5],
            "title": ["A"] * 6,
            "year": [2018, 2019, 2019, np.nan, 2020, 2021],
            "user_review": ["Great <b>game</b>!", "Boring", "Boring", np.nan, "!!! ...", "Bad"],
            "user_suggestion": [1, 0, 0, 1, 1, np.nan],
        }
    )
    out, meta = prepare_frame(df, n_jobs=1)

    # duplicate id 2, missing review 3, missing label 5 are dropped; review 4 keeps its token
    assert out["review_id"].tolist() == [1, 2, 4]
    assert out[config.LABEL_COL].tolist() == [1, 0, 1]
    assert out[config.CLEAN_COL].tolist() == ["great game exclamationmark", "boring", "exclamationmark"]
    assert meta["input_rows"] == 6
    assert meta["final_rows"] == 3
    assert meta["dropped_rows"] == 3
    assert meta["class_balance"] == {1: 2, 0: 1}


def test_prepare_frame_keeps_rows_without_id():
    df = pd.DataFrame(
        {
            "review_id": [np.nan, np.nan, 7, 7],
            "title": ["A"] * 4,
            "year": [2018] * 4,
            "user_review": ["Fun", "Bad", "Great", "Great"],
            "user_suggestion": [1, 0, 1, 1],
        }
    )
    out, meta = prepare_frame(df, n_jobs=1)
    assert out[config.CLEAN_COL].tolist() == ["fun", "bad", "great"]
    assert meta["dropped_rows"] == 1


def test_prepare_frame_drops_reviews_empty_after_cleaning():
    df = pd.DataFrame(
        {
            "review_id": [1, 2],
            "title": ["A", "B"],
            "year": [2018, 2019],
            "user_review": ["https://only.a/link #tag", "fun"],
            "user_suggestion": [1, 0],
        }
    )
    out, _ = prepare_frame(df, n_jobs=1)
    assert out["review_id"].tolist() == [2]


def test_prepare_dataset_writes_clean_csv(reviews_csv, tmp_path):
    meta = prepare_dataset(reviews_csv, outdir=tmp_path / "out", n_jobs=1)
    written = pd.read_csv(meta["out_clean"])
    assert meta["final_rows"] == len(written) == 60
    assert list(written.columns) == config.RAW_COLUMNS + [config.CLEAN_COL, config.LABEL_COL]


def test_split_row_counts(reviews_df):
    reviews_df[config.LABEL_COL] = reviews_df["user_suggestion"]
    train, test = split_dataset(reviews_df, test_size=0.25, random_state=1)
    assert len(train) + len(test) == len(reviews_df)
    assert len(test) == 15
    assert set(train["review_id"]).isdisjoint(test["review_id"])
    assert train.index.tolist() == list(range(len(train)))


def test_stratified_split_keeps_balance(reviews_df):
    reviews_df[config.LABEL_COL] = reviews_df["user_suggestion"]
    _, test = split_dataset(reviews_df, test_size=0.2, random_state=3, stratify=True)
    assert test[config.LABEL_COL].sum() == 6
