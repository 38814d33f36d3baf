#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Prepare the Steam game review dataset
(CSV columns: review_id, title, year, user_review, user_suggestion):
- Drop rows without review text or label, de-duplicate on review_id
- Map user_suggestion to label {not recommended: 0, recommended: 1}
- Clean review text into clean_review (in parallel)
- Save to <outdir>/reviews_clean.csv

This module provides functions to prepare the dataset programmatically.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Tuple

import pandas as pd
from sklearn.model_selection import train_test_split

from . import config
from .core.text_cleaning import clean_texts

logger = logging.getLogger(__name__)


def load_reviews(path: str | Path) -> pd.DataFrame:
    """Read the raw review CSV and check its schema."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Review CSV not found: {path}")
    df = pd.read_csv(path)
    missing = [c for c in config.RAW_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path} is missing required columns: {missing}")
    logger.info(f"Loaded reviews: {df.shape} from {path}")
    return df


def prepare_frame(df: pd.DataFrame, n_jobs: int = config.N_JOBS) -> Tuple[pd.DataFrame, dict]:
    """
    Clean an already-loaded review frame.

    Returns:
        (clean frame, metadata dict)
    """
    before = len(df)
    df = df.dropna(subset=[config.REVIEW_COL, config.SUGGESTION_COL])
    # rows without an id are never duplicates of each other
    ids = df[config.REVIEW_ID_COL]
    df = df[ids.isna() | ~ids.duplicated()].copy()

    df[config.LABEL_COL] = pd.to_numeric(df[config.SUGGESTION_COL], errors="coerce")
    df = df[df[config.LABEL_COL].isin([0, 1])].copy()
    df[config.LABEL_COL] = df[config.LABEL_COL].astype(int)
    df[config.YEAR_COL] = pd.to_numeric(df[config.YEAR_COL], errors="coerce").astype("Int64")

    df[config.CLEAN_COL] = clean_texts(df[config.REVIEW_COL].tolist(), n_jobs=n_jobs)
    empty = df[config.CLEAN_COL].str.len() == 0
    if empty.any():
        logger.warning(f"Dropping {int(empty.sum())} reviews that are empty after cleaning")
    df = df[~empty].reset_index(drop=True)

    meta = {
        "input_rows": before,
        "dropped_rows": before - len(df),
        "final_rows": int(len(df)),
        "class_balance": {int(k): int(v) for k, v in df[config.LABEL_COL].value_counts().items()},
    }
    return df, meta


def prepare_dataset(
    src_path: str | Path,
    outdir: str | Path = config.DATA_DIR,
    n_jobs: int = config.N_JOBS,
) -> dict:
    """
    Prepare the review dataset from the raw CSV file.

    Args:
        src_path: Path to the raw review CSV
        outdir: Output directory for the cleaned CSV
        n_jobs: Worker processes for text cleaning

    Returns:
        Dictionary with metadata about the processing
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    df, meta = prepare_frame(load_reviews(src_path), n_jobs=n_jobs)

    clean_path = outdir / config.CLEAN_REVIEWS_FILE
    cols = config.RAW_COLUMNS + [config.CLEAN_COL, config.LABEL_COL]
    df[cols].to_csv(clean_path, index=False, encoding="utf-8")

    meta.update({"src": str(src_path), "out_clean": str(clean_path)})
    logger.info(f"Prepared {meta['final_rows']} reviews, dropped {meta['dropped_rows']}")
    return meta


def split_dataset(
    df: pd.DataFrame,
    test_size: float = config.TEST_SIZE,
    random_state: int = config.RANDOM_STATE,
    stratify: bool = False,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Random train/test split; both parts get a fresh index."""
    train_df, test_df = train_test_split(
        df,
        test_size=test_size,
        random_state=random_state,
        stratify=df[config.LABEL_COL] if stratify else None,
    )
    train_df = train_df.reset_index(drop=True)
    test_df = test_df.reset_index(drop=True)
    logger.info(f"Data split: {len(train_df)} train, {len(test_df)} test")
    return train_df, test_df


def main():
    """CLI interface."""
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--src", required=True, help="Path to the raw review CSV")
    parser.add_argument("--outdir", default=str(config.DATA_DIR), help="Output directory")
    parser.add_argument("--n-jobs", type=int, default=config.N_JOBS)
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    meta = prepare_dataset(src_path=args.src, outdir=args.outdir, n_jobs=args.n_jobs)
    print(json.dumps(meta, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
