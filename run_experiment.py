#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Runner for the Steam review sentiment experiment.

- Run from project root after `pip install -e .`.
- Trains the LSTM, the Naive Bayes benchmark, or both on one random split.
- Intermediate artifacts are cached under --data-dir; pass --refresh to rebuild them.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from review_sentiment import config
from review_sentiment.experiments import ExperimentalPipeline


def setup_logging(log_level: str = config.LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=config.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _resolve_csv(data_dir: Path, csv_path: Path | None) -> Path:
    """Locate the raw review CSV from --csv or --data-dir."""
    p = csv_path if csv_path is not None else data_dir / config.RAW_REVIEWS_FILE.name
    if not p.exists():
        raise FileNotFoundError(
            f"Cannot find {p}. Place the review CSV under --data-dir or pass --csv explicitly."
        )
    return p


def main() -> None:
    ap = argparse.ArgumentParser(description="Steam review sentiment: LSTM vs. Naive Bayes")
    ap.add_argument("--csv", type=Path, default=None, help="Path to the raw review CSV")
    ap.add_argument("--data-dir", type=Path, default=config.DATA_DIR, help="Directory for data and cached artifacts")
    ap.add_argument("--results-dir", type=Path, default=config.RESULTS_DIR)
    ap.add_argument("--model", choices=["lstm", "nb", "all"], default="all")
    ap.add_argument("--seed", type=int, default=config.RANDOM_STATE)
    ap.add_argument("--test-size", type=float, default=config.TEST_SIZE)
    ap.add_argument("--stratify", action="store_true", help="Stratify the train/test split by label")
    ap.add_argument("--fast", action="store_true", help="Small LSTM, two epochs")
    ap.add_argument("--n-jobs", type=int, default=config.N_JOBS, help="Worker processes for cleaning/stemming")
    ap.add_argument("--refresh", action="store_true", help="Ignore cached artifacts")
    ap.add_argument("--log-level", default=config.LOG_LEVEL)

    # Optional LSTM overrides
    ap.add_argument("--epochs", type=int, default=None)
    ap.add_argument("--max-len", type=int, default=None, help="Padded sequence length")
    ap.add_argument("--num-words", type=int, default=None, help="Tokenizer vocabulary size")

    args = ap.parse_args()
    setup_logging(args.log_level)

    lstm_overrides = {
        k: v
        for k, v in {"epochs": args.epochs, "max_len": args.max_len, "num_words": args.num_words}.items()
        if v is not None
    }
    lstm_overrides["seed"] = args.seed

    pipeline = ExperimentalPipeline(
        data_path=_resolve_csv(args.data_dir, args.csv),
        work_dir=args.data_dir,
        results_dir=args.results_dir,
        random_state=args.seed,
        test_size=args.test_size,
        stratify=args.stratify,
        fast=args.fast,
        n_jobs=args.n_jobs,
        refresh=args.refresh,
        model_params={"lstm": lstm_overrides},
    )
    models = ["lstm", "nb"] if args.model == "all" else [args.model]
    pipeline.run_complete_pipeline(models)


if __name__ == "__main__":
    main()
