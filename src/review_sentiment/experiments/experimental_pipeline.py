#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Experimental pipeline: Steam review sentiment, LSTM vs. Naive Bayes.

The pipeline runs once, top to bottom:
1. Load and clean the review CSV (cached as reviews_clean.csv)
2. Random train/test split
3. Train and evaluate the LSTM (weights and history cached)
4. Train and evaluate the Naive Bayes benchmark (stemmed tokens and model cached)
5. Print confusion matrices and a summary table, save plots and results
"""

import hashlib
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .. import config
from ..core.cache import ArtifactCache
from ..core.metrics import classification_report, compute_all_metrics, confusion_matrix_frame
from ..models.lstm_sentiment import LSTMSentiment
from ..models.models_registry import MODEL_NAMES, canonical_name, get_factory_and_params
from ..prepare_dataset import load_reviews, prepare_frame, split_dataset
from .visualization import (
    export_summary_table,
    plot_confusion_matrices,
    plot_label_distribution,
    plot_training_history,
)

logger = logging.getLogger(__name__)

PREDICTION_COLUMNS = [config.REVIEW_ID_COL, config.LABEL_COL, "probability", "prediction"]

# Only empty fields are missing values; a review may clean to the literal text "nan" or "null"
CLEAN_CSV_READ = {
    "keep_default_na": False,
    "na_values": {c: [""] for c in config.RAW_COLUMNS},
}


def _json_safe(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if isinstance(v, (int, float, str, bool, type(None)))}


def _params_key(params: Dict[str, Any]) -> str:
    """Short digest of the params that change a fitted model (worker count excluded)."""
    safe = {k: v for k, v in _json_safe(params).items() if k != "n_jobs"}
    return hashlib.sha1(json.dumps(safe, sort_keys=True).encode("utf-8")).hexdigest()[:10]


class ExperimentalPipeline:
    """
    Runs both classifiers on one train/test split and reports their metrics.
    """

    def __init__(
        self,
        data_path: str | Path = config.RAW_REVIEWS_FILE,
        work_dir: str | Path = config.DATA_DIR,
        results_dir: str | Path = config.RESULTS_DIR,
        random_state: int = config.RANDOM_STATE,
        test_size: float = config.TEST_SIZE,
        stratify: bool = False,
        fast: bool = False,
        n_jobs: int = config.N_JOBS,
        refresh: bool = False,
        model_params: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        """
        Args:
            data_path: Raw review CSV
            work_dir: Directory for cached intermediate artifacts
            results_dir: Directory for plots, tables and the results JSON
            random_state: Seed for the split and the LSTM
            test_size: Share of rows held out for testing
            stratify: Keep the label balance in both split parts
            fast: Use the small LSTM configuration
            n_jobs: Worker processes for cleaning and stemming
            refresh: Ignore cached artifacts and recompute them
            model_params: Per-model overrides, e.g. {"lstm": {"epochs": 3}}
        """
        self.data_path = Path(data_path)
        self.work_dir = Path(work_dir)
        self.results_dir = Path(results_dir)
        self.random_state = random_state
        self.test_size = test_size
        self.stratify = stratify
        self.fast = fast
        self.n_jobs = n_jobs
        self.refresh = refresh
        self.model_params = {canonical_name(k): v for k, v in (model_params or {}).items()}

        self.results_dir.mkdir(parents=True, exist_ok=True)
        self.cache = ArtifactCache(self.work_dir, refresh=refresh)

        self.data: pd.DataFrame | None = None
        self.train_data: pd.DataFrame | None = None
        self.test_data: pd.DataFrame | None = None
        self.results: Dict[str, Any] = {}

    @property
    def split_dir(self) -> str:
        """Cache subdirectory for everything that depends on the train/test split."""
        mode = "stratified" if self.stratify else "random"
        return f"split_seed{self.random_state}_test{self.test_size:g}_{mode}"

    def _params(self, model: str) -> tuple:
        factory, params = get_factory_and_params(model, fast=self.fast)
        params = {**params, **self.model_params.get(model, {})}
        return factory, params

    # ---------- data ----------
    def load_and_prepare_data(self) -> pd.DataFrame:
        print("=" * 60)
        print("STEP 1: Loading and Cleaning Reviews")
        print("=" * 60)

        def compute():
            df, meta = prepare_frame(load_reviews(self.data_path), n_jobs=self.n_jobs)
            logger.info(f"Cleaned {meta['final_rows']} reviews, dropped {meta['dropped_rows']}")
            return df[config.RAW_COLUMNS + [config.CLEAN_COL, config.LABEL_COL]].copy()

        df = self.cache.load_or_compute(config.CLEAN_REVIEWS_FILE, compute, **CLEAN_CSV_READ)
        df[config.CLEAN_COL] = df[config.CLEAN_COL].fillna("").astype(str)
        df[config.LABEL_COL] = df[config.LABEL_COL].astype(int)
        self.data = df

        print(f"[data] rows={len(df)}, balance={df[config.LABEL_COL].value_counts().to_dict()}")
        print("\nSample data:")
        print(df.head()[[config.CLEAN_COL, config.LABEL_COL]])
        return df

    def split_data(self):
        if self.data is None:
            raise ValueError("Must call load_and_prepare_data() first")
        self.train_data, self.test_data = split_dataset(
            self.data,
            test_size=self.test_size,
            random_state=self.random_state,
            stratify=self.stratify,
        )
        print(f"Data split: {len(self.train_data)} train, {len(self.test_data)} test")
        return self.train_data, self.test_data

    def _require_split(self):
        if self.train_data is None or self.test_data is None:
            raise ValueError("Must call split_data() first")

    # ---------- evaluation ----------
    def evaluate_model(self, model: str, y_true, y_pred) -> Dict[str, Any]:
        metrics = compute_all_metrics(y_true, y_pred)
        print(f"\n{'=' * 60}")
        print(f"{MODEL_NAMES[model]}: Test Set Evaluation")
        print(f"{'=' * 60}")
        print(confusion_matrix_frame(metrics["confusion_matrix"]).to_string())
        print()
        print(classification_report(y_true, y_pred))
        return metrics

    def _model_dir(self, model: str, params: Dict[str, Any]) -> str:
        """Cache subdirectory for one model trained on the current split."""
        return f"{self.split_dir}/{model}_{_params_key(params)}"

    def _predictions(self, name: str, proba: np.ndarray, threshold: float) -> pd.DataFrame:
        preds = pd.DataFrame(
            {
                config.REVIEW_ID_COL: self.test_data[config.REVIEW_ID_COL].to_numpy(),
                config.LABEL_COL: self.test_data[config.LABEL_COL].to_numpy(),
                "probability": proba,
                "prediction": (proba >= threshold).astype(int),
            }
        )[PREDICTION_COLUMNS]
        self.cache.save(name, preds)
        return preds

    # ---------- models ----------
    def run_lstm(self) -> Dict[str, Any]:
        print("\n" + "=" * 60)
        print("STEP 2: LSTM")
        print("=" * 60)
        self._require_split()

        factory, params = self._params("lstm")
        artifacts = self._model_dir("lstm", params)
        model_dir = self.cache.path(artifacts)
        if self.refresh or not LSTMSentiment.is_saved(model_dir):
            est = factory(params)
            est.fit(self.train_data[config.CLEAN_COL], self.train_data[config.LABEL_COL])
            est.save(model_dir)
        else:
            logger.info(f"[cache] hit: {model_dir}")
            est = LSTMSentiment.load(model_dir)

        proba = est.predict_proba(self.test_data[config.CLEAN_COL])
        preds = self._predictions(f"{artifacts}/predictions.csv", proba, est.p["threshold"])

        res = {
            "display_name": MODEL_NAMES["lstm"],
            "params": _json_safe(est.p),
            "artifacts": str(model_dir),
            "history": est.history,
            "metrics": self.evaluate_model("lstm", preds[config.LABEL_COL], preds["prediction"]),
        }
        self.results["lstm"] = res
        return res

    def run_naive_bayes(self) -> Dict[str, Any]:
        print("\n" + "=" * 60)
        print("STEP 3: Naive Bayes")
        print("=" * 60)
        self._require_split()

        factory, params = self._params("nb")
        params.setdefault("n_jobs", self.n_jobs)
        nb = factory(params)
        artifacts = self._model_dir("nb", params)

        train_docs = self.cache.load_or_compute(
            f"{self.split_dir}/nb_train_tokens.joblib",
            lambda: nb.preprocess(self.train_data[config.CLEAN_COL]),
        )
        test_docs = self.cache.load_or_compute(
            f"{self.split_dir}/nb_test_tokens.joblib",
            lambda: nb.preprocess(self.test_data[config.CLEAN_COL]),
        )
        est = self.cache.load_or_compute(
            f"{artifacts}/naive_bayes.joblib",
            lambda: nb.fit_tokens(train_docs, self.train_data[config.LABEL_COL]),
        )
        print(f"[NB] vocabulary after filtering: {len(est.dtm.vocabulary)} terms")

        proba = est.predict_proba_tokens(test_docs)
        preds = self._predictions(f"{artifacts}/predictions.csv", proba, 0.5)

        res = {
            "display_name": MODEL_NAMES["nb"],
            "params": _json_safe(est.p),
            "artifacts": str(self.cache.path(artifacts)),
            "vocabulary_size": len(est.dtm.vocabulary),
            "metrics": self.evaluate_model("nb", preds[config.LABEL_COL], preds["prediction"]),
        }
        self.results["nb"] = res
        return res

    # ---------- reporting ----------
    def print_summary_table(self):
        if not self.results:
            return
        print("\n" + "=" * 60)
        print("MODEL SUMMARY (test set)")
        print("=" * 60)
        header = f"{'Model':30} | {'Acc':>6} | {'Rec':>6} | {'Prec':>6} | {'F1':>6}"
        print(header)
        print("-" * len(header))
        for res in self.results.values():
            m = res["metrics"]
            print(
                f"{res['display_name']:30} | {m['accuracy']:.4f} | {m['recall']:.4f} | "
                f"{m['precision']:.4f} | {m['f1']:.4f}"
            )
        print("=" * 60)

    def create_visualizations(self):
        print("\n" + "=" * 60)
        print("STEP 4: Creating Visualizations")
        print("=" * 60)
        if self.data is not None:
            plot_label_distribution(self.data, self.results_dir)
        if "lstm" in self.results:
            plot_training_history(self.results["lstm"].get("history", {}), self.results_dir, name="lstm")
        plot_confusion_matrices(self.results, self.results_dir)
        export_summary_table(self.results, self.results_dir)
        print(f"Visualizations saved to {self.results_dir}/")

    def save_results(self) -> Path:
        print("\n" + "=" * 60)
        print("STEP 5: Saving Results")
        print("=" * 60)
        results_path = (
            self.results_dir / f"experiment_results_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        )
        payload = {
            "data_path": str(self.data_path),
            "random_state": self.random_state,
            "test_size": self.test_size,
            "train_rows": None if self.train_data is None else len(self.train_data),
            "test_rows": None if self.test_data is None else len(self.test_data),
            "models": self.results,
        }
        with open(results_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True, ensure_ascii=False)
        print(f"Results saved to: {results_path}")
        return results_path

    def run_complete_pipeline(self, models: Optional[List[str]] = None) -> Dict[str, Any]:
        models = [canonical_name(m) for m in (models or ["lstm", "nb"])]
        self.load_and_prepare_data()
        self.split_data()
        if "lstm" in models:
            self.run_lstm()
        if "nb" in models:
            self.run_naive_bayes()
        self.print_summary_table()
        self.create_visualizations()
        self.save_results()
        return self.results
