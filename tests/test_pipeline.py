"""
End-to-end test of the experimental pipeline on a small synthetic review set.

WordNet is replaced by a dictionary lookup; work runs in-process (n_jobs=1).
"""

import json
from pathlib import Path

import pytest

from review_sentiment import config
from review_sentiment.experiments import ExperimentalPipeline
from review_sentiment.models import naive_bayes
from review_sentiment.models.models_registry import canonical_name, get_factory_and_params

STEMS = {"loved": ["love"], "crashes": ["crash"], "servers": ["server"]}


@pytest.fixture(autouse=True)
def fake_wordnet(monkeypatch):
    monkeypatch.setattr(naive_bayes, "wordnet_candidates", lambda term: STEMS.get(term, []))
    monkeypatch.setattr(naive_bayes, "ensure_nltk_resource", lambda *a, **k: None)


def _pipeline(reviews_csv, tmp_path, test_size=0.25, **kwargs):
    return ExperimentalPipeline(
        data_path=reviews_csv,
        work_dir=tmp_path / "work",
        results_dir=tmp_path / "results",
        test_size=test_size,
        fast=True,
        n_jobs=1,
        model_params={"lstm": {"epochs": 2, "batch_size": 16}, "nb": {"n_jobs": 1}},
        **kwargs,
    )


def test_registry_names():
    assert canonical_name("LSTM") == "lstm"
    assert canonical_name("naive_bayes") == "nb"
    with pytest.raises(ValueError):
        get_factory_and_params("svm")


def test_split_requires_data(reviews_csv, tmp_path):
    with pytest.raises(ValueError):
        _pipeline(reviews_csv, tmp_path).split_data()


def test_complete_pipeline(reviews_csv, tmp_path):
    pipeline = _pipeline(reviews_csv, tmp_path)
    results = pipeline.run_complete_pipeline()

    assert set(results) == {"lstm", "nb"}
    for res in results.values():
        cm = res["metrics"]["confusion_matrix"]
        assert sum(map(sum, cm)) == len(pipeline.test_data) == 15
        assert 0.0 <= res["metrics"]["accuracy"] <= 1.0
    assert len(results["lstm"]["history"]["loss"]) == 2
    # the synthetic vocabulary separates the classes cleanly
    assert results["nb"]["metrics"]["accuracy"] == 1.0

    work = tmp_path / "work"
    split = work / pipeline.split_dir
    assert split.name == "split_seed42_test0.25_random"
    lstm_dir = Path(results["lstm"]["artifacts"])
    nb_dir = Path(results["nb"]["artifacts"])
    assert lstm_dir.parent == split and nb_dir.parent == split
    for path in [
        work / "reviews_clean.csv",
        lstm_dir / "lstm_weights.pt",
        lstm_dir / "lstm_history.json",
        lstm_dir / "predictions.csv",
        split / "nb_train_tokens.joblib",
        split / "nb_test_tokens.joblib",
        nb_dir / "naive_bayes.joblib",
        nb_dir / "predictions.csv",
    ]:
        assert path.exists(), path

    out = tmp_path / "results"
    assert (out / "confusion_matrices.png").exists()
    assert (out / "lstm_training_history.png").exists()
    assert (out / "model_summary.md").exists()
    saved = json.loads(next(out.glob("experiment_results_*.json")).read_text(encoding="utf-8"))
    assert set(saved["models"]) == {"lstm", "nb"}
    assert saved["test_rows"] == 15


def test_second_run_reuses_cache(reviews_csv, tmp_path):
    first = _pipeline(reviews_csv, tmp_path).run_complete_pipeline()
    weights = Path(first["lstm"]["artifacts"]) / "lstm_weights.pt"
    mtime = weights.stat().st_mtime

    second = _pipeline(reviews_csv, tmp_path).run_complete_pipeline()
    assert weights.stat().st_mtime == mtime
    assert second["lstm"]["metrics"] == first["lstm"]["metrics"]
    assert second["nb"]["metrics"] == first["nb"]["metrics"]
    assert second["lstm"]["history"] == first["lstm"]["history"]


def test_single_model(reviews_csv, tmp_path):
    results = _pipeline(reviews_csv, tmp_path).run_complete_pipeline(["nb"])
    assert set(results) == {"nb"}


def test_changed_split_does_not_reuse_artifacts(reviews_csv, tmp_path):
    first = _pipeline(reviews_csv, tmp_path, test_size=0.25)
    first.run_complete_pipeline()
    second = _pipeline(reviews_csv, tmp_path, test_size=0.5)
    results = second.run_complete_pipeline()

    assert second.split_dir != first.split_dir
    assert len(second.test_data) == 30
    for res in results.values():
        assert sum(map(sum, res["metrics"]["confusion_matrix"])) == len(second.test_data)
        assert res["metrics"]["support"] == len(second.test_data)


def test_changed_model_params_retrain(reviews_csv, tmp_path):
    first = _pipeline(reviews_csv, tmp_path).run_complete_pipeline(["lstm"])
    pipeline = _pipeline(reviews_csv, tmp_path)
    pipeline.model_params["lstm"] = {"epochs": 3, "batch_size": 16}
    second = pipeline.run_complete_pipeline(["lstm"])

    assert second["lstm"]["artifacts"] != first["lstm"]["artifacts"]
    assert len(second["lstm"]["history"]["loss"]) == 3


def test_cached_clean_reviews_keep_nan_like_text(reviews_df, tmp_path):
    reviews_df.loc[0, "user_review"] = "<b>nan</b>"
    reviews_df.loc[2, "user_review"] = "<i>NULL</i>"
    csv = tmp_path / "train.csv"
    reviews_df.to_csv(csv, index=False)

    fresh = _pipeline(csv, tmp_path).load_and_prepare_data()
    cached = _pipeline(csv, tmp_path).load_and_prepare_data()

    assert fresh[config.CLEAN_COL].iloc[0] == "nan"
    assert fresh[config.CLEAN_COL].iloc[2] == "null"
    assert cached[config.CLEAN_COL].tolist() == fresh[config.CLEAN_COL].tolist()
    assert cached[config.LABEL_COL].tolist() == fresh[config.LABEL_COL].tolist()
