#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Standalone script to re-plot results from an experiment results JSON file
"""

import argparse
import json
from pathlib import Path

from review_sentiment.experiments.visualization import (
    export_summary_table,
    plot_confusion_matrices,
    plot_training_history,
)


def _latest(results_dir: Path):
    files = sorted(results_dir.glob("experiment_results_*.json"))
    return files[-1] if files else None


def main():
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--results", type=Path, default=None, help="Results JSON (default: latest in --results-dir)")
    ap.add_argument("--results-dir", type=Path, default=Path("results"))
    args = ap.parse_args()

    results_file = args.results or _latest(args.results_dir)
    if results_file is None or not results_file.exists():
        print(f"Error: no results file found (looked for {results_file or args.results_dir / 'experiment_results_*.json'})")
        return

    print(f"Loading results from: {results_file}")
    with open(results_file, "r", encoding="utf-8") as f:
        data = json.load(f)

    models = data.get("models", {})
    if not models:
        print("Error: No model results found in the file")
        return
    print(f"Found {len(models)} models:")
    for name, res in models.items():
        print(f"  - {res.get('display_name', name)}")

    args.results_dir.mkdir(parents=True, exist_ok=True)
    print("\nGenerating visualizations...")
    if "lstm" in models:
        plot_training_history(models["lstm"].get("history", {}), args.results_dir, name="lstm")
    plot_confusion_matrices(models, args.results_dir)
    print(export_summary_table(models, args.results_dir).to_string(index=False))
    print("\nVisualization complete!")


if __name__ == "__main__":
    main()
