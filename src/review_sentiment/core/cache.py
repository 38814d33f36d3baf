"""
On-disk cache for intermediate artifacts.

Cleaning, stemming and training are slow; their results are written once
under the work directory and reloaded on later runs.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable

import joblib
import pandas as pd

logger = logging.getLogger(__name__)


class ArtifactCache:
    """
    Load-or-compute store keyed by path relative to the cache root.

    The serializer is picked from the file suffix: ``.csv`` goes through
    pandas, ``.json`` through json, anything else through joblib.
    """

    def __init__(self, root: str | Path, refresh: bool = False):
        """
        Args:
            root: Directory holding the cached files
            refresh: Recompute (and overwrite) even if a file exists
        """
        self.root = Path(root)
        self.refresh = refresh
        self.root.mkdir(parents=True, exist_ok=True)

    def path(self, name: str) -> Path:
        return self.root / name

    def exists(self, name: str) -> bool:
        return self.path(name).exists()

    def load(self, name: str, **read_kwargs: Any) -> Any:
        """Load a cached file; ``read_kwargs`` go to ``pd.read_csv`` for CSV files."""
        p = self.path(name)
        if p.suffix == ".csv":
            return pd.read_csv(p, **read_kwargs)
        if p.suffix == ".json":
            return json.loads(p.read_text(encoding="utf-8"))
        return joblib.load(p)

    def save(self, name: str, value: Any) -> Path:
        p = self.path(name)
        p.parent.mkdir(parents=True, exist_ok=True)
        if p.suffix == ".csv":
            value.to_csv(p, index=False, encoding="utf-8")
        elif p.suffix == ".json":
            p.write_text(json.dumps(value, ensure_ascii=False, indent=2), encoding="utf-8")
        else:
            joblib.dump(value, p)
        return p

    def load_or_compute(self, name: str, compute: Callable[[], Any], **read_kwargs: Any) -> Any:
        if self.exists(name) and not self.refresh:
            logger.info(f"[cache] hit: {self.path(name)}")
            return self.load(name, **read_kwargs)
        logger.info(f"[cache] miss: {self.path(name)}, computing")
        value = compute()
        self.save(name, value)
        return value
