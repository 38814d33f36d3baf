# lstm_sentiment.py
import json
import logging
import random
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import torch
import torch.nn as nn
from torch.utils.data import DataLoader, TensorDataset

from .sequences import PAD_ID, Tokenizer, pad_sequences

logger = logging.getLogger(__name__)

WEIGHTS_FILE = "lstm_weights.pt"
TOKENIZER_FILE = "lstm_tokenizer.json"
PARAMS_FILE = "lstm_params.json"
HISTORY_FILE = "lstm_history.json"

DEFAULT_PARAMS: Dict[str, Any] = {
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
    "threshold": 0.5,
    "seed": 42,
}


def set_seed(seed: int = 42):
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    torch.cuda.manual_seed_all(seed)


class LSTMNet(nn.Module):
    """Embedding -> single LSTM layer -> one output unit (logit)."""

    def __init__(self, vocab_size: int, emb_dim: int, units: int):
        super().__init__()
        self.emb = nn.Embedding(vocab_size, emb_dim, padding_idx=PAD_ID)
        self.lstm = nn.LSTM(emb_dim, units, batch_first=True)
        self.out = nn.Linear(units, 1)

    def forward(self, x):
        emb = self.emb(x)  # [B, T, E]
        _, (h_n, _) = self.lstm(emb)
        # sequences are pre-padded, so the final state follows the last real token
        return self.out(h_n[-1]).squeeze(-1)

    def penalty(self, l1: float, l2: float) -> torch.Tensor:
        """Elastic-net penalty on the LSTM input and recurrent weight matrices."""
        total = torch.zeros((), device=self.out.weight.device)
        for name, w in self.lstm.named_parameters():
            if not name.startswith("weight"):
                continue
            if l1:
                total = total + l1 * w.abs().sum()
            if l2:
                total = total + l2 * w.pow(2).sum()
        return total


class LSTMSentiment:
    def __init__(self, **params: Any):
        self.p = {**DEFAULT_PARAMS, **params}
        self.device = torch.device("cuda" if torch.cuda.is_available() else "cpu")
        self.tokenizer: Tokenizer | None = None
        self.model: LSTMNet | None = None
        self.history: Dict[str, List[float]] = {}

    # ---------- helpers ----------
    def _encode(self, texts) -> np.ndarray:
        seqs = self.tokenizer.texts_to_sequences(list(texts))
        return pad_sequences(seqs, maxlen=self.p["max_len"])

    def _build_model(self) -> LSTMNet:
        return LSTMNet(
            vocab_size=self.tokenizer.vocab_size,
            emb_dim=self.p["embedding_dim"],
            units=self.p["units"],
        ).to(self.device)

    def _build_optimizer(self):
        name = str(self.p["optimizer"]).lower()
        if name == "adam":
            return torch.optim.Adam(self.model.parameters(), lr=self.p["lr"])
        if name == "rmsprop":
            return torch.optim.RMSprop(self.model.parameters(), lr=self.p["lr"])
        raise ValueError(f"Unknown optimizer: {self.p['optimizer']}")

    def _loader(self, X: np.ndarray, y: np.ndarray, shuffle: bool) -> DataLoader:
        ds = TensorDataset(torch.as_tensor(X), torch.as_tensor(y, dtype=torch.float32))
        g = torch.Generator().manual_seed(self.p["seed"])
        return DataLoader(ds, batch_size=self.p["batch_size"], shuffle=shuffle, generator=g)

    @torch.no_grad()
    def _evaluate(self, loader: DataLoader, lossf) -> tuple:
        self.model.eval()
        total, correct, n = 0.0, 0, 0
        for xb, yb in loader:
            xb, yb = xb.to(self.device), yb.to(self.device)
            logits = self.model(xb)
            total += lossf(logits, yb).item() * xb.size(0)
            correct += int(((logits >= 0).float() == yb).sum().item())
            n += xb.size(0)
        penalty = self.model.penalty(self.p["l1"], self.p["l2"]).item()
        return total / max(1, n) + penalty, correct / max(1, n)

    def _check_fitted(self):
        if self.model is None or self.tokenizer is None:
            raise ValueError("LSTMSentiment must be fitted (or loaded) before predicting")

    # ---------- api ----------
    def fit(self, texts, y):
        set_seed(self.p["seed"])
        texts = list(texts)
        y = np.asarray(y, dtype=np.float32)
        if len(texts) != len(y):
            raise ValueError("texts and y must have the same length")

        # the validation share is the tail of the training data, taken before shuffling
        n_val = int(len(texts) * self.p["validation_split"])
        n_train = len(texts) - n_val
        if n_train <= 0:
            raise ValueError("validation_split leaves no training rows")

        self.tokenizer = Tokenizer(num_words=self.p["num_words"]).fit_on_texts(texts[:n_train])
        X = self._encode(texts)
        logger.info(
            f"[LSTM] device={self.device}, vocab={self.tokenizer.vocab_size}, "
            f"train={n_train}, val={n_val}, max_len={self.p['max_len']}"
        )

        dl_train = self._loader(X[:n_train], y[:n_train], shuffle=True)
        dl_val = self._loader(X[n_train:], y[n_train:], shuffle=False) if n_val else None

        self.model = self._build_model()
        optim = self._build_optimizer()
        lossf = nn.BCEWithLogitsLoss()
        l1, l2 = self.p["l1"], self.p["l2"]

        self.history = {"loss": [], "accuracy": []}
        if dl_val is not None:
            self.history.update({"val_loss": [], "val_accuracy": []})

        epochs = self.p["epochs"]
        for ep in range(1, epochs + 1):
            self.model.train()
            total, correct, n = 0.0, 0, 0
            for xb, yb in dl_train:
                xb, yb = xb.to(self.device), yb.to(self.device)
                optim.zero_grad()
                logits = self.model(xb)
                loss = lossf(logits, yb) + self.model.penalty(l1, l2)
                loss.backward()
                optim.step()
                total += loss.item() * xb.size(0)
                correct += int(((logits.detach() >= 0).float() == yb).sum().item())
                n += xb.size(0)
            self.history["loss"].append(total / max(1, n))
            self.history["accuracy"].append(correct / max(1, n))

            msg = f"[LSTM] epoch {ep}/{epochs} loss={self.history['loss'][-1]:.4f} acc={self.history['accuracy'][-1]:.4f}"
            if dl_val is not None:
                val_loss, val_acc = self._evaluate(dl_val, lossf)
                self.history["val_loss"].append(val_loss)
                self.history["val_accuracy"].append(val_acc)
                msg += f" val_loss={val_loss:.4f} val_acc={val_acc:.4f}"
            logger.info(msg)
        return self

    @torch.no_grad()
    def predict_proba(self, texts) -> np.ndarray:
        """Probability that each review is recommended."""
        self._check_fitted()
        self.model.eval()
        X = self._encode(texts)
        dl = self._loader(X, np.zeros(len(X), dtype=np.float32), shuffle=False)
        outs = []
        for xb, _ in dl:
            logits = self.model(xb.to(self.device))
            outs.append(torch.sigmoid(logits).cpu().numpy())
        return np.concatenate(outs) if outs else np.zeros(0, dtype=np.float32)

    def predict(self, texts) -> np.ndarray:
        return (self.predict_proba(texts) >= self.p["threshold"]).astype(int)

    # ---------- persistence ----------
    def save(self, out_dir) -> Path:
        self._check_fitted()
        out_dir = Path(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        torch.save(self.model.state_dict(), out_dir / WEIGHTS_FILE)
        (out_dir / TOKENIZER_FILE).write_text(json.dumps(self.tokenizer.to_dict()), encoding="utf-8")
        (out_dir / PARAMS_FILE).write_text(json.dumps(self.p, indent=2), encoding="utf-8")
        (out_dir / HISTORY_FILE).write_text(json.dumps(self.history, indent=2), encoding="utf-8")
        logger.info(f"[LSTM] saved model to {out_dir}")
        return out_dir

    @classmethod
    def is_saved(cls, out_dir) -> bool:
        out_dir = Path(out_dir)
        return all((out_dir / f).exists() for f in (WEIGHTS_FILE, TOKENIZER_FILE, PARAMS_FILE))

    @classmethod
    def load(cls, out_dir) -> "LSTMSentiment":
        out_dir = Path(out_dir)
        params = json.loads((out_dir / PARAMS_FILE).read_text(encoding="utf-8"))
        est = cls(**params)
        est.tokenizer = Tokenizer.from_dict(json.loads((out_dir / TOKENIZER_FILE).read_text(encoding="utf-8")))
        est.model = est._build_model()
        est.model.load_state_dict(torch.load(out_dir / WEIGHTS_FILE, map_location=est.device))
        est.model.eval()
        history_path = out_dir / HISTORY_FILE
        if history_path.exists():
            est.history = json.loads(history_path.read_text(encoding="utf-8"))
        logger.info(f"[LSTM] loaded model from {out_dir}")
        return est


def create_lstm_factory():
    def factory(params: Dict[str, Any]):
        return LSTMSentiment(**params)
    return factory
