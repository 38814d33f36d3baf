# sequences.py
from collections import Counter
from typing import Dict, Iterable, List, Optional

import numpy as np

PAD_ID = 0


class Tokenizer:
    """
    Word-index tokenizer over whitespace-split, already-cleaned text.

    Words are ranked by descending frequency (ties keep first-seen order)
    and numbered from 1; index 0 is reserved for padding. Only the
    ``num_words - 1`` most frequent words are emitted by
    ``texts_to_sequences``, so every id lies in ``[1, num_words)``.
    Words outside the kept vocabulary are dropped.
    """

    def __init__(self, num_words: Optional[int] = None):
        self.num_words = num_words
        self.word_index: Dict[str, int] = {}
        self.word_counts: Dict[str, int] = {}
        self.fitted = False

    def fit_on_texts(self, texts: Iterable[str]) -> "Tokenizer":
        cnt = Counter()
        for t in texts:
            cnt.update(str(t).split())
        self.word_counts = dict(cnt)
        # Counter.most_common is a stable sort, so ties keep insertion order
        self.word_index = {w: i for i, (w, _) in enumerate(cnt.most_common(), start=1)}
        self.fitted = True
        return self

    @property
    def vocab_size(self) -> int:
        """Size of the id space the embedding must cover (padding included)."""
        full = len(self.word_index) + 1
        return full if self.num_words is None else min(full, self.num_words)

    def texts_to_sequences(self, texts: Iterable[str]) -> List[List[int]]:
        if not self.fitted:
            raise ValueError("Tokenizer must be fitted before texts_to_sequences()")
        limit = self.vocab_size
        out = []
        for t in texts:
            ids = (self.word_index.get(w) for w in str(t).split())
            out.append([i for i in ids if i is not None and i < limit])
        return out

    def to_dict(self) -> Dict:
        return {"num_words": self.num_words, "word_index": self.word_index}

    @classmethod
    def from_dict(cls, d: Dict) -> "Tokenizer":
        tok = cls(num_words=d.get("num_words"))
        tok.word_index = {str(k): int(v) for k, v in d["word_index"].items()}
        tok.fitted = True
        return tok


def pad_sequences(
    sequences: List[List[int]],
    maxlen: int,
    padding: str = "pre",
    truncating: str = "pre",
    value: int = PAD_ID,
) -> np.ndarray:
    """
    Pad/truncate every sequence to exactly ``maxlen`` ids.

    ``"pre"`` pads (or cuts) at the start, ``"post"`` at the end.
    """
    if padding not in ("pre", "post"):
        raise ValueError(f"Unknown padding mode: {padding}")
    if truncating not in ("pre", "post"):
        raise ValueError(f"Unknown truncating mode: {truncating}")
    if maxlen <= 0:
        raise ValueError("maxlen must be positive")

    out = np.full((len(sequences), maxlen), value, dtype=np.int64)
    for i, seq in enumerate(sequences):
        if not len(seq):
            continue
        trunc = seq[-maxlen:] if truncating == "pre" else seq[:maxlen]
        if padding == "pre":
            out[i, maxlen - len(trunc):] = trunc
        else:
            out[i, : len(trunc)] = trunc
    return out
