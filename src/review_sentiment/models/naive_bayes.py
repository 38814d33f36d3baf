# naive_bayes.py
"""
Bag-of-words Naive Bayes benchmark.

Text -> word tokens -> stop words removed -> dictionary stemming ->
presence/absence document-term matrix -> Bernoulli Naive Bayes.
"""
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import nltk
import numpy as np
import regex as re
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS, CountVectorizer
from sklearn.naive_bayes import BernoulliNB

from ..config import DTM_MAX_DF, DTM_MIN_DF
from ..core.parallel import parallel_map

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\b\w[\w'-]*\b")

DEFAULT_PARAMS: Dict[str, Any] = {
    "max_df": DTM_MAX_DF,
    "min_df": DTM_MIN_DF,
    "alpha": 1.0,  # Laplace smoothing
    "n_jobs": -1,
}


def tokenize(text: str) -> List[str]:
    return _TOKEN_RE.findall(str(text).lower())


def remove_stopwords(tokens: Iterable[str]) -> List[str]:
    return [t for t in tokens if t not in ENGLISH_STOP_WORDS]


# ---------- dictionary stemming ----------
def ensure_nltk_resource(package: str, category: str = "corpora") -> None:
    try:
        nltk.data.find(f"{category}/{package}")
    except LookupError:
        logger.info(f"Downloading nltk resource: {package}")
        nltk.download(package, quiet=True)


def wordnet_candidates(term: str) -> List[str]:
    """
    Dictionary stems of ``term`` from WordNet, one lookup per part of speech.

    Duplicates are dropped; order follows noun, verb, adjective, adverb.
    Needs the WordNet corpus (see ``ensure_nltk_resource``).
    """
    from nltk.corpus import wordnet as wn

    candidates: List[str] = []
    for pos in (wn.NOUN, wn.VERB, wn.ADJ, wn.ADV):
        stem = wn.morphy(term, pos)
        if stem and stem not in candidates:
            candidates.append(stem)
    return candidates


class DictionaryStemmer:
    """
    Stem by dictionary lookup.

    No candidate -> the term is kept as is. Several candidates -> the last one wins.
    """

    def __init__(self, lookup: Optional[Callable[[str], List[str]]] = None):
        self.lookup = lookup

    def stem(self, term: str) -> str:
        lookup = self.lookup if self.lookup is not None else wordnet_candidates
        candidates = lookup(term)
        if not candidates:
            return term
        return candidates[-1]

    def stem_documents(self, docs: List[List[str]], n_jobs: int = -1) -> List[List[str]]:
        """
        Stem tokenized documents.

        Each distinct term is looked up once (in parallel), then every
        document is rebuilt in its original order.
        """
        if self.lookup is None:
            ensure_nltk_resource("wordnet")
        vocab = sorted({t for doc in docs for t in doc})
        logger.info(f"[NB] stemming {len(vocab)} distinct terms over {len(docs)} documents")
        stems = parallel_map(self.stem, vocab, n_jobs=n_jobs)
        table = dict(zip(vocab, stems))
        return [[table[t] for t in doc] for doc in docs]


# ---------- document-term matrix ----------
def _identity(doc):
    return doc


class DocumentTermMatrix:
    """
    Boolean document-term matrix over pre-tokenized documents.

    Fitted on the training documents only: terms found in more than
    ``max_df`` (a share) or fewer than ``min_df`` (a count) of them are
    dropped from the vocabulary.
    """

    def __init__(self, max_df: float = DTM_MAX_DF, min_df: int = DTM_MIN_DF):
        self.vectorizer = CountVectorizer(
            analyzer=_identity, max_df=max_df, min_df=min_df, binary=True
        )

    def fit_transform(self, docs: List[List[str]]):
        X = self.vectorizer.fit_transform(docs)
        logger.info(f"[NB] document-term matrix: {X.shape[0]} docs x {X.shape[1]} terms")
        return X

    def transform(self, docs: List[List[str]]):
        return self.vectorizer.transform(docs)

    @property
    def vocabulary(self) -> List[str]:
        return list(self.vectorizer.get_feature_names_out())


class NaiveBayesSentiment:
    def __init__(self, **params: Any):
        self.p = {**DEFAULT_PARAMS, **params}
        self.stemmer = DictionaryStemmer(self.p.get("stem_lookup"))
        self.dtm: DocumentTermMatrix | None = None
        self.model: BernoulliNB | None = None

    def preprocess(self, texts) -> List[List[str]]:
        docs = [remove_stopwords(tokenize(t)) for t in texts]
        return self.stemmer.stem_documents(docs, n_jobs=self.p["n_jobs"])

    def fit_tokens(self, docs: List[List[str]], y):
        self.dtm = DocumentTermMatrix(max_df=self.p["max_df"], min_df=self.p["min_df"])
        X = self.dtm.fit_transform(docs)
        self.model = BernoulliNB(alpha=self.p["alpha"])
        self.model.fit(X, np.asarray(y).astype(int))
        return self

    def _check_fitted(self):
        if self.model is None or self.dtm is None:
            raise ValueError("NaiveBayesSentiment must be fitted before predicting")

    def predict_tokens(self, docs: List[List[str]]) -> np.ndarray:
        self._check_fitted()
        return self.model.predict(self.dtm.transform(docs))

    def predict_proba_tokens(self, docs: List[List[str]]) -> np.ndarray:
        """Probability of the recommended class."""
        self._check_fitted()
        proba = self.model.predict_proba(self.dtm.transform(docs))
        return proba[:, list(self.model.classes_).index(1)]

    def fit(self, texts, y):
        return self.fit_tokens(self.preprocess(texts), y)

    def predict(self, texts) -> np.ndarray:
        return self.predict_tokens(self.preprocess(texts))

    def predict_proba(self, texts) -> np.ndarray:
        return self.predict_proba_tokens(self.preprocess(texts))


def create_naive_bayes_factory():
    def factory(params: Dict[str, Any]):
        return NaiveBayesSentiment(**params)
    return factory
