#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Review text cleaning.

Every review goes through the same fixed chain:
- HTML entities unescaped, tags stripped
- Unicode folded to ASCII (accents transliterated, emoji dropped)
- lowercase
- Steam "early access review" banner removed
- URLs and hashtags stripped
- contractions expanded
- letter elongations ("sooooo") repaired
- "!" / "?" turned into word tokens, all other punctuation removed
- whitespace collapsed

``clean_text`` is a pure function so it can be shipped to worker processes
by ``core.parallel.parallel_map``.
"""
from __future__ import annotations

import html
import unicodedata
from typing import Iterable, List

import regex as re

from .parallel import parallel_map

TAG_RE = re.compile(r"<[^>]+>")
URL_RE = re.compile(r"(https?://\S+|www\.\S+)", re.IGNORECASE)
HASHTAG_RE = re.compile(r"#\w+")
EARLY_ACCESS_RE = re.compile(r"\bearly access review\b")
ELONGATION_RE = re.compile(r"([a-z])\1{2,}")
REPEATED_MARK_RE = re.compile(r"([!?])\1+")
APOSTROPHE_RE = re.compile(r"['‘’ʼ`´]")
PUNCT_RE = re.compile(r"[\p{P}\p{S}]")
SPACE_RE = re.compile(r"\s+")

EXCLAMATION_TOKEN = "exclamationmark"
QUESTION_TOKEN = "questionmark"

CONTRACTIONS = {
    "ain't": "am not", "aren't": "are not", "can't": "cannot", "can't've": "cannot have",
    "could've": "could have", "couldn't": "could not", "didn't": "did not", "doesn't": "does not",
    "don't": "do not", "hadn't": "had not", "hasn't": "has not", "haven't": "have not",
    "he's": "he is", "she's": "she is", "it's": "it is", "i'm": "i am", "i've": "i have",
    "i'd": "i would", "i'll": "i will", "isn't": "is not", "let's": "let us", "mightn't": "might not",
    "mustn't": "must not", "shan't": "shall not", "shouldn't": "should not",
    "that's": "that is", "there's": "there is", "they're": "they are", "they've": "they have",
    "they'll": "they will", "they'd": "they would", "we're": "we are", "we've": "we have",
    "we'll": "we will", "weren't": "were not", "wasn't": "was not",
    "what's": "what is", "who's": "who is", "won't": "will not", "wouldn't": "would not",
    "you'd": "you would", "you'll": "you will", "you're": "you are", "you've": "you have",
    "y'all": "you all", "gonna": "going to", "wanna": "want to", "gotta": "got to",
}
CONTRACTION_RE = re.compile(
    r"\b(" + "|".join(re.escape(k) for k in sorted(CONTRACTIONS, key=len, reverse=True)) + r")\b"
)

# applied after the dictionary, for forms it does not list
SUFFIX_CONTRACTIONS = [
    (re.compile(r"(\w)n't\b"), r"\1 not"),
    (re.compile(r"(\w)'re\b"), r"\1 are"),
    (re.compile(r"(\w)'ll\b"), r"\1 will"),
    (re.compile(r"(\w)'ve\b"), r"\1 have"),
    (re.compile(r"(\w)'m\b"), r"\1 am"),
    (re.compile(r"(\w)'d\b"), r"\1 would"),
]


def strip_html(s: str) -> str:
    s = html.unescape(s).replace("<br />", " ").replace("<br>", " ")
    return TAG_RE.sub(" ", s)


def to_ascii(s: str) -> str:
    s = unicodedata.normalize("NFKD", s)
    return s.encode("ascii", "ignore").decode("ascii")


def expand_contractions(s: str) -> str:
    s = APOSTROPHE_RE.sub("'", s)
    s = CONTRACTION_RE.sub(lambda m: CONTRACTIONS[m.group(0)], s)
    for pattern, repl in SUFFIX_CONTRACTIONS:
        s = pattern.sub(repl, s)
    return s


def repair_elongation(s: str) -> str:
    return ELONGATION_RE.sub(r"\1\1", s)


def replace_punctuation(s: str) -> str:
    s = REPEATED_MARK_RE.sub(r"\1", s)
    s = s.replace("!", f" {EXCLAMATION_TOKEN} ").replace("?", f" {QUESTION_TOKEN} ")
    s = APOSTROPHE_RE.sub("", s)
    return PUNCT_RE.sub(" ", s)


def clean_text(text) -> str:
    if not isinstance(text, str):
        return ""
    s = strip_html(text)
    # before the ASCII fold, which would drop curly apostrophes
    s = APOSTROPHE_RE.sub("'", s)
    s = to_ascii(s)
    s = s.lower()
    s = EARLY_ACCESS_RE.sub(" ", s)
    s = URL_RE.sub(" ", s)
    s = HASHTAG_RE.sub(" ", s)
    s = expand_contractions(s)
    s = repair_elongation(s)
    s = replace_punctuation(s)
    return SPACE_RE.sub(" ", s).strip()


def clean_texts(texts: Iterable, n_jobs: int = -1) -> List[str]:
    """Clean a collection of reviews in parallel; order is preserved."""
    return parallel_map(clean_text, texts, n_jobs=n_jobs)
