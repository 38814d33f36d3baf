"""
Unit tests for the review text cleaning chain.
"""

import string

import numpy as np
import pytest

from review_sentiment.core.text_cleaning import (
    clean_text,
    clean_texts,
    expand_contractions,
    repair_elongation,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Great game, so much fun! Loved every minute.", "great game so much fun exclamationmark loved every minute"),
        ("Is it worth it?", "is it worth it questionmark"),
        ("Don't buy it!!!", "do not buy it exclamationmark"),
        ("Sooooo goooood", "soo good"),
        ("Café naïve", "cafe naive"),
        ("Check https://store.steampowered.com/app/1 and www.example.com now", "check and now"),
        ("#GOTY worthy", "worthy"),
        ("<b>Bold</b> move &amp; more", "bold move more"),
        ("Early Access Review\nGreat potential", "great potential"),
        ("They’re great", "they are great"),
        ("It's the player's choice", "it is the players choice"),
        ("Fun \U0001F600   10/10", "fun 10 10"),
    ],
)
def test_clean_text_examples(raw, expected):
    assert clean_text(raw) == expected


def test_clean_text_non_string():
    """Missing reviews clean to an empty string."""
    assert clean_text(np.nan) == ""
    assert clean_text(None) == ""


def test_cleaned_text_has_no_urls_hashtags_tags_or_punctuation():
    raw = (
        "<p>WOW!!! Best game EVER :) #blessed</p> see http://x.co/abc?q=1 "
        "or www.site.org; price: $19.99 (on sale) - can't complain... really?"
    )
    out = clean_text(raw)
    assert "http" not in out
    assert "www" not in out
    assert "blessed" not in out
    assert "<" not in out and ">" not in out
    assert not any(ch in string.punctuation for ch in out)
    assert "exclamationmark" in out
    assert "questionmark" in out
    assert "cannot" in out
    assert "  " not in out
    assert out == out.strip()


def test_expand_contractions_suffix_fallback():
    """Forms missing from the dictionary are expanded by suffix."""
    assert expand_contractions("needn't") == "need not"
    assert expand_contractions("devs'll fix it") == "devs will fix it"


def test_repair_elongation_keeps_digits():
    assert repair_elongation("1000 hours") == "1000 hours"
    assert repair_elongation("yesssss") == "yess"


def test_clean_texts_preserves_order():
    texts = ["B game!", "a GAME?", "c"]
    assert clean_texts(texts, n_jobs=1) == ["b game exclamationmark", "a game questionmark", "c"]
