import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pandas as pd
import pytest

POSITIVE = [
    "Great game, so much fun! Loved every minute.",
    "Amazing story and great soundtrack, highly recommend",
    "Really fun with friends, great co-op <br /> 10/10",
    "I love this game, amazing graphics and fun gameplay!!!",
    "Best purchase this year, great value and fun",
]
NEGATIVE = [
    "Boring and broken, I want a refund.",
    "Bad servers, constant crashes, broken matchmaking",
    "Don't buy it. Boring grind and bad balance?",
    "Refund requested: bad port, broken controls https://example.com/bug",
    "So boring... the devs abandoned it #dead",
]


def make_reviews(n: int = 60) -> pd.DataFrame:
    rows = []
    for i in range(n):
        positive = i % 2 == 0
        pool = POSITIVE if positive else NEGATIVE
        rows.append(
            {
                "review_id": i + 1,
                "title": "Space Game" if i % 3 else "Dungeon Game",
                "year": 2015 + i % 5,
                "user_review": pool[(i // 2) % len(pool)],
                "user_suggestion": int(positive),
            }
        )
    return pd.DataFrame(rows)


@pytest.fixture
def reviews_df():
    return make_reviews()


@pytest.fixture
def reviews_csv(tmp_path, reviews_df):
    path = tmp_path / "train.csv"
    reviews_df.to_csv(path, index=False)
    return path
