"""
Central configuration for paths, column names, and defaults.

Model hyperparameters are not kept here; they live in the params dicts
returned by ``models.models_registry``.
"""

from pathlib import Path

# Base paths (relative to the directory the runner is started from)
DATA_DIR = Path("data")
RESULTS_DIR = Path("results")
RAW_REVIEWS_FILE = DATA_DIR / "train.csv"
CLEAN_REVIEWS_FILE = "reviews_clean.csv"

# Raw CSV schema
REVIEW_ID_COL = "review_id"
TITLE_COL = "title"
YEAR_COL = "year"
REVIEW_COL = "user_review"
SUGGESTION_COL = "user_suggestion"
RAW_COLUMNS = [REVIEW_ID_COL, TITLE_COL, YEAR_COL, REVIEW_COL, SUGGESTION_COL]

# Derived columns
CLEAN_COL = "clean_review"
LABEL_COL = "label"

# 0 = not recommended, 1 = recommended
LABEL_NAMES = ["Not Recommended", "Recommended"]

# Train/test split
RANDOM_STATE = 42
TEST_SIZE = 0.2

# Document-term matrix filtering (fitted on the training set)
DTM_MAX_DF = 0.8  # drop terms present in more than 80% of documents
DTM_MIN_DF = 5  # drop terms present in fewer than 5 documents

# Parallel map (-1 = all cores)
N_JOBS = -1

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
