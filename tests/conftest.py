"""Shared fixtures for the CoocRec test-suite."""

import sys
from pathlib import Path

import pandas as pd
import pytest

# Ensure `import coocrec...` works without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


SIMPLE_RATINGS = [
    [1, 1, 1],
    [1, 0, 1],
    [1, 0, 0],
]

COMPLEX_RATINGS = [
    [1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 1],
    [0, 1, 0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 1, 1, 1, 0, 0, 0, 1, 1, 1, 1, 1],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0],
]


@pytest.fixture
def simple_ratings():
    """Three users by three items."""
    return [row[:] for row in SIMPLE_RATINGS]


@pytest.fixture
def complex_ratings():
    """Ten users by nineteen items, several users with no ratings."""
    return [row[:] for row in COMPLEX_RATINGS]


@pytest.fixture
def interactions_csv(tmp_path) -> Path:
    """Interaction log mirroring SIMPLE_RATINGS with external ids.

    Users 10, 20, 30 map to rows 0, 1, 2; items 100, 200, 300 to columns
    0, 1, 2. User 10 interacted with item 100 twice.
    """
    rows = [
        {"user_id": 10, "item_id": 100, "timestamp": "2024-01-01"},
        {"user_id": 10, "item_id": 100, "timestamp": "2024-01-02"},
        {"user_id": 10, "item_id": 200, "timestamp": "2024-01-03"},
        {"user_id": 10, "item_id": 300, "timestamp": "2024-01-04"},
        {"user_id": 20, "item_id": 100, "timestamp": "2024-01-05"},
        {"user_id": 20, "item_id": 300, "timestamp": "2024-01-06"},
        {"user_id": 30, "item_id": 100, "timestamp": "2024-01-07"},
    ]
    csv_path = tmp_path / "interactions.csv"
    pd.DataFrame(rows).to_csv(csv_path, index=False)
    return csv_path
