"""Utility functions for loading interaction data.

This module turns interaction logs into the binary user x item ratings
matrix the co-occurrence pipeline works on, together with the mappings
between external ids and matrix indices.
"""

import logging
from pathlib import Path
from typing import Dict, Hashable, Tuple

import numpy as np
import pandas as pd
from scipy.sparse import csr_matrix

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_USER_COL = "user_id"
DEFAULT_ITEM_COL = "item_id"


def load_csv_to_ratings(
    csv_path: str,
    user_col: str = DEFAULT_USER_COL,
    item_col: str = DEFAULT_ITEM_COL,
) -> Tuple[csr_matrix, Dict[Hashable, int], Dict[Hashable, int]]:
    """Load CSV data and convert to a binary user-item ratings matrix.

    Reads a CSV file containing one row per interaction and constructs a
    sparse matrix where rows represent users and columns represent items.
    A cell is 1 if the user interacted with the item at least once, 0
    otherwise; repeated interactions collapse to 1.

    Args:
        csv_path: Path to CSV file containing interaction data.
        user_col: Name of the column containing user identifiers.
        item_col: Name of the column containing item identifiers.

    Returns:
        A tuple containing:
            - Sparse CSR matrix of shape (n_users, n_items) with 0/1 entries
            - Dictionary mapping user_id to matrix row index
            - Dictionary mapping item_id to matrix column index

    Raises:
        FileNotFoundError: If CSV file does not exist.
        ValueError: If CSV is missing required columns or is empty.

    Example:
        >>> ratings, user_map, item_map = load_csv_to_ratings(
        ...     "data/interactions.csv",
        ...     user_col="user_id",
        ...     item_col="item_id"
        ... )
        >>> print(f"Matrix shape: {ratings.shape}")
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    logger.info(f"Loading CSV from {csv_path}")
    df = pd.read_csv(csv_path)

    # Validate required columns
    required_columns = {user_col, item_col}
    if not required_columns.issubset(df.columns):
        missing = required_columns - set(df.columns)
        raise ValueError(f"CSV missing required columns: {missing}")

    if df.empty:
        raise ValueError("Cannot create ratings matrix from empty CSV")

    logger.info(f"Loaded {len(df)} interaction records")

    pairs = df[[user_col, item_col]].drop_duplicates()

    unique_users = sorted(pairs[user_col].unique())
    unique_items = sorted(pairs[item_col].unique())

    user_id_to_idx = {_to_builtin(uid): idx for idx, uid in enumerate(unique_users)}
    item_id_to_idx = {_to_builtin(iid): idx for idx, iid in enumerate(unique_items)}

    logger.info(f"Unique users: {len(unique_users)}")
    logger.info(f"Unique items: {len(unique_items)}")

    row_indices = pairs[user_col].map(_to_builtin).map(user_id_to_idx).values
    col_indices = pairs[item_col].map(_to_builtin).map(item_id_to_idx).values
    data = np.ones(len(pairs), dtype=np.float64)

    n_users = len(unique_users)
    n_items = len(unique_items)

    ratings = csr_matrix(
        (data, (row_indices, col_indices)),
        shape=(n_users, n_items),
        dtype=np.float64,
    )

    logger.info(f"Matrix shape: {ratings.shape}")
    logger.info(f"Matrix density: {ratings.nnz / (n_users * n_items):.4%}")

    return ratings, user_id_to_idx, item_id_to_idx


def check_data_exists(csv_path: str) -> bool:
    """Check if the interaction data file exists.

    Args:
        csv_path: Path where the CSV should be stored.

    Returns:
        True if the file exists, False otherwise.
    """
    return Path(csv_path).is_file()


def _to_builtin(value):
    # numpy scalars to plain Python so ids serialize and compare cleanly
    return value.item() if isinstance(value, np.generic) else value
