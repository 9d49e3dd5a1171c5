"""Input validation for the collaborative filtering pipeline.

Each check raises its own error kind. Callers run them in a fixed order:
matrix size, then user index, then rating values (the full O(U * I) scan is
the most expensive, so it goes last).
"""

import logging
from typing import Any, Sequence, Union

import numpy as np
from scipy.sparse import issparse, spmatrix

from coocrec.exceptions import (
    CoMatrixWrongDimensions,
    RatingArrayValueInvalid,
    UserIndexOutOfRange,
)

# Configure module logger
logger = logging.getLogger(__name__)

Ratings = Union[Sequence[Sequence[float]], np.ndarray, spmatrix]


def as_ratings_array(ratings: Ratings) -> np.ndarray:
    """Convert ratings to a dense two-dimensional float array.

    Accepts nested sequences, numpy arrays and scipy sparse matrices. An
    empty input is treated as a matrix with no users and no items.
    """
    if issparse(ratings):
        return ratings.toarray().astype(np.float64)

    matrix = np.asarray(ratings, dtype=np.float64)
    if matrix.size == 0 and matrix.ndim < 2:
        return matrix.reshape(0, 0)
    if matrix.ndim != 2:
        raise ValueError(
            f"Ratings must be two-dimensional, got {matrix.ndim} dimension(s)"
        )
    return matrix


def validate_matrix_size(matrix: Any, size: int) -> None:
    """Check that ``matrix`` is exactly ``size`` x ``size``.

    Raises:
        CoMatrixWrongDimensions: If the shape differs.
    """
    shape = np.shape(matrix)
    if shape != (size, size):
        logger.debug(f"Co-matrix shape {shape} does not match item count {size}")
        raise CoMatrixWrongDimensions(shape, size)


def validate_user_index(user_index: int, ratings: Ratings) -> None:
    """Check that ``user_index`` addresses a row of ``ratings``.

    Raises:
        UserIndexOutOfRange: If the index is negative or past the last row.
    """
    user_count = ratings.shape[0] if hasattr(ratings, "shape") else len(ratings)
    if user_index < 0 or user_index >= user_count:
        raise UserIndexOutOfRange(user_index, user_count)


def validate_rating_values(matrix: Ratings) -> None:
    """Check that every rating is exactly 0 or 1.

    Scans the whole matrix. For sparse input only the stored entries need
    checking, the implicit ones are zero.

    Raises:
        RatingArrayValueInvalid: On the first offending cell, in row-major order.
    """
    if issparse(matrix):
        coo = matrix.tocoo()
        invalid = ~np.isin(coo.data, (0, 1))
        if invalid.any():
            positions = sorted(zip(coo.row[invalid], coo.col[invalid], coo.data[invalid]))
            row, col, value = positions[0]
            raise RatingArrayValueInvalid(int(row), int(col), float(value))
        return

    values = as_ratings_array(matrix)
    invalid = ~np.isin(values, (0, 1))
    if invalid.any():
        row, col = np.argwhere(invalid)[0]
        raise RatingArrayValueInvalid(int(row), int(col), float(values[row, col]))
