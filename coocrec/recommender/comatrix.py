"""Item co-occurrence matrix construction.

Builds the symmetric item x item matrix that stands in for item similarity:
entry (x, i) counts the users who rated both items, optionally divided by the
number of users who rated either of them. The result only depends on the
ratings, so it can be built once and reused for every user.
"""

import logging
import time

import numpy as np

from coocrec.recommender.validation import (
    Ratings,
    as_ratings_array,
    validate_rating_values,
)

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_NORMALIZE_ON_POPULARITY = True


def create_co_matrix(
    ratings: Ratings,
    normalize_on_popularity: bool = DEFAULT_NORMALIZE_ON_POPULARITY,
) -> np.ndarray:
    """Generate an item co-occurrence matrix.

    For every user and every item pair x < i, the pair's count goes up by one
    when the user rated both items. With normalization enabled, a second
    matrix seeded as the identity counts the users who rated either item and
    the counts are divided by it, which keeps popular items from dominating.

    Every pair count is gathered at once with ``R.T @ R``; the "rated either"
    count follows from inclusion-exclusion, so no per-pair loop is needed.

    Args:
        ratings: Binary user x item matrix. Rows are users, columns items;
            1 means the user engaged with the item, 0 means not.
        normalize_on_popularity: If False, raw counts are returned and the
            popularity of items will bias the results.

    Returns:
        A symmetric (n_items, n_items) float array with a zero diagonal.
        Normalized entries lie in [0, 1].

    Raises:
        RatingArrayValueInvalid: If any rating is not 0 or 1.

    Example:
        >>> co_matrix = create_co_matrix([[1, 1, 1], [1, 0, 1], [1, 0, 0]])
        >>> print(f"Items 0 and 2 co-occur at rate {co_matrix[0, 2]:.3f}")
        Items 0 and 2 co-occur at rate 0.667
    """
    start_time = time.time()

    ratings_matrix = as_ratings_array(ratings)
    validate_rating_values(ratings_matrix)
    n_users, n_items = ratings_matrix.shape

    # Users who rated both items of each pair
    co_matrix = ratings_matrix.T @ ratings_matrix
    item_popularity = np.diag(co_matrix).copy()
    np.fill_diagonal(co_matrix, 0.0)

    if normalize_on_popularity:
        # Users who rated either item: |x| + |i| - |x and i|
        normalizer_matrix = (
            item_popularity[:, np.newaxis] + item_popularity[np.newaxis, :] - co_matrix
        )
        np.fill_diagonal(normalizer_matrix, 1.0)
        co_matrix = normalize_co_matrix(co_matrix, normalizer_matrix)

    logger.debug(
        "Built co-occurrence matrix",
        extra={
            "num_users": n_users,
            "num_items": n_items,
            "normalized": normalize_on_popularity,
            "build_time_ms": round((time.time() - start_time) * 1000, 2),
        },
    )

    return co_matrix


def normalize_co_matrix(
    co_matrix: np.ndarray, normalizer_matrix: np.ndarray
) -> np.ndarray:
    """Divide a co-occurrence matrix elementwise by its popularity normalizer.

    Pairs no user rated at all have a zero normalizer; they come out as 0.

    Args:
        co_matrix: Raw co-occurrence counts.
        normalizer_matrix: Division factors, same shape as ``co_matrix``.

    Returns:
        The normalized co-occurrence matrix.
    """
    return np.divide(
        co_matrix,
        normalizer_matrix,
        out=np.zeros_like(co_matrix, dtype=np.float64),
        where=normalizer_matrix != 0,
    )
