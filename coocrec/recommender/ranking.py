"""Ranking of unrated items from a co-occurrence matrix.

A user's score for an item is the average co-occurrence between that item and
every item the user already rated. Items are ranked by descending score;
equal scores keep ascending item order.
"""

import logging
from typing import List

import numpy as np

from coocrec.recommender.validation import (
    Ratings,
    as_ratings_array,
    validate_matrix_size,
    validate_rating_values,
    validate_user_index,
)

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_ONLY_RECOMMEND_FROM_SIMILAR_TASTE = True


def get_recommendations(
    ratings: Ratings,
    co_matrix: np.ndarray,
    user_index: int,
    only_recommend_from_similar_taste: bool = DEFAULT_ONLY_RECOMMEND_FROM_SIMILAR_TASTE,
) -> List[int]:
    """Generate recommendations for a user given a co-occurrence matrix.

    Args:
        ratings: Binary user x item matrix the co-occurrence matrix was
            built from.
        co_matrix: Item x item co-occurrence matrix, see
            :func:`coocrec.recommender.comatrix.create_co_matrix`.
        user_index: Row of ``ratings`` to recommend for.
        only_recommend_from_similar_taste: When enabled, items that never
            co-occur with anything the user rated are left out.

    Returns:
        Item indices sorted from most to least recommended. Items the user
        already rated are never included.

    Raises:
        CoMatrixWrongDimensions: If ``co_matrix`` is not n_items x n_items.
        UserIndexOutOfRange: If ``user_index`` is not a row of ``ratings``.
        RatingArrayValueInvalid: If any rating is not 0 or 1.
    """
    ratings_matrix = as_ratings_array(ratings)
    scores = score_items(ratings_matrix, co_matrix, user_index)
    rated_items = get_rated_items_for_user(ratings_matrix, user_index)

    recommendations = rank_scored_items(
        scores,
        rated_items,
        only_recommend_from_similar_taste=only_recommend_from_similar_taste,
    )

    logger.debug(
        "Ranked items for user",
        extra={
            "user_index": user_index,
            "num_rated": len(rated_items),
            "num_recommendations": len(recommendations),
        },
    )

    return recommendations


def score_items(
    ratings: Ratings,
    co_matrix: np.ndarray,
    user_index: int,
) -> np.ndarray:
    """Compute a user's predicted relevance for every item.

    Validates the inputs in the order matrix size, user index, rating values,
    then averages the co-occurrence rows of the items the user rated. A user
    who rated nothing gets all-zero scores.

    Returns:
        Float array of length n_items.
    """
    ratings_matrix = as_ratings_array(ratings)
    item_count = ratings_matrix.shape[1]

    validate_matrix_size(co_matrix, item_count)
    validate_user_index(user_index, ratings_matrix)
    validate_rating_values(ratings_matrix)

    rated_items = get_rated_items_for_user(ratings_matrix, user_index)

    # One row per rated item, summed column-wise
    similarities = np.asarray(co_matrix, dtype=np.float64)[rated_items]
    scores = similarities.sum(axis=0)

    if rated_items:
        scores = scores / len(rated_items)

    return scores


def get_rated_items_for_user(ratings: Ratings, user_index: int) -> List[int]:
    """Get the items a user has rated.

    Returns:
        Ascending item indices with a nonzero rating in the user's row.
    """
    user_row = as_ratings_array(ratings)[user_index]
    return [int(idx) for idx in np.flatnonzero(user_row)]


def rank_scored_items(
    scores: np.ndarray,
    rated_items: List[int],
    only_recommend_from_similar_taste: bool = DEFAULT_ONLY_RECOMMEND_FROM_SIMILAR_TASTE,
) -> List[int]:
    """Order item indices by descending score, leaving out rated items."""
    excluded = set(rated_items)

    # Stable sort keeps ascending item order among equal scores
    ranked = np.argsort(-scores, kind="stable")

    if only_recommend_from_similar_taste:
        ranked = ranked[scores[ranked] != 0]

    return [int(idx) for idx in ranked if int(idx) not in excluded]
