"""Module for getting recommendations from interaction logs.

Loads the interaction data, builds the co-occurrence recommender and
recommends items for one or many users.
"""

import logging
import time
from typing import Dict, Hashable, List

from joblib import Parallel, delayed

from coocrec.config import settings
from coocrec.exceptions import CoocRecException
from coocrec.recommender.comatrix import DEFAULT_NORMALIZE_ON_POPULARITY
from coocrec.recommender.recommender import (
    DEFAULT_TOP_N,
    CoOccurrenceRecommender,
    create_recommender_from_csv,
)

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = settings.data_path
DEFAULT_N_JOBS = settings.n_jobs
DEFAULT_USER_COL = settings.user_col
DEFAULT_ITEM_COL = settings.item_col


def recommend_items_for_user(
    user_id: Hashable,
    data_path: str = DEFAULT_DATA_PATH,
    top_n: int = DEFAULT_TOP_N,
    allow_cold_start: bool = True,
    normalize_on_popularity: bool = DEFAULT_NORMALIZE_ON_POPULARITY,
    user_col: str = DEFAULT_USER_COL,
    item_col: str = DEFAULT_ITEM_COL,
) -> List[Hashable]:
    """Get recommendations for a user.

    Loads the interaction data and returns the top N item recommendations.
    """
    start_time = time.time()

    logger.info(
        "Starting recommendation generation",
        extra={
            "user_id": user_id,
            "top_n": top_n,
            "data_path": data_path,
        }
    )

    try:
        build_start = time.time()
        recommender = create_recommender_from_csv(
            data_path,
            user_col=user_col,
            item_col=item_col,
            normalize_on_popularity=normalize_on_popularity,
        )
        build_time = time.time() - build_start

        logger.info(
            "Recommender built",
            extra={
                "user_id": user_id,
                "build_time_ms": round(build_time * 1000, 2),
                "num_users": recommender.user_count,
                "num_items": recommender.item_count,
            }
        )

        scoring_start = time.time()
        recommendations = recommender.recommend(
            user_id, top_n=top_n, allow_cold_start=allow_cold_start
        )
        scoring_time = time.time() - scoring_start
        total_time = time.time() - start_time

        logger.info(
            "Recommendations generated",
            extra={
                "user_id": user_id,
                "num_recommendations": len(recommendations),
                "scoring_time_ms": round(scoring_time * 1000, 2),
                "total_time_ms": round(total_time * 1000, 2),
            }
        )

        return recommendations

    except FileNotFoundError as e:
        logger.error(
            "Interaction data not found",
            extra={
                "user_id": user_id,
                "data_path": data_path,
                "error": str(e),
            }
        )
        raise
    except CoocRecException as e:
        logger.error(
            "Recommendation request rejected",
            extra={
                "user_id": user_id,
                "error": e.message,
                "error_type": type(e).__name__,
            }
        )
        raise


def batch_recommend_for_users(
    user_ids: List[Hashable],
    data_path: str = DEFAULT_DATA_PATH,
    top_n: int = DEFAULT_TOP_N,
    n_jobs: int = DEFAULT_N_JOBS,
    normalize_on_popularity: bool = DEFAULT_NORMALIZE_ON_POPULARITY,
    user_col: str = DEFAULT_USER_COL,
    item_col: str = DEFAULT_ITEM_COL,
) -> Dict[Hashable, List[Hashable]]:
    """Generate recommendations for multiple users in batch.

    More efficient than calling recommend_items_for_user() multiple times,
    as it builds the co-occurrence matrix once and reuses it for all users.
    Ranking calls only read the shared matrix, so they run on a thread pool.

    Args:
        user_ids: List of user IDs for which to generate recommendations.
        data_path: Path to the interaction CSV.
        top_n: Number of recommendations per user.
        n_jobs: Number of worker threads (-1 uses all cores).
        normalize_on_popularity: Whether to normalize co-occurrence counts.
        user_col: Column holding user ids.
        item_col: Column holding item ids.

    Returns:
        Dictionary mapping user IDs to their recommended item ID lists.

    Raises:
        FileNotFoundError: If the interaction data is not found at data_path.

    Example:
        >>> recommendations = batch_recommend_for_users(
        ...     user_ids=[1, 5, 10, 42],
        ...     top_n=5
        ... )
        >>> for user_id, recs in recommendations.items():
        ...     print(f"User {user_id}: {recs}")
    """
    logger.info(
        f"Generating batch recommendations for {len(user_ids)} users, "
        f"top_n={top_n}, n_jobs={n_jobs}"
    )

    try:
        recommender = create_recommender_from_csv(
            data_path,
            user_col=user_col,
            item_col=item_col,
            normalize_on_popularity=normalize_on_popularity,
        )
    except FileNotFoundError as e:
        logger.error(f"Interaction data not found: {e}")
        raise

    results = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(_recommend_or_empty)(recommender, user_id, top_n)
        for user_id in user_ids
    )

    logger.info(f"Batch recommendations completed for {len(user_ids)} users")

    return dict(zip(user_ids, results))


def _recommend_or_empty(
    recommender: CoOccurrenceRecommender,
    user_id: Hashable,
    top_n: int,
) -> List[Hashable]:
    # One failing user must not sink the whole batch
    try:
        return recommender.recommend(user_id, top_n=top_n)
    except CoocRecException as e:
        logger.error(f"Failed to generate recommendations for user {user_id}: {e}")
        return []
