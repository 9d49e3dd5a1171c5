"""Co-occurrence recommender service object.

Wraps the filtering core with external user and item ids. The co-occurrence
matrix is built once per recommender and shared by every call.
"""

import logging
from typing import Dict, Hashable, List, Tuple, Union

import numpy as np

from coocrec.exceptions import UserNotFoundError
from coocrec.recommender.comatrix import (
    DEFAULT_NORMALIZE_ON_POPULARITY,
    create_co_matrix,
)
from coocrec.recommender.ranking import (
    get_rated_items_for_user,
    rank_scored_items,
    score_items,
)
from coocrec.recommender.utils import (
    DEFAULT_ITEM_COL,
    DEFAULT_USER_COL,
    load_csv_to_ratings,
)
from coocrec.recommender.validation import Ratings, as_ratings_array

# Configure module logger
logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10


class CoOccurrenceRecommender:
    """Recommends items by co-occurrence with a user's past interactions."""

    def __init__(
        self,
        ratings: Ratings,
        user_id_to_idx: Dict[Hashable, int],
        item_id_to_idx: Dict[Hashable, int],
        normalize_on_popularity: bool = DEFAULT_NORMALIZE_ON_POPULARITY,
    ):
        """Initialize the recommender and build its co-occurrence matrix.

        Raises:
            RatingArrayValueInvalid: If any rating is not 0 or 1.
        """
        self.ratings = as_ratings_array(ratings)
        self.user_id_to_idx = user_id_to_idx
        self.item_id_to_idx = item_id_to_idx
        self.idx_to_item_id = {idx: iid for iid, idx in item_id_to_idx.items()}
        self.normalize_on_popularity = normalize_on_popularity

        self.co_matrix = create_co_matrix(
            self.ratings, normalize_on_popularity=normalize_on_popularity
        )
        self.item_popularity = self.ratings.sum(axis=0)

        logger.info(
            f"Initialized CoOccurrenceRecommender: "
            f"{self.user_count} users, {self.item_count} items, "
            f"normalized={normalize_on_popularity}"
        )

    @property
    def user_count(self) -> int:
        return self.ratings.shape[0]

    @property
    def item_count(self) -> int:
        return self.ratings.shape[1]

    def most_popular_items(self, top_n: int = DEFAULT_TOP_N) -> List[Hashable]:
        """Items rated by the most users, ties broken by ascending index."""
        order = np.argsort(-self.item_popularity, kind="stable")
        return [self.idx_to_item_id[int(idx)] for idx in order[: max(top_n, 0)]]

    def recommend(
        self,
        user_id: Hashable,
        top_n: int = DEFAULT_TOP_N,
        allow_cold_start: bool = True,
        only_recommend_from_similar_taste: bool = True,
        return_scores: bool = False,
    ) -> Union[List[Hashable], Tuple[List[Hashable], Dict]]:
        """Get recommendations for a user.

        Unknown users fall back to the most popular items when
        ``allow_cold_start`` is set.

        Raises:
            UserNotFoundError: If the user is unknown and cold start is off.
        """
        logger.info(f"Generating recommendations for user {user_id}, top_n={top_n}")

        if user_id not in self.user_id_to_idx:
            if not allow_cold_start:
                raise UserNotFoundError(user_id)

            logger.info(f"User {user_id} not found, using cold-start")
            recommendations = self.most_popular_items(top_n)
            if return_scores:
                popularity = {
                    iid: float(self.item_popularity[self.item_id_to_idx[iid]])
                    for iid in recommendations
                }
                return recommendations, {"method": "cold_start", "popularity": popularity}
            return recommendations

        user_idx = self.user_id_to_idx[user_id]
        scores = score_items(self.ratings, self.co_matrix, user_idx)
        ranked = rank_scored_items(
            scores,
            get_rated_items_for_user(self.ratings, user_idx),
            only_recommend_from_similar_taste=only_recommend_from_similar_taste,
        )
        recommendations = [self.idx_to_item_id[idx] for idx in ranked[: max(top_n, 0)]]

        if not recommendations:
            logger.warning(f"No items to recommend for user {user_id}")

        logger.info(f"Generated {len(recommendations)} recommendations for user {user_id}")

        if return_scores:
            score_breakdown = {
                "method": "co_occurrence",
                "scores": {
                    iid: float(scores[self.item_id_to_idx[iid]])
                    for iid in recommendations
                },
            }
            return recommendations, score_breakdown

        return recommendations


def create_recommender_from_csv(
    csv_path: str,
    user_col: str = DEFAULT_USER_COL,
    item_col: str = DEFAULT_ITEM_COL,
    normalize_on_popularity: bool = DEFAULT_NORMALIZE_ON_POPULARITY,
) -> CoOccurrenceRecommender:
    """Create a recommender from an interaction log CSV.

    Raises:
        FileNotFoundError: If the CSV does not exist.
        ValueError: If the CSV is empty or lacks the id columns.
    """
    ratings, user_id_to_idx, item_id_to_idx = load_csv_to_ratings(
        csv_path, user_col=user_col, item_col=item_col
    )

    return CoOccurrenceRecommender(
        ratings=ratings,
        user_id_to_idx=user_id_to_idx,
        item_id_to_idx=item_id_to_idx,
        normalize_on_popularity=normalize_on_popularity,
    )
