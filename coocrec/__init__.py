"""CoocRec: item co-occurrence collaborative filtering.

This package recommends items to a user from a binary user-item interaction
matrix, scoring unrated items by how often they co-occur with the items the
user already engaged with.

Modules:
    recommender: Co-occurrence matrix, ranking and inference logic
    api: FastAPI application and REST API endpoints
"""

from coocrec.recommender import (
    collaborative_filter,
    create_co_matrix,
    get_recommendations,
)

__version__ = "0.1.0"

__all__ = ["collaborative_filter", "create_co_matrix", "get_recommendations"]
