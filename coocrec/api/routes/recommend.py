"""Recommendation endpoints for the CoocRec API.

Serves recommendations for users of the configured interaction log, and
exposes the co-occurrence pipeline directly for ratings matrices posted in
the request body.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field, field_validator

from coocrec.api.metrics import metrics_service
from coocrec.config import settings
from coocrec.exceptions import DataNotFoundError
from coocrec.recommender.comatrix import create_co_matrix
from coocrec.recommender.ranking import get_recommendations as rank_items
from coocrec.recommender.recommender import (
    CoOccurrenceRecommender,
    create_recommender_from_csv,
)
from coocrec.recommender.utils import check_data_exists

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/recommend",
    tags=["recommendations"],
)

# Interaction log served by default
DEFAULT_DATA_PATH = settings.data_path

# Cache for the built recommender, keyed by data path
_recommender_cache: Optional[Dict[str, Any]] = None


class RecommendationResponse(BaseModel):
    """Response model for recommendations of a known data set."""

    user_id: int = Field(..., description="User ID for recommendations")
    recommendations: List[int] = Field(
        ..., description="Recommended item IDs, most relevant first"
    )
    scores: Optional[Dict[str, Any]] = Field(
        default=None, description="Score breakdown when explain=true"
    )


def require_rectangular(ratings: List[List[float]]) -> List[List[float]]:
    """Reject ratings whose rows differ in length."""
    row_lengths = {len(row) for row in ratings}
    if len(row_lengths) > 1:
        raise ValueError(
            f"All ratings rows must have the same length, got lengths {sorted(row_lengths)}"
        )
    return ratings


class MatrixRecommendationRequest(BaseModel):
    """Ratings matrix and user row to rank items for."""

    ratings: List[List[float]] = Field(..., description="Binary user x item matrix")
    user_index: int = Field(..., description="Row of the ratings matrix")
    only_recommend_from_similar_taste: bool = True
    normalize_on_popularity: bool = True

    @field_validator("ratings")
    @classmethod
    def validate_ratings(cls, v: List[List[float]]) -> List[List[float]]:
        return require_rectangular(v)


class MatrixRecommendationResponse(BaseModel):
    user_index: int
    recommendations: List[int]


class CoMatrixRequest(BaseModel):
    ratings: List[List[float]] = Field(..., description="Binary user x item matrix")
    normalize_on_popularity: bool = True

    @field_validator("ratings")
    @classmethod
    def validate_ratings(cls, v: List[List[float]]) -> List[List[float]]:
        return require_rectangular(v)


class CoMatrixResponse(BaseModel):
    co_matrix: List[List[float]]


def load_recommender_if_needed(data_path: Optional[str] = None) -> CoOccurrenceRecommender:
    """Build the recommender from the interaction log if not already built.

    Uses a module-level cache so the co-occurrence matrix is computed once
    and shared by every request.

    Raises:
        DataNotFoundError: If the interaction log does not exist.
    """
    global _recommender_cache

    data_path = data_path or DEFAULT_DATA_PATH

    if _recommender_cache is not None and _recommender_cache["data_path"] == data_path:
        logger.debug("Using cached recommender")
        return _recommender_cache["recommender"]

    if not check_data_exists(data_path):
        logger.error(f"Interaction data not found at {data_path}")
        raise DataNotFoundError(data_path)

    logger.info(f"Building recommender from {data_path}")
    recommender = create_recommender_from_csv(
        data_path,
        user_col=settings.user_col,
        item_col=settings.item_col,
        normalize_on_popularity=settings.normalize_on_popularity,
    )

    _recommender_cache = {
        "data_path": data_path,
        "recommender": recommender,
        "loaded_at": datetime.now(timezone.utc).isoformat(),
    }

    logger.info("Recommender built successfully")
    return recommender


def get_cache_status() -> Dict[str, Any]:
    """Describe the cached recommender for the status endpoint."""
    if _recommender_cache is None:
        return {
            "data_loaded": False,
            "timestamp_last_loaded": None,
            "num_users": 0,
            "num_items": 0,
        }

    recommender = _recommender_cache["recommender"]
    return {
        "data_loaded": True,
        "timestamp_last_loaded": _recommender_cache["loaded_at"],
        "num_users": recommender.user_count,
        "num_items": recommender.item_count,
    }


@router.get("/{user_id}", response_model=RecommendationResponse)
def recommend_for_user(
    user_id: int,
    top_n: int = settings.default_top_n,
    allow_cold_start: bool = True,
    only_similar_taste: bool = True,
    explain: bool = False,
    data_path: Optional[str] = None,
) -> RecommendationResponse:
    """Get item recommendations for a user of the interaction log.

    Example:
        GET /recommend/42?top_n=5
        Returns top 5 item recommendations for user 42.
    """
    start_time = time.time()
    recommender = load_recommender_if_needed(data_path)

    result = recommender.recommend(
        user_id,
        top_n=top_n,
        allow_cold_start=allow_cold_start,
        only_recommend_from_similar_taste=only_similar_taste,
        return_scores=explain,
    )
    recommendations, scores = result if explain else (result, None)

    metrics_service.record_recommendation((time.time() - start_time) * 1000)

    return RecommendationResponse(
        user_id=user_id,
        recommendations=recommendations,
        scores=scores,
    )


@router.post("/matrix", response_model=MatrixRecommendationResponse)
def recommend_from_matrix(request: MatrixRecommendationRequest) -> MatrixRecommendationResponse:
    """Rank items for one row of a posted ratings matrix."""
    start_time = time.time()

    co_matrix = create_co_matrix(
        request.ratings, normalize_on_popularity=request.normalize_on_popularity
    )
    recommendations = rank_items(
        request.ratings,
        co_matrix,
        request.user_index,
        only_recommend_from_similar_taste=request.only_recommend_from_similar_taste,
    )

    metrics_service.record_recommendation((time.time() - start_time) * 1000)

    return MatrixRecommendationResponse(
        user_index=request.user_index,
        recommendations=recommendations,
    )


@router.post("/co-matrix", response_model=CoMatrixResponse)
def build_co_matrix(request: CoMatrixRequest) -> CoMatrixResponse:
    """Build the co-occurrence matrix of a posted ratings matrix."""
    co_matrix = create_co_matrix(
        request.ratings, normalize_on_popularity=request.normalize_on_popularity
    )
    return CoMatrixResponse(co_matrix=co_matrix.tolist())


@router.post("/reload-data")
def reload_data(data_path: Optional[str] = None) -> Dict[str, str]:
    """Rebuild the recommender from disk.

    Useful after the interaction log has been updated, without restarting
    the server.
    """
    global _recommender_cache

    logger.info("Reloading interaction data...")
    _recommender_cache = None

    load_recommender_if_needed(data_path)
    return {"status": "Data reloaded successfully"}
