"""Item co-occurrence recommendation module for CoocRec.

This module contains the collaborative filtering core (validation,
co-occurrence matrix construction and ranking), the interaction data loader,
and the service object and inference helpers built on top of them.
"""

from coocrec.recommender.comatrix import create_co_matrix
from coocrec.recommender.filtering import collaborative_filter
from coocrec.recommender.ranking import get_recommendations

__all__ = ["collaborative_filter", "create_co_matrix", "get_recommendations"]
