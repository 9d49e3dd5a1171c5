"""One-call collaborative filtering.

Builds the co-occurrence matrix and ranks items for a single user. Use
:func:`create_co_matrix` and :func:`get_recommendations` directly when several
users are ranked against the same ratings.
"""

from typing import List

from coocrec.recommender.comatrix import create_co_matrix
from coocrec.recommender.ranking import get_recommendations
from coocrec.recommender.validation import Ratings


def collaborative_filter(ratings: Ratings, user_index: int) -> List[int]:
    """Generate recommendations using collaborative filtering.

    Runs in memory in roughly O(U * I^2) for U users and I items, so it suits
    reasonably small inputs such as a hundred users by a hundred items.

    Args:
        ratings: Binary user x item matrix, for example::

                  I0 I1 I2
            U0  [ 1, 1, 1 ],
            U1  [ 1, 0, 1 ],
            U2  [ 1, 0, 0 ],

            A 1 means the user engaged with the item, 0 that they did not.
            Users can also stand for sessions of a single person.
        user_index: Row of ``ratings`` to recommend for.

    Returns:
        Item indices sorted by how recommended the item is.

    Raises:
        UserIndexOutOfRange: If ``user_index`` is not a row of ``ratings``.
        RatingArrayValueInvalid: If any rating is not 0 or 1.
    """
    co_matrix = create_co_matrix(ratings)
    return get_recommendations(ratings, co_matrix, user_index)
