"""Tests for ranking items from a co-occurrence matrix."""

import numpy as np
import pytest

from coocrec.exceptions import (
    CoMatrixWrongDimensions,
    RatingArrayValueInvalid,
    UserIndexOutOfRange,
)
from coocrec.recommender.comatrix import create_co_matrix
from coocrec.recommender.ranking import (
    get_rated_items_for_user,
    get_recommendations,
    score_items,
)


@pytest.fixture
def simple_co_matrix(simple_ratings):
    return create_co_matrix(simple_ratings)


@pytest.fixture
def complex_co_matrix(complex_ratings):
    return create_co_matrix(complex_ratings)


@pytest.mark.parametrize(
    "user_index, expected",
    [
        (0, []),
        (1, [1]),
        (2, [2, 1]),
    ],
)
def test_simple_recommendations(simple_ratings, simple_co_matrix, user_index, expected):
    """Ranking on the three-user example."""
    assert get_recommendations(simple_ratings, simple_co_matrix, user_index) == expected


def test_complex_user_6(complex_ratings, complex_co_matrix):
    recs = get_recommendations(complex_ratings, complex_co_matrix, 6)

    assert recs[0] == 1
    assert recs[-1] == 11


def test_complex_user_0(complex_ratings, complex_co_matrix):
    """Items 14-17 tie for the top ranks, item 11 follows."""
    recs = get_recommendations(complex_ratings, complex_co_matrix, 0)

    assert len(recs) == 5
    assert set(recs[:4]) == {14, 15, 16, 17}
    assert recs[4] == 11


def test_complex_user_9(complex_ratings, complex_co_matrix):
    """The only item sharing a user with item 13 is item 12."""
    assert get_recommendations(complex_ratings, complex_co_matrix, 9) == [12]


def test_complex_user_1(complex_ratings, complex_co_matrix):
    recs = get_recommendations(complex_ratings, complex_co_matrix, 1)

    assert len(recs) == 12
    assert recs[0] == 18
    assert set(recs[1:8]) <= {0, 2, 3, 4, 5, 6, 7, 8, 9, 10}
    assert set(recs[8:]) == {14, 15, 16, 17}


def test_ties_resolve_to_ascending_item_index(complex_ratings, complex_co_matrix):
    """Equal scores keep ascending item order."""
    recs = get_recommendations(complex_ratings, complex_co_matrix, 0)

    assert recs[:4] == [14, 15, 16, 17]


def test_user_without_ratings_gets_nothing(complex_ratings, complex_co_matrix):
    """A user who rated nothing has all-zero scores and no recommendations."""
    assert get_recommendations(complex_ratings, complex_co_matrix, 2) == []
    np.testing.assert_array_equal(score_items(complex_ratings, complex_co_matrix, 2), 0)


def test_user_without_ratings_include_unrelated(complex_ratings, complex_co_matrix):
    """With zero-score items allowed, every item comes back in index order."""
    recs = get_recommendations(
        complex_ratings,
        complex_co_matrix,
        2,
        only_recommend_from_similar_taste=False,
    )

    assert recs == list(range(19))


def test_include_unrelated_items_appends_zero_scores(simple_ratings):
    """Disabling the similar-taste filter keeps zero-score items at the end."""
    ratings = [
        [1, 0, 0, 0],
        [1, 1, 0, 0],
        [0, 0, 1, 1],
    ]
    co_matrix = create_co_matrix(ratings)

    assert get_recommendations(ratings, co_matrix, 0) == [1]
    assert get_recommendations(
        ratings, co_matrix, 0, only_recommend_from_similar_taste=False
    ) == [1, 2, 3]


def test_scores_are_average_co_occurrence(simple_ratings, simple_co_matrix):
    """Scores average the co-occurrence rows of the rated items."""
    scores = score_items(simple_ratings, simple_co_matrix, 1)

    expected = (simple_co_matrix[0] + simple_co_matrix[2]) / 2
    np.testing.assert_allclose(scores, expected)


@pytest.mark.parametrize("seed", range(5))
def test_never_recommends_rated_items(seed):
    """No output contains an item the user already rated."""
    rng = np.random.default_rng(seed)
    ratings = (rng.random((15, 10)) < 0.3).astype(int)
    co_matrix = create_co_matrix(ratings)

    for user_index in range(ratings.shape[0]):
        for only_similar in (True, False):
            recs = get_recommendations(
                ratings, co_matrix, user_index,
                only_recommend_from_similar_taste=only_similar,
            )
            rated = set(np.flatnonzero(ratings[user_index]).tolist())

            assert rated.isdisjoint(recs)
            assert len(recs) == len(set(recs))


@pytest.mark.parametrize("seed", range(3))
def test_scores_descend(seed):
    """Recommendations come out in non-increasing score order."""
    rng = np.random.default_rng(seed)
    ratings = (rng.random((20, 12)) < 0.4).astype(int)
    co_matrix = create_co_matrix(ratings)

    for user_index in range(ratings.shape[0]):
        recs = get_recommendations(ratings, co_matrix, user_index)
        scores = score_items(ratings, co_matrix, user_index)[recs]

        assert (np.diff(scores) <= 0).all()
        assert (scores != 0).all()


def test_co_matrix_can_be_reused_across_users(complex_ratings, complex_co_matrix):
    """Ranking reads the co-occurrence matrix without changing it."""
    before = complex_co_matrix.copy()

    for user_index in range(len(complex_ratings)):
        get_recommendations(complex_ratings, complex_co_matrix, user_index)

    np.testing.assert_array_equal(complex_co_matrix, before)


def test_wrong_dimensions_checked_before_user_index(simple_ratings):
    """A wrong co-matrix shape is reported even if the user index is bad too."""
    with pytest.raises(CoMatrixWrongDimensions):
        get_recommendations(simple_ratings, np.ones((4, 7)), 3)


def test_user_index_checked_before_values(simple_co_matrix):
    """An out-of-range user is reported before invalid ratings."""
    invalid = [
        [1, 1, 2],
        [1, 0, 1],
        [1, 0, 0],
    ]

    with pytest.raises(UserIndexOutOfRange):
        get_recommendations(invalid, simple_co_matrix, 3)

    with pytest.raises(RatingArrayValueInvalid):
        get_recommendations(invalid, simple_co_matrix, 1)


def test_user_index_out_of_range(simple_ratings, simple_co_matrix):
    with pytest.raises(UserIndexOutOfRange):
        get_recommendations(simple_ratings, simple_co_matrix, 3)


def test_get_rated_items_for_user(complex_ratings):
    assert get_rated_items_for_user(complex_ratings, 3) == [12, 13]
    assert get_rated_items_for_user(complex_ratings, 2) == []


def test_returns_plain_ints(simple_ratings, simple_co_matrix):
    recs = get_recommendations(simple_ratings, simple_co_matrix, 2)

    assert all(type(idx) is int for idx in recs)
