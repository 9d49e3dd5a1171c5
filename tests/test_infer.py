"""Tests for the inference module."""

import inspect
import random

import pandas as pd
import pytest

from coocrec.config import settings
from coocrec.exceptions import UserNotFoundError
from coocrec.recommender.infer import (
    batch_recommend_for_users,
    recommend_items_for_user,
)


@pytest.fixture
def random_interactions(tmp_path):
    """Random interaction log: 10 users, 20 items, 50 interactions."""
    random.seed(42)

    interactions = [
        {"user_id": random.randint(1, 10), "item_id": random.randint(1, 20)}
        for _ in range(50)
    ]

    csv_path = tmp_path / "test_interactions.csv"
    pd.DataFrame(interactions).to_csv(csv_path, index=False)
    return csv_path


def test_recommend_items_for_user_known_user(interactions_csv):
    recommendations = recommend_items_for_user(
        user_id=30,
        data_path=str(interactions_csv),
    )

    assert recommendations == [300, 200]


def test_recommend_items_for_user_unknown_user_returns_cold_start(random_interactions):
    recommendations = recommend_items_for_user(
        user_id=999,
        data_path=str(random_interactions),
        top_n=5,
    )

    assert isinstance(recommendations, list)
    assert len(recommendations) == 5
    assert all(isinstance(rec, int) for rec in recommendations)


def test_recommend_items_for_user_unknown_user_without_cold_start(interactions_csv):
    with pytest.raises(UserNotFoundError):
        recommend_items_for_user(
            user_id=999,
            data_path=str(interactions_csv),
            allow_cold_start=False,
        )


def test_recommend_items_for_user_missing_data_raises_filenotfounderror(tmp_path):
    with pytest.raises(FileNotFoundError):
        recommend_items_for_user(
            user_id=5,
            data_path=str(tmp_path / "nonexistent.csv"),
        )


@pytest.mark.parametrize("n_jobs", [1, 2])
def test_batch_matches_single_calls(random_interactions, n_jobs):
    """Batch results equal one-by-one results, thread pool or not."""
    user_ids = list(range(1, 11))

    results = batch_recommend_for_users(
        user_ids, data_path=str(random_interactions), top_n=5, n_jobs=n_jobs
    )

    assert list(results) == user_ids
    for user_id in user_ids:
        assert results[user_id] == recommend_items_for_user(
            user_id, data_path=str(random_interactions), top_n=5
        )


def test_batch_missing_data_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        batch_recommend_for_users([1, 2], data_path=str(tmp_path / "missing.csv"))


@pytest.fixture
def custom_columns_csv(tmp_path):
    """SIMPLE_RATINGS as a log whose id columns are named shopper and product."""
    rows = [
        {"shopper": 10, "product": 100},
        {"shopper": 10, "product": 200},
        {"shopper": 10, "product": 300},
        {"shopper": 20, "product": 100},
        {"shopper": 20, "product": 300},
        {"shopper": 30, "product": 100},
    ]
    csv_path = tmp_path / "custom_columns.csv"
    pd.DataFrame(rows).to_csv(csv_path, index=False)
    return csv_path


def test_recommend_items_for_user_custom_columns(custom_columns_csv):
    recommendations = recommend_items_for_user(
        user_id=30,
        data_path=str(custom_columns_csv),
        user_col="shopper",
        item_col="product",
    )

    assert recommendations == [300, 200]


def test_batch_custom_columns(custom_columns_csv):
    results = batch_recommend_for_users(
        [20, 30],
        data_path=str(custom_columns_csv),
        user_col="shopper",
        item_col="product",
    )

    assert results == {20: [200], 30: [300, 200]}


@pytest.mark.parametrize("func", [recommend_items_for_user, batch_recommend_for_users])
def test_column_defaults_follow_settings(func):
    parameters = inspect.signature(func).parameters

    assert parameters["user_col"].default == settings.user_col
    assert parameters["item_col"].default == settings.item_col
