"""
Shared fixtures: a small ratings dataset and fake recommenders recording their requests.
"""

import pytest

from recselect.data.model import Rating, RatingDataModel

TARGET_USER = 1

# user -> {item: rating}
RATINGS_TABLE = {
    1: {1: 5, 2: 3, 3: 4, 4: 1, 5: 2},
    2: {1: 4, 2: 3, 3: 5, 6: 2},
    3: {1: 5, 2: 2, 4: 2, 5: 3, 6: 1},
    4: {2: 4, 3: 4, 4: 1, 6: 3},
    5: {1: 3, 3: 5, 5: 2, 6: 4},
    6: {1: 4, 2: 2, 4: 2, 5: 1},
}


def ratings_from_table(table):
    return [Rating(user_id, item_id, float(value))
            for user_id, items in table.items()
            for item_id, value in items.items()]


@pytest.fixture
def target_user():
    return TARGET_USER


@pytest.fixture
def data_model():
    return RatingDataModel(ratings_from_table(RATINGS_TABLE), rating_scale=(1, 5))


@pytest.fixture
def ratings_file(tmp_path):
    path = tmp_path / 'u.data'
    lines = [f"{user_id}\t{item_id}\t{value}\n"
             for user_id, items in RATINGS_TABLE.items()
             for item_id, value in items.items()]
    path.write_text(''.join(lines))
    return path


class SpyRecommender:

    def __init__(self, builder, trained_items):
        self.builder = builder
        self.trained_items = trained_items

    def estimate(self, user_id, item_id):
        self.builder.requests.append((self.trained_items, item_id))
        if callable(self.builder.estimate_value):
            return self.builder.estimate_value(user_id, item_id)
        return self.builder.estimate_value


class SpyRecommenderBuilder:
    """
    Builds recommenders answering a fixed estimate (or the result of a function),
    and records the target user items of every training view with each request.
    """

    def __init__(self, target_user, estimate_value=3.0):
        self.target_user = target_user
        self.estimate_value = estimate_value
        self.requests = []
        self.training_sizes = []

    def build(self, data_model):
        if data_model.knows_user(self.target_user):
            trained_items = frozenset(data_model.item_ids_from_user(self.target_user))
        else:
            trained_items = frozenset()
        self.training_sizes.append(data_model.num_users)
        return SpyRecommender(self, trained_items)


@pytest.fixture
def spy_builder(target_user):
    return SpyRecommenderBuilder(target_user)
