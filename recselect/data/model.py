"""
In-memory rating data models.
Defines the query contract shared by every dataset view (users, items, preferences,
counts and rating bounds) and the plain dictionary-backed implementation of it.
"""

from abc import ABC, abstractmethod
from typing import Any, NamedTuple

import numpy as np
import pandas as pd  # type: ignore

from recselect.exceptions import UnknownItemError, UnknownUserError

RATING_COLUMNS = ['user_id', 'item_id', 'rating']


class Rating(NamedTuple):
    """A preference of one user for one item."""
    user_id: Any
    item_id: Any
    value: float


class DataModel(ABC):
    """
    Read access to a ratings dataset.

    Users and items are iterated in insertion order. Queries about a user
    without any rating raise UnknownUserError, queries about an item without
    any rater raise UnknownItemError. Counting queries answer 0 instead.
    """

    @abstractmethod
    def user_ids(self):
        """Iterate over the ids of all users."""

    @abstractmethod
    def item_ids(self):
        """Iterate over the ids of all items having at least one rater."""

    @abstractmethod
    def preferences_from_user(self, user_id):
        """Return the ordered list of Rating of the given user."""

    @abstractmethod
    def preferences_for_item(self, item_id):
        """Return the list of Rating given to the item."""

    @abstractmethod
    def preference_value(self, user_id, item_id):
        """Return the rating value, or None if the user did not rate the item."""

    @property
    @abstractmethod
    def num_users(self) -> int:
        pass

    @property
    @abstractmethod
    def num_items(self) -> int:
        pass

    @abstractmethod
    def num_users_with_preference_for(self, item_id, other_item_id=None) -> int:
        """
        Count the raters of an item, or the users who rated both items when
        a second item is given.
        """

    @property
    @abstractmethod
    def min_preference(self) -> float:
        pass

    @property
    @abstractmethod
    def max_preference(self) -> float:
        pass

    @abstractmethod
    def set_preference(self, user_id, item_id, value):
        pass

    @abstractmethod
    def remove_preference(self, user_id, item_id):
        pass

    def item_ids_from_user(self, user_id) -> set:
        return {rating.item_id for rating in self.preferences_from_user(user_id)}

    def knows_user(self, user_id) -> bool:
        try:
            return len(self.preferences_from_user(user_id)) > 0
        except UnknownUserError:
            return False

    def iter_ratings(self):
        """Iterate over every rating of the data model, user by user."""
        for user_id in self.user_ids():
            yield from self.preferences_from_user(user_id)

    def to_frame(self) -> pd.DataFrame:
        """Return all ratings as a DataFrame with columns [user_id, item_id, rating]."""
        return pd.DataFrame(
            [(r.user_id, r.item_id, r.value) for r in self.iter_ratings()],
            columns=RATING_COLUMNS)


class RatingDataModel(DataModel):
    """
    Dictionary-backed data model.

    The rating scale is the declared one when given, otherwise the smallest
    and the largest observed values.
    """

    def __init__(self, ratings=(), rating_scale=None):
        """
        Args:
            ratings: Iterable of Rating (or (user, item, value) tuples).
            rating_scale (tuple): Optional declared (min, max) preference values.
        """
        self._users = {}
        self._items = {}
        self.rating_scale = tuple(rating_scale) if rating_scale is not None else None
        for user_id, item_id, value in ratings:
            self.set_preference(user_id, item_id, value)

    @classmethod
    def from_training_map(cls, training_map, rating_scale=None):
        """Build a data model from a mapping of user id to list of Rating."""
        return cls(
            (rating for ratings in training_map.values() for rating in ratings),
            rating_scale=rating_scale)

    @classmethod
    def from_frame(cls, ratings_df: pd.DataFrame, rating_scale=None):
        """Build a data model from a DataFrame with columns [user_id, item_id, rating]."""
        ratings = zip(ratings_df['user_id'].tolist(),
                      ratings_df['item_id'].tolist(),
                      ratings_df['rating'].astype(float).tolist())
        return cls(ratings, rating_scale=rating_scale)

    def user_ids(self):
        return iter(list(self._users))

    def item_ids(self):
        return iter(list(self._items))

    def preferences_from_user(self, user_id):
        if user_id not in self._users:
            raise UnknownUserError(user_id)
        return list(self._users[user_id].values())

    def preferences_for_item(self, item_id):
        if item_id not in self._items:
            raise UnknownItemError(item_id)
        return list(self._items[item_id].values())

    def preference_value(self, user_id, item_id):
        rating = self._users.get(user_id, {}).get(item_id)
        return None if rating is None else rating.value

    @property
    def num_users(self):
        return len(self._users)

    @property
    def num_items(self):
        return len(self._items)

    def num_users_with_preference_for(self, item_id, other_item_id=None):
        raters = self._items.get(item_id, {})
        if other_item_id is None:
            return len(raters)
        other_raters = self._items.get(other_item_id, {})
        return len(raters.keys() & other_raters.keys())

    @property
    def min_preference(self):
        if self.rating_scale is not None:
            return self.rating_scale[0]
        return self._observed_bound(min)

    @property
    def max_preference(self):
        if self.rating_scale is not None:
            return self.rating_scale[1]
        return self._observed_bound(max)

    def _observed_bound(self, reducer):
        values = [r.value for prefs in self._users.values() for r in prefs.values()]
        return float(reducer(values)) if values else np.nan

    def set_preference(self, user_id, item_id, value):
        rating = Rating(user_id, item_id, float(value))
        self._users.setdefault(user_id, {})[item_id] = rating
        self._items.setdefault(item_id, {})[user_id] = rating

    def remove_preference(self, user_id, item_id):
        user_prefs = self._users.get(user_id)
        if user_prefs is None or item_id not in user_prefs:
            return
        del user_prefs[item_id]
        del self._items[item_id][user_id]
        if not user_prefs:
            del self._users[user_id]
        if not self._items[item_id]:
            del self._items[item_id]

    def __repr__(self):
        return (f"RatingDataModel(users={self.num_users}, items={self.num_items}, "
                f"scale=({self.min_preference}, {self.max_preference}))")


class GenericDataModelBuilder:
    """Default training view builder: copies the training preferences into a RatingDataModel."""

    def __init__(self, rating_scale=None):
        self.rating_scale = rating_scale

    def build(self, training_data) -> RatingDataModel:
        return RatingDataModel.from_training_map(training_data, rating_scale=self.rating_scale)
