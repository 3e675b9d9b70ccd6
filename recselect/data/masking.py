"""
Masking view over a data model.
Hides a subset of the target user's ratings, so that the dataset looks as if these
ratings never existed, without copying or mutating the underlying data model.
"""

from recselect.data.model import DataModel
from recselect.exceptions import UnknownItemError, UnknownUserError


class PreferenceMaskingModel(DataModel):
    """
    Read-only projection of a data model with masked target user preferences.

    The view is also its own training view builder: build() receives the
    training preferences produced by the evaluator and masks every rating of
    the target user that is missing from them. Only the target user entry of
    the training preferences is read, the other users always come from the
    wrapped data model. Thus, this view must only be used when the whole
    dataset is used for training (evaluation percentage of 1).
    """

    def __init__(self, data_model: DataModel, target_user):
        self.data_model = data_model
        self.target_user = target_user
        self._masked_preferences = None
        self._target_user_hidden = False
        # items rated only by the target user, with this rating masked
        self._masked_items = set()
        # lazily filled caches, cleared by build()
        self._item_preferences_cache = {}
        self._user_preferences_cache = None

    def build(self, training_data):
        """
        Compute the masked items of the target user from the given training preferences.

        Args:
            training_data (dict): Mapping of user id to the list of Rating kept for training.

        Returns:
            PreferenceMaskingModel: this view, ready to be queried.
        """
        self._masked_preferences = None
        self._target_user_hidden = False
        self._masked_items = set()
        self._item_preferences_cache = {}
        self._user_preferences_cache = None

        if self.target_user not in training_data:
            raise RuntimeError(
                f"The training preferences don't contain the target user {self.target_user}.")
        try:
            masked = set(self.data_model.item_ids_from_user(self.target_user))
        except UnknownUserError as exc:
            raise RuntimeError(
                f"The data model has no baseline ratings for the target user {self.target_user}."
            ) from exc

        visible = set()
        for rating in training_data[self.target_user]:
            masked.discard(rating.item_id)
            visible.add(rating.item_id)
        self._masked_preferences = masked
        # without any visible rating, the target user is unknown to the view
        self._target_user_hidden = not visible

        for item_id in masked:
            if self.data_model.num_users_with_preference_for(item_id) == 1:
                self._masked_items.add(item_id)
        return self

    @property
    def masked_preferences(self) -> frozenset:
        self._check_built()
        return frozenset(self._masked_preferences)

    def _check_built(self):
        if self._masked_preferences is None:
            raise RuntimeError("The masking view must be built before being queried.")

    def _is_masked(self, user_id, item_id):
        return user_id == self.target_user and item_id in self._masked_preferences

    def user_ids(self):
        self._check_built()
        if self._target_user_hidden:
            return (user_id for user_id in self.data_model.user_ids()
                    if user_id != self.target_user)
        return self.data_model.user_ids()

    def item_ids(self):
        self._check_built()
        return (item_id for item_id in self.data_model.item_ids()
                if item_id not in self._masked_items)

    def preferences_from_user(self, user_id):
        self._check_built()
        if user_id != self.target_user:
            return self.data_model.preferences_from_user(user_id)
        if self._target_user_hidden:
            raise UnknownUserError(user_id)
        if self._user_preferences_cache is None:
            self._user_preferences_cache = [
                rating for rating in self.data_model.preferences_from_user(user_id)
                if rating.item_id not in self._masked_preferences]
        return list(self._user_preferences_cache)

    def preferences_for_item(self, item_id):
        self._check_built()
        if item_id in self._masked_items:
            raise UnknownItemError(item_id)
        if item_id not in self._masked_preferences:
            return self.data_model.preferences_for_item(item_id)
        cached = self._item_preferences_cache.get(item_id)
        if cached is None:
            cached = [rating for rating in self.data_model.preferences_for_item(item_id)
                      if rating.user_id != self.target_user]
            self._item_preferences_cache[item_id] = cached
        return list(cached)

    def preference_value(self, user_id, item_id):
        self._check_built()
        if self._is_masked(user_id, item_id):
            return None
        return self.data_model.preference_value(user_id, item_id)

    @property
    def num_users(self):
        self._check_built()
        if self._target_user_hidden:
            return self.data_model.num_users - 1
        return self.data_model.num_users

    @property
    def num_items(self):
        self._check_built()
        return self.data_model.num_items - len(self._masked_items)

    def num_users_with_preference_for(self, item_id, other_item_id=None):
        self._check_built()
        result = self.data_model.num_users_with_preference_for(item_id, other_item_id)
        if other_item_id is None:
            if item_id in self._masked_preferences:
                result -= 1
            return result
        # the target user is counted by the wrapped model if it rated both items
        rated_both = (self.data_model.preference_value(self.target_user, item_id) is not None
                      and self.data_model.preference_value(self.target_user, other_item_id) is not None)
        if rated_both and (item_id in self._masked_preferences
                           or other_item_id in self._masked_preferences):
            result -= 1
        return result

    @property
    def min_preference(self):
        return self.data_model.min_preference

    @property
    def max_preference(self):
        return self.data_model.max_preference

    def set_preference(self, user_id, item_id, value):
        raise NotImplementedError("The masking view is read-only.")

    def remove_preference(self, user_id, item_id):
        raise NotImplementedError("The masking view is read-only.")
