"""
Exceptions raised by data models and recommender strategies.
"""


class UnknownUserError(LookupError):
    """The user has no preference in the data model."""

    def __init__(self, user_id):
        super().__init__(f"Unknown user: {user_id}")
        self.user_id = user_id


class UnknownItemError(LookupError):
    """No user has a preference for the item in the data model."""

    def __init__(self, item_id):
        super().__init__(f"Unknown item: {item_id}")
        self.item_id = item_id
