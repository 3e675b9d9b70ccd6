"""
Prediction algorithms missing from the Surprise library.
"""

import numpy as np
from surprise import AlgoBase, KNNBasic, PredictionImpossible  # type: ignore


class ItemAverage(AlgoBase):
    """Predicts the average rating of the item."""

    def fit(self, trainset):
        AlgoBase.fit(self, trainset)
        self.item_means = np.zeros(trainset.n_items)
        for inner_iid, ratings in trainset.ir.items():
            self.item_means[inner_iid] = np.mean([r for (_, r) in ratings])
        return self

    def estimate(self, u, i):
        if not self.trainset.knows_item(i):
            raise PredictionImpossible('Item is unknown.')
        return self.item_means[i]


class ItemUserAverage(ItemAverage):
    """
    Predicts the average rating of the item, shifted by the difference between
    the user average rating and the global average rating.
    """

    def fit(self, trainset):
        ItemAverage.fit(self, trainset)
        self.user_offsets = np.zeros(trainset.n_users)
        global_mean = trainset.global_mean
        for inner_uid, ratings in trainset.ur.items():
            self.user_offsets[inner_uid] = np.mean([r for (_, r) in ratings]) - global_mean
        return self

    def estimate(self, u, i):
        if not (self.trainset.knows_user(u) and self.trainset.knows_item(i)):
            raise PredictionImpossible('User and/or item is unknown.')
        return self.item_means[i] + self.user_offsets[u]


class PrecomputedSimilarityKNN(KNNBasic):
    """
    KNNBasic reusing a similarity matrix computed on another trainset.

    The similarity source is a pair (raw id -> row index, similarity matrix).
    Every user (or item, depending on user_based) of the fitted trainset must
    be indexed in the source.
    """

    def __init__(self, similarity_source, k=40, min_k=1, sim_options=None, **kwargs):
        KNNBasic.__init__(self, k=k, min_k=min_k, sim_options=sim_options or {},
                          verbose=False, **kwargs)
        self.similarity_source = similarity_source

    def compute_similarities(self):
        raw_index, full_sim = self.similarity_source
        if self.sim_options.get('user_based', True):
            to_raw = self.trainset.to_raw_uid
        else:
            to_raw = self.trainset.to_raw_iid
        rows = np.array([raw_index[to_raw(inner_id)] for inner_id in range(self.n_x)], dtype=int)
        return full_sim[np.ix_(rows, rows)]
