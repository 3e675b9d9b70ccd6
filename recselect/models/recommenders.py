"""
Recommender builders backed by the Surprise library.
A builder trains a recommender on a data model. The trained recommender estimates the
rating of a user for an item, or signals that the user or the item is unknown.
"""

import logging

import numpy as np
from surprise import (  # type: ignore
    NMF, SVD, BaselineOnly, Dataset, KNNBasic, NormalPredictor, PredictionImpossible, Reader, SVDpp
)

import config
from recselect.exceptions import UnknownItemError, UnknownUserError
from recselect.models.configuration import (
    BasicConfiguration, ItemSimilarityConfiguration, LatentFactorConfiguration,
    UserSimilarityConfiguration
)
from recselect.models.surprise_algorithms import (
    ItemAverage, ItemUserAverage, PrecomputedSimilarityKNN
)

logger = logging.getLogger(__name__)


def to_trainset(data_model):
    """Convert a data model into a Surprise trainset, keeping its rating scale."""
    reader = Reader(rating_scale=(data_model.min_preference, data_model.max_preference))
    dataset = Dataset.load_from_df(data_model.to_frame(), reader)
    return dataset.build_full_trainset()


class SurpriseRecommender:
    """
    Trained Surprise algorithm answering estimates with raw ids.

    The known_trainset decides which users and items are known. It defaults
    to the trainset the algorithm was fitted on, and differs from it when the
    algorithm was fitted once on a larger dataset and is reused.
    """

    def __init__(self, algorithm, trainset, known_trainset=None):
        self.algorithm = algorithm
        self.trainset = trainset
        self.known_trainset = trainset if known_trainset is None else known_trainset

    def estimate(self, user_id, item_id):
        """
        Estimate the rating of the user for the item.

        Returns:
            float: The estimate, NaN if the algorithm can't compute it.

        Raises:
            UnknownUserError, UnknownItemError: the id is absent from the training data.
        """
        if not _knows_raw_user(self.known_trainset, user_id):
            raise UnknownUserError(user_id)
        if not _knows_raw_item(self.known_trainset, item_id):
            raise UnknownItemError(item_id)
        inner_uid = self.trainset.to_inner_uid(user_id)
        inner_iid = self.trainset.to_inner_iid(item_id)
        try:
            estimate = self.algorithm.estimate(inner_uid, inner_iid)
        except PredictionImpossible:
            return np.nan
        if isinstance(estimate, tuple):
            estimate, _ = estimate
        return float(estimate)


def _knows_raw_user(trainset, user_id):
    try:
        trainset.to_inner_uid(user_id)
    except ValueError:
        return False
    return True


def _knows_raw_item(trainset, item_id):
    try:
        trainset.to_inner_iid(item_id)
    except ValueError:
        return False
    return True


class SurpriseRecommenderBuilder:
    """
    Creates a fresh Surprise algorithm for each data model and fits it.

    With a random_state, the global numpy generator is seeded before each fit,
    and the factorization algorithms get their own seed.
    """

    def __init__(self, configuration, random_state=None):
        if configuration is None:
            raise ValueError("The configuration must not be None.")
        self.configuration = configuration
        self.random_state = random_state

    def seed(self):
        # NormalPredictor draws its estimates from the global generator
        if self.random_state is not None:
            np.random.seed(self.random_state)

    def create_algorithm(self):
        raise NotImplementedError

    def build(self, data_model) -> SurpriseRecommender:
        trainset = to_trainset(data_model)
        algorithm = self.create_algorithm()
        self.seed()
        algorithm.fit(trainset)
        return SurpriseRecommender(algorithm, trainset)


class BasicRecommenderBuilder(SurpriseRecommenderBuilder):

    def create_algorithm(self):
        algorithm = self.configuration.type.algorithm
        if algorithm == 'item_average':
            return ItemAverage()
        if algorithm == 'user_average':
            return ItemUserAverage()
        if algorithm == 'baseline_only':
            return BaselineOnly(verbose=False)
        if algorithm == 'normal_predictor':
            return NormalPredictor()
        raise ValueError(f"Unsupported basic algorithm: {algorithm}")


class ItemSimilarityRecommenderBuilder(SurpriseRecommenderBuilder):

    def create_algorithm(self):
        sim_options = {'name': self.configuration.type.similarity, 'user_based': False}
        return KNNBasic(k=config.ITEM_SIMILARITY_K, sim_options=sim_options, verbose=False)


class UserSimilarityRecommenderBuilder(SurpriseRecommenderBuilder):
    """
    Builds user based recommenders.
    With similarity reuse, the similarity matrix of the configured data model is
    computed at the first build, then only re-indexed for the next ones.
    """

    def __init__(self, configuration, random_state=None):
        super().__init__(configuration, random_state)
        self._similarity_source = None

    @property
    def sim_options(self):
        return {'name': self.configuration.type.similarity, 'user_based': True}

    def create_algorithm(self):
        if not self.configuration.reuse_similarity:
            return KNNBasic(k=self.configuration.neighbor_count,
                            sim_options=self.sim_options, verbose=False)
        if self._similarity_source is None:
            # lazy initialization
            full_trainset = to_trainset(self.configuration.data_model)
            full_algorithm = KNNBasic(sim_options=self.sim_options, verbose=False)
            full_algorithm.fit(full_trainset)
            raw_index = {full_trainset.to_raw_uid(inner): inner
                         for inner in full_trainset.all_users()}
            self._similarity_source = (raw_index, full_algorithm.sim)
            logger.debug("Cached the %s similarity of %d users",
                         self.sim_options['name'], full_trainset.n_users)
        return PrecomputedSimilarityKNN(self._similarity_source,
                                        k=self.configuration.neighbor_count,
                                        sim_options=self.sim_options)


class LatentFactorRecommenderBuilder(SurpriseRecommenderBuilder):
    """
    Builds matrix factorization recommenders.
    With factorization reuse, the factorization of the configured data model is
    computed at the first build, and each data model only decides which users
    and items are known.
    """

    def __init__(self, configuration, random_state=None):
        super().__init__(configuration, random_state)
        self._cached = None

    def create_algorithm(self):
        algorithm = self.configuration.type.algorithm
        n_factors = self.configuration.feature_count
        n_epochs = self.configuration.iteration_count
        if algorithm == 'svd':
            return SVD(n_factors=n_factors, n_epochs=n_epochs,
                       lr_all=config.LATENT_LEARNING_RATE, reg_all=config.LATENT_REGULARIZATION,
                       random_state=self.random_state)
        if algorithm == 'svdpp':
            return SVDpp(n_factors=n_factors, n_epochs=n_epochs,
                         lr_all=config.LATENT_LEARNING_RATE, reg_all=config.LATENT_REGULARIZATION,
                         random_state=self.random_state)
        if algorithm == 'nmf':
            return NMF(n_factors=n_factors, n_epochs=n_epochs, random_state=self.random_state)
        raise ValueError(f"Unsupported latent factor algorithm: {algorithm}")

    def build(self, data_model) -> SurpriseRecommender:
        if not self.configuration.reuse_factorization:
            return super().build(data_model)
        if self._cached is None:
            full_trainset = to_trainset(self.configuration.data_model)
            algorithm = self.create_algorithm()
            self.seed()
            algorithm.fit(full_trainset)
            self._cached = (algorithm, full_trainset)
        algorithm, full_trainset = self._cached
        return SurpriseRecommender(algorithm, full_trainset, known_trainset=to_trainset(data_model))


def build_recommender_builder(configuration, random_state=None):
    """Return the builder matching the type of the given configuration."""
    if isinstance(configuration, BasicConfiguration):
        return BasicRecommenderBuilder(configuration, random_state)
    if isinstance(configuration, ItemSimilarityConfiguration):
        return ItemSimilarityRecommenderBuilder(configuration, random_state)
    if isinstance(configuration, UserSimilarityConfiguration):
        return UserSimilarityRecommenderBuilder(configuration, random_state)
    if isinstance(configuration, LatentFactorConfiguration):
        return LatentFactorRecommenderBuilder(configuration, random_state)
    raise ValueError(f"Unsupported configuration: {configuration!r}")


def recommend(recommender, data_model, user_id, count=config.DEFAULT_RECOMMENDATION_COUNT):
    """
    Recommend the items the user has not rated yet, the highest estimates first.

    Args:
        recommender (SurpriseRecommender): Recommender trained on the data model.
        data_model: Data model the recommender was trained on.
        user_id: Target user.
        count (int): Maximum number of recommendations.

    Returns:
        list: (item_id, estimate) tuples. Items without estimate are skipped.
    """
    rated = data_model.item_ids_from_user(user_id)
    candidates = []
    for item_id in data_model.item_ids():
        if item_id in rated:
            continue
        estimate = recommender.estimate(user_id, item_id)
        if not np.isnan(estimate):
            candidates.append((item_id, estimate))
    candidates.sort(key=lambda candidate: candidate[1], reverse=True)
    return candidates[:count]
