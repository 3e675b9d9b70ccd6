"""
Recommender families and types.
Each recommender type belongs to a family, the family decides which hyperparameters
must be searched for during the selection.
"""

from enum import Enum


class RecommenderFamily(Enum):
    BASIC = 'basic'
    ITEM_SIMILARITY_BASED = 'item_similarity_based'
    USER_SIMILARITY_BASED = 'user_similarity_based'
    LATENT_FACTOR = 'latent_factor'


class RecommenderType(Enum):
    """
    Recommender algorithms available for the selection.

    The value of a member is (family, algorithm, similarity, description). The
    algorithm names a surprise prediction algorithm (or a custom one), the
    similarity names a surprise similarity measure for the neighborhood
    algorithms.
    """
    # basic
    ITEM_AVERAGE = (RecommenderFamily.BASIC, 'item_average', None,
                    "Item average recommender")
    USER_AVERAGE = (RecommenderFamily.BASIC, 'user_average', None,
                    "User average recommender")
    BASELINE = (RecommenderFamily.BASIC, 'baseline_only', None,
                "Baseline estimates recommender")
    # basic, usually the worst
    RANDOM = (RecommenderFamily.BASIC, 'normal_predictor', None,
              "Random recommender")
    # based on item similarity
    ITEM_SIMILARITY_WITH_COSINE = (
        RecommenderFamily.ITEM_SIMILARITY_BASED, 'knn_basic', 'cosine',
        "Item based recommender with cosine similarity")
    ITEM_SIMILARITY_WITH_MSD = (
        RecommenderFamily.ITEM_SIMILARITY_BASED, 'knn_basic', 'msd',
        "Item based recommender with mean squared difference similarity")
    ITEM_SIMILARITY_WITH_PEARSON_CORRELATION = (
        RecommenderFamily.ITEM_SIMILARITY_BASED, 'knn_basic', 'pearson',
        "Item based recommender with Pearson correlation")
    ITEM_SIMILARITY_WITH_PEARSON_BASELINE = (
        RecommenderFamily.ITEM_SIMILARITY_BASED, 'knn_basic', 'pearson_baseline',
        "Item based recommender with baseline centered Pearson correlation")
    # based on user similarity
    USER_SIMILARITY_WITH_COSINE = (
        RecommenderFamily.USER_SIMILARITY_BASED, 'knn_basic', 'cosine',
        "User based recommender with cosine similarity")
    USER_SIMILARITY_WITH_MSD = (
        RecommenderFamily.USER_SIMILARITY_BASED, 'knn_basic', 'msd',
        "User based recommender with mean squared difference similarity")
    USER_SIMILARITY_WITH_PEARSON_CORRELATION = (
        RecommenderFamily.USER_SIMILARITY_BASED, 'knn_basic', 'pearson',
        "User based recommender with Pearson correlation")
    USER_SIMILARITY_WITH_PEARSON_BASELINE = (
        RecommenderFamily.USER_SIMILARITY_BASED, 'knn_basic', 'pearson_baseline',
        "User based recommender with baseline centered Pearson correlation")
    # based on latent factors
    SVD_WITH_SGD_FACTORIZER = (
        RecommenderFamily.LATENT_FACTOR, 'svd', None,
        "SVD based recommender with SGD factorizer")
    SVD_WITH_SVDPLUSPLUS_FACTORIZER = (
        RecommenderFamily.LATENT_FACTOR, 'svdpp', None,
        "SVD based recommender with SVD++ factorizer")
    NMF_FACTORIZER = (
        RecommenderFamily.LATENT_FACTOR, 'nmf', None,
        "Non-negative matrix factorization recommender")

    def __init__(self, family, algorithm, similarity, description):
        self.family = family
        self.algorithm = algorithm
        self.similarity = similarity
        self.description = description

    @property
    def option_name(self):
        """Name of the type on the command line."""
        return self.name.lower()

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unable to find the given algorithm ({value}).") from None

    @classmethod
    def working_recommenders(cls):
        return list(cls)

    @classmethod
    def by_family(cls, family: RecommenderFamily):
        if family is None:
            raise ValueError("The family must not be None.")
        return [member for member in cls.working_recommenders() if member.family is family]

    @classmethod
    def speed_ordered_recommenders(cls):
        """Working recommenders, the slowest ones last."""
        result = cls.working_recommenders()
        for slow in (cls.ITEM_AVERAGE, cls.USER_AVERAGE, cls.NMF_FACTORIZER,
                     cls.SVD_WITH_SGD_FACTORIZER, cls.SVD_WITH_SVDPLUSPLUS_FACTORIZER):
            if slow in result:
                result.remove(slow)
                result.append(slow)
        return result

    def __str__(self):
        return self.option_name
