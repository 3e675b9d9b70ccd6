"""
Recommender configurations.
A configuration identifies a recommender type and its hyperparameters. It is enough to
rebuild the recommender, and to render it back as reusable command line arguments.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from recselect.models.types import RecommenderFamily, RecommenderType


def _check_family(recommender_type, family):
    if recommender_type.family is not family:
        raise ValueError(f"{recommender_type} is not a {family.value} recommender.")


@dataclass(frozen=True)
class BasicConfiguration:
    type: RecommenderType

    def __post_init__(self):
        _check_family(self.type, RecommenderFamily.BASIC)

    def to_command_args(self):
        return ['--algorithm', self.type.option_name]

    def __str__(self):
        return self.type.description


@dataclass(frozen=True)
class ItemSimilarityConfiguration:
    type: RecommenderType

    def __post_init__(self):
        _check_family(self.type, RecommenderFamily.ITEM_SIMILARITY_BASED)

    def to_command_args(self):
        return ['--algorithm', self.type.option_name]

    def __str__(self):
        return self.type.description


@dataclass(frozen=True)
class UserSimilarityConfiguration:
    """
    User based recommender with a maximum number of neighbors.

    If reuse_similarity is set, the user similarities are computed once on the
    given data model and shared by every recommender built from this
    configuration.
    """
    type: RecommenderType
    neighbor_count: int
    data_model: Optional[Any] = field(default=None, compare=False, repr=False)
    reuse_similarity: bool = False

    def __post_init__(self):
        _check_family(self.type, RecommenderFamily.USER_SIMILARITY_BASED)
        if self.neighbor_count < 1:
            raise ValueError("The number of neighbors must be at least 1.")
        if self.reuse_similarity and self.data_model is None:
            raise ValueError("A data model must be provided if the similarities have to be reused.")
        if not self.reuse_similarity:
            # keep the data model only if necessary
            object.__setattr__(self, 'data_model', None)

    def to_command_args(self):
        return ['--algorithm', self.type.option_name, '--neighbors', str(self.neighbor_count)]

    def __str__(self):
        return f"{self.type.description} with {self.neighbor_count} maximum neighbors"


@dataclass(frozen=True)
class LatentFactorConfiguration:
    """
    Matrix factorization recommender.

    If reuse_factorization is set, the factorization is computed once on the
    given data model and shared by every recommender built from this
    configuration.
    """
    type: RecommenderType
    feature_count: int
    iteration_count: int
    data_model: Optional[Any] = field(default=None, compare=False, repr=False)
    reuse_factorization: bool = False

    def __post_init__(self):
        _check_family(self.type, RecommenderFamily.LATENT_FACTOR)
        if self.feature_count < 1 or self.iteration_count < 1:
            raise ValueError("The numbers of features and iterations must be at least 1.")
        if self.reuse_factorization and self.data_model is None:
            raise ValueError("A data model must be provided if the factorization has to be reused.")
        if not self.reuse_factorization:
            object.__setattr__(self, 'data_model', None)

    def to_command_args(self):
        return ['--algorithm', self.type.option_name,
                '--features', str(self.feature_count),
                '--iterations', str(self.iteration_count)]

    def __str__(self):
        return (f"{self.type.description} with {self.feature_count} features "
                f"and {self.iteration_count} iterations")


def configuration_for(recommender_type: RecommenderType, **hyperparameters):
    """Create the configuration matching the family of the given type."""
    family = recommender_type.family
    if family is RecommenderFamily.BASIC:
        return BasicConfiguration(recommender_type)
    if family is RecommenderFamily.ITEM_SIMILARITY_BASED:
        return ItemSimilarityConfiguration(recommender_type)
    if family is RecommenderFamily.USER_SIMILARITY_BASED:
        return UserSimilarityConfiguration(recommender_type, **hyperparameters)
    if family is RecommenderFamily.LATENT_FACTOR:
        return LatentFactorConfiguration(recommender_type, **hyperparameters)
    raise ValueError(f"Unknown recommender family: {family}")
