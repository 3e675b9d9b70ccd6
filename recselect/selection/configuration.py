"""
Options shared by the selectors and their objective functions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from recselect.data.model import DataModel
from recselect.evaluation.evaluator import PersonalRecommenderEvaluator
from recselect.models.recommenders import build_recommender_builder


class SpeedOption(Enum):
    """
    Speed and precision of the evaluations: (training percentage, exhaustive).
    The slowest option predicts each rating of the target user once.
    """
    EXTREMELY_SLOW = (1.0, True)
    VERY_SLOW = (0.95, True)
    SLOW = (0.9, True)
    NORMAL = (0.8, True)
    FAST = (0.5, True)
    VERY_FAST = (0.7, False)

    def __init__(self, training_percentage, exhaustive):
        self.training_percentage = training_percentage
        self.exhaustive = exhaustive

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown speed: {value}") from None


@dataclass(frozen=True)
class SelectorConfiguration:
    """Everything an evaluation needs, besides the recommender to evaluate."""
    data_model: DataModel
    target_user: Any
    evaluator: PersonalRecommenderEvaluator
    evaluation_percentage: float
    reuse_is_allowed: bool
    speed: SpeedOption
    data_model_builder: Optional[Any] = None
    random_state: Optional[int] = None

    @property
    def training_percentage(self) -> float:
        return self.speed.training_percentage

    def recommender_builder(self, configuration):
        return build_recommender_builder(configuration, self.random_state)

    def evaluate(self, configuration):
        """Evaluate the recommender of the given configuration."""
        recommender_builder = self.recommender_builder(configuration)
        return self.evaluator.evaluate(
            recommender_builder, self.data_model_builder, self.data_model,
            self.training_percentage, self.evaluation_percentage)
