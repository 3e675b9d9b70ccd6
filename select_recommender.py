"""
Select the best recommender for a specific user.

Usage:
    python select_recommender.py --user 1
    python select_recommender.py --user 1 --algorithms baseline item_similarity_with_cosine
    python select_recommender.py --user 1 --metric mean_absolute_error --speed fast --coverage 0.8
"""

import argparse
import logging
import sys

import config
from recselect.data.loader import default_ratings_path, load_data_model
from recselect.evaluation.report import MetricType
from recselect.models.types import RecommenderType
from recselect.selection.configuration import SpeedOption
from recselect.selection.selector import RecommenderSelector


def percentage(value):
    """argparse type of the options between 0 and 1."""
    try:
        result = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not a number") from None
    if not 0 <= result <= 1:
        raise argparse.ArgumentTypeError(f"{value} is not between 0 and 1")
    return result


def enum_choice(parse):
    def parse_option(value):
        try:
            return parse(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None
    return parse_option


def build_parser():
    parser = argparse.ArgumentParser(description='Select the best recommender for a user')
    parser.add_argument('--data', default=default_ratings_path(),
                        help='Ratings file: user id, item id, rating(, timestamp)')
    parser.add_argument('--sep', default=config.RATINGS_SEPARATOR, help='Column separator')
    parser.add_argument('--user', type=int, required=True, help='User ID')
    parser.add_argument('--algorithms', nargs='+', type=enum_choice(RecommenderType.parse),
                        help='Recommender types to compare (default: all of them), one of: '
                             + ', '.join(t.option_name for t in RecommenderType))
    parser.add_argument('--metric', type=enum_choice(MetricType.parse),
                        default=MetricType.parse(config.DEFAULT_METRIC),
                        help='mean_absolute_error or root_mean_squared_error')
    parser.add_argument('--speed', type=enum_choice(SpeedOption.parse),
                        default=SpeedOption.parse(config.DEFAULT_SPEED),
                        help='One of: ' + ', '.join(s.name.lower() for s in SpeedOption))
    parser.add_argument('--coverage', type=percentage, default=config.DEFAULT_MINIMUM_COVERAGE,
                        help='Minimum share of the user ratings a recommender must predict')
    parser.add_argument('--evaluation-percentage', type=percentage,
                        default=config.DEFAULT_EVALUATION_PERCENTAGE,
                        help='Share of the other users used for training')
    parser.add_argument('--seed', type=int, default=config.RANDOM_SEED, help='Random seed')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    if args.evaluation_percentage == 0:
        parser.error("--evaluation-percentage must be greater than 0")
    try:
        data_model = load_data_model(args.data, sep=args.sep)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    if not data_model.knows_user(args.user):
        parser.error(f"Unknown user: {args.user}")

    algorithms = args.algorithms or RecommenderType.speed_ordered_recommenders()
    print(f"Selecting among {len(algorithms)} recommenders for User {args.user}...")
    selector = RecommenderSelector(data_model, args.user, metric=args.metric, speed=args.speed,
                                   evaluation_percentage=args.evaluation_percentage,
                                   random_state=args.seed)
    evaluation = selector.select_among(algorithms, args.coverage)

    if evaluation is None:
        print(f"\nNo recommender reaches a coverage of {args.coverage:.0%} for User {args.user}.")
        return 0
    print("\nSelected recommender:")
    print("-" * 60)
    print(evaluation)
    print("\nArguments: " + ' '.join(evaluation.configuration.to_command_args()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
