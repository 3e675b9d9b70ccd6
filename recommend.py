"""
Generate recommendations for a specific user with a selected recommender.

The recommender options are the ones printed by select_recommender.py.

Usage:
    python recommend.py --user 1 --algorithm baseline
    python recommend.py --user 1 --algorithm user_similarity_with_pearson_correlation --neighbors 12
    python recommend.py --user 1 --algorithm svd_with_sgd_factorizer --features 8 --iterations 20 --recommendations 5
"""

import argparse
import logging
import sys

import config
from recselect.data.loader import default_ratings_path, load_data_model
from recselect.models.configuration import configuration_for
from recselect.models.recommenders import build_recommender_builder, recommend
from recselect.models.types import RecommenderFamily, RecommenderType
from select_recommender import enum_choice


def positive_int(value):
    try:
        result = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not an integer") from None
    if result < 1:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return result


def build_parser():
    parser = argparse.ArgumentParser(description='Generate recommendations for a user')
    parser.add_argument('--data', default=default_ratings_path(),
                        help='Ratings file: user id, item id, rating(, timestamp)')
    parser.add_argument('--sep', default=config.RATINGS_SEPARATOR, help='Column separator')
    parser.add_argument('--user', type=int, required=True, help='User ID')
    parser.add_argument('--algorithm', type=enum_choice(RecommenderType.parse), required=True,
                        help='Recommender type, one of: '
                             + ', '.join(t.option_name for t in RecommenderType))
    parser.add_argument('--neighbors', type=positive_int,
                        help='Maximum number of neighbors (user similarity recommenders)')
    parser.add_argument('--features', type=positive_int,
                        help='Number of features (latent factor recommenders)')
    parser.add_argument('--iterations', type=positive_int,
                        help='Number of iterations (latent factor recommenders)')
    parser.add_argument('--recommendations', type=positive_int,
                        default=config.DEFAULT_RECOMMENDATION_COUNT,
                        help='Number of recommendations')
    parser.add_argument('--seed', type=int, default=config.RANDOM_SEED, help='Random seed')
    return parser


def configuration_from_args(args):
    """
    Rebuild the recommender configuration from the parsed options.

    Raises:
        ValueError: if a hyperparameter of the recommender family is missing.
    """
    family = args.algorithm.family
    hyperparameters = {}
    if family is RecommenderFamily.USER_SIMILARITY_BASED:
        if args.neighbors is None:
            raise ValueError(f"--neighbors is required by {args.algorithm.option_name}")
        hyperparameters['neighbor_count'] = args.neighbors
    elif family is RecommenderFamily.LATENT_FACTOR:
        if args.features is None or args.iterations is None:
            raise ValueError(
                f"--features and --iterations are required by {args.algorithm.option_name}")
        hyperparameters['feature_count'] = args.features
        hyperparameters['iteration_count'] = args.iterations
    return configuration_for(args.algorithm, **hyperparameters)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    try:
        configuration = configuration_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))
    try:
        data_model = load_data_model(args.data, sep=args.sep)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    if not data_model.knows_user(args.user):
        parser.error(f"Unknown user: {args.user}")

    print(f"Training {configuration}...")
    recommender = build_recommender_builder(configuration, args.seed).build(data_model)
    recommendations = recommend(recommender, data_model, args.user, args.recommendations)

    print(f"\nTop {args.recommendations} Recommendations for User {args.user}:")
    print("-" * 60)
    if not recommendations:
        print("No item can be recommended.")
    for rank, (item_id, score) in enumerate(recommendations, 1):
        print(f"{rank:2d}. Item {item_id} (Score: {score:.3f})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
