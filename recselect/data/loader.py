"""
Module for loading ratings datasets.
Provides functions to read a delimited ratings file from the filesystem and to wrap it
into a data model.
"""

import logging
import os

import pandas as pd  # type: ignore

import config
from recselect.data.model import RATING_COLUMNS, RatingDataModel

logger = logging.getLogger(__name__)


def get_project_root():
    current_file_path = os.path.abspath(__file__)
    current_dir = os.path.dirname(current_file_path)
    current_dir = os.path.dirname(current_dir)
    current_dir = os.path.dirname(current_dir)
    return current_dir


def default_ratings_path(data_dir=config.DATA_DIR, file_name=config.RATINGS_FILE):
    return os.path.join(get_project_root(), data_dir, file_name)


def load_ratings(data_path, sep=config.RATINGS_SEPARATOR):
    """
    Load ratings from a delimited file without header.

    The first three columns are the user id, the item id and the rating. A fourth
    column, if any, is read as a timestamp. When a user rated an item several
    times, only the last rating is kept.

    Args:
        data_path (str): Path of the ratings file.
        sep (str): Column separator (default: tab, as in MovieLens u.data).

    Returns:
        pd.DataFrame: A DataFrame containing columns [user_id, item_id, rating(, timestamp)].
    """
    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Ratings file not found: {data_path}")

    rating_df = pd.read_csv(data_path, sep=sep, header=None)
    if rating_df.shape[1] < 3:
        raise ValueError(f"Expected at least 3 columns in {data_path}, found {rating_df.shape[1]}.")

    names = RATING_COLUMNS + ['timestamp']
    rating_df = rating_df.iloc[:, :4].copy()
    rating_df.columns = names[:rating_df.shape[1]]
    rating_df['rating'] = rating_df['rating'].astype(float)

    n_rows = len(rating_df)
    rating_df = rating_df.drop_duplicates(subset=['user_id', 'item_id'], keep='last')
    if len(rating_df) < n_rows:
        logger.warning("Dropped %d duplicate ratings from %s", n_rows - len(rating_df), data_path)

    return rating_df.reset_index(drop=True)


def load_data_model(data_path, sep=config.RATINGS_SEPARATOR, rating_scale=None):
    """
    Load a ratings file into a RatingDataModel.

    Args:
        data_path (str): Path of the ratings file.
        sep (str): Column separator.
        rating_scale (tuple): Optional declared (min, max) rating values.
    """
    ratings_df = load_ratings(data_path, sep=sep)
    data_model = RatingDataModel.from_frame(ratings_df, rating_scale=rating_scale)
    logger.info("Loaded %d ratings from %d users on %d items",
                len(ratings_df), data_model.num_users, data_model.num_items)
    return data_model

