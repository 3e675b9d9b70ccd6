import pytest

from recselect.data.loader import load_data_model, load_ratings


@pytest.fixture
def ratings_file(tmp_path):
    path = tmp_path / 'u.data'
    path.write_text(
        "1\t10\t4\t881250949\n"
        "1\t11\t2\t881250950\n"
        "2\t10\t5\t881250951\n"
        "1\t10\t3\t881250952\n")
    return path


class TestLoadRatings:

    def test_columns(self, ratings_file):
        ratings = load_ratings(str(ratings_file))
        assert list(ratings.columns) == ['user_id', 'item_id', 'rating', 'timestamp']
        assert ratings['rating'].dtype == float

    def test_last_duplicate_is_kept(self, ratings_file):
        ratings = load_ratings(str(ratings_file))
        assert len(ratings) == 3
        user_ratings = ratings[ratings['user_id'] == 1]
        assert dict(zip(user_ratings['item_id'], user_ratings['rating'])) == {10: 3.0, 11: 2.0}

    def test_three_columns(self, tmp_path):
        path = tmp_path / 'ratings.csv'
        path.write_text("a,x,1.5\nb,x,4\n")
        ratings = load_ratings(str(path), sep=',')
        assert list(ratings.columns) == ['user_id', 'item_id', 'rating']
        assert list(ratings['user_id']) == ['a', 'b']

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_ratings(str(tmp_path / 'missing.data'))

    def test_too_few_columns(self, tmp_path):
        path = tmp_path / 'ratings.csv'
        path.write_text("1,2\n")
        with pytest.raises(ValueError):
            load_ratings(str(path), sep=',')


def test_load_data_model(ratings_file):
    data_model = load_data_model(str(ratings_file), rating_scale=(1, 5))
    assert data_model.num_users == 2
    assert data_model.num_items == 2
    assert data_model.preference_value(1, 10) == 3.0
    assert data_model.max_preference == 5
