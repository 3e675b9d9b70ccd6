import argparse

import pytest

from recselect.evaluation.report import MetricType
from recselect.models.types import RecommenderType
from recselect.selection.configuration import SpeedOption
from select_recommender import build_parser, main, percentage


class TestParser:

    def test_percentage(self):
        assert percentage('0.25') == 0.25
        with pytest.raises(argparse.ArgumentTypeError):
            percentage('1.5')
        with pytest.raises(argparse.ArgumentTypeError):
            percentage('half')

    def test_options(self):
        args = build_parser().parse_args([
            '--user', '3', '--algorithms', 'baseline', 'svd_with_sgd_factorizer',
            '--metric', 'mean_absolute_error', '--speed', 'fast', '--coverage', '0.7'])
        assert args.user == 3
        assert args.algorithms == [RecommenderType.BASELINE, RecommenderType.SVD_WITH_SGD_FACTORIZER]
        assert args.metric is MetricType.MEAN_ABSOLUTE_ERROR
        assert args.speed is SpeedOption.FAST
        assert args.coverage == 0.7

    def test_defaults(self):
        args = build_parser().parse_args(['--user', '1'])
        assert args.algorithms is None
        assert args.metric is MetricType.ROOT_MEAN_SQUARED_ERROR
        assert args.speed is SpeedOption.EXTREMELY_SLOW

    def test_unknown_algorithm(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['--user', '1', '--algorithms', 'magic'])


class TestMain:

    def test_selection(self, ratings_file, capsys):
        exit_code = main(['--data', str(ratings_file), '--user', '1',
                          '--algorithms', 'item_average', 'baseline'])
        output = capsys.readouterr().out
        assert exit_code == 0
        assert "Selected recommender" in output
        assert "Arguments: --algorithm" in output

    def test_no_selection(self, ratings_file, capsys, monkeypatch):
        monkeypatch.setattr('select_recommender.RecommenderSelector.select_among',
                            lambda self, types, coverage: None)
        assert main(['--data', str(ratings_file), '--user', '1']) == 0
        assert "No recommender reaches" in capsys.readouterr().out

    def test_unknown_user(self, ratings_file):
        with pytest.raises(SystemExit):
            main(['--data', str(ratings_file), '--user', '404'])

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit):
            main(['--data', str(tmp_path / 'missing'), '--user', '1'])
