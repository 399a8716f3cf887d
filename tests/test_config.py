"""
Tests for configuration.
"""

from pathlib import Path

import pytest

from memorial_match import ConfigurationError
from memorial_match.config import MatchConfig


class TestMatchConfig:
    """Tests for MatchConfig validation and environment loading."""

    def test_defaults(self):
        config = MatchConfig()
        assert config.default_threshold == 0.5
        assert sum(config.weights.values()) == pytest.approx(1.0)
        assert config.database_path is None

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ConfigurationError):
            MatchConfig(weights={
                'name': 0.5, 'birth_date': 0.2, 'death_date': 0.2,
                'birth_place': 0.1, 'resting_place': 0.1,
            })

    def test_weight_ordering_enforced(self):
        """Places may not outweigh dates."""
        with pytest.raises(ConfigurationError):
            MatchConfig(weights={
                'name': 0.30, 'birth_date': 0.15, 'death_date': 0.15,
                'birth_place': 0.20, 'resting_place': 0.20,
            })

    def test_missing_weight(self):
        with pytest.raises(ConfigurationError):
            MatchConfig(weights={'name': 1.0})

    def test_custom_weights(self):
        config = MatchConfig(weights={
            'name': 0.5, 'birth_date': 0.2, 'death_date': 0.2,
            'birth_place': 0.05, 'resting_place': 0.05,
        })
        assert config.weights['name'] == 0.5

    @pytest.mark.parametrize("threshold", [-0.1, 1.1])
    def test_default_threshold_range(self, threshold):
        with pytest.raises(ConfigurationError):
            MatchConfig(default_threshold=threshold)

    def test_from_env_empty(self):
        config = MatchConfig.from_env({})
        assert config.database_path is None

    def test_from_env(self):
        config = MatchConfig.from_env({
            'MEMORIAL_MATCH_DB': '/tmp/memorials.db',
            'MEMORIAL_MATCH_THRESHOLD': '0.7',
            'MEMORIAL_MATCH_POOL_LIMIT': '25',
            'MEMORIAL_MATCH_LOG_LEVEL': 'debug',
        })
        assert config.database_path == Path('/tmp/memorials.db')
        assert config.default_threshold == 0.7
        assert config.pool_limit == 25
        assert config.log_level == 'DEBUG'

    def test_from_env_database_url(self):
        config = MatchConfig.from_env({'DATABASE_URL': 'sqlite:///data/memorials.db'})
        assert config.database_path == Path('data/memorials.db')

    def test_from_env_ignores_non_sqlite_url(self):
        config = MatchConfig.from_env({'DATABASE_URL': 'postgresql://localhost/memorials'})
        assert config.database_path is None

    def test_from_env_bad_threshold(self):
        with pytest.raises(ConfigurationError):
            MatchConfig.from_env({'MEMORIAL_MATCH_THRESHOLD': 'high'})

    @pytest.mark.parametrize("limit", [0, -1])
    def test_pool_limit_must_be_positive(self, limit):
        with pytest.raises(ConfigurationError):
            MatchConfig(pool_limit=limit)

    def test_from_env_negative_pool_limit(self):
        with pytest.raises(ConfigurationError):
            MatchConfig.from_env({'MEMORIAL_MATCH_POOL_LIMIT': '-1'})
