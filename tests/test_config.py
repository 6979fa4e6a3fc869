"""Tests for the global configuration object."""

import pytest
import apsis
from apsis import config, temp_config


class TestConfig:
    """Test configuration defaults, reset and temporary overrides."""

    def test_defaults(self):
        assert config.EQUALITY_RTOL == 1e-12
        assert config.EQUALITY_ATOL == 1e-14
        assert config.ANOMALY_TOLERANCE == 1e-13
        assert config.MAX_ITERATIONS == 200
        assert config.DEGENERACY_TOLERANCE == 1e-12
        assert config.SNAP_TO_EQUATORIAL == 1e-10
        assert config.STRICT_VALIDATION is False

    def test_hash_decimals_follows_atol(self):
        """HASH_DECIMALS is two orders coarser than EQUALITY_ATOL."""
        assert config.HASH_DECIMALS == 12
        with temp_config(EQUALITY_ATOL=1e-8):
            assert config.HASH_DECIMALS == 6

    def test_reset(self):
        config.MAX_ITERATIONS = 5
        config.STRICT_VALIDATION = True
        try:
            config.reset()
            assert config.MAX_ITERATIONS == 200
            assert config.STRICT_VALIDATION is False
        finally:
            config.reset()

    def test_temp_config_restores(self):
        with temp_config(MAX_ITERATIONS=3, STRICT_VALIDATION=True) as cfg:
            assert cfg is config
            assert config.MAX_ITERATIONS == 3
            assert config.STRICT_VALIDATION is True
        assert config.MAX_ITERATIONS == 200
        assert config.STRICT_VALIDATION is False

    def test_temp_config_restores_after_exception(self):
        with pytest.raises(RuntimeError):
            with temp_config(ANOMALY_TOLERANCE=1e-6):
                raise RuntimeError("boom")
        assert config.ANOMALY_TOLERANCE == 1e-13

    def test_temp_config_unknown_key(self):
        with pytest.raises(AttributeError, match="no attribute 'TOLERANCE'"):
            with temp_config(TOLERANCE=1.0):
                pass

    def test_repr_lists_settings(self):
        text = repr(config)
        assert "MAX_ITERATIONS = 200" in text
        assert "STRICT_VALIDATION = False" in text

    def test_package_exposes_same_instance(self):
        assert apsis.config is config
