"""Tests for configuration classes."""

import os
import pytest
from unittest.mock import patch


class TestCORSConfig:
    """Tests for CORSConfig class."""

    def test_cors_default_origins(self):
        """Test that default CORS origins are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            from config import CORSConfig

            config = CORSConfig()

            assert config.allowed_origins == ["http://localhost:8000"]

    def test_cors_parses_env_var(self):
        """Test that CORS origins are parsed from environment variable."""
        env_origins = "http://example.com,http://localhost:3000,http://app.test.com"
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            from config import _parse_cors_origins

            origins = _parse_cors_origins()

            assert origins == [
                "http://example.com",
                "http://localhost:3000",
                "http://app.test.com",
            ]

    def test_cors_parses_origins_with_whitespace(self):
        """Whitespace and empty entries are dropped."""
        env_origins = "  http://example.com  , ,  http://localhost:3000  "
        with patch.dict(os.environ, {"CORS_ORIGINS": env_origins}):
            from config import _parse_cors_origins

            assert _parse_cors_origins() == ["http://example.com", "http://localhost:3000"]

    def test_cors_default_methods_and_headers(self):
        from config import CORSConfig

        config = CORSConfig()

        assert config.allow_credentials is True
        assert "*" in config.allow_methods
        assert "*" in config.allow_headers


class TestRateLimitConfig:
    """Tests for RateLimitConfig class."""

    def test_rate_limit_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is True
            assert config.requests_per_minute == 60

    def test_rate_limit_from_env(self):
        with patch.dict(
            os.environ,
            {"RATE_LIMIT_ENABLED": "false", "RATE_LIMIT_RPM": "120"},
        ):
            from config import RateLimitConfig

            config = RateLimitConfig()

            assert config.enabled is False
            assert config.requests_per_minute == 120

    @pytest.mark.parametrize("value", ["false", "FALSE", "0", "no"])
    def test_rate_limit_only_true_enables(self, value):
        with patch.dict(os.environ, {"RATE_LIMIT_ENABLED": value}):
            from config import RateLimitConfig

            assert RateLimitConfig().enabled is False


class TestSecurityConfig:
    """Tests for SecurityConfig class."""

    def test_secret_key_auto_generates(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import SecurityConfig

            config = SecurityConfig()

            assert config.secret_key

    def test_secret_key_from_env(self):
        with patch.dict(os.environ, {"SECRET_KEY": "my-super-secret-key-12345"}):
            from config import SecurityConfig

            assert SecurityConfig().secret_key == "my-super-secret-key-12345"


class TestTableConfig:
    """Tests for TableConfig class."""

    def test_table_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import TableConfig

            config = TableConfig()

            assert config.default_mode == "solo"
            assert config.seed is None

    def test_table_from_env(self):
        with patch.dict(
            os.environ,
            {"TABLE_DEFAULT_MODE": "head_to_head", "TABLE_SEED": " 1234 "},
        ):
            from config import TableConfig

            config = TableConfig()

            assert config.default_mode == "head_to_head"
            assert config.seed == 1234

    def test_blank_seed_is_unseeded(self):
        with patch.dict(os.environ, {"TABLE_SEED": "   "}):
            from config import _parse_seed

            assert _parse_seed() is None

    def test_table_config_frozen(self):
        from config import TableConfig

        config = TableConfig()

        with pytest.raises(Exception):  # dataclasses.FrozenInstanceError
            config.default_mode = "two_player"


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_app_config_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            from config import AppConfig

            config = AppConfig()

            assert config.debug is False
            assert config.host == "0.0.0.0"
            assert config.port == 8000
            assert config.session_ttl == 3600

    def test_app_config_debug_from_env(self):
        with patch.dict(os.environ, {"DEBUG": "true"}):
            from config import AppConfig

            assert AppConfig().debug is True

    def test_app_config_has_nested_configs(self):
        from config import AppConfig

        config = AppConfig()

        assert hasattr(config, "table")
        assert hasattr(config, "cors")
        assert hasattr(config, "rate_limit")
        assert hasattr(config, "security")
