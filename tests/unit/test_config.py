"""Unit tests for configuration."""

import pytest
from pydantic import ValidationError

from url_fields.config import (
    Config,
    DedupConfig,
    NormalizationConfig,
    OutputConfig,
    get_config,
    reset_config,
)


class TestConfig:
    """Test suite for configuration."""

    def test_defaults(self):
        """Test default settings."""
        config = Config()

        assert config.normalization.default_scheme == "https"
        assert config.normalization.domain_policy == "lenient"
        assert config.normalization.private_requires_root is False
        assert config.output.suppress_empty_fields is True
        assert config.output.suppress_empty_templates is False
        assert config.dedup.strategy == "adjacent"

    def test_env_override(self, monkeypatch):
        """Test settings are read from prefixed environment variables."""
        monkeypatch.setenv("URL_NORMALIZE_DOMAIN_POLICY", "strict")
        monkeypatch.setenv("URL_OUTPUT_SUPPRESS_EMPTY_TEMPLATES", "true")
        monkeypatch.setenv("URL_DEDUP_STRATEGY", "cluster")

        assert NormalizationConfig().domain_policy == "strict"
        assert OutputConfig().suppress_empty_templates is True
        assert DedupConfig().strategy == "cluster"

    def test_invalid_values(self):
        """Test unknown policies are rejected."""
        with pytest.raises(ValidationError):
            NormalizationConfig(domain_policy="sometimes")

        with pytest.raises(ValidationError):
            DedupConfig(strategy="fuzzy")

    def test_global_config(self):
        """Test the global config is cached until reset."""
        reset_config()
        config = get_config()

        assert get_config() is config

        reset_config()
        assert get_config() is not config
        reset_config()
