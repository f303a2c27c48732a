"""
Configuration management for url-fields.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NormalizationConfig(BaseSettings):
    """Configuration for URL normalization and domain validation."""

    default_scheme: str = Field(
        default="https",
        description="Scheme prefixed to tokens that cannot stand alone as a URL",
    )
    domain_policy: Literal["lenient", "strict"] = Field(
        default="lenient",
        description=(
            "'strict' rejects URLs whose host is not a registrable ICANN or "
            "private domain; 'lenient' keeps them with empty domain fields"
        ),
    )
    private_requires_root: bool = Field(
        default=False,
        description="Require a registrable root below private suffixes too",
    )

    model_config = SettingsConfigDict(env_prefix="URL_NORMALIZE_")


class OutputConfig(BaseSettings):
    """Configuration for how empty results are printed."""

    suppress_empty_fields: bool = Field(
        default=True, description="Skip empty results in single-field mode"
    )
    suppress_empty_templates: bool = Field(
        default=False, description="Skip empty results in template mode"
    )

    model_config = SettingsConfigDict(env_prefix="URL_OUTPUT_")


class DedupConfig(BaseSettings):
    """Configuration for the dedup pass."""

    strategy: Literal["adjacent", "cluster"] = Field(
        default="adjacent",
        description=(
            "'adjacent' merges neighbours after sorting; 'cluster' merges the "
            "transitive closure of equivalent URLs"
        ),
    )

    model_config = SettingsConfigDict(env_prefix="URL_DEDUP_")


class Config(BaseSettings):
    """Main configuration."""

    # Sub-configs
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    dedup: DedupConfig = Field(default_factory=DedupConfig)

    # Global settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_nested_delimiter="__"
    )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
