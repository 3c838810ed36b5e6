"""Configuration management module for the swap match engine."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config
from .models import (
    AppConfig,
    ChainSearchConfig,
    ConfidenceWeights,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MatchingConfig,
    SimilarityWeights,
)

__all__ = [
    # Main loader functions
    "load_config",
    "parse_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "MatchingConfig",
    "SimilarityWeights",
    "ConfidenceWeights",
    "ChainSearchConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
