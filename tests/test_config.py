"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from swapmatch.config import (
    AppConfig,
    ConfigurationError,
    ConfidenceWeights,
    MatchingConfig,
    load_config,
    load_environment_config,
    parse_config,
)
from swapmatch.config.validators import check_for_warnings

ENV_VARS = ("LOG_LEVEL", "ENVIRONMENT", "SWAPMATCH_CONFIG")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and working directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_config(tmp_path):
    def _write(content, name="config.yaml"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


class TestConfigModels:
    """Tests for configuration defaults and constraints."""

    def test_defaults_reproduce_matching_policy(self):
        config = AppConfig()

        assert config.matching.similarity_threshold == 0.5
        assert config.matching.min_confidence == 0.4
        assert config.matching.max_results == 10
        assert config.matching.similarity.exact == 1.0
        assert config.matching.similarity.synonym == 0.8
        assert config.matching.similarity.partial == 0.6
        assert config.matching.similarity.context_bonus == 0.5
        assert config.matching.confidence.chain_factor == 0.85
        assert config.matching.chain.enabled is False
        assert config.matching.chain.max_length == 4
        assert config.logging.level == "INFO"
        assert config.logging.format == "key-value"

    def test_blend_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="must sum to 1.0"):
            ConfidenceWeights(similarity=0.5, trust=0.25, experience=0.15)

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_bounds(self, threshold):
        with pytest.raises(ValueError):
            MatchingConfig(similarity_threshold=threshold)


class TestLoadConfig:
    """Tests for load_config."""

    def test_uses_defaults_without_config_file(self):
        app_config, env_config = load_config()

        assert app_config == AppConfig()
        assert env_config.environment == "local"

    def test_loads_explicit_file(self, write_config):
        path = write_config(
            """
matching:
  similarity_threshold: 0.6
  chain:
    enabled: true
logging:
  level: DEBUG
  format: json
""",
            name="custom.yaml",
        )

        app_config, _ = load_config(path)

        assert app_config.matching.similarity_threshold == 0.6
        assert app_config.matching.min_confidence == 0.4
        assert app_config.matching.chain.enabled is True
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"

    def test_finds_config_yaml_in_working_directory(self, write_config):
        write_config("matching:\n  max_results: 3\n")

        app_config, _ = load_config()

        assert app_config.matching.max_results == 3

    def test_finds_config_directory_fallback(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "config.yaml").write_text("matching:\n  max_results: 4\n")

        app_config, _ = load_config()

        assert app_config.matching.max_results == 4

    def test_path_from_environment(self, write_config, monkeypatch):
        path = write_config("matching:\n  max_results: 5\n", name="env.yaml")
        monkeypatch.setenv("SWAPMATCH_CONFIG", str(path))

        app_config, env_config = load_config()

        assert app_config.matching.max_results == 5
        assert env_config.config_path == path

    def test_missing_explicit_file(self):
        with pytest.raises(ConfigurationError, match="Specified configuration file not found"):
            load_config(Path("nope.yaml"))

    def test_invalid_yaml(self, write_config):
        path = write_config("matching: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML configuration"):
            load_config(path)

    def test_empty_file(self, write_config):
        path = write_config("")

        with pytest.raises(ConfigurationError, match="Configuration file is empty"):
            load_config(path)

    def test_non_mapping_root(self, write_config):
        path = write_config("- matching\n- logging\n")

        with pytest.raises(ConfigurationError, match="root must be a mapping"):
            load_config(path)

    def test_validation_errors_are_collected(self, write_config):
        path = write_config(
            """
matching:
  similarity_threshold: 1.5
  chain:
    max_length: 9
logging:
  format: xml
"""
        )

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert error.message == "Configuration validation failed"
        assert len(error.errors) == 3
        assert any("matching -> similarity_threshold" in e for e in error.errors)
        assert any("matching -> chain -> max_length" in e for e in error.errors)
        assert any("logging -> format" in e for e in error.errors)

    def test_emits_warnings_for_unusual_settings(self, write_config):
        path = write_config("matching:\n  similarity_threshold: 0.2\n")

        with pytest.warns(UserWarning, match="Low similarity_threshold"):
            load_config(path)


class TestParseConfig:
    """Tests for parse_config."""

    def test_type_errors_name_the_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"matching": {"max_results": "many"}})

        assert "Invalid type for 'matching -> max_results'" in exc_info.value.errors[0]

    def test_confidence_weights_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"matching": {"confidence": {"similarity": 0.9}}})

        assert "must sum to 1.0" in exc_info.value.errors[0]


class TestCheckForWarnings:
    """Tests for check_for_warnings."""

    def test_no_warnings_for_defaults(self):
        assert check_for_warnings({}) == []
        assert check_for_warnings({"matching": {"similarity_threshold": 0.5}}) == []

    def test_high_min_confidence(self):
        warnings = check_for_warnings({"matching": {"min_confidence": 0.95}})

        assert len(warnings) == 1
        assert "High min_confidence" in warnings[0]

    def test_long_chain_search(self):
        warnings = check_for_warnings({"matching": {"chain": {"enabled": True, "max_length": 6}}})

        assert len(warnings) == 1
        assert "Chain search up to 6 users" in warnings[0]

    def test_long_chain_ignored_when_disabled(self):
        assert check_for_warnings({"matching": {"chain": {"max_length": 6}}}) == []


class TestEnvironmentConfig:
    """Tests for load_environment_config."""

    def test_defaults(self):
        env_config = load_environment_config()

        assert env_config.log_level is None
        assert env_config.environment == "local"
        assert env_config.config_path is None

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " debug ")

        assert load_environment_config().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "Invalid LOG_LEVEL: 'LOUD'" in exc_info.value.errors[0]

    def test_empty_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "  ")

        with pytest.raises(ConfigurationError, match="ENVIRONMENT is set but empty"):
            load_environment_config()

    def test_environment_label(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "staging")

        assert load_environment_config().environment == "staging"


class TestConfigurationError:
    """Tests for ConfigurationError formatting."""

    def test_message_lists_errors_and_suggestions(self):
        error = ConfigurationError(
            "Configuration validation failed",
            errors=["matching -> max_results: too small"],
            suggestions=["Review config.example.yaml"],
        )

        text = str(error)
        assert text.startswith("Configuration validation failed")
        assert "Validation Errors:\n  1. matching -> max_results: too small" in text
        assert "Suggestions:\n  - Review config.example.yaml" in text

    def test_plain_message(self):
        assert str(ConfigurationError("boom")) == "boom"
