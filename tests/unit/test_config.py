"""Tests for configuration management."""

import pytest

from capacity_ratio.config import (
    CapacityRatioConfig,
    LoggingConfig,
    ScoringSettings,
    build_priority,
    build_shape,
)
from capacity_ratio.errors import ShapeParseError
from capacity_ratio.priorities import RequestedToCapacityRatioPriority
from capacity_ratio.shape import Domain, default_shape, new_shape


class TestScoringSettings:
    def test_defaults(self):
        settings = ScoringSettings()
        assert settings.max_priority == 10
        assert settings.scoring_function_shape is None
        assert settings.shape_domain == "normalized"

    def test_invalid_max_priority(self):
        with pytest.raises(ValueError, match="max_priority must be between 1 and 100"):
            ScoringSettings(max_priority=0)

    def test_invalid_domain(self):
        with pytest.raises(ValueError, match="shape_domain must be one of"):
            ScoringSettings(shape_domain="logarithmic")

    def test_is_frozen(self):
        settings = ScoringSettings()
        with pytest.raises(Exception):
            settings.max_priority = 5

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CAPACITY_RATIO_MAX_PRIORITY", "20")
        monkeypatch.setenv("CAPACITY_RATIO_SCORING_FUNCTION_SHAPE", "0=0,1=1")
        settings = ScoringSettings()
        assert settings.max_priority == 20
        assert settings.scoring_function_shape == "0=0,1=1"


class TestLoggingConfig:
    def test_defaults(self):
        cfg = LoggingConfig()
        assert cfg.log_level == "INFO"
        assert cfg.log_format == "console"

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(log_level="LOUD")

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid log format"):
            LoggingConfig(log_format="xml")


class TestCapacityRatioConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CAPACITY_RATIO_SHAPE_DOMAIN", "integer")
        cfg = CapacityRatioConfig.from_env()
        assert cfg.logging.log_level == "DEBUG"
        assert cfg.scoring.shape_domain == "integer"

    def test_from_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("CAPACITY_RATIO_MAX_PRIORITY=7\n")
        cfg = CapacityRatioConfig.from_env(str(env_file))
        assert cfg.scoring.max_priority == 7

    def test_domain(self):
        cfg = CapacityRatioConfig(scoring=ScoringSettings(shape_domain="integer", max_priority=20))
        assert cfg.domain() == Domain.integer(20)
        assert CapacityRatioConfig().domain() == Domain.normalized()

    def test_to_dict(self):
        data = CapacityRatioConfig().to_dict()
        assert data["scoring"]["max_priority"] == 10
        assert data["logging"]["log_format"] == "console"

    def test_str(self):
        assert "shape=default" in str(CapacityRatioConfig())


class TestBuildShape:
    def test_default(self):
        assert build_shape(CapacityRatioConfig()) == default_shape()

    def test_default_follows_max_priority(self):
        cfg = CapacityRatioConfig(scoring=ScoringSettings(max_priority=5))
        assert build_shape(cfg) == default_shape(5)

    def test_descriptor(self):
        cfg = CapacityRatioConfig(scoring=ScoringSettings(scoring_function_shape="0=0,0.5=1,1=0"))
        assert build_shape(cfg) == new_shape([0, 0.5, 1], [0, 1, 0], Domain.normalized())

    def test_integer_descriptor(self):
        cfg = CapacityRatioConfig(
            scoring=ScoringSettings(scoring_function_shape="0=10,100=0", shape_domain="integer")
        )
        assert build_shape(cfg) == default_shape()

    def test_invalid_descriptor_is_fatal(self):
        cfg = CapacityRatioConfig(scoring=ScoringSettings(scoring_function_shape="1=0,0=1"))
        with pytest.raises(ShapeParseError, match="values in x must be increasing"):
            build_shape(cfg)


class TestBuildPriority:
    def test_builds_priority(self):
        priority = build_priority(CapacityRatioConfig())
        assert isinstance(priority, RequestedToCapacityRatioPriority)
        assert priority.shape == default_shape()
        assert priority.max_priority == 10

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CAPACITY_RATIO_MAX_PRIORITY", "20")
        priority = build_priority()
        assert priority.max_priority == 20
        assert priority.shape == default_shape(20)

    def test_malformed_descriptor_is_fatal(self):
        cfg = CapacityRatioConfig(scoring=ScoringSettings(scoring_function_shape="blah"))
        with pytest.raises(ShapeParseError):
            build_priority(cfg)
