"""
Configuration Tests
===================

Tests for YAML loading, environment overrides and settings conversion.
"""

import logging

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable load_config reads."""
    for name in (
        "SLOPES_CONFIG", "SLOPES_WIDTH", "SLOPES_HEIGHT", "SLOPES_SAMPLES_PER_ROW",
        "SLOPES_NUM_ROWS", "SLOPES_PERLIN_RATIO", "SLOPES_NOISE_SEED",
        "SLOPES_JITTER_SEED", "SLOPES_PORT", "SLOPES_LOG_LEVEL", "PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, clean_env, tmp_path):
        from slopes.config import load_config

        settings = load_config(str(tmp_path / "missing.yaml"))

        assert settings.generation.width == 552
        assert settings.generation.height == 736
        assert settings.generation.vertical_margin == 60
        assert settings.generation.horizontal_margin == 50
        assert settings.generation.distance_between_rows == 9
        assert settings.generation.perlin_ratio == 0.8
        assert settings.generation.samples_per_row == 250
        assert settings.generation.noise_seed == 20
        assert settings.generation.jitter_seed is None
        assert settings.postprocess.grouping_tolerance == 1e-6

    def test_yaml_values(self, clean_env, tmp_path):
        from slopes.config import load_config

        path = tmp_path / "config.yaml"
        path.write_text(
            "generation:\n"
            "  width: 300\n"
            "  num_rows: 12\n"
            "export:\n"
            "  stroke_color: navy\n"
        )
        settings = load_config(str(path))

        assert settings.generation.width == 300
        assert settings.generation.num_rows == 12
        assert settings.generation.height == 736
        assert settings.export.stroke_color == "navy"

    def test_config_path_from_environment(self, clean_env, tmp_path):
        from slopes.config import load_config

        path = tmp_path / "other.yaml"
        path.write_text("generation:\n  samples_per_row: 40\n")
        clean_env.setenv("SLOPES_CONFIG", str(path))

        assert load_config().generation.samples_per_row == 40

    def test_environment_overrides_yaml(self, clean_env, tmp_path):
        from slopes.config import load_config

        path = tmp_path / "config.yaml"
        path.write_text("generation:\n  width: 300\n  perlin_ratio: 0.5\n")
        clean_env.setenv("SLOPES_WIDTH", "640")
        clean_env.setenv("SLOPES_JITTER_SEED", "7")
        clean_env.setenv("SLOPES_LOG_LEVEL", "DEBUG")
        clean_env.setenv("PORT", "9000")

        settings = load_config(str(path))

        assert settings.generation.width == 640
        assert settings.generation.perlin_ratio == 0.5
        assert settings.generation.jitter_seed == 7
        assert settings.logging.level == "DEBUG"
        assert settings.server.port == 9000

    def test_missing_explicit_file_warns(self, clean_env, tmp_path, caplog):
        """A config path that does not exist is reported, not silently ignored."""
        from slopes.config import load_config

        missing = tmp_path / "missing.yaml"
        with caplog.at_level(logging.WARNING, logger="slopes.config"):
            settings = load_config(str(missing))

        assert settings.generation.width == 552
        assert any(
            r.levelno == logging.WARNING and str(missing) in r.getMessage()
            for r in caplog.records
        )

    def test_infinite_environment_value_rejected(self, clean_env, tmp_path):
        from pydantic import ValidationError

        from slopes.config import load_config

        clean_env.setenv("SLOPES_WIDTH", "inf")

        with pytest.raises(ValidationError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml_value_rejected(self, clean_env, tmp_path):
        from pydantic import ValidationError

        from slopes.config import load_config

        path = tmp_path / "config.yaml"
        path.write_text("generation:\n  perlin_ratio: 3\n")

        with pytest.raises(ValidationError):
            load_config(str(path))


class TestGenerationSettings:
    """Tests for GenerationSettings.to_generation_config."""

    def test_builds_generation_config(self):
        from slopes.config import GenerationSettings

        config = GenerationSettings(samples_per_row=80).to_generation_config()

        assert config.margins == (60, 50)
        assert config.samples_per_row == 80
        assert config.perlin_ratio == 0.8

    def test_non_finite_settings(self):
        from pydantic import ValidationError

        from slopes.config import GenerationSettings

        with pytest.raises(ValidationError):
            GenerationSettings(height=float("inf"))

    def test_undrawable_settings(self):
        """Margins that swallow the page are reported as configuration errors."""
        from slopes.config import GenerationSettings
        from slopes.errors import InvalidConfigurationError

        with pytest.raises(InvalidConfigurationError):
            GenerationSettings(width=100, horizontal_margin=50).to_generation_config()
