"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import pytest
import toml

from fragstats.config import (
    create_template_config,
    get_config_dir,
    get_db_path,
    get_rating_settings,
    load_config,
)
from fragstats.models import MetricType, RatingSettings


@pytest.fixture
def config_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestLoadConfig:
    """Reading config.toml."""

    def test_missing_file(self, config_dir: Path):
        assert load_config(config_dir / "config.toml") == {}

    def test_invalid_toml_is_ignored(self, config_dir: Path):
        path = config_dir / "config.toml"
        path.write_text("[rating\nbase_rating = ")

        assert load_config(path) == {}

    def test_template_round_trip(self, config_dir: Path):
        path = create_template_config(config_dir / "nested" / "config.toml")

        config = load_config(path)

        assert path.exists()
        assert get_rating_settings(config) == RatingSettings()


class TestRatingSettings:
    """Building RatingSettings from the [rating] section."""

    def test_defaults_without_section(self):
        settings = get_rating_settings({})

        assert settings.base_rating == 1500
        assert settings.conversion_factor == 50
        assert settings.global_average(MetricType.HSR) == 20.0

    def test_overrides(self):
        config = {
            "rating": {
                "base_rating": 1000,
                "minutes_per_game": 40,
                "global_averages": {"adr": 90, "kda": 1.2},
            }
        }

        settings = get_rating_settings(config)

        assert settings.base_rating == 1000
        assert settings.minutes_per_game == 40
        assert settings.global_average(MetricType.ADR) == 90.0
        assert settings.global_average(MetricType.KDA) == 1.2
        assert settings.global_average(MetricType.HSR) == 20.0

    def test_unknown_metric_ignored(self):
        config = {"rating": {"global_averages": {"kpr": 0.8}}}

        settings = get_rating_settings(config)

        assert set(settings.global_averages) == set(MetricType)

    def test_non_numeric_average_keeps_default(self):
        config = {"rating": {"global_averages": {"hsr": "lots", "adr": float("nan"), "kda": 1.4}}}

        settings = get_rating_settings(config)

        assert settings.global_average(MetricType.HSR) == 20.0
        assert settings.global_average(MetricType.ADR) == 75.0
        assert settings.global_average(MetricType.KDA) == 1.4

    def test_unknown_keys_ignored(self):
        assert get_rating_settings({"rating": {"colour": "blue"}}) == RatingSettings()


class TestPaths:
    """Config directory and database location."""

    def test_home_override(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FRAGSTATS_HOME", str(config_dir))

        assert get_config_dir() == config_dir
        assert get_db_path({}) == config_dir / "fragstats.db"

    def test_default_location(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("FRAGSTATS_HOME", raising=False)

        assert get_config_dir() == Path.home() / ".config" / "fragstats"

    def test_db_path_override(self, config_dir: Path):
        config = {"storage": {"db_path": str(config_dir / "games.db")}}

        assert get_db_path(config) == config_dir / "games.db"

    def test_empty_db_path_uses_default(self, config_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FRAGSTATS_HOME", str(config_dir))
        written = create_template_config(config_dir / "config.toml")

        assert get_db_path(toml.load(written)) == config_dir / "fragstats.db"
