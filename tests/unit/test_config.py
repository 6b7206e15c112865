"""Unit tests for configuration, random sources and logging setup."""

import random

import pytest
import structlog

from wagerbook.config import (
    LossBasis,
    Settings,
    WageringConfig,
    get_wagering_config,
)
from wagerbook.logging_config import configure_logging
from wagerbook.services.rng import ScriptedRandom, default_rng, make_rng


class TestWageringConfig:
    """Loading wagering parameters."""

    def test_packaged_defaults(self):
        """The packaged defaults give a ten hour window and payout losses."""
        config = get_wagering_config()

        assert config.odds_window.hours == 10
        assert config.odds_window.interval_seconds == 3600
        assert (config.odds_window.sample_min, config.odds_window.sample_max) == (1, 100)
        assert (config.settlement.draw_min, config.settlement.draw_max) == (1, 100)
        assert config.settlement.loss_basis == LossBasis.PAYOUT

    def test_from_mapping_overrides(self):
        """Values in the mapping replace the defaults."""
        config = WageringConfig.from_mapping({
            "odds_window": {"hours": 24, "interval_seconds": 1800},
            "settlement": {"loss_basis": "stake"},
        })

        assert config.odds_window.hours == 24
        assert config.odds_window.interval_seconds == 1800
        assert config.odds_window.sample_max == 100
        assert config.settlement.loss_basis == LossBasis.STAKE

    def test_from_mapping_none_uses_defaults(self):
        """A missing section falls back to defaults."""
        assert WageringConfig.from_mapping(None) == WageringConfig()

    def test_unknown_loss_basis_rejected(self):
        """An unknown loss basis is a config error."""
        with pytest.raises(ValueError):
            WageringConfig.from_mapping({"settlement": {"loss_basis": "half"}})

    def test_missing_defaults_file(self, tmp_path):
        """A missing defaults file reads as empty."""
        settings = Settings(config_path=tmp_path / "missing.yaml")

        assert settings.load_defaults_config() == {}

    def test_settings_from_environment(self, monkeypatch):
        """Settings are read from the environment."""
        monkeypatch.setenv("RANDOM_SEED", "77")
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///x.db")

        settings = Settings()

        assert settings.random_seed == 77
        assert settings.database_url == "sqlite+aiosqlite:///x.db"


class TestRandomSources:
    """Seedable and scripted sources."""

    def test_same_seed_same_sequence(self):
        """Equal seeds replay the same draws."""
        a = make_rng(5)
        b = make_rng(5)

        assert [a.randint(1, 100) for _ in range(20)] == [b.randint(1, 100) for _ in range(20)]

    def test_default_rng_is_shared(self):
        """The default source is one shared instance."""
        assert default_rng() is default_rng()
        assert isinstance(default_rng(), random.Random)

    def test_scripted_values_in_order(self):
        """Scripted values come back in order."""
        rng = ScriptedRandom([1, 100, 42])

        assert [rng.randint(1, 100) for _ in range(3)] == [1, 100, 42]

    def test_scripted_exhaustion(self):
        """Running out of scripted values raises."""
        rng = ScriptedRandom([])

        with pytest.raises(ValueError):
            rng.randint(1, 100)

    def test_scripted_value_out_of_range(self):
        """A scripted value outside the bounds raises."""
        rng = ScriptedRandom([101])

        with pytest.raises(ValueError):
            rng.randint(1, 100)


class TestLogging:
    """structlog setup."""

    def test_configure_is_repeatable(self):
        """Configuring logging twice is harmless."""
        settings = Settings(log_json=False, log_level="DEBUG")

        configure_logging(settings, force=True)
        configure_logging(settings)

        logger = structlog.get_logger("wagerbook.test")
        logger.info("logging_configured", check=True)
        assert structlog.is_configured()
