"""Configuration for Wagerbook."""

from wagerbook.config.settings import Settings, get_settings
from wagerbook.config.wagering import (
    LossBasis,
    OddsWindowConfig,
    SettlementConfig,
    WageringConfig,
    get_wagering_config,
)

__all__ = [
    "Settings",
    "get_settings",
    "LossBasis",
    "OddsWindowConfig",
    "SettlementConfig",
    "WageringConfig",
    "get_wagering_config",
]
