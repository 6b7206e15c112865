"""Wagering Configuration.

Defines the parameters for odds history generation and settlement.
Values come from the ``wagering`` section of defaults.yaml when present,
otherwise the dataclass defaults apply.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from wagerbook.config.settings import get_settings

logger = structlog.get_logger(__name__)


class LossBasis(str, Enum):
    """Which wager figure is debited from the account on a loss."""
    PAYOUT = "payout"  # Historical behaviour: lose the potential winnings
    STAKE = "stake"    # Lose the amount actually risked


@dataclass
class OddsWindowConfig:
    """Shape of the backward-looking odds history."""
    hours: int = 10
    interval_seconds: int = 3600
    sample_min: int = 1
    sample_max: int = 100


@dataclass
class SettlementConfig:
    """Settlement draw range and loss accounting."""
    draw_min: int = 1
    draw_max: int = 100
    loss_basis: LossBasis = LossBasis.PAYOUT


@dataclass
class WageringConfig:
    """Complete wagering configuration."""

    odds_window: OddsWindowConfig = field(default_factory=OddsWindowConfig)
    settlement: SettlementConfig = field(default_factory=SettlementConfig)

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "WageringConfig":
        """Build config from a parsed YAML mapping, ignoring unknown keys."""
        data = data or {}
        window = data.get("odds_window", {}) or {}
        settlement = data.get("settlement", {}) or {}

        odds_window = OddsWindowConfig(
            hours=int(window.get("hours", 10)),
            interval_seconds=int(window.get("interval_seconds", 3600)),
            sample_min=int(window.get("sample_min", 1)),
            sample_max=int(window.get("sample_max", 100)),
        )
        settlement_config = SettlementConfig(
            draw_min=int(settlement.get("draw_min", 1)),
            draw_max=int(settlement.get("draw_max", 100)),
            loss_basis=LossBasis(settlement.get("loss_basis", LossBasis.PAYOUT.value)),
        )
        return cls(odds_window=odds_window, settlement=settlement_config)


_WAGERING_CONFIG: WageringConfig | None = None


def get_wagering_config() -> WageringConfig:
    """Get the wagering configuration, loading defaults.yaml on first use."""
    global _WAGERING_CONFIG
    if _WAGERING_CONFIG is None:
        defaults = get_settings().load_defaults_config()
        _WAGERING_CONFIG = WageringConfig.from_mapping(defaults.get("wagering"))
        logger.debug(
            "wagering_config_loaded",
            hours=_WAGERING_CONFIG.odds_window.hours,
            loss_basis=_WAGERING_CONFIG.settlement.loss_basis.value,
        )
    return _WAGERING_CONFIG
