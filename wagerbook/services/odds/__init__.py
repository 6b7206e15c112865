"""Odds history module for Wagerbook."""

from wagerbook.services.odds.history import (
    OddsHistory,
    OddsSample,
    generate_odds_history,
    sample_probability,
)

__all__ = ["OddsHistory", "OddsSample", "generate_odds_history", "sample_probability"]
