"""Pytest configuration and fixtures for Wagerbook tests."""

import random

import pytest

CREATED_AT = 1_700_000_000


@pytest.fixture
def created_at():
    """Fixed wager creation time (epoch seconds)."""
    return CREATED_AT


@pytest.fixture
def game():
    """Sample game reference."""
    from wagerbook.models.wager import GameRef

    return GameRef(id=7, home_team="Home", away_team="Away", name="Home vs Away")


@pytest.fixture
def seeded_rng():
    """Deterministic generator for reproducible samples."""
    return random.Random(1234)


@pytest.fixture
def make_wager(game, created_at, seeded_rng):
    """Factory for wagers with a fixed creation time and seeded odds history."""
    from wagerbook.models.wager import Wager

    def _make(stake=100, side="Home", payout=150, win_probability=0, **kwargs):
        kwargs.setdefault("rng", seeded_rng)
        kwargs.setdefault("created_at", created_at)
        return Wager(game, stake, side, payout, win_probability, **kwargs)

    return _make


@pytest.fixture
def account():
    """Account with a 500 unit balance."""
    from wagerbook.models.wager import Account

    return Account(balance=500, id=1, username="bettor")
