"""Wager entity and the collaborators it references.

A Wager records a bet on a game: the side picked, the stake, the payout, the
win probability used at settlement and an odds history generated at
creation. Games and accounts are external; the wager only holds a
reference to a game, and an account is only touched by the settlement engine.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import structlog

from wagerbook.config import OddsWindowConfig
from wagerbook.services.odds import OddsHistory, generate_odds_history
from wagerbook.services.rng import RandomSource

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GameRef:
    """Identity-only reference to a game."""

    id: int | None
    home_team: str
    away_team: str
    name: str | None = None

    def __str__(self) -> str:
        return self.name or f"{self.home_team} vs {self.away_team}"


@dataclass
class Account:
    """Bettor account whose balance settlement adjusts."""

    balance: int
    id: int | None = None
    username: str | None = None


class WagerState(str, Enum):
    """Lifecycle position of a wager."""
    UNSETTLED = "UNSETTLED"  # Odds history built, no decision yet
    SETTLED = "SETTLED"      # Fulfillment decided
    APPLIED = "APPLIED"      # Outcome applied to an account


def now_epoch() -> int:
    """Current time in whole epoch seconds."""
    return int(datetime.now(timezone.utc).timestamp())


class Wager:
    """
    Single bet on a game.

    The odds history is generated inside the constructor and exposed
    read-only. ``win_probability`` stays mutable and is what settlement
    uses; the history is a separate simulated trace.

    Equality follows the persistence id: two wagers are equal when both
    have been assigned the same id. Until then a wager only equals itself.
    """

    def __init__(
        self,
        game: GameRef,
        stake: int,
        side: str,
        payout: int,
        win_probability: int = 0,
        *,
        rng: RandomSource | None = None,
        created_at: int | None = None,
        config: OddsWindowConfig | None = None,
    ):
        self.game = game
        self.side = side
        self.stake = stake
        self.payout = payout
        self.win_probability = win_probability
        self.fulfilled = False
        self.settled_at: int | None = None
        self.applied_count = 0
        self.id: int | None = None

        self._created_at = now_epoch() if created_at is None else int(created_at)
        self._odds_history = generate_odds_history(self._created_at, rng, config)

        logger.debug(
            "wager_created",
            game=str(game),
            side=side,
            stake=stake,
            payout=payout,
            created_at=self._created_at,
        )

    @classmethod
    def restore(
        cls,
        *,
        game: GameRef | None,
        stake: int,
        side: str,
        payout: int,
        win_probability: int,
        fulfilled: bool,
        created_at: int,
        odds_history: OddsHistory,
        id: int | None = None,
        settled_at: int | None = None,
        applied_count: int = 0,
    ) -> "Wager":
        """
        Rebuild a wager from stored or decoded fields in one step.

        The odds history is taken as given; nothing is re-sampled.
        """
        wager = cls.__new__(cls)
        wager.game = game
        wager.side = side
        wager.stake = stake
        wager.payout = payout
        wager.win_probability = win_probability
        wager.fulfilled = fulfilled
        wager.settled_at = settled_at
        wager.applied_count = applied_count
        wager.id = id
        wager._created_at = int(created_at)
        wager._odds_history = odds_history
        return wager

    @property
    def created_at(self) -> int:
        return self._created_at

    @property
    def odds_history(self) -> OddsHistory:
        return self._odds_history

    @property
    def state(self) -> WagerState:
        if self.settled_at is None:
            return WagerState.UNSETTLED
        if self.applied_count == 0:
            return WagerState.SETTLED
        return WagerState.APPLIED

    def core_fields(self) -> dict[str, Any]:
        """Fields that survive serialization, for comparison and logging."""
        return {
            "stake": self.stake,
            "payout": self.payout,
            "side": self.side,
            "win_probability": self.win_probability,
            "fulfilled": self.fulfilled,
            "created_at": self.created_at,
            "odds_history": self.odds_history.to_pairs(),
        }

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Wager):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((Wager, self.id))

    def __str__(self) -> str:
        return f"Bet on {self.game} for {self.stake}"

    def __repr__(self) -> str:
        return (
            f"<Wager id={self.id} {self.side} stake={self.stake} "
            f"payout={self.payout} state={self.state.value}>"
        )
