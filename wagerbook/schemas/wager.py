"""JSON codec for wagers.

Decoding builds the complete Wager in one step through ``Wager.restore``;
no half-initialised instance is ever handed out. The codec checks shape only
(JSON syntax and field types). Values are taken as-is, so a negative stake or
a win probability of 250 decodes without complaint.

Legacy camelCase field names (betTeam, betAmt, winAmt, winOdds, fulfillment,
currentEpochSeconds, winOddsOvertime) are accepted on decode.
"""

from typing import Any

import structlog
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from wagerbook.errors import WagerDecodeError
from wagerbook.models.wager import GameRef, Wager
from wagerbook.services.odds import OddsHistory, OddsSample

logger = structlog.get_logger(__name__)


class OddsSamplePayload(BaseModel):
    """Single odds history entry."""

    probability: int
    timestamp: int


class GamePayload(BaseModel):
    """Game reference as carried inside a wager."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = None
    home_team: str = Field(
        default="", validation_alias=AliasChoices("home_team", "homeTeam")
    )
    away_team: str = Field(
        default="", validation_alias=AliasChoices("away_team", "awayTeam")
    )
    name: str | None = None


class WagerPayload(BaseModel):
    """Serialized wager."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = None
    game: GamePayload | None = None
    side: str = Field(default="", validation_alias=AliasChoices("side", "betTeam"))
    stake: int = Field(default=0, validation_alias=AliasChoices("stake", "betAmt"))
    payout: int = Field(default=0, validation_alias=AliasChoices("payout", "winAmt"))
    win_probability: int = Field(
        default=0, validation_alias=AliasChoices("win_probability", "winOdds")
    )
    fulfilled: bool = Field(
        default=False, validation_alias=AliasChoices("fulfilled", "fulfillment")
    )
    created_at: int = Field(
        default=0, validation_alias=AliasChoices("created_at", "currentEpochSeconds")
    )
    settled_at: int | None = None
    applied_count: int = 0
    odds_history: list[OddsSamplePayload] = Field(
        default_factory=list,
        validation_alias=AliasChoices("odds_history", "winOddsOvertime"),
    )

    @field_validator("odds_history", mode="before")
    @classmethod
    def _pairs_to_samples(cls, value: Any) -> Any:
        """Accept ``[[probability, timestamp], ...]`` as well as objects."""
        if isinstance(value, list):
            return [
                {"probability": item[0], "timestamp": item[1]}
                if isinstance(item, (list, tuple)) and len(item) == 2
                else item
                for item in value
            ]
        return value

    @classmethod
    def from_wager(cls, wager: Wager) -> "WagerPayload":
        game = None
        if wager.game is not None:
            game = GamePayload(
                id=wager.game.id,
                home_team=wager.game.home_team,
                away_team=wager.game.away_team,
                name=wager.game.name,
            )
        return cls(
            id=wager.id,
            game=game,
            side=wager.side,
            stake=wager.stake,
            payout=wager.payout,
            win_probability=wager.win_probability,
            fulfilled=wager.fulfilled,
            created_at=wager.created_at,
            settled_at=wager.settled_at,
            applied_count=wager.applied_count,
            odds_history=[
                OddsSamplePayload(probability=s.probability, timestamp=s.timestamp)
                for s in wager.odds_history
            ],
        )

    def to_wager(self) -> Wager:
        game = None
        if self.game is not None:
            game = GameRef(
                id=self.game.id,
                home_team=self.game.home_team,
                away_team=self.game.away_team,
                name=self.game.name,
            )
        history = OddsHistory(
            created_at=self.created_at,
            samples=tuple(
                OddsSample(probability=s.probability, timestamp=s.timestamp)
                for s in self.odds_history
            ),
        )
        return Wager.restore(
            id=self.id,
            game=game,
            side=self.side,
            stake=self.stake,
            payout=self.payout,
            win_probability=self.win_probability,
            fulfilled=self.fulfilled,
            created_at=self.created_at,
            settled_at=self.settled_at,
            applied_count=self.applied_count,
            odds_history=history,
        )


def encode_wager(wager: Wager) -> str:
    """Serialize a wager to JSON text."""
    return WagerPayload.from_wager(wager).model_dump_json()


def decode_wager(data: str | bytes) -> Wager:
    """
    Deserialize a wager from JSON text.

    Raises:
        WagerDecodeError: If the input is not JSON or does not have the
            shape of a wager
    """
    try:
        payload = WagerPayload.model_validate_json(data)
    except ValidationError as e:
        logger.warning("wager_decode_failed", errors=e.error_count())
        raise WagerDecodeError(f"Invalid wager payload: {e}") from e
    return payload.to_wager()
