"""Database records for Wagerbook.

These map the wager, its game and the bettor account onto tables. The
domain objects in ``wagerbook.models.wager`` carry the behaviour; records
are converted to and from them by ``wagerbook.services.store``.
"""

from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wagerbook.models.base import Base, TimestampMixin

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class GameRecord(Base, TimestampMixin):
    """Game a wager is placed on. Reference data only."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    home_team: Mapped[str] = mapped_column(String(200), nullable=False)
    away_team: Mapped[str] = mapped_column(String(200), nullable=False)
    name: Mapped[str | None] = mapped_column(String(300), nullable=True)

    wagers: Mapped[list["WagerRecord"]] = relationship(
        "WagerRecord", back_populates="game"
    )

    def __repr__(self) -> str:
        return f"<GameRecord {self.home_team} vs {self.away_team}>"


class AccountRecord(Base, TimestampMixin):
    """Bettor account. Balance is in whole currency units."""

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    wagers: Mapped[list["WagerRecord"]] = relationship(
        "WagerRecord", back_populates="account"
    )

    def __repr__(self) -> str:
        return f"<AccountRecord {self.id} balance={self.balance}>"


class WagerRecord(Base, TimestampMixin):
    """
    Stored wager.

    The odds history is kept as a JSON list of [probability, timestamp]
    pairs so it can be restored exactly rather than re-sampled.
    """

    __tablename__ = "wagers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    game_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("games.id"), nullable=False
    )
    account_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("accounts.id"), nullable=True
    )
    side: Mapped[str] = mapped_column(String(200), nullable=False)
    stake: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payout: Mapped[int] = mapped_column(BigInteger, nullable=False)
    win_probability: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    fulfilled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_epoch: Mapped[int] = mapped_column(
        BigInteger, nullable=False, doc="Wager creation time in epoch seconds"
    )
    settled_epoch: Mapped[int | None] = mapped_column(
        BigInteger, nullable=True, doc="Time of the last fulfillment decision"
    )
    applied_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    odds_history: Mapped[list[Any]] = mapped_column(
        JSONType, nullable=False, default=list
    )

    game: Mapped["GameRecord"] = relationship("GameRecord", back_populates="wagers")
    account: Mapped["AccountRecord | None"] = relationship(
        "AccountRecord", back_populates="wagers"
    )

    __table_args__ = (
        Index("idx_wagers_unsettled", "settled_epoch", "account_id"),
    )

    def __repr__(self) -> str:
        return f"<WagerRecord {self.id} {self.side} stake={self.stake}>"
