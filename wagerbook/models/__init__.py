"""Domain objects and database models for Wagerbook."""

from wagerbook.models.base import Base, get_engine, get_session, get_session_factory
from wagerbook.models.domain import AccountRecord, GameRecord, WagerRecord
from wagerbook.models.wager import Account, GameRef, Wager, WagerState

__all__ = [
    # Base
    "Base",
    "get_engine",
    "get_session",
    "get_session_factory",
    # Records
    "GameRecord",
    "AccountRecord",
    "WagerRecord",
    # Domain
    "Account",
    "GameRef",
    "Wager",
    "WagerState",
]
