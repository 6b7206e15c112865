"""Persistence store for wagers and accounts.

Converts between the domain objects (Wager, Account, GameRef) and their
database records. The store assigns wager ids; nothing else does.
"""

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from wagerbook.errors import AccountNotFoundError, WagerNotFoundError
from wagerbook.models.domain import AccountRecord, GameRecord, WagerRecord
from wagerbook.models.wager import Account, GameRef, Wager
from wagerbook.services.odds import OddsHistory

logger = structlog.get_logger(__name__)


def game_from_record(record: GameRecord) -> GameRef:
    return GameRef(
        id=record.id,
        home_team=record.home_team,
        away_team=record.away_team,
        name=record.name,
    )


def account_from_record(record: AccountRecord) -> Account:
    return Account(balance=record.balance, id=record.id, username=record.username)


def wager_to_record(wager: Wager, account_id: int | None = None) -> WagerRecord:
    """Build a new record from a wager whose game has already been stored."""
    if wager.game is None or wager.game.id is None:
        raise ValueError("Wager game must be stored before the wager")
    return WagerRecord(
        game_id=wager.game.id,
        account_id=account_id,
        side=wager.side,
        stake=wager.stake,
        payout=wager.payout,
        win_probability=wager.win_probability,
        fulfilled=wager.fulfilled,
        created_epoch=wager.created_at,
        settled_epoch=wager.settled_at,
        applied_count=wager.applied_count,
        odds_history=wager.odds_history.to_pairs(),
    )


def wager_from_record(record: WagerRecord) -> Wager:
    """Restore a wager, including its stored odds history, from a record."""
    return Wager.restore(
        id=record.id,
        game=game_from_record(record.game),
        side=record.side,
        stake=record.stake,
        payout=record.payout,
        win_probability=record.win_probability,
        fulfilled=record.fulfilled,
        created_at=record.created_epoch,
        settled_at=record.settled_epoch,
        applied_count=record.applied_count,
        odds_history=OddsHistory.from_pairs(
            record.odds_history or [], record.created_epoch
        ),
    )


class WagerStore:
    """Async store for wagers, games and accounts on one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add_game(self, game: GameRef) -> GameRef:
        """Store a game and return the reference with its id."""
        record = GameRecord(
            home_team=game.home_team,
            away_team=game.away_team,
            name=game.name,
        )
        self.db.add(record)
        await self.db.flush()
        return game_from_record(record)

    async def add_account(self, account: Account) -> Account:
        """Store an account and assign its id."""
        record = AccountRecord(username=account.username, balance=account.balance)
        self.db.add(record)
        await self.db.flush()
        account.id = record.id
        return account

    async def add(self, wager: Wager, account_id: int | None = None) -> Wager:
        """Store a new wager and assign its id."""
        record = wager_to_record(wager, account_id)
        self.db.add(record)
        await self.db.flush()
        wager.id = record.id
        logger.info("wager_stored", wager_id=wager.id, account_id=account_id)
        return wager

    async def _get_record(self, wager_id: int) -> WagerRecord:
        result = await self.db.execute(
            select(WagerRecord)
            .options(joinedload(WagerRecord.game))
            .where(WagerRecord.id == wager_id)
            .execution_options(populate_existing=True)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise WagerNotFoundError(wager_id)
        return record

    async def get(self, wager_id: int) -> Wager:
        """Load a wager by id."""
        return wager_from_record(await self._get_record(wager_id))

    async def save(self, wager: Wager) -> None:
        """Write back the fields that change after creation."""
        if wager.id is None:
            raise ValueError("Cannot save a wager that was never added")
        record = await self._get_record(wager.id)
        record.win_probability = wager.win_probability
        record.fulfilled = wager.fulfilled
        record.settled_epoch = wager.settled_at
        record.applied_count = wager.applied_count
        await self.db.flush()

    async def get_account(self, account_id: int) -> Account:
        """Load an account by id."""
        record = await self.db.get(AccountRecord, account_id)
        if record is None:
            raise AccountNotFoundError(account_id)
        return account_from_record(record)

    async def save_account(self, account: Account) -> None:
        """Write back an account balance."""
        if account.id is None:
            raise ValueError("Cannot save an account that was never added")
        record = await self.db.get(AccountRecord, account.id)
        if record is None:
            raise AccountNotFoundError(account.id)
        record.balance = account.balance
        await self.db.flush()

    async def list_unsettled(
        self, limit: int | None = None, only_with_account: bool = False
    ) -> list[tuple[Wager, int | None]]:
        """Wagers with no fulfillment decision yet, with their account ids.

        With ``only_with_account`` set, wagers not linked to an account are
        filtered out before ``limit`` applies.
        """
        query = (
            select(WagerRecord)
            .options(joinedload(WagerRecord.game))
            .where(WagerRecord.settled_epoch.is_(None))
            .order_by(WagerRecord.id)
            .execution_options(populate_existing=True)
        )
        if only_with_account:
            query = query.where(WagerRecord.account_id.is_not(None))
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return [(wager_from_record(r), r.account_id) for r in result.scalars().all()]

    async def count_unsettled_without_account(self) -> int:
        """Number of undecided wagers not linked to any account."""
        result = await self.db.execute(
            select(func.count())
            .select_from(WagerRecord)
            .where(
                WagerRecord.settled_epoch.is_(None),
                WagerRecord.account_id.is_(None),
            )
        )
        return result.scalar_one()
