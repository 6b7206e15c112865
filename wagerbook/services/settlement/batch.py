"""Batch settlement of stored wagers.

Each unsettled wager linked to an account is decided and applied exactly
once, then both are written back in the same transaction. Wagers without an
account are left alone.
"""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from wagerbook.errors import AccountNotFoundError
from wagerbook.services.settlement.engine import SettlementEngine
from wagerbook.services.store import WagerStore

logger = structlog.get_logger(__name__)


async def settle_pending_wagers(
    db: AsyncSession,
    engine: SettlementEngine | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """
    Settle every unsettled wager that has an account.

    Args:
        db: Database session
        engine: Settlement engine (defaults to one using the default rng)
        limit: Max wagers to process in this run

    Returns:
        Stats dict with counts per outcome
    """
    stats = {
        "wagers_checked": 0,
        "settled_win": 0,
        "settled_lose": 0,
        "skipped_no_account": 0,
        "errors": 0,
    }
    engine = engine or SettlementEngine()
    store = WagerStore(db)

    try:
        pending = await store.list_unsettled(limit=limit, only_with_account=True)
        stats["wagers_checked"] = len(pending)
        stats["skipped_no_account"] = await store.count_unsettled_without_account()

        for wager, account_id in pending:
            try:
                account = await store.get_account(account_id)
            except AccountNotFoundError as e:
                logger.error("settlement_account_missing", wager_id=wager.id, error=str(e))
                stats["errors"] += 1
                continue

            result = engine.settle(wager, account)
            await store.save(wager)
            await store.save_account(account)

            if result.fulfilled:
                stats["settled_win"] += 1
            else:
                stats["settled_lose"] += 1

        await db.commit()
        logger.info("settlement_complete", **stats)

    except Exception as e:
        logger.error("settlement_failed", error=str(e))
        await db.rollback()
        raise

    return stats
