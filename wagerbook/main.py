"""Wagerbook settlement runner.

Settles every pending wager in the configured database:

    python -m wagerbook.main
"""

import asyncio
from typing import Any

import structlog

from wagerbook.config import get_settings
from wagerbook.logging_config import configure_logging
from wagerbook.models.base import get_session
from wagerbook.services.rng import make_rng
from wagerbook.services.settlement import SettlementEngine, settle_pending_wagers

logger = structlog.get_logger(__name__)


async def _run_settlement_async(
    database_url: str | None, seed: int | None
) -> dict[str, Any]:
    engine = SettlementEngine(rng=make_rng(seed)) if seed is not None else None
    async with get_session(database_url) as session:
        return await settle_pending_wagers(session, engine=engine)


def run_settlement(
    database_url: str | None = None, seed: int | None = None
) -> dict[str, Any]:
    """Settle pending wagers and return the run stats."""
    configure_logging()
    settings = get_settings()
    seeded = seed is not None or settings.random_seed is not None
    logger.info("starting_settlement", seeded=seeded)
    return asyncio.run(_run_settlement_async(database_url, seed))


def main() -> None:
    stats = run_settlement()
    logger.info("settlement_run_finished", **stats)


if __name__ == "__main__":
    main()
