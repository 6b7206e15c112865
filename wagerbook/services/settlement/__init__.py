"""Settlement module for Wagerbook."""

from wagerbook.services.settlement.batch import settle_pending_wagers
from wagerbook.services.settlement.engine import (
    SettlementEngine,
    SettlementResult,
    loss_amount,
    settle_wager,
)

__all__ = [
    "SettlementEngine",
    "SettlementResult",
    "loss_amount",
    "settle_pending_wagers",
    "settle_wager",
]
