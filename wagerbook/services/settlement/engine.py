"""Wager settlement engine.

Decides whether a wager pays out and applies the result to an account.

Decision:
    r = uniform integer in [1, 100]
    fulfilled = r <= win_probability

Balance application:
    fulfilled      -> balance + payout
    not fulfilled  -> balance - payout   (or stake, with LossBasis.STAKE)

The engine holds no locks and keeps no record of what it has settled.
Calling decide() twice re-draws the outcome and calling apply() twice
moves the balance twice. Callers that need exactly-once behaviour have to
guard for it (see settlement.batch).
"""

from dataclasses import dataclass
from typing import Any

import structlog

from wagerbook.config import LossBasis, SettlementConfig, get_wagering_config
from wagerbook.models.wager import Account, Wager, now_epoch
from wagerbook.services.rng import RandomSource, default_rng

logger = structlog.get_logger(__name__)


@dataclass
class SettlementResult:
    """Outcome of deciding and applying a single wager."""

    wager_id: int | None
    fulfilled: bool
    draw: int
    win_probability: int
    balance_before: int
    balance_after: int

    @property
    def delta(self) -> int:
        return self.balance_after - self.balance_before

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "wager_id": self.wager_id,
            "fulfilled": self.fulfilled,
            "draw": self.draw,
            "win_probability": self.win_probability,
            "balance_before": self.balance_before,
            "balance_after": self.balance_after,
            "delta": self.delta,
        }


def loss_amount(wager: Wager, basis: LossBasis = LossBasis.PAYOUT) -> int:
    """Amount debited when a wager does not pay out."""
    if basis == LossBasis.STAKE:
        return wager.stake
    return wager.payout


class SettlementEngine:
    """
    Settle wagers against an injected random source.

    Pass a seeded ``random.Random`` or a ``ScriptedRandom`` to get
    reproducible outcomes.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        config: SettlementConfig | None = None,
    ):
        """
        Initialize settlement engine.

        Args:
            rng: Random source for the settlement draw. Defaults to the
                 process-wide generator.
            config: Settlement configuration. If not provided, loads from
                    defaults.yaml
        """
        self.rng = rng or default_rng()
        self.config = config or get_wagering_config().settlement

    def draw(self) -> int:
        """Draw one uniform integer from the settlement range."""
        return self.rng.randint(self.config.draw_min, self.config.draw_max)

    def _decide(self, wager: Wager) -> int:
        p = wager.win_probability
        if not self.config.draw_min <= p <= self.config.draw_max:
            # 0 or below never pays, draw_max or above always pays
            logger.warning(
                "win_probability_out_of_range",
                wager_id=wager.id,
                win_probability=p,
            )
        if wager.settled_at is not None:
            logger.warning(
                "wager_resettled",
                wager_id=wager.id,
                previous_outcome=wager.fulfilled,
            )

        r = self.draw()
        wager.fulfilled = r <= p
        wager.settled_at = now_epoch()

        logger.info(
            "fulfillment_decided",
            wager_id=wager.id,
            draw=r,
            win_probability=p,
            fulfilled=wager.fulfilled,
        )
        return r

    def decide(self, wager: Wager) -> bool:
        """Decide whether the wager pays out and record it on the wager."""
        self._decide(wager)
        return wager.fulfilled

    def apply(self, wager: Wager, account: Account) -> Account:
        """
        Apply the wager's outcome to an account balance.

        No lower bound is enforced; the balance may go negative.

        Returns:
            The same account, with its balance updated
        """
        if wager.settled_at is None:
            logger.warning("apply_before_settlement", wager_id=wager.id)
        elif wager.applied_count > 0:
            logger.warning(
                "wager_applied_again",
                wager_id=wager.id,
                applied_count=wager.applied_count,
            )

        before = account.balance
        if wager.fulfilled:
            account.balance = before + wager.payout
        else:
            account.balance = before - loss_amount(wager, self.config.loss_basis)
        wager.applied_count += 1

        logger.info(
            "balance_applied",
            wager_id=wager.id,
            account_id=account.id,
            fulfilled=wager.fulfilled,
            balance_before=before,
            balance_after=account.balance,
        )
        return account

    def settle(self, wager: Wager, account: Account) -> SettlementResult:
        """
        Decide the wager and apply it to the account.

        Args:
            wager: Wager to settle
            account: Account to credit or debit

        Returns:
            SettlementResult with the draw and balance movement
        """
        draw = self._decide(wager)
        before = account.balance
        self.apply(wager, account)
        return SettlementResult(
            wager_id=wager.id,
            fulfilled=wager.fulfilled,
            draw=draw,
            win_probability=wager.win_probability,
            balance_before=before,
            balance_after=account.balance,
        )


# Convenience function for one-off settlement
def settle_wager(
    wager: Wager,
    account: Account,
    rng: RandomSource | None = None,
) -> SettlementResult:
    """
    Quick settlement with default configuration.

    Args:
        wager: Wager to settle
        account: Account to credit or debit
        rng: Optional random source

    Returns:
        SettlementResult
    """
    engine = SettlementEngine(rng=rng)
    return engine.settle(wager, account)
