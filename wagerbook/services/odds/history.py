"""Odds history generation.

Every wager carries a fixed-length, backward-looking trace of win-probability
samples taken at hourly steps from its creation time. The trace is produced
once, synchronously, when the wager is created and never changes afterwards.

NOTE: the sampler is a placeholder. It draws uniformly from the configured
range and ignores the timestamp it is given; there is no real odds model yet.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import structlog

from wagerbook.config import OddsWindowConfig, get_wagering_config
from wagerbook.services.rng import RandomSource, default_rng

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OddsSample:
    """Single point in an odds history."""

    probability: int
    timestamp: int


@dataclass(frozen=True)
class OddsHistory:
    """
    Immutable time series of odds samples.

    Entry ``j`` is the sample for ``created_at - j * interval`` seconds, so the
    newest sample comes first.
    """

    created_at: int
    samples: tuple[OddsSample, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[OddsSample]:
        return iter(self.samples)

    def __getitem__(self, index: int) -> OddsSample:
        return self.samples[index]

    @property
    def probabilities(self) -> list[int]:
        return [s.probability for s in self.samples]

    @property
    def timestamps(self) -> list[int]:
        return [s.timestamp for s in self.samples]

    def to_pairs(self) -> list[list[int]]:
        """Convert to ``[[probability, timestamp], ...]`` for storage."""
        return [[s.probability, s.timestamp] for s in self.samples]

    @classmethod
    def from_pairs(
        cls, pairs: Iterable[Sequence[int]], created_at: int
    ) -> "OddsHistory":
        """Rebuild a stored trace without drawing new samples."""
        samples = tuple(
            OddsSample(probability=int(p), timestamp=int(t)) for p, t in pairs
        )
        return cls(created_at=int(created_at), samples=samples)


def sample_probability(
    timestamp: int,
    rng: RandomSource | None = None,
    config: OddsWindowConfig | None = None,
) -> int:
    """
    Sample the win probability for a point in time.

    Returns a uniform integer in [sample_min, sample_max], 1-100 by default.
    ``timestamp`` is accepted but does not influence the draw.
    """
    rng = rng or default_rng()
    config = config or get_wagering_config().odds_window
    return rng.randint(config.sample_min, config.sample_max)


def generate_odds_history(
    created_at: int,
    rng: RandomSource | None = None,
    config: OddsWindowConfig | None = None,
    hours: int | None = None,
) -> OddsHistory:
    """
    Generate the odds history for a wager created at ``created_at``.

    Args:
        created_at: Creation time in epoch seconds
        rng: Random source for the samples
        config: Window configuration (defaults to defaults.yaml)
        hours: Override for the window length N

    Returns:
        OddsHistory with exactly N samples
    """
    rng = rng or default_rng()
    config = config or get_wagering_config().odds_window
    window = config.hours if hours is None else hours
    if window < 0:
        raise ValueError(f"Odds window must be non-negative, got {window}")

    samples = []
    for j in range(window):
        timestamp = created_at - j * config.interval_seconds
        samples.append(
            OddsSample(
                probability=sample_probability(timestamp, rng, config),
                timestamp=timestamp,
            )
        )

    history = OddsHistory(created_at=created_at, samples=tuple(samples))
    logger.debug("odds_history_generated", created_at=created_at, samples=len(history))
    return history
