"""Unit tests for the Wager entity."""

import random

import pytest

from wagerbook.models.wager import GameRef, Wager, WagerState
from wagerbook.services.odds import OddsHistory
from wagerbook.services.rng import ScriptedRandom


class TestWagerConstruction:
    """Creating a wager builds its odds history immediately."""

    def test_fields_from_constructor(self, make_wager, game, created_at):
        """Constructor arguments land on the wager."""
        wager = make_wager(stake=100, side="Home", payout=150)

        assert wager.game == game
        assert wager.side == "Home"
        assert wager.stake == 100
        assert wager.payout == 150
        assert wager.win_probability == 0
        assert wager.fulfilled is False
        assert wager.created_at == created_at
        assert wager.id is None

    def test_odds_history_populated_at_creation(self, make_wager, created_at):
        """A new wager already carries its odds history."""
        wager = make_wager()

        assert isinstance(wager.odds_history, OddsHistory)
        assert len(wager.odds_history) == 10
        assert wager.odds_history.timestamps[0] == created_at
        assert wager.odds_history.timestamps[-1] == created_at - 9 * 3600

    def test_creation_time_defaults_to_now(self, game):
        """Creation time defaults to the current epoch second."""
        wager = Wager(game, 10, "Away", 20, rng=random.Random(0))

        assert wager.created_at > 1_600_000_000
        assert wager.odds_history.created_at == wager.created_at

    def test_scripted_history(self, game, created_at):
        """History samples come from the given source."""
        rng = ScriptedRandom(range(1, 11))
        wager = Wager(game, 10, "Away", 20, rng=rng, created_at=created_at)

        assert wager.odds_history.probabilities == list(range(1, 11))

    def test_history_and_created_at_are_read_only(self, make_wager):
        """History and creation time cannot be reassigned."""
        wager = make_wager()

        with pytest.raises(AttributeError):
            wager.odds_history = None
        with pytest.raises(AttributeError):
            wager.created_at = 0

    def test_win_probability_is_mutable_and_independent(self, make_wager):
        """Changing win probability leaves the history alone."""
        wager = make_wager(win_probability=20)
        before = wager.odds_history

        wager.win_probability = 80

        assert wager.win_probability == 80
        assert wager.odds_history is before

    def test_str_matches_bet_description(self, make_wager):
        """String form reads "Bet on <game> for <stake>"."""
        wager = make_wager(stake=100)

        assert str(wager) == "Bet on Home vs Away for 100"


class TestWagerState:
    """Lifecycle derived from settlement fields."""

    def test_new_wager_is_unsettled(self, make_wager):
        """A fresh wager is unsettled."""
        assert make_wager().state == WagerState.UNSETTLED

    def test_settled_then_applied(self, make_wager):
        """State moves from settled to applied."""
        wager = make_wager()
        wager.settled_at = 1
        assert wager.state == WagerState.SETTLED

        wager.applied_count = 1
        assert wager.state == WagerState.APPLIED


class TestWagerEquality:
    """Equality compares the persistence id only."""

    def test_unsaved_wager_equals_only_itself(self, make_wager):
        """Without an id a wager equals only itself."""
        a = make_wager()
        b = make_wager()

        assert a == a
        assert a != b

    def test_same_id_is_equal(self, make_wager):
        """Wagers with the same id are equal."""
        a = make_wager(stake=1)
        b = make_wager(stake=999)
        a.id = b.id = 42

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_different_ids_not_equal(self, make_wager):
        """Different ids are not equal."""
        a = make_wager()
        b = make_wager()
        a.id, b.id = 1, 2

        assert a != b

    def test_not_equal_to_other_types(self, make_wager):
        """A wager never equals a non-wager."""
        wager = make_wager()
        wager.id = 1

        assert wager != 1


class TestWagerRestore:
    """Restoring builds a complete wager without re-sampling."""

    def test_restore_keeps_given_history(self, game, created_at):
        """Restore takes the history as given."""
        history = OddsHistory.from_pairs([[10, created_at], [20, created_at - 3600]], created_at)

        wager = Wager.restore(
            id=3,
            game=game,
            stake=50,
            side="Away",
            payout=75,
            win_probability=60,
            fulfilled=True,
            created_at=created_at,
            settled_at=created_at + 10,
            applied_count=1,
            odds_history=history,
        )

        assert wager.id == 3
        assert wager.odds_history is history
        assert wager.fulfilled is True
        assert wager.state == WagerState.APPLIED

    def test_game_str_without_name(self):
        """An unnamed game prints as home vs away."""
        game = GameRef(id=None, home_team="Duke", away_team="Kansas")

        assert str(game) == "Duke vs Kansas"
