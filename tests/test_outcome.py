"""Tests for outcome resolution and the scoreboard."""

import random
from collections import Counter
from itertools import product
from unittest.mock import MagicMock

import pytest

from stage.domain.entities import Play, SessionState, TurnOutcome
from stage.outcome import OutcomeEngine, format_record, judge, scoreboard_note


def fixed_engine(draw: Play) -> OutcomeEngine:
    rng = MagicMock(spec=random.Random)
    rng.choice.return_value = draw
    return OutcomeEngine(rng)


class TestJudge:
    def test_ties(self):
        for play in Play:
            assert judge(play, play) is TurnOutcome.TIE

    def test_non_tie_pairs_split_evenly(self):
        pairs = [(u, o) for u, o in product(Play, Play) if u is not o]
        outcomes = {pair: judge(*pair) for pair in pairs}

        assert len(pairs) == 6
        wins = {pair for pair, outcome in outcomes.items() if outcome is TurnOutcome.WIN}
        losses = {pair for pair, outcome in outcomes.items() if outcome is TurnOutcome.LOSS}
        assert wins == {
            (Play.ROCK, Play.SCISSORS),
            (Play.SCISSORS, Play.PAPER),
            (Play.PAPER, Play.ROCK),
        }
        assert len(losses) == 3


class TestOutcomeEngine:
    def test_no_play_leaves_counters(self):
        state = SessionState(wins=2, losses=1, ties=0)
        rng = MagicMock(spec=random.Random)
        result = OutcomeEngine(rng).resolve(state, None)

        assert result.outcome is TurnOutcome.NONE
        assert result.state == state
        assert result.state.other_played is None
        assert "no one is playing rock-paper-scissors" in result.stage_directions
        rng.choice.assert_not_called()

    def test_no_play_clears_previous_turn_plays(self):
        state = SessionState(wins=1, user_played=Play.ROCK, other_played=Play.SCISSORS)
        result = OutcomeEngine().resolve(state, None)
        assert result.state.user_played is None
        assert result.state.other_played is None
        assert result.state.wins == 1

    def test_victory(self):
        state = SessionState(wins=2, losses=1, ties=0)
        result = fixed_engine(Play.SCISSORS).resolve(state, Play.ROCK)

        assert result.outcome is TurnOutcome.WIN
        assert (result.state.wins, result.state.losses, result.state.ties) == (3, 1, 0)
        assert result.state.user_played is Play.ROCK
        assert result.state.other_played is Play.SCISSORS
        assert "unilateral victory" in result.stage_directions
        assert scoreboard_note(result.state) == "---\n{{user}}'s record: 3-1-0."
        assert format_record(result.state) == "record: 3-1-0"

    def test_tie(self):
        result = fixed_engine(Play.PAPER).resolve(SessionState.initial(), Play.PAPER)

        assert result.outcome is TurnOutcome.TIE
        assert result.state.ties == 1
        assert result.state.wins == 0
        assert result.state.losses == 0
        assert "resulting in a tie" in result.stage_directions
        assert "simply abide" in result.stage_directions

    def test_defeat(self):
        result = fixed_engine(Play.ROCK).resolve(SessionState(ties=4), Play.SCISSORS)

        assert result.outcome is TurnOutcome.LOSS
        assert (result.state.wins, result.state.losses, result.state.ties) == (0, 1, 4)
        assert "unilateral defeat" in result.stage_directions
        assert "ridiculous fashion" in result.stage_directions

    @pytest.mark.parametrize("user, other", list(product(Play, Play)))
    def test_directions_name_both_plays(self, user, other):
        result = fixed_engine(other).resolve(SessionState.initial(), user)
        directions = result.stage_directions

        assert f"throwing {user.value}" in directions
        assert f"throw {other.value}" in directions
        assert "{{user}}" in directions
        assert directions.startswith(
            "This universe is secretly and tacitly ruled by the will of rock-paper-scissors."
        )
        if result.outcome is not TurnOutcome.TIE:
            assert "{{char}}" in directions

    @pytest.mark.parametrize("user, other", list(product(Play, Play)))
    def test_exactly_one_counter_changes(self, user, other):
        before = SessionState(wins=5, losses=6, ties=7)
        after = fixed_engine(other).resolve(before, user).state

        deltas = (after.wins - before.wins, after.losses - before.losses, after.ties - before.ties)
        assert sorted(deltas) == [0, 0, 1]

    def test_input_state_not_mutated(self):
        state = SessionState.initial()
        fixed_engine(Play.SCISSORS).resolve(state, Play.ROCK)
        assert state == SessionState.initial()

    def test_totals_track_detected_turns(self):
        engine = OutcomeEngine(random.Random(7))
        plays = [Play.ROCK, None, Play.PAPER, Play.SCISSORS, None, Play.ROCK]
        state = SessionState.initial()
        for play in plays:
            state = engine.resolve(state, play).state
        assert state.total_games == sum(1 for play in plays if play is not None)

    def test_draw_is_uniform_and_independent(self):
        # Opposing throws ignore the user's throw; long-run outcomes sit near 1/3 each.
        engine = OutcomeEngine(random.Random(1234))
        trials = 9000

        for user in Play:
            draws = Counter(engine.resolve(SessionState.initial(), user).state.other_played for _ in range(trials))
            for play in Play:
                assert abs(draws[play] / trials - 1 / 3) < 0.03

        state = SessionState.initial()
        for _ in range(trials):
            state = engine.resolve(state, Play.ROCK).state
        for count in (state.wins, state.losses, state.ties):
            assert abs(count / trials - 1 / 3) < 0.03


class TestScoreboard:
    def test_hidden_without_games(self):
        assert scoreboard_note(SessionState.initial()) is None

    @pytest.mark.parametrize("wins, losses, ties", [(1, 0, 0), (0, 1, 0), (0, 0, 1), (12, 3, 40)])
    def test_shape(self, wins, losses, ties):
        state = SessionState(wins=wins, losses=losses, ties=ties)
        note = scoreboard_note(state)
        assert f"record: {wins}-{losses}-{ties}" in note
        assert note.startswith("---\n")
