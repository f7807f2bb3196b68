"""Outcome resolution for a detected play."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from stage import prompts
from stage.domain.entities import Play, SessionState, TurnOutcome

logger = logging.getLogger(__name__)

PLAYS = tuple(Play)


@dataclass(frozen=True)
class TurnResult:
    state: SessionState
    outcome: TurnOutcome
    stage_directions: str


def judge(user_played: Play, other_played: Play) -> TurnOutcome:
    if user_played is other_played:
        return TurnOutcome.TIE
    if user_played.beats(other_played):
        return TurnOutcome.WIN
    return TurnOutcome.LOSS


def format_record(state: SessionState) -> str:
    return prompts.RECORD.format(wins=state.wins, losses=state.losses, ties=state.ties)


def scoreboard_note(state: SessionState) -> Optional[str]:
    if state.total_games == 0:
        return None
    return prompts.SCOREBOARD.format(record=format_record(state))


class OutcomeEngine:
    """Resolves a turn into new state plus stage directions.

    The only impurity is the opposing draw, taken from ``rng`` so tests can
    seed or replace it.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def draw(self) -> Play:
        return self._rng.choice(PLAYS)

    def resolve(self, state: SessionState, user_played: Optional[Play]) -> TurnResult:
        state = state.without_plays()

        if user_played is None:
            return TurnResult(
                state=state,
                outcome=TurnOutcome.NONE,
                stage_directions=f"{prompts.PREAMBLE} {prompts.NO_GAME}",
            )

        other_played = self.draw()
        outcome = judge(user_played, other_played)

        update = {"user_played": user_played, "other_played": other_played}
        if outcome is TurnOutcome.TIE:
            update["ties"] = state.ties + 1
            template = prompts.TIE
        elif outcome is TurnOutcome.WIN:
            update["wins"] = state.wins + 1
            template = prompts.VICTORY
        else:
            update["losses"] = state.losses + 1
            template = prompts.DEFEAT

        directions = (
            f"{prompts.PREAMBLE} "
            + prompts.INVOCATION.format(user_played=user_played.value)
            + template.format(other_played=other_played.value)
        )

        logger.info(
            "Resolved %s vs %s: %s", user_played.value, other_played.value, outcome.value
        )
        return TurnResult(
            state=state.model_copy(update=update),
            outcome=outcome,
            stage_directions=directions,
        )
