"""Team scoring, tiebreaker resolution and ranking for standings."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
import math
from typing import Iterable, Sequence

from trivia_app.constants.presentation_constants import TIEBREAKER_SUFFIX_MULTIPLIERS
from trivia_app.core.models import GameData, QuestionFormat, Round, Team


@dataclass(frozen=True, slots=True)
class RankedEntry:
    """A team together with its rank and total over the scored rounds."""

    team: Team
    rank: int
    score: float


def total_score(team: Team, rounds: Iterable[Round]) -> float:
    """Sum the team's scores for the given rounds.

    Scores keyed by rounds outside ``rounds`` (including rounds that were
    deleted from the document) do not count.
    """
    return sum(team.scores.get(round_.id, 0.0) for round_ in rounds)


def tiebreaker_distance(team: Team, correct_answer: float) -> float | None:
    if team.tiebreaker_answer is None:
        return None
    return abs(team.tiebreaker_answer - correct_answer)


def compare_tiebreaker(team_a: Team, team_b: Team, correct_answer: float | None) -> bool:
    """Return True if ``team_a`` ranks strictly above ``team_b`` on the tiebreaker.

    A closer answer wins. A team that answered beats one that did not. When
    the answers cannot decide (no correct answer known, equal distances, or
    neither team answered) the legacy tiebreaker score decides, higher first.
    """
    if correct_answer is None:
        return team_a.tiebreaker_score > team_b.tiebreaker_score

    distance_a = tiebreaker_distance(team_a, correct_answer)
    distance_b = tiebreaker_distance(team_b, correct_answer)

    if distance_a is not None and distance_b is not None:
        if distance_a == distance_b:
            return team_a.tiebreaker_score > team_b.tiebreaker_score
        return distance_a < distance_b
    if distance_a is not None:
        return True
    if distance_b is not None:
        return False
    return team_a.tiebreaker_score > team_b.tiebreaker_score


def is_tied(team_a: Team, team_b: Team, rounds: Sequence[Round], correct_answer: float | None) -> bool:
    """Return True if both teams share a rank.

    Totals must match. With a known correct answer the tiebreaker distances
    must match too, two silent teams counting as equal; legacy scores only
    break ties in the ordering. Without a correct answer the legacy scores
    must match.
    """
    if total_score(team_a, rounds) != total_score(team_b, rounds):
        return False
    if correct_answer is None:
        return team_a.tiebreaker_score == team_b.tiebreaker_score
    return tiebreaker_distance(team_a, correct_answer) == tiebreaker_distance(team_b, correct_answer)


def sorted_standings(
    teams: Iterable[Team],
    rounds: Sequence[Round],
    correct_answer: float | None,
) -> list[Team]:
    """Stable sort, highest total first, ties ordered by the tiebreaker."""
    teams = list(teams)
    totals = {id(team): total_score(team, rounds) for team in teams}

    def _compare(team_a: Team, team_b: Team) -> int:
        score_a = totals[id(team_a)]
        score_b = totals[id(team_b)]
        if score_a != score_b:
            return -1 if score_a > score_b else 1
        if compare_tiebreaker(team_a, team_b, correct_answer):
            return -1
        if compare_tiebreaker(team_b, team_a, correct_answer):
            return 1
        return 0

    return sorted(teams, key=cmp_to_key(_compare))


def with_ranks(
    teams: Iterable[Team],
    rounds: Sequence[Round],
    correct_answer: float | None,
) -> list[RankedEntry]:
    """Sort teams and assign 1-based ranks, sharing a rank only on a true tie."""
    ordered = sorted_standings(list(teams), rounds, correct_answer)
    ranked: list[RankedEntry] = []
    current_rank = 1
    for position, team in enumerate(ordered):
        if position > 0 and not is_tied(ordered[position - 1], team, rounds, correct_answer):
            current_rank = position + 1
        ranked.append(RankedEntry(team=team, rank=current_rank, score=total_score(team, rounds)))
    return ranked


def parse_tiebreaker_value(raw_answer: str) -> float | None:
    """Parse a numeric tiebreaker answer such as ``"1,000"``, ``"8.1B"`` or ``"2t"``."""
    cleaned = raw_answer.replace(",", "").replace(" ", "").upper()
    # float() would accept digit separators such as "1_000".
    if "_" in cleaned:
        return None
    multiplier = 1.0
    for suffix, suffix_multiplier in TIEBREAKER_SUFFIX_MULTIPLIERS.items():
        if cleaned.endswith(suffix):
            multiplier = suffix_multiplier
            cleaned = cleaned[: -len(suffix)]
            break
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value * multiplier


def extract_correct_tiebreaker_answer(game_data: GameData) -> float | None:
    """Return the parsed answer of the first tiebreaker question, if numeric."""
    for round_ in game_data.rounds:
        for question in round_.questions:
            if question.format is QuestionFormat.TIEBREAKER:
                return parse_tiebreaker_value(question.answer)
    return None
