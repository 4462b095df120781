"""Builds the presentation slide sequence from a game document.

The builder is a pure function of the document: the same ``GameData`` always
yields the same slides in the same order with the same ``slide_id`` values.
Slide identities come from round and question ids rather than positions, so
an edited document produces slides that still match the previous sequence
wherever the underlying round or question survived the edit.

Display data that would otherwise be recomputed on every navigation step
(question numbers, crossword reveal sets, ranked standings) is captured on the
slides here, once per build.
"""

from __future__ import annotations

from dataclasses import dataclass

from trivia_app.constants.presentation_constants import (
    ANSWER_ICON,
    CONNECTION_ANSWER_TITLE,
    DEFAULT_CROSSWORD_REVEAL_INDEX,
    FINAL_STANDINGS_TITLE,
    QUESTION_ICON,
    STANDINGS_ICON,
    STANDINGS_TITLE,
    SUBMIT_ANSWERS_ICON,
    SUBMIT_ANSWERS_TITLE,
    TIEBREAKER_ANSWER_TITLE,
    TIEBREAKER_QUESTION_TITLE,
    WELCOME_ICON,
    WELCOME_TITLE,
)
from trivia_app.core.models import GameData, Question, QuestionFormat, Round, Team
from trivia_app.core.services.ranking import extract_correct_tiebreaker_answer, with_ranks
from trivia_app.core.slides import RankedTeam, Slide, SlideKind


@dataclass(frozen=True, slots=True)
class SlideDeck:
    """Slides for one document together with the tiebreaker answer used to rank them."""

    slides: tuple[Slide, ...]
    tiebreaker_answer: float | None


def build_slides(game_data: GameData) -> list[Slide]:
    return list(build_slide_deck(game_data).slides)


def build_slide_deck(game_data: GameData, include_final_standings: bool = False) -> SlideDeck:
    """Build every slide for ``game_data``.

    The last per-round standings slide already shows the final result; pass
    ``include_final_standings`` to append a separate ``standings-final`` slide.
    """
    tiebreaker_answer = extract_correct_tiebreaker_answer(game_data)
    slides: list[Slide] = [Slide(kind=SlideKind.WELCOME, title=WELCOME_TITLE, icon=WELCOME_ICON)]

    for round_index, round_ in enumerate(game_data.rounds):
        slides.append(
            Slide(
                kind=SlideKind.ROUND_TITLE,
                title=round_.name,
                icon=round_.format.icon,
                round_index=round_index,
                round_id=round_.id,
            )
        )
        slides.extend(_question_slides(round_index, round_))
        slides.append(
            Slide(
                kind=SlideKind.SUBMIT_ANSWERS,
                title=SUBMIT_ANSWERS_TITLE,
                icon=SUBMIT_ANSWERS_ICON,
                round_index=round_index,
                round_id=round_.id,
            )
        )
        slides.extend(_answer_slides(round_index, round_))
        slides.append(
            Slide(
                kind=SlideKind.STANDINGS,
                title=STANDINGS_TITLE,
                icon=STANDINGS_ICON,
                round_index=round_index,
                after_round=round_index,
                ranked_teams=_ranked_snapshot(
                    game_data.teams, game_data.rounds[: round_index + 1], tiebreaker_answer
                ),
            )
        )

    if include_final_standings and game_data.rounds:
        slides.append(
            Slide(
                kind=SlideKind.STANDINGS,
                title=FINAL_STANDINGS_TITLE,
                icon=STANDINGS_ICON,
                after_round=None,
                ranked_teams=_ranked_snapshot(game_data.teams, game_data.rounds, tiebreaker_answer),
            )
        )

    return SlideDeck(slides=tuple(slides), tiebreaker_answer=tiebreaker_answer)


def parse_reveal_indices(index_text: str | None) -> frozenset[int]:
    """Parse ``"1, 5"`` into ``{1, 5}``.

    Tokens that are not integers are dropped. A missing or wholly unparseable
    string falls back to the default first-letter reveal.
    """
    default = frozenset({int(DEFAULT_CROSSWORD_REVEAL_INDEX)})
    if index_text is None:
        return default
    indices: set[int] = set()
    for token in index_text.split(","):
        try:
            indices.add(int(token.strip()))
        except ValueError:
            continue
    return frozenset(indices) or default


def _crossword_indices(question: Question) -> frozenset[int] | None:
    if question.format is not QuestionFormat.CROSSWORD_CLUE:
        return None
    return parse_reveal_indices(question.crossword_reveal_index)


def _question_slides(round_index: int, round_: Round) -> list[Slide]:
    # Connections are revealed only among the answers.
    slides: list[Slide] = []
    question_number = 0
    for question_index, question in enumerate(round_.questions):
        if question.format is QuestionFormat.CONNECTION:
            continue
        question_number += 1
        if question.format is QuestionFormat.TIEBREAKER:
            title = TIEBREAKER_QUESTION_TITLE
        else:
            title = f"R{round_index + 1} - Q{question_number}"
        slides.append(
            Slide(
                kind=SlideKind.QUESTION,
                title=title,
                icon=QUESTION_ICON,
                round_index=round_index,
                question_index=question_index,
                round_id=round_.id,
                question_id=question.id,
                question_number=question_number,
                is_music_question=question.format is QuestionFormat.MUSIC_QUESTION,
                crossword_reveal_indices=_crossword_indices(question),
            )
        )
    return slides


def _answer_slides(round_index: int, round_: Round) -> list[Slide]:
    slides: list[Slide] = []
    answer_number = 0
    for question_index, question in enumerate(round_.questions):
        number: int | None
        if question.format is QuestionFormat.TIEBREAKER:
            title = TIEBREAKER_ANSWER_TITLE
            number = None
        elif question.format is QuestionFormat.CONNECTION:
            title = CONNECTION_ANSWER_TITLE
            number = None
        else:
            answer_number += 1
            title = f"R{round_index + 1} - A{answer_number}"
            number = answer_number
        slides.append(
            Slide(
                kind=SlideKind.ANSWER,
                title=title,
                icon=ANSWER_ICON,
                round_index=round_index,
                question_index=question_index,
                round_id=round_.id,
                question_id=question.id,
                question_number=number,
                is_music_question=question.format is QuestionFormat.MUSIC_QUESTION,
                crossword_reveal_indices=_crossword_indices(question),
            )
        )
    return slides


def _ranked_snapshot(
    teams: list[Team],
    scoring_rounds: list[Round],
    tiebreaker_answer: float | None,
) -> tuple[RankedTeam, ...]:
    return tuple(
        RankedTeam(team_id=entry.team.id, team_name=entry.team.name, rank=entry.rank, score=entry.score)
        for entry in with_ranks(teams, scoring_rounds, tiebreaker_answer)
    )
