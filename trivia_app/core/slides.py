"""Slide and presentation state models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SlideKind(Enum):
    """Discriminator for the slide variants of a presentation."""

    WELCOME = "welcome"
    ROUND_TITLE = "roundTitle"
    QUESTION = "question"
    SUBMIT_ANSWERS = "submitAnswers"
    ANSWER = "answer"
    STANDINGS = "standings"


@dataclass(frozen=True, slots=True)
class RankedTeam:
    """Standings row captured when the slide is built."""

    team_id: str
    team_name: str
    rank: int
    score: float


@dataclass(frozen=True, slots=True)
class Slide:
    """One addressable unit of the presentation sequence.

    Variant payload lives in the optional fields: ``round_index`` for every
    round-scoped kind, ``question_index`` for question and answer slides and
    ``after_round`` for standings (``None`` marks the final standings). The
    remaining optional fields are display data computed once by the builder.
    """

    kind: SlideKind
    title: str
    icon: str
    round_index: int | None = None
    question_index: int | None = None
    after_round: int | None = None
    round_id: str | None = None
    question_id: str | None = None
    question_number: int | None = None
    is_music_question: bool = False
    crossword_reveal_indices: frozenset[int] | None = None
    ranked_teams: tuple[RankedTeam, ...] | None = None

    @property
    def slide_id(self) -> str:
        """Identity derived from content, stable across regenerations."""
        kind = self.kind
        if kind is SlideKind.WELCOME:
            return "welcome"
        if kind is SlideKind.ROUND_TITLE:
            return f"round-{self.round_id or self.round_index}"
        if kind is SlideKind.QUESTION:
            return f"question-{self.question_id or f'{self.round_index}-{self.question_index}'}"
        if kind is SlideKind.SUBMIT_ANSWERS:
            return f"submit-{self.round_id or self.round_index}"
        if kind is SlideKind.ANSWER:
            return f"answer-{self.question_id or f'{self.round_index}-{self.question_index}'}"
        if kind is SlideKind.STANDINGS:
            if self.after_round is None:
                return "standings-final"
            return f"standings-{self.after_round}"
        raise ValueError(f"Unhandled slide kind: {kind!r}")

    @property
    def team_count(self) -> int:
        return len(self.ranked_teams) if self.ranked_teams is not None else 0

    @property
    def is_standings(self) -> bool:
        return self.kind is SlideKind.STANDINGS

    @property
    def is_answer(self) -> bool:
        return self.kind is SlideKind.ANSWER

    @property
    def has_staged_answer(self) -> bool:
        """Answer slides reveal in a second step unless they are music answers."""
        return self.kind is SlideKind.ANSWER and not self.is_music_question


@dataclass(frozen=True, slots=True)
class PresentationState:
    """Immutable snapshot of the slides and navigation progress."""

    slides: tuple[Slide, ...] = ()
    current_slide_index: int = 0
    standings_reveal_count: int = 0
    answer_reveal_shown: bool = False

    @property
    def current_slide(self) -> Slide | None:
        if 0 <= self.current_slide_index < len(self.slides):
            return self.slides[self.current_slide_index]
        return None

    @property
    def can_go_next(self) -> bool:
        """A staged reveal is pending or a later slide exists."""
        slide = self.current_slide
        if slide is None:
            return False
        if slide.has_staged_answer and not self.answer_reveal_shown:
            return True
        if slide.is_standings and self.standings_reveal_count < slide.team_count:
            return True
        return self.current_slide_index < len(self.slides) - 1

    @property
    def can_go_previous(self) -> bool:
        slide = self.current_slide
        if slide is None:
            return False
        if slide.has_staged_answer and self.answer_reveal_shown:
            return True
        if slide.is_standings and self.standings_reveal_count > 0:
            return True
        return self.current_slide_index > 0
