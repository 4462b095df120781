"""Domain models for the trivia game document."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4


def _new_id() -> str:
    return uuid4().hex


class QuestionFormat(Enum):
    """Presentation format of a single question."""

    STANDARD = "standard"
    CONNECTION = "connection"  # Answer-only; no question slide
    TIEBREAKER = "tiebreaker"  # Numeric estimate, ranked by distance
    MUSIC_QUESTION = "musicQuestion"
    CROSSWORD_CLUE = "crosswordClue"
    BEFORE_AND_AFTER = "beforeAndAfter"


class RoundFormat(Enum):
    """Default format for questions added to a round."""

    STANDARD = "standard"
    CROSSWORD = "crossword"
    MUSIC = "music"
    BEFORE_AND_AFTER = "beforeAndAfter"

    @property
    def icon(self) -> str:
        return _ROUND_ICONS[self]

    @property
    def default_question_format(self) -> QuestionFormat:
        return _ROUND_DEFAULT_QUESTION_FORMATS[self]


_ROUND_ICONS: dict[RoundFormat, str] = {
    RoundFormat.STANDARD: "speech-bubbles",
    RoundFormat.CROSSWORD: "grid-3x3",
    RoundFormat.MUSIC: "music-note",
    RoundFormat.BEFORE_AND_AFTER: "arrows-left-right",
}

_ROUND_DEFAULT_QUESTION_FORMATS: dict[RoundFormat, QuestionFormat] = {
    RoundFormat.STANDARD: QuestionFormat.STANDARD,
    RoundFormat.CROSSWORD: QuestionFormat.CROSSWORD_CLUE,
    RoundFormat.MUSIC: QuestionFormat.MUSIC_QUESTION,
    RoundFormat.BEFORE_AND_AFTER: QuestionFormat.BEFORE_AND_AFTER,
}


@dataclass(slots=True)
class Question:
    """A single question; which text fields matter depends on ``format``."""

    text: str = ""
    answer: str = ""
    points: float = 1.0
    format: QuestionFormat = QuestionFormat.STANDARD
    id: str = field(default_factory=_new_id)
    # Music questions
    title: str = ""
    artist: str = ""
    song_url: str = ""
    start_time: str = ""
    stop_time: str = ""
    # Crossword clues: comma-separated 1-based letter indices shown up front
    crossword_reveal_index: str | None = "1"
    presenter_notes: str = ""


@dataclass(slots=True)
class Round:
    """An ordered group of questions presented together."""

    name: str
    format: RoundFormat = RoundFormat.STANDARD
    questions: list[Question] = field(default_factory=list)
    id: str = field(default_factory=_new_id)

    def new_question(self, format: QuestionFormat | None = None, **fields: object) -> Question:
        """Append and return a question, in this round's default format unless given."""
        question = Question(format=format or self.format.default_question_format, **fields)
        self.questions.append(question)
        return question


@dataclass(slots=True)
class Team:
    """A competing team with sparse per-round scores."""

    name: str
    scores: dict[str, float] = field(default_factory=dict)
    tiebreaker_answer: float | None = None
    tiebreaker_score: float = 0.0  # Legacy; used only when answers cannot decide
    id: str = field(default_factory=_new_id)


@dataclass(slots=True)
class GameData:
    """Root document consumed by the presentation core."""

    rounds: list[Round] = field(default_factory=list)
    teams: list[Team] = field(default_factory=list)

    def find_question(self, question_id: str | None) -> Question | None:
        if question_id is None:
            return None
        for round_ in self.rounds:
            for question in round_.questions:
                if question.id == question_id:
                    return question
        return None
