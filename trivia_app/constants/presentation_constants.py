"""Slide titles, icons and parsing constants shared by the presentation core."""

WELCOME_TITLE: str = "Welcome"
SUBMIT_ANSWERS_TITLE: str = "Submit Answers"
STANDINGS_TITLE: str = "Standings"
FINAL_STANDINGS_TITLE: str = "Final Standings"
TIEBREAKER_QUESTION_TITLE: str = "Tiebreaker"
TIEBREAKER_ANSWER_TITLE: str = "Tiebreaker Answer"
CONNECTION_ANSWER_TITLE: str = "Connection"

WELCOME_ICON: str = "hand-wave"
QUESTION_ICON: str = "question-circle"
SUBMIT_ANSWERS_ICON: str = "paper-plane"
ANSWER_ICON: str = "check-circle"
STANDINGS_ICON: str = "bar-chart"

# Letters past this limit are not shown on crossword slides.
CROSSWORD_MAX_LETTERS: int = 12
DEFAULT_CROSSWORD_REVEAL_INDEX: str = "1"

TIEBREAKER_SUFFIX_MULTIPLIERS: dict[str, float] = {
    "T": 1_000_000_000_000.0,
    "B": 1_000_000_000.0,
}
