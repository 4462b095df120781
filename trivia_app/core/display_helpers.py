"""Formatting helpers shared by the presentation display and the control panel."""

from __future__ import annotations

from typing import Iterable, Sequence

from trivia_app.constants.presentation_constants import CROSSWORD_MAX_LETTERS
from trivia_app.core.slides import RankedTeam, Slide, SlideKind


def crossword_letters(answer: str, reveal_indices: Iterable[int] | None) -> list[str | None]:
    """Return the crossword boxes for ``answer``; unrevealed boxes are ``None``.

    ``reveal_indices`` are 1-based. Only the first ``CROSSWORD_MAX_LETTERS``
    letters are shown.
    """
    revealed = set(reveal_indices) if reveal_indices is not None else {1}
    letters = answer.upper()[:CROSSWORD_MAX_LETTERS]
    return [letter if position in revealed else None for position, letter in enumerate(letters, start=1)]


def visible_standings(ranked_teams: Sequence[RankedTeam], reveal_count: int) -> list[RankedTeam]:
    """Rows revealed so far; standings are revealed from last place upwards."""
    if reveal_count <= 0:
        return []
    first_visible = max(0, len(ranked_teams) - reveal_count)
    return list(ranked_teams[first_visible:])


def format_score(score: float) -> str:
    if score == int(score):
        return str(int(score))
    return f"{score:.1f}"


def slide_label(slide: Slide) -> str:
    """Short description of a slide for sidebars and logs."""
    if slide.kind is SlideKind.STANDINGS:
        if slide.after_round is None:
            return "Final standings"
        return f"Standings after round {slide.after_round + 1}"
    if slide.kind is SlideKind.ROUND_TITLE:
        return f"Round {(slide.round_index or 0) + 1}: {slide.title}"
    return slide.title
