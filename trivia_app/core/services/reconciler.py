"""Maps navigation progress onto a freshly built slide sequence."""

from __future__ import annotations

from typing import Sequence

from trivia_app.core.services.navigation import clamp_index
from trivia_app.core.services.slide_index import SlideIndex
from trivia_app.core.slides import PresentationState, Slide


def reconcile(
    previous: PresentationState,
    new_slides: Sequence[Slide],
    reset_navigation: bool,
    index: SlideIndex | None = None,
) -> PresentationState:
    """Return the state to show after the slides were rebuilt.

    With ``reset_navigation`` the presentation restarts from the first slide.
    Otherwise the previously current slide is looked up by ``slide_id``; if it
    no longer exists the old index is clamped into the new sequence. Reveal
    progress carries over only where the landing slide can hold it.

    ``index`` is the lookup table for ``new_slides`` when the caller already
    built one.
    """
    slides = tuple(new_slides)
    if not slides:
        return PresentationState()
    if reset_navigation:
        return PresentationState(slides=slides)

    if index is None:
        index = SlideIndex.from_slides(slides)
    previous_slide = previous.current_slide
    position: int | None = None
    if previous_slide is not None:
        position = index.slide_position(previous_slide.slide_id)
    if position is None:
        position = clamp_index(previous.current_slide_index, slides)

    landed = slides[position]
    standings_reveal_count = 0
    if landed.is_standings:
        standings_reveal_count = min(previous.standings_reveal_count, landed.team_count)
    answer_reveal_shown = False
    if landed.is_answer:
        answer_reveal_shown = previous.answer_reveal_shown or landed.is_music_question

    return PresentationState(
        slides=slides,
        current_slide_index=position,
        standings_reveal_count=standings_reveal_count,
        answer_reveal_shown=answer_reveal_shown,
    )
