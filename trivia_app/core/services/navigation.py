"""Stepwise navigation through the slide sequence."""

from __future__ import annotations

import logging
from typing import Sequence

from trivia_app.core.services.slide_index import SlideIndex
from trivia_app.core.slides import PresentationState, Slide

logger = logging.getLogger(__name__)


class SlideNavigator:
    """Owns the current position and reveal progress of a presentation.

    ``next`` and ``previous`` step through staged reveals before moving
    between slides: a non-music answer is hidden until the next step, and a
    standings slide reveals one team per step. Every operation returns
    whether it changed the state.
    """

    def __init__(self) -> None:
        self._slides: tuple[Slide, ...] = ()
        self._index = SlideIndex()
        self._current_index: int = 0
        self._standings_reveal_count: int = 0
        self._answer_reveal_shown: bool = False

    # --- State access ---

    @property
    def slides(self) -> tuple[Slide, ...]:
        return self._slides

    @property
    def current_slide_index(self) -> int:
        return self._current_index

    @property
    def standings_reveal_count(self) -> int:
        return self._standings_reveal_count

    @property
    def answer_reveal_shown(self) -> bool:
        return self._answer_reveal_shown

    @property
    def current_slide(self) -> Slide | None:
        if 0 <= self._current_index < len(self._slides):
            return self._slides[self._current_index]
        return None

    def snapshot(self) -> PresentationState:
        return PresentationState(
            slides=self._slides,
            current_slide_index=self._current_index,
            standings_reveal_count=self._standings_reveal_count,
            answer_reveal_shown=self._answer_reveal_shown,
        )

    def restore(self, state: PresentationState, index: SlideIndex | None = None) -> None:
        """Replace slides and progress wholesale.

        ``index`` must have been built from ``state.slides``; when omitted the
        lookup tables are rebuilt here.
        """
        self._slides = tuple(state.slides)
        self._index = index if index is not None else SlideIndex.from_slides(self._slides)
        self._current_index = state.current_slide_index
        self._standings_reveal_count = state.standings_reveal_count
        self._answer_reveal_shown = state.answer_reveal_shown

    def replace_slide(self, position: int, slide: Slide) -> None:
        slides = list(self._slides)
        slides[position] = slide
        self._slides = tuple(slides)
        self._index = SlideIndex.from_slides(self._slides)

    # --- Availability ---

    @property
    def can_go_next(self) -> bool:
        return self.snapshot().can_go_next

    @property
    def can_go_previous(self) -> bool:
        return self.snapshot().can_go_previous

    # --- Transitions ---

    def next(self) -> bool:
        slide = self.current_slide
        if slide is None:
            return False

        if slide.has_staged_answer and not self._answer_reveal_shown:
            logger.debug("Revealing answer on %s", slide.title)
            self._answer_reveal_shown = True
            return True

        if slide.is_standings and self._standings_reveal_count < slide.team_count:
            self._standings_reveal_count += 1
            logger.debug("Revealing team %s of %s", self._standings_reveal_count, slide.team_count)
            return True

        if self._current_index >= len(self._slides) - 1:
            logger.debug("Already at last slide")
            return False

        self._current_index += 1
        landed = self._slides[self._current_index]
        self._standings_reveal_count = 0
        # Music answers have no staged reveal and show on arrival.
        self._answer_reveal_shown = landed.is_answer and landed.is_music_question
        logger.info("Navigated to slide %s: %s", self._current_index, landed.title)
        return True

    def previous(self) -> bool:
        slide = self.current_slide
        if slide is None:
            return False

        if slide.has_staged_answer and self._answer_reveal_shown:
            logger.debug("Hiding answer on %s", slide.title)
            self._answer_reveal_shown = False
            return True

        if slide.is_standings and self._standings_reveal_count > 0:
            logger.debug("Hiding team %s", self._standings_reveal_count)
            self._standings_reveal_count -= 1
            return True

        if self._current_index <= 0:
            logger.debug("Already at first slide")
            return False

        self._current_index -= 1
        landed = self._slides[self._current_index]
        # Returning to a slide shows it fully revealed.
        self._standings_reveal_count = landed.team_count if landed.is_standings else 0
        self._answer_reveal_shown = landed.is_answer
        logger.info("Navigated to slide %s: %s", self._current_index, landed.title)
        return True

    def jump_to_index(self, index: int) -> bool:
        if not 0 <= index < len(self._slides):
            logger.warning(
                "Attempted jump to invalid index %s, valid range: 0-%s", index, len(self._slides) - 1
            )
            return False

        slide = self._slides[index]
        self._current_index = index
        self._standings_reveal_count = 0
        self._answer_reveal_shown = slide.is_answer and slide.is_music_question
        logger.info("Jumped to slide %s: %s", index, slide.title)
        return True

    def jump_to_slide_id(self, slide_id: str) -> bool:
        position = self._index.slide_position(slide_id)
        if position is None:
            logger.warning("No slide found for slide ID: %s", slide_id)
            return False
        return self.jump_to_index(position)

    def jump_to_question_id(self, question_id: str) -> bool:
        position = self._index.question_position(question_id)
        if position is None:
            logger.warning("No question slide found for question ID: %s", question_id)
            return False
        return self.jump_to_index(position)


def clamp_index(index: int, slides: Sequence[Slide]) -> int:
    if not slides:
        return 0
    return max(0, min(index, len(slides) - 1))
