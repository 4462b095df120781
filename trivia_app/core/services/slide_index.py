"""Lookup tables for jumping straight to a slide."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from trivia_app.core.slides import Slide, SlideKind


@dataclass(slots=True)
class SlideIndex:
    """Maps slide ids and question ids to positions in the slide sequence."""

    by_slide_id: dict[str, int] = field(default_factory=dict)
    by_question_id: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_slides(cls, slides: Iterable[Slide]) -> "SlideIndex":
        index = cls()
        for position, slide in enumerate(slides):
            index.by_slide_id.setdefault(slide.slide_id, position)
            # Questions resolve to their question slide, never the answer.
            if slide.kind is SlideKind.QUESTION and slide.question_id is not None:
                index.by_question_id.setdefault(slide.question_id, position)
        return index

    def slide_position(self, slide_id: str) -> int | None:
        return self.by_slide_id.get(slide_id)

    def question_position(self, question_id: str) -> int | None:
        return self.by_question_id.get(question_id)
