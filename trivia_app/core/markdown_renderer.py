"""Markdown rendering for question and answer text shown on slides.

Hosts write prompts with light markdown (emphasis, line breaks, the odd
table for a picture round). The display client receives ready-made HTML
fragments so every screen renders the same markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class SlideTextRenderer:
    """Converts slide markdown into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html, "breaks": True})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str | None:
        """Render markdown into an HTML fragment, or ``None`` for blank text."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return None
        return self._markdown.render(sanitized)


# Shared instance; MarkdownIt is safe to reuse for read-only renders.
renderer = SlideTextRenderer()
