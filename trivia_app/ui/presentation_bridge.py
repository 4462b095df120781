"""Qt signal bridge for hosts that drive the presentation from a Qt window."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from trivia_app.core.presentation_controller import PresentationController
from trivia_app.core.slides import PresentationState


class PresentationBridge(QObject):
    """Re-emits presentation controller changes as Qt signals.

    ``state_changed`` carries every new ``PresentationState``;
    ``slide_changed`` fires only when the current slide index moves and
    ``slides_rebuilt`` when the slide sequence itself was replaced.
    """

    state_changed = Signal(object)
    slide_changed = Signal(int)
    slides_rebuilt = Signal(int)

    def __init__(self, controller: PresentationController, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._last_state = controller.state
        controller.add_listener(self._handle_state)

    def detach(self) -> None:
        self._controller.remove_listener(self._handle_state)

    def _handle_state(self, state: PresentationState) -> None:
        previous = self._last_state
        self._last_state = state
        if state.slides != previous.slides:
            self.slides_rebuilt.emit(len(state.slides))
        if state.current_slide_index != previous.current_slide_index:
            self.slide_changed.emit(state.current_slide_index)
        self.state_changed.emit(state)
