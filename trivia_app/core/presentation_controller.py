"""Presentation state shared between the editor, the Qt host and the API."""

from __future__ import annotations

import copy
from dataclasses import replace
import logging
from threading import Lock, RLock
from typing import Callable

from trivia_app.core.display_helpers import visible_standings
from trivia_app.core.models import GameData, Question, RoundFormat
from trivia_app.core.services.navigation import SlideNavigator
from trivia_app.core.services.ranking import extract_correct_tiebreaker_answer
from trivia_app.core.services.reconciler import reconcile
from trivia_app.core.services.slide_builder import build_slide_deck
from trivia_app.core.services.slide_index import SlideIndex
from trivia_app.core.slides import PresentationState, RankedTeam, Slide, SlideKind

logger = logging.getLogger(__name__)

StateListener = Callable[[PresentationState], None]


class PresentationController:
    """Facade over slide building, navigation and regeneration.

    Hosts receive the controller they should drive explicitly. All calls are
    serialized with a lock so the Qt thread and the API server thread never
    observe a half-applied navigation step or regeneration. Listeners are
    called after the state lock is released with the resulting immutable
    state. Each change carries a version taken under the state lock, and a
    delivery is abandoned once a newer version has started delivering, so
    listeners never end on a stale state.
    """

    def __init__(self, include_final_standings: bool = False) -> None:
        self._lock = Lock()
        self._notify_lock = RLock()
        self._navigator = SlideNavigator()
        self._game_data = GameData()
        self._include_final_standings = include_final_standings
        self._listeners: list[StateListener] = []
        self._state_version: int = 0
        self._delivered_version: int = 0

        # Tiebreaker cache is valid only for the generation it was computed in.
        self._data_generation: int = 0
        self._tiebreaker_cache: tuple[int, float | None] | None = None

    # --- Listeners ---

    def add_listener(self, listener: StateListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _next_version(self) -> int:
        # Caller holds self._lock.
        self._state_version += 1
        return self._state_version

    def _notify(self, state: PresentationState, version: int) -> None:
        # Reentrant so a listener may navigate; the nested delivery supersedes this one.
        with self._notify_lock:
            if version <= self._delivered_version:
                logger.debug("Dropping stale presentation state %s", version)
                return
            self._delivered_version = version
            with self._lock:
                listeners = list(self._listeners)
            for listener in listeners:
                if self._delivered_version != version:
                    break
                listener(state)

    # --- State access ---

    @property
    def state(self) -> PresentationState:
        with self._lock:
            return self._navigator.snapshot()

    @property
    def slides(self) -> tuple[Slide, ...]:
        with self._lock:
            return self._navigator.slides

    @property
    def current_slide(self) -> Slide | None:
        with self._lock:
            return self._navigator.current_slide

    @property
    def current_slide_index(self) -> int:
        with self._lock:
            return self._navigator.current_slide_index

    @property
    def standings_reveal_count(self) -> int:
        with self._lock:
            return self._navigator.standings_reveal_count

    @property
    def answer_reveal_shown(self) -> bool:
        with self._lock:
            return self._navigator.answer_reveal_shown

    @property
    def can_go_next(self) -> bool:
        with self._lock:
            return self._navigator.can_go_next

    @property
    def can_go_previous(self) -> bool:
        with self._lock:
            return self._navigator.can_go_previous

    @property
    def game_data(self) -> GameData:
        with self._lock:
            return copy.deepcopy(self._game_data)

    @property
    def tiebreaker_answer(self) -> float | None:
        with self._lock:
            cached = self._tiebreaker_cache
            if cached is not None and cached[0] == self._data_generation:
                return cached[1]
            answer = extract_correct_tiebreaker_answer(self._game_data)
            self._tiebreaker_cache = (self._data_generation, answer)
            return answer

    def question_for_slide(self, slide: Slide | None) -> Question | None:
        """Return a copy of the question shown on ``slide``, if any."""
        if slide is None or slide.question_id is None:
            return None
        with self._lock:
            question = self._game_data.find_question(slide.question_id)
            return copy.deepcopy(question) if question is not None else None

    def current_view(self) -> tuple[PresentationState, Question | None]:
        """Return the state and a copy of its current question, read together."""
        with self._lock:
            state = self._navigator.snapshot()
            slide = state.current_slide
            question = None
            if slide is not None and slide.question_id is not None:
                question = copy.deepcopy(self._game_data.find_question(slide.question_id))
            return state, question

    def visible_standings(self) -> list[RankedTeam]:
        """Standings rows revealed so far on the current slide."""
        with self._lock:
            slide = self._navigator.current_slide
            if slide is None or not slide.is_standings:
                return []
            return visible_standings(slide.ranked_teams or (), self._navigator.standings_reveal_count)

    # --- Document changes ---

    def update(self, game_data: GameData) -> PresentationState:
        """Rebuild slides after a content edit, keeping the current position."""
        logger.debug("Updating game data")
        return self._refresh_slides(game_data, reset_navigation=False)

    def regenerate(self, game_data: GameData) -> PresentationState:
        """Rebuild slides after a structural edit and restart from the first slide."""
        return self._refresh_slides(game_data, reset_navigation=True)

    def update_round_icon(self, round_id: str, new_format: RoundFormat) -> bool:
        """Patch the icon of a round title slide without rebuilding the slides."""
        with self._lock:
            position = next(
                (
                    i
                    for i, slide in enumerate(self._navigator.slides)
                    if slide.kind is SlideKind.ROUND_TITLE and slide.round_id == round_id
                ),
                None,
            )
            if position is None:
                logger.warning("No round title slide found for round ID: %s", round_id)
                return False
            slide = self._navigator.slides[position]
            self._navigator.replace_slide(position, replace(slide, icon=new_format.icon))
            state = self._navigator.snapshot()
            version = self._next_version()
        logger.debug("Updated round icon for round %s to %s", round_id, new_format.icon)
        self._notify(state, version)
        return True

    def _refresh_slides(self, game_data: GameData, reset_navigation: bool) -> PresentationState:
        owned = copy.deepcopy(game_data)
        deck = build_slide_deck(owned, include_final_standings=self._include_final_standings)
        index = SlideIndex.from_slides(deck.slides)
        with self._lock:
            previous = self._navigator.snapshot()
            state = reconcile(previous, deck.slides, reset_navigation, index=index)
            self._game_data = owned
            self._data_generation += 1
            self._tiebreaker_cache = (self._data_generation, deck.tiebreaker_answer)
            self._navigator.restore(state, index=index)
            version = self._next_version()
        logger.info("Generated %s slides from %s rounds", len(deck.slides), len(owned.rounds))
        self._notify(state, version)
        return state

    # --- Navigation ---

    def next(self) -> bool:
        return self._navigate(lambda navigator: navigator.next())

    def previous(self) -> bool:
        return self._navigate(lambda navigator: navigator.previous())

    def jump_to_index(self, index: int) -> bool:
        return self._navigate(lambda navigator: navigator.jump_to_index(index))

    def jump_to_slide_id(self, slide_id: str) -> bool:
        return self._navigate(lambda navigator: navigator.jump_to_slide_id(slide_id))

    def jump_to_question_id(self, question_id: str) -> bool:
        return self._navigate(lambda navigator: navigator.jump_to_question_id(question_id))

    def _navigate(self, step: Callable[[SlideNavigator], bool]) -> bool:
        with self._lock:
            changed = step(self._navigator)
            if not changed:
                return False
            state = self._navigator.snapshot()
            version = self._next_version()
        self._notify(state, version)
        return True
