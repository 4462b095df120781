"""FastAPI server that feeds the second-screen display and remote controls."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator
import uvicorn

from trivia_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION
from trivia_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from trivia_app.core.display_helpers import crossword_letters, format_score, slide_label, visible_standings
from trivia_app.core.markdown_renderer import renderer
from trivia_app.core.models import GameData, Question, QuestionFormat, Round, RoundFormat, Team
from trivia_app.core.presentation_controller import PresentationController
from trivia_app.core.slides import PresentationState, Slide, SlideKind


class QuestionPayload(BaseModel):
    """Payload schema for a question inside a pushed game document.

    A question without ``format`` takes its round's default question format.
    """

    id: str = Field(min_length=1)
    format: QuestionFormat | None = None
    text: str = ""
    answer: str = ""
    points: float = Field(default=1.0, ge=0.0, le=10.0, multiple_of=0.5)
    title: str = ""
    artist: str = ""
    song_url: str = ""
    start_time: str = ""
    stop_time: str = ""
    crossword_reveal_index: str | None = "1"
    presenter_notes: str = ""


class RoundPayload(BaseModel):
    """Payload schema for a round inside a pushed game document."""

    id: str = Field(min_length=1)
    name: str = ""
    format: RoundFormat = RoundFormat.STANDARD
    questions: list[QuestionPayload] = Field(default_factory=list)

    def to_round(self) -> Round:
        round_ = Round(id=self.id, name=self.name, format=self.format)
        for question in self.questions:
            round_.new_question(**question.model_dump())
        return round_


class TeamPayload(BaseModel):
    """Payload schema for a team inside a pushed game document."""

    id: str = Field(min_length=1)
    name: str = ""
    scores: dict[str, float] = Field(default_factory=dict)
    tiebreaker_answer: float | None = None
    tiebreaker_score: float = 0.0

    def to_team(self) -> Team:
        return Team(
            id=self.id,
            name=self.name,
            scores=dict(self.scores),
            tiebreaker_answer=self.tiebreaker_answer,
            tiebreaker_score=self.tiebreaker_score,
        )


class GameDataPayload(BaseModel):
    """Payload schema for the full game document pushed by the editor."""

    rounds: list[RoundPayload] = Field(default_factory=list)
    teams: list[TeamPayload] = Field(default_factory=list)

    def to_game_data(self) -> GameData:
        return GameData(
            rounds=[round_.to_round() for round_ in self.rounds],
            teams=[team.to_team() for team in self.teams],
        )


class JumpPayload(BaseModel):
    """Payload schema for jumping to a slide; exactly one target is allowed."""

    index: int | None = None
    slide_id: str | None = None
    question_id: str | None = None

    @model_validator(mode="after")
    def _exactly_one_target(self) -> "JumpPayload":
        targets = [value for value in (self.index, self.slide_id, self.question_id) if value is not None]
        if len(targets) != 1:
            raise ValueError("Provide exactly one of index, slide_id or question_id.")
        return self


class RoundIconPayload(BaseModel):
    """Payload schema for a cosmetic round format change."""

    format: RoundFormat


def _serialize_slide(slide: Slide, position: int) -> dict[str, object]:
    return {
        "index": position,
        "slide_id": slide.slide_id,
        "kind": slide.kind.value,
        "title": slide.title,
        "label": slide_label(slide),
        "icon": slide.icon,
        "round_id": slide.round_id,
        "question_id": slide.question_id,
        "question_number": slide.question_number,
    }


def _question_content(slide: Slide, question: Question, answer_visible: bool) -> dict[str, object]:
    content: dict[str, object] = {
        "format": question.format.value,
        "prompt_html": renderer.render_fragment(question.text),
        "is_music_question": slide.is_music_question,
    }
    if question.format is QuestionFormat.BEFORE_AND_AFTER:
        # The second clue is stored in the artist field.
        content["second_clue_html"] = renderer.render_fragment(question.artist)
    if question.format is QuestionFormat.CROSSWORD_CLUE:
        reveal = range(1, len(question.answer) + 1) if answer_visible else slide.crossword_reveal_indices
        content["crossword_letters"] = crossword_letters(question.answer, reveal)
    if slide.kind is SlideKind.ANSWER and answer_visible:
        if question.format is QuestionFormat.MUSIC_QUESTION:
            content["song_title"] = question.title
            content["song_artist"] = question.artist
        else:
            content["answer_html"] = renderer.render_fragment(question.answer)
    return content


def _presentation_payload(state: PresentationState, question: Question | None) -> dict[str, object]:
    slide = state.current_slide
    payload: dict[str, object] = {
        "slide_count": len(state.slides),
        "current_slide_index": state.current_slide_index,
        "standings_reveal_count": state.standings_reveal_count,
        "answer_reveal_shown": state.answer_reveal_shown,
        "can_go_next": state.can_go_next,
        "can_go_previous": state.can_go_previous,
        "current_slide": None,
    }
    if slide is None:
        return payload

    current = _serialize_slide(slide, state.current_slide_index)
    if question is not None:
        answer_visible = slide.kind is SlideKind.ANSWER and (
            state.answer_reveal_shown or slide.is_music_question
        )
        current["content"] = _question_content(slide, question, answer_visible)
    if slide.is_standings:
        current["team_count"] = slide.team_count
        current["standings"] = [
            {
                "team_id": row.team_id,
                "team_name": row.team_name,
                "rank": row.rank,
                "score": format_score(row.score),
            }
            for row in visible_standings(slide.ranked_teams or (), state.standings_reveal_count)
        ]
    payload["current_slide"] = current
    return payload


def _get_controller_dependency(controller: PresentationController):
    def dependency() -> PresentationController:
        return controller

    return dependency


def create_api_app(controller: PresentationController) -> FastAPI:
    """Create a FastAPI application wired to the provided presentation controller."""

    app = FastAPI(
        title=f"{APP_NAME} API",
        version=APP_VERSION,
        description=APP_ABOUT_TEXT,
        license_info={"name": APP_LICENSE},
    )
    controller_dep = _get_controller_dependency(controller)

    @app.get("/presentation")
    def get_presentation(manager: PresentationController = Depends(controller_dep)) -> dict[str, object]:
        return _presentation_payload(*manager.current_view())

    @app.get("/presentation/slides")
    def list_slides(manager: PresentationController = Depends(controller_dep)) -> dict[str, object]:
        state = manager.state
        return {
            "current_slide_index": state.current_slide_index,
            "slides": [_serialize_slide(slide, position) for position, slide in enumerate(state.slides)],
        }

    @app.post("/presentation/next")
    def go_next(manager: PresentationController = Depends(controller_dep)) -> dict[str, object]:
        manager.next()
        return _presentation_payload(*manager.current_view())

    @app.post("/presentation/previous")
    def go_previous(manager: PresentationController = Depends(controller_dep)) -> dict[str, object]:
        manager.previous()
        return _presentation_payload(*manager.current_view())

    @app.post("/presentation/jump")
    def jump(
        payload: JumpPayload,
        manager: PresentationController = Depends(controller_dep),
    ) -> dict[str, object]:
        if payload.index is not None:
            found = manager.jump_to_index(payload.index)
            detail = f"Slide index {payload.index} out of range"
        elif payload.slide_id is not None:
            found = manager.jump_to_slide_id(payload.slide_id)
            detail = f"Unknown slide id '{payload.slide_id}'"
        else:
            found = manager.jump_to_question_id(payload.question_id or "")
            detail = f"No question slide for question id '{payload.question_id}'"
        if not found:
            raise HTTPException(status_code=404, detail=detail)
        return _presentation_payload(*manager.current_view())

    @app.put("/presentation/game")
    def push_game(
        payload: GameDataPayload,
        reset: bool = False,
        manager: PresentationController = Depends(controller_dep),
    ) -> dict[str, object]:
        game_data = payload.to_game_data()
        if reset:
            manager.regenerate(game_data)
        else:
            manager.update(game_data)
        return _presentation_payload(*manager.current_view())

    @app.post("/presentation/rounds/{round_id}/icon")
    def update_round_icon(
        round_id: str,
        payload: RoundIconPayload,
        manager: PresentationController = Depends(controller_dep),
    ) -> dict[str, object]:
        if not manager.update_round_icon(round_id, payload.format):
            raise HTTPException(status_code=404, detail=f"No round title slide for round id '{round_id}'")
        return {"round_id": round_id, "icon": payload.format.icon}

    return app


def start_api_server(
    controller: PresentationController,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""

    app = create_api_app(controller)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="PresentationApiServer", daemon=True)
    thread.start()
    return thread
