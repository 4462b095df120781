from __future__ import annotations

import pytest

from trivia_app.core.models import GameData, Question, QuestionFormat, Round, RoundFormat, Team
from trivia_app.core.presentation_controller import PresentationController


def make_game() -> GameData:
    """Three rounds covering every question format, with fixed ids.

    Slide positions (23 slides):
      0 welcome
      1 round-r1, 2 question-q1, 3 question-q2, 4 submit-r1,
      5 answer-q1, 6 answer-q2, 7 answer-q3 (connection), 8 standings-0
      9 round-r2, 10 question-q4 (music), 11 question-q5, 12 question-q6 (tiebreaker),
      13 submit-r2, 14 answer-q4, 15 answer-q5, 16 answer-q6, 17 standings-1
      18 round-r3, 19 question-q7, 20 submit-r3, 21 answer-q7, 22 standings-2
    """
    round_one = Round(
        id="r1",
        name="General Knowledge",
        questions=[
            Question(id="q1", text="Capital of *France*?", answer="Paris"),
            Question(
                id="q2",
                format=QuestionFormat.CROSSWORD_CLUE,
                text="City of light",
                answer="paris",
                crossword_reveal_index="1, 3",
            ),
            Question(id="q3", format=QuestionFormat.CONNECTION, answer="Capitals", points=0.0),
        ],
    )
    round_two = Round(
        id="r2",
        name="Name That Tune",
        format=RoundFormat.MUSIC,
        questions=[
            Question(
                id="q4",
                format=QuestionFormat.MUSIC_QUESTION,
                title="Bohemian Rhapsody",
                artist="Queen",
                song_url="spotify:track:abc",
                start_time="0:55",
                stop_time="1:10",
            ),
            Question(id="q5", text="Who sang *Hello*?", answer="Adele"),
            Question(
                id="q6",
                format=QuestionFormat.TIEBREAKER,
                text="How many steps to the top?",
                answer="1,000",
                points=0.0,
            ),
        ],
    )
    round_three = Round(
        id="r3",
        name="Before & After",
        format=RoundFormat.BEFORE_AND_AFTER,
        questions=[
            Question(
                id="q7",
                format=QuestionFormat.BEFORE_AND_AFTER,
                text="Canada's island province",
                artist="Citizenfour subject",
                answer="Prince Edward Snowden",
            ),
        ],
    )
    teams = [
        Team(id="alpha", name="Alpha", scores={"r1": 3, "r2": 4, "r3": 2}, tiebreaker_answer=900),
        Team(id="bravo", name="Bravo", scores={"r1": 5, "r2": 2, "r3": 2}, tiebreaker_answer=1200),
        Team(id="charlie", name="Charlie", scores={"r1": 1, "r2": 1, "gone": 50}),
    ]
    return GameData(rounds=[round_one, round_two, round_three], teams=teams)


@pytest.fixture
def game() -> GameData:
    return make_game()


@pytest.fixture
def controller(game: GameData) -> PresentationController:
    presentation = PresentationController()
    presentation.regenerate(game)
    return presentation
