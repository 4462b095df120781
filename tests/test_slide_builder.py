from __future__ import annotations

from conftest import make_game

from trivia_app.core.models import GameData, Question, QuestionFormat, Round, Team
from trivia_app.core.services.slide_builder import build_slide_deck, build_slides, parse_reveal_indices
from trivia_app.core.slides import SlideKind


def _ids(slides):
    return [slide.slide_id for slide in slides]


def test_empty_document_yields_only_welcome():
    slides = build_slides(GameData())
    assert _ids(slides) == ["welcome"]
    assert slides[0].kind is SlideKind.WELCOME


def test_slide_order_and_ids(game):
    assert _ids(build_slides(game)) == [
        "welcome",
        "round-r1",
        "question-q1",
        "question-q2",
        "submit-r1",
        "answer-q1",
        "answer-q2",
        "answer-q3",
        "standings-0",
        "round-r2",
        "question-q4",
        "question-q5",
        "question-q6",
        "submit-r2",
        "answer-q4",
        "answer-q5",
        "answer-q6",
        "standings-1",
        "round-r3",
        "question-q7",
        "submit-r3",
        "answer-q7",
        "standings-2",
    ]


def test_build_is_deterministic():
    assert build_slides(make_game()) == build_slides(make_game())


def test_question_and_answer_counts_per_round(game):
    slides = build_slides(game)
    for round_index, round_ in enumerate(game.rounds):
        question_slides = [s for s in slides if s.kind is SlideKind.QUESTION and s.round_index == round_index]
        answer_slides = [s for s in slides if s.kind is SlideKind.ANSWER and s.round_index == round_index]
        non_connections = [q for q in round_.questions if q.format is not QuestionFormat.CONNECTION]
        assert len(question_slides) == len(non_connections)
        assert len(answer_slides) == len(round_.questions)


def test_titles_and_numbers(game):
    by_id = {slide.slide_id: slide for slide in build_slides(game)}
    assert by_id["round-r2"].title == "Name That Tune"
    assert by_id["question-q5"].title == "R2 - Q2"
    assert by_id["question-q6"].title == "Tiebreaker"
    assert by_id["question-q6"].question_number == 3
    assert by_id["answer-q2"].title == "R1 - A2"
    assert by_id["answer-q3"].title == "Connection"
    assert by_id["answer-q3"].question_number is None
    assert by_id["answer-q6"].title == "Tiebreaker Answer"
    assert by_id["answer-q6"].question_number is None
    assert by_id["submit-r3"].title == "Submit Answers"


def test_connection_does_not_consume_question_number():
    round_ = Round(
        id="r",
        name="Mixed",
        questions=[
            Question(id="c", format=QuestionFormat.CONNECTION, answer="Link"),
            Question(id="a", text="First"),
            Question(id="b", text="Second"),
        ],
    )
    by_id = {slide.slide_id: slide for slide in build_slides(GameData(rounds=[round_]))}
    assert by_id["question-a"].title == "R1 - Q1"
    assert by_id["answer-a"].title == "R1 - A1"
    assert by_id["answer-b"].title == "R1 - A2"
    assert "question-c" not in by_id


def test_music_and_crossword_display_data(game):
    by_id = {slide.slide_id: slide for slide in build_slides(game)}
    assert by_id["answer-q4"].is_music_question
    assert not by_id["answer-q5"].is_music_question
    assert by_id["question-q2"].crossword_reveal_indices == frozenset({1, 3})
    assert by_id["answer-q2"].crossword_reveal_indices == frozenset({1, 3})
    assert by_id["answer-q1"].crossword_reveal_indices is None


def test_round_title_icon_follows_round_format(game):
    by_id = {slide.slide_id: slide for slide in build_slides(game)}
    assert by_id["round-r2"].icon == "music-note"
    assert by_id["round-r1"].icon == "speech-bubbles"


def test_parse_reveal_indices():
    assert parse_reveal_indices("1,5") == frozenset({1, 5})
    assert parse_reveal_indices(" 2 , x, ,4") == frozenset({2, 4})
    assert parse_reveal_indices(None) == frozenset({1})
    assert parse_reveal_indices("abc") == frozenset({1})
    assert parse_reveal_indices("") == frozenset({1})


def test_standings_are_cumulative_and_ranked(game):
    by_id = {slide.slide_id: slide for slide in build_slides(game)}

    after_first = by_id["standings-0"].ranked_teams
    assert [(row.team_id, row.rank, row.score) for row in after_first] == [
        ("bravo", 1, 5),
        ("alpha", 2, 3),
        ("charlie", 3, 1),
    ]

    # Alpha and Bravo tie on 9; Alpha's tiebreaker (900) is closer to 1,000.
    final = by_id["standings-2"].ranked_teams
    assert [(row.team_name, row.rank, row.score) for row in final] == [
        ("Alpha", 1, 9),
        ("Bravo", 2, 9),
        ("Charlie", 3, 2),
    ]


def test_round_without_questions():
    game = GameData(rounds=[Round(id="empty", name="Empty")], teams=[Team(id="t", name="T")])
    slides = build_slides(game)
    assert _ids(slides) == ["welcome", "round-empty", "submit-empty", "standings-0"]
    assert slides[-1].team_count == 1


def test_deck_reports_tiebreaker_answer(game):
    assert build_slide_deck(game).tiebreaker_answer == 1000


def test_optional_final_standings_slide(game):
    slides = build_slide_deck(game, include_final_standings=True).slides
    assert slides[-1].slide_id == "standings-final"
    assert slides[-1].after_round is None
    assert slides[-1].ranked_teams == slides[-2].ranked_teams
    assert _ids(build_slide_deck(GameData(), include_final_standings=True).slides) == ["welcome"]


def test_slide_ids_survive_text_edits(game):
    before = build_slides(game)
    game.rounds[0].questions[0].text = "Capital of Spain?"
    game.rounds[0].questions[0].answer = "Madrid"
    game.teams[0].scores["r1"] = 10
    after = build_slides(game)
    assert _ids(before) == _ids(after)


def test_builder_does_not_mutate_document(game):
    snapshot = make_game()
    build_slides(game)
    assert game == snapshot
