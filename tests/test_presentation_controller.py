from __future__ import annotations

from conftest import make_game

from trivia_app.core.models import GameData, Question, QuestionFormat, RoundFormat
from trivia_app.core.presentation_controller import PresentationController


def test_new_controller_is_empty():
    controller = PresentationController()
    assert controller.slides == ()
    assert controller.current_slide is None
    assert controller.current_slide_index == 0
    assert not controller.can_go_next
    assert not controller.can_go_previous
    assert not controller.next()
    assert controller.tiebreaker_answer is None


def test_regenerate_resets_navigation(controller, game):
    controller.jump_to_index(8)
    controller.next()
    state = controller.regenerate(game)
    assert (state.current_slide_index, state.standings_reveal_count, state.answer_reveal_shown) == (0, 0, False)
    assert controller.current_slide.slide_id == "welcome"


def test_update_keeps_round_two_title_after_round_one_edit(controller):
    assert controller.jump_to_slide_id("round-r2")
    edited = make_game()
    edited.rounds[0].questions[0].text = "Capital of Italy?"
    edited.rounds[0].questions[0].answer = "Rome"
    controller.update(edited)
    assert controller.current_slide.slide_id == "round-r2"
    assert controller.current_slide_index == 9


def test_update_after_deleting_current_question_clamps(controller):
    assert controller.jump_to_question_id("q7")
    edited = make_game()
    del edited.rounds[2].questions[0]
    state = controller.update(edited)
    assert 0 <= state.current_slide_index < len(state.slides)
    assert state.current_slide.slide_id == "submit-r3"


def test_update_preserves_answer_reveal(controller):
    controller.jump_to_slide_id("answer-q5")
    controller.next()
    edited = make_game()
    edited.rounds[1].questions[1].answer = "Adele Adkins"
    controller.update(edited)
    assert controller.current_slide.slide_id == "answer-q5"
    assert controller.answer_reveal_shown


def test_update_to_empty_document(controller):
    controller.jump_to_index(10)
    state = controller.update(GameData())
    assert [slide.slide_id for slide in state.slides] == ["welcome"]
    assert state.current_slide_index == 0


def test_controller_owns_a_copy_of_the_document(controller, game):
    game.rounds[0].name = "Renamed behind the controller's back"
    assert controller.game_data.rounds[0].name == "General Knowledge"
    assert controller.slides[1].title == "General Knowledge"


def test_tiebreaker_answer_cache_is_invalidated_on_update(controller):
    assert controller.tiebreaker_answer == 1000
    edited = make_game()
    edited.rounds[1].questions[2].answer = "2.5B"
    controller.update(edited)
    assert controller.tiebreaker_answer == 2_500_000_000
    edited.rounds[1].questions[2].format = QuestionFormat.STANDARD
    controller.regenerate(edited)
    assert controller.tiebreaker_answer is None


def test_update_round_icon_patches_only_the_title_slide(controller):
    before = controller.slides
    assert controller.update_round_icon("r1", RoundFormat.CROSSWORD)
    after = controller.slides
    assert after[1].icon == "grid-3x3"
    assert after[1].slide_id == before[1].slide_id
    assert [s for i, s in enumerate(after) if i != 1] == [s for i, s in enumerate(before) if i != 1]


def test_update_round_icon_unknown_round_is_a_no_op(controller, caplog):
    before = controller.state
    assert not controller.update_round_icon("missing", RoundFormat.MUSIC)
    assert controller.state == before
    assert "No round title slide" in caplog.text


def test_unknown_jumps_leave_state_unchanged(controller):
    controller.jump_to_index(3)
    before = controller.state
    assert not controller.jump_to_index(99)
    assert not controller.jump_to_slide_id("nope")
    assert not controller.jump_to_question_id("nope")
    assert controller.state == before


def test_question_for_slide(controller):
    controller.jump_to_question_id("q5")
    question = controller.question_for_slide(controller.current_slide)
    assert isinstance(question, Question)
    assert question.answer == "Adele"
    assert controller.question_for_slide(controller.slides[0]) is None


def test_visible_standings_reveal_from_last_place(controller):
    controller.jump_to_slide_id("standings-2")
    assert controller.visible_standings() == []
    controller.next()
    assert [row.team_name for row in controller.visible_standings()] == ["Charlie"]
    controller.next()
    assert [row.team_name for row in controller.visible_standings()] == ["Bravo", "Charlie"]


def test_listeners_receive_each_change(controller, game):
    received = []
    controller.add_listener(received.append)

    controller.next()
    controller.previous()
    controller.previous()  # no-op at the first slide
    controller.update(game)

    assert [state.current_slide_index for state in received] == [1, 0, 0]
    controller.remove_listener(received.append)
    controller.next()
    assert len(received) == 3


def test_final_standings_option():
    controller = PresentationController(include_final_standings=True)
    controller.regenerate(make_game())
    assert controller.slides[-1].slide_id == "standings-final"
    assert controller.jump_to_slide_id("standings-final")


def test_listener_that_navigates_does_not_leave_others_on_a_stale_state(controller):
    observed = []

    def advance_once(state):
        if state.current_slide_index == 1:
            controller.next()

    controller.add_listener(advance_once)
    controller.add_listener(lambda state: observed.append(state.current_slide_index))

    controller.next()

    assert controller.current_slide_index == 2
    assert observed == [2]


def test_current_view_reads_state_and_question_together(controller):
    controller.jump_to_slide_id("answer-q1")
    state, question = controller.current_view()
    assert state.current_slide.slide_id == "answer-q1"
    assert question.id == "q1"
    assert state.can_go_next and not state.answer_reveal_shown

    controller.jump_to_index(0)
    state, question = controller.current_view()
    assert question is None
    assert state.can_go_next and not state.can_go_previous
