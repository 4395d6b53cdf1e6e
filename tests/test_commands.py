"""Tests for the command interpreter."""

import pytest

from oldforest.engine.builder import (
    BRIDGE,
    CASTLE,
    FOREST,
    HOME,
    RIVER,
    STONE_KEY,
    WATER_KEY,
)
from oldforest.engine.commands import (
    DEATH_STATUS,
    GAME_OVER_STATUS,
    HELP_TEXT,
    VICTORY_STATUS,
    attempt_answer,
    attempt_move,
    get_exits,
    get_room_view,
    handle_command,
    handle_move,
)
from oldforest.engine.state import Ending, GameState
from oldforest.engine.world import Item


def _give_keys(state: GameState) -> None:
    state.player.add_item(Item(STONE_KEY))
    state.player.add_item(Item(WATER_KEY))


def test_help(state: GameState):
    result = handle_command(state, "HELP")
    assert result.lines == [HELP_TEXT]
    assert state.player.current_room == FOREST


@pytest.mark.parametrize("command", ["look", "l", "  LOOK  "])
def test_look(state: GameState, command: str):
    result = handle_command(state, command)
    assert result.entered_room
    assert result.lines == []
    assert state.player.current_room == FOREST


@pytest.mark.parametrize("command", ["inventory", "i"])
def test_inventory(state: GameState, command: str):
    assert handle_command(state, command).lines == ["Inventory: (empty)"]
    state.player.add_item(Item(STONE_KEY))
    assert handle_command(state, command).lines == ["Inventory: Stone Key"]


@pytest.mark.parametrize(
    "command, room",
    [
        ("east", BRIDGE),
        ("e", BRIDGE),
        ("go east", BRIDGE),
        ("Go  E", BRIDGE),
        ("south", RIVER),
        ("s", RIVER),
    ],
)
def test_movement(state: GameState, command: str, room: str):
    result = handle_command(state, command)
    assert result.entered_room
    assert state.player.current_room == room


def test_move_nowhere(state: GameState):
    result = handle_command(state, "north")
    assert result.lines == ["❌ You can't go north from here."]
    assert not result.entered_room
    assert state.player.current_room == FOREST


def test_castle_sealed_without_keys(state: GameState):
    state.player.add_item(Item(STONE_KEY))
    result = handle_command(state, "west")
    assert "magically sealed" in result.lines[0]
    assert state.player.current_room == FOREST


def test_castle_opens_with_both_keys(state: GameState):
    _give_keys(state)
    handle_command(state, "west")
    assert state.player.current_room == CASTLE


def test_attempt_move_unknown_direction(state: GameState):
    result = attempt_move(state, "up")
    assert "can't go up" in result.lines[0]


def test_answer_command(state: GameState):
    handle_command(state, "east")
    result = handle_command(state, "answer a shadow")
    assert result.lines == [
        "✅ Correct! Troll accepts your answer.",
        "🔑 You received: Stone Key",
    ]
    assert state.player.has_item(STONE_KEY)
    assert state.world.room(BRIDGE).character.riddle.solved


@pytest.mark.parametrize("verb", ["say", "reply", "ANSWER"])
def test_answer_synonyms(state: GameState, verb: str):
    handle_command(state, "south")
    handle_command(state, f"{verb} river")
    assert state.player.has_item(WATER_KEY)


def test_bare_text_answers_open_riddle(state: GameState):
    handle_command(state, "e")
    result = handle_command(state, "The Shadow!")
    assert result.lines[0].startswith("✅ Correct!")


def test_bare_text_after_solving_is_unknown(state: GameState):
    handle_command(state, "e")
    handle_command(state, "shadow")
    result = handle_command(state, "shadow")
    assert result.lines[0].startswith('Unknown command: "shadow"')


def test_answer_where_no_riddle(state: GameState):
    result = handle_command(state, "answer shadow")
    assert result.lines == ["There's no riddle here to answer."]


def test_answer_already_solved(state: GameState):
    handle_command(state, "e")
    handle_command(state, "answer shadow")
    result = handle_command(state, "answer shadow")
    assert result.lines == ["You already answered Troll."]
    assert len(state.player.inventory) == 1


def test_wrong_answer_reports_attempts(state: GameState):
    handle_command(state, "e")
    result = handle_command(state, "answer wind")
    assert result.lines == ["❌ Wrong! You have 2 attempts left."]
    assert not state.is_finished


def test_unknown_command(state: GameState):
    result = handle_command(state, "dance wildly")
    assert result.lines == [
        'Unknown command: "dance wildly". '
        "Type 'help' for a list of valid commands."
    ]


def test_blank_input_changes_nothing(state: GameState):
    result = handle_command(state, "   ")
    assert result.lines == ["I beg your pardon?"]
    assert state.turns == 0


def test_turns_are_counted(state: GameState):
    handle_command(state, "look")
    handle_command(state, "east")
    assert state.turns == 2


def test_dwarf_without_keys_does_not_win(state: GameState):
    state.player.current_room = CASTLE
    result = attempt_answer(state, "fire")
    assert "nothing happens" in result.lines[-1]
    assert not state.is_finished
    assert state.player.current_room == CASTLE
    # The victory item is not a key, so it is never handed out
    assert state.player.inventory == []


def test_dwarf_with_keys_wins(state: GameState):
    _give_keys(state)
    handle_command(state, "west")
    result = handle_command(state, "answer fire")
    assert result.ended is Ending.VICTORY
    assert result.entered_room
    assert "transported home" in result.lines[-1]
    assert state.player.current_room == HOME
    assert state.status == VICTORY_STATUS
    assert not state.status_is_error
    assert state.is_finished


def test_death_ends_game(state: GameState):
    handle_command(state, "s")
    for guess in ("sea", "lake"):
        assert handle_command(state, guess).ended is None
    result = handle_command(state, "pond")
    assert result.ended is Ending.DEATH
    assert "GAME OVER" in result.lines[0]
    assert state.status == DEATH_STATUS
    assert state.status_is_error
    assert state.ending is Ending.DEATH


def test_commands_rejected_after_game_over(state: GameState):
    state.ending = Ending.DEATH
    turns = state.turns
    result = handle_command(state, "east")
    assert result.lines == []
    assert state.status == GAME_OVER_STATUS
    assert state.status_is_error
    assert state.player.current_room == FOREST
    assert state.turns == turns


def test_restart_escapes_game_over(state: GameState):
    state.ending = Ending.VICTORY
    result = handle_command(state, "Restart")
    assert result.restarted
    assert result.entered_room
    assert not state.is_finished


def test_room_view(state: GameState):
    view = get_room_view(state)
    assert view.title == "Forest Entrance"
    assert view.image == "/assets/img/forest.jpg"
    assert view.character_text is None
    assert view.exits == ["east", "south", "west"]
    assert view.details[0] == "The Bridge is to the east."
    assert get_exits(state) == view.exits


def test_room_view_shows_riddle_then_cleared_image(state: GameState):
    handle_command(state, "east")
    view = get_room_view(state)
    assert view.image.endswith("monster.jpg")
    assert "Riddle:" in view.character_text
    handle_command(state, "shadow")
    view = get_room_view(state)
    assert view.image.endswith("bridge.jpg")
    assert view.character_text == "Troll has already been answered."


@pytest.mark.parametrize("direction, room", [("east", BRIDGE), ("S", RIVER)])
def test_handle_move(state: GameState, direction: str, room: str):
    result = handle_move(state, direction)
    assert result.entered_room
    assert state.player.current_room == room
    assert state.turns == 1


def test_handle_move_unknown_direction_is_not_a_guess(state: GameState):
    handle_command(state, "east")
    result = handle_move(state, "sideways")
    assert result.lines == ["❌ You can't go sideways from here."]
    assert state.world.room(BRIDGE).character.riddle.attempts == 3


def test_handle_move_rejected_after_game_over(state: GameState):
    state.ending = Ending.DEATH
    result = handle_move(state, "sideways")
    assert result.lines == []
    assert state.status == GAME_OVER_STATUS
    assert state.status_is_error
    assert state.turns == 0
