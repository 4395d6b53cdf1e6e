"""Command dispatch and handler functions.

handle_command(state, raw_input) -> CommandResult is the main entry point.
It classifies one line of player text, dispatches to a handler, and the
handler mutates state in place and returns the lines to show the player.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from .builder import CASTLE_NAME, HOME_NAME, STONE_KEY, WATER_KEY
from .state import Ending, GameState
from .world import AnswerStatus, Item, Room

DIRECTIONS = ("north", "south", "east", "west")
SHORT_DIRECTIONS = {d[0]: d for d in DIRECTIONS}

_MOVE_PATTERN = re.compile(r"(?:go\s+)?(n|s|e|w|north|south|east|west)")
_ANSWER_PATTERN = re.compile(r"(?:answer|say|reply)\s+(.+)")

HELP_TEXT = (
    "Commands: north / south / east / west  |  go <dir>  |  answer <text>  |  "
    "look  |  inventory  |  restart"
)
GAME_OVER_STATUS = "Game over. Type 'restart' to play again."
DEATH_STATUS = "💀 GAME OVER. Type 'restart' to try again."
VICTORY_STATUS = "🎉 YOU WIN! Type 'restart' to play again."


@dataclass
class CommandResult:
    """What one command produced for the presentation layer."""

    lines: list[str] = field(default_factory=list)
    # The player (re-)entered a room: the transcript starts afresh
    entered_room: bool = False
    restarted: bool = False
    # Set only on the turn that ended the game
    ended: Ending | None = None


@dataclass(frozen=True)
class RoomView:
    """Render model of a room."""

    title: str
    image: str
    description: str
    character_text: str | None
    details: list[str]
    exits: list[str]


def handle_command(state: GameState, raw_input: str) -> CommandResult:
    """Process one line of player input."""
    cmd = (raw_input or "").strip()
    if not cmd:
        return CommandResult(["I beg your pardon?"])
    lower = cmd.lower()

    # Restart always works, even after the game is over
    if lower == "restart":
        return _cmd_restart(state)

    if state.is_finished:
        return _reject_finished(state)

    state.turns += 1

    handler = _VERB_DISPATCH.get(lower)
    if handler is not None:
        return handler(state)

    move = _MOVE_PATTERN.fullmatch(lower)
    if move:
        direction = move.group(1)
        return attempt_move(state, SHORT_DIRECTIONS.get(direction, direction))

    answer = _ANSWER_PATTERN.fullmatch(lower)
    if answer:
        return attempt_answer(state, answer.group(1))

    if lower in DIRECTIONS:
        return attempt_move(state, lower)

    character = state.current_room.character
    if character is not None and character.has_open_riddle:
        return attempt_answer(state, cmd)

    return CommandResult([
        f'Unknown command: "{cmd}". Type \'help\' for a list of valid commands.'
    ])


def handle_move(state: GameState, direction: str) -> CommandResult:
    """Follow an exit by name, as a clickable exit link does.

    Unlike free text, an unknown direction is never taken as a riddle guess.
    """
    if state.is_finished:
        return _reject_finished(state)

    state.turns += 1
    direction = direction.strip().lower()
    return attempt_move(state, SHORT_DIRECTIONS.get(direction, direction))


def attempt_move(state: GameState, direction: str) -> CommandResult:
    """Move the player through a link of the current room, if allowed."""
    target = state.current_room.move(direction)
    if target is None:
        return CommandResult([f"❌ You can't go {direction} from here."])

    if target.name == CASTLE_NAME and not _has_both_keys(state):
        return CommandResult([
            "⚠️ The castle gates are magically sealed. You need both the "
            "Stone Key and Water Key to enter."
        ])

    _enter_room(state, target)
    return CommandResult(entered_room=True)


def attempt_answer(state: GameState, answer_text: str) -> CommandResult:
    """Answer the riddle of the current room's character."""
    character = state.current_room.character
    if character is None or character.riddle is None:
        return CommandResult(["There's no riddle here to answer."])

    result = character.try_answer(answer_text)
    outcome = CommandResult([result.message])

    if result.status is AnswerStatus.CORRECT:
        reward = result.reward
        if reward and "key" in reward.lower():
            if state.player.add_item(Item(reward)):
                outcome.lines.append(f"🔑 You received: {reward}")

        if "dwarf" in character.name.lower():
            if _has_both_keys(state):
                outcome.lines.append(
                    "✨ As you answer, the castle trembles and the treasure "
                    "room opens. You are transported home with the treasure!"
                )
                home = state.world.room_named(HOME_NAME)
                if home is None:
                    raise KeyError(HOME_NAME)
                _enter_room(state, home)
                outcome.entered_room = True
                state.set_status(VICTORY_STATUS)
                state.ending = outcome.ended = Ending.VICTORY
            else:
                outcome.lines.append(
                    "The dwarf nods, but nothing happens. You need both the "
                    "Stone Key and the Water Key to claim the treasure. "
                    "Find them first."
                )
    elif result.status is AnswerStatus.DEAD:
        state.set_status(DEATH_STATUS, is_error=True)
        state.ending = outcome.ended = Ending.DEATH

    return outcome


def _reject_finished(state: GameState) -> CommandResult:
    state.set_status(GAME_OVER_STATUS, is_error=True)
    return CommandResult()


def _has_both_keys(state: GameState) -> bool:
    return state.player.has_item(STONE_KEY) and state.player.has_item(WATER_KEY)


def _enter_room(state: GameState, room: Room) -> None:
    state.player.current_room = room.key


def _cmd_restart(state: GameState) -> CommandResult:
    state.reset()
    return CommandResult(entered_room=True, restarted=True)


def _cmd_look(state: GameState) -> CommandResult:
    return CommandResult(entered_room=True)


def _cmd_inventory(state: GameState) -> CommandResult:
    return CommandResult([f"Inventory: {state.player.inventory_list()}"])


def _static_response(msg: str) -> Callable[[GameState], CommandResult]:
    """Return a handler that ignores the state and returns a fixed message."""
    def handler(state: GameState) -> CommandResult:
        return CommandResult([msg])
    return handler


_VERB_DISPATCH: dict[str, Callable[[GameState], CommandResult]] = {
    "help": _static_response(HELP_TEXT),
    **dict.fromkeys(("look", "l"), _cmd_look),
    **dict.fromkeys(("inventory", "i"), _cmd_inventory),
}


def get_room_view(state: GameState) -> RoomView:
    """Describe the current room for rendering."""
    room = state.current_room
    character = room.character
    return RoomView(
        title=room.name,
        image=room.display_image,
        description=room.describe(),
        character_text=character.interact_text() if character else None,
        details=room.details(),
        exits=get_exits(state),
    )


def get_exits(state: GameState) -> list[str]:
    return list(state.current_room.linked_rooms)
