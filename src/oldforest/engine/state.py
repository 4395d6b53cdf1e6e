"""Mutable per-game state: the player and the world they play in.

The player's location is a room key into ``GameState.world`` rather than a
room object, so rebuilding the world on restart leaves nothing dangling.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from .builder import START_ROOM, build_world
from .world import Item, Room, World

INITIAL_STATUS = "Type 'help' for commands."


class Ending(StrEnum):
    VICTORY = "victory"
    DEATH = "death"


@dataclass
class Player:
    current_room: str = START_ROOM
    inventory: list[Item] = field(default_factory=list)

    def add_item(self, item: Item) -> bool:
        """Add an item unless one with the same name is held. Returns True if added."""
        if self.has_item(item.name):
            return False
        self.inventory.append(item)
        return True

    def has_item(self, name: str) -> bool:
        return any(item.matches(name) for item in self.inventory)

    def inventory_list(self) -> str:
        if not self.inventory:
            return "(empty)"
        return ", ".join(item.name for item in self.inventory)


@dataclass
class GameState:
    """Everything one game needs. Mutated in place by the command handlers."""

    world: World = field(default_factory=build_world)
    player: Player = field(default_factory=Player)
    turns: int = 0
    status: str = INITIAL_STATUS
    status_is_error: bool = False
    # Game-over flag: set on victory or death, cleared only by restart
    ending: Ending | None = None

    @property
    def is_finished(self) -> bool:
        return self.ending is not None

    @property
    def current_room(self) -> Room:
        return self.world.room(self.player.current_room)

    def set_status(self, text: str, is_error: bool = False) -> None:
        self.status = text
        self.status_is_error = is_error

    def reset(self) -> None:
        """Throw away the world and player and start over."""
        fresh = new_game_state()
        self.world = fresh.world
        self.player = fresh.player
        self.turns = fresh.turns
        self.status = fresh.status
        self.status_is_error = fresh.status_is_error
        self.ending = fresh.ending


def new_game_state() -> GameState:
    """Create a fresh game with the player at the forest entrance."""
    return GameState(world=build_world(), player=Player(current_room=START_ROOM))
