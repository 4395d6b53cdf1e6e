"""Session layer bridging the game engine and the capsule.

Each player (identified by certificate fingerprint) owns one in-memory
``GameSession``. Sessions live in a ``SessionRegistry`` held by the app and
are lost when the process stops.

xitzin runs sync handlers on worker threads, so every read or write of a
game happens while holding that game's ``lock``.
"""

import threading
from collections import OrderedDict
from collections.abc import Callable

from .engine.commands import (
    CommandResult,
    RoomView,
    get_room_view,
    handle_command,
    handle_move,
)
from .engine.state import Ending, GameState, new_game_state
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_SESSIONS = 1000


class GameSession:
    """Wraps one GameState plus the transcript shown under the room."""

    def __init__(self, fingerprint: str, state: GameState | None = None):
        self.fingerprint = fingerprint
        self.state = state or new_game_state()
        self.transcript: list[str] = []
        self.lock = threading.Lock()

    def process_command(self, raw_input: str) -> CommandResult:
        """Delegate a line of free text to the engine."""
        return self._apply(raw_input, lambda: handle_command(self.state, raw_input))

    def process_move(self, direction: str) -> CommandResult:
        """Follow an exit link by direction name."""
        return self._apply(f"go {direction}", lambda: handle_move(self.state, direction))

    def _apply(
        self, command: str, run: Callable[[], CommandResult]
    ) -> CommandResult:
        """Run an engine call and fold its result into the transcript."""
        room_before = self.state.player.current_room
        result = run()

        if result.entered_room:
            self.transcript.clear()
        self.transcript.extend(result.lines)

        logger.debug(
            "command_handled",
            fingerprint=self.fingerprint,
            command=command,
            turns=self.state.turns,
        )
        if result.restarted:
            logger.info("game_restarted", fingerprint=self.fingerprint)
        elif self.state.player.current_room != room_before:
            logger.debug(
                "room_entered",
                fingerprint=self.fingerprint,
                room=self.state.player.current_room,
            )
        if result.ended is not None:
            logger.info(
                "game_won" if result.ended is Ending.VICTORY else "game_lost",
                fingerprint=self.fingerprint,
                turns=self.state.turns,
            )
        return result

    def room_view(self) -> RoomView:
        return get_room_view(self.state)

    def inventory_summary(self) -> str:
        return self.state.player.inventory_list()


class SessionRegistry:
    """Process-local map from fingerprint to game session.

    Holds at most ``max_sessions`` games; the least recently used one is
    dropped to make room for a new player.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, GameSession] = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, fingerprint: str) -> GameSession:
        """Return the player's live game, starting one if needed."""
        with self._lock:
            game = self._sessions.get(fingerprint)
            if game is not None:
                self._sessions.move_to_end(fingerprint)
                return game

            game = GameSession(fingerprint)
            self._sessions[fingerprint] = game
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("game_evicted", fingerprint=evicted)
            logger.info(
                "game_started",
                fingerprint=fingerprint,
                sessions=len(self._sessions),
            )
            return game
