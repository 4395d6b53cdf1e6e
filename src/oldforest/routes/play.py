"""Gameplay routes."""

from collections.abc import Callable
from contextlib import contextmanager

from xitzin import Redirect, Request, Xitzin
from xitzin.auth import get_identity, require_certificate

from ..app import get_session
from ..engine.commands import CommandResult
from ..models import Player
from ..session import GameSession
from ..users import get_or_create_player, record_ending


@contextmanager
def _game_session(request: Request):
    """Yield the player record and their live game, closing the db session."""
    identity = get_identity(request)
    db_session = get_session(request.app)
    try:
        player = get_or_create_player(db_session, identity.fingerprint)
        game = request.app.state.games.get_or_create(identity.fingerprint)
        yield db_session, player, game
    finally:
        db_session.close()


def _render_play(app: Xitzin, game: GameSession, player: Player):
    """Render the main play view."""
    state = game.state
    return app.template(
        "play.gmi",
        room=game.room_view(),
        transcript=game.transcript,
        status=state.status,
        status_is_error=state.status_is_error,
        inventory=game.inventory_summary(),
        is_finished=state.is_finished,
        turns=state.turns,
        wins=player.wins,
        deaths=player.deaths,
    )


def _play(
    app: Xitzin,
    request: Request,
    action: Callable[[GameSession], CommandResult],
):
    """Run one engine action for the requesting player and render the result."""
    with _game_session(request) as (db_session, player, game):
        with game.lock:
            result = action(game)
            if result.ended is not None:
                player = record_ending(db_session, player, result.ended)
            return _render_play(app, game, player)


def _play_command(app: Xitzin, request: Request, command: str):
    """Run one line of free text for the requesting player."""
    return _play(app, request, lambda game: game.process_command(command))


def _register_action_routes(app: Xitzin) -> None:
    """Register command and movement routes."""

    @app.gemini("/play", name="play")
    @require_certificate
    def play(request: Request):
        """Main game view."""
        with _game_session(request) as (_, player, game):
            with game.lock:
                return _render_play(app, game, player)

    @app.gemini("/go/{direction}", name="go")
    @require_certificate
    def go(request: Request, direction: str):
        """Movement via clickable link."""
        return _play(app, request, lambda game: game.process_move(direction))

    @app.input("/cmd", prompt="What do you want to do?", name="cmd")
    @require_certificate
    def cmd(request: Request, query: str):
        """Freeform command entry."""
        return _play_command(app, request, query)

    @app.input("/answer", prompt="What is your answer?", name="answer")
    @require_certificate
    def answer(request: Request, query: str):
        """Answer the riddle in the current room."""
        return _play_command(app, request, f"answer {query}")

    @app.gemini("/look", name="look")
    @require_certificate
    def look(request: Request):
        """Look around."""
        return _play_command(app, request, "look")


def _register_info_routes(app: Xitzin) -> None:
    """Register inventory and game management routes."""

    @app.gemini("/inventory", name="inventory")
    @require_certificate
    def inventory(request: Request):
        """Show carried items."""
        return _play_command(app, request, "inventory")

    @app.input(
        "/restart",
        prompt="Are you sure you want to start over? Type YES to confirm:",
        name="restart",
    )
    @require_certificate
    def restart(request: Request, query: str):
        """Restart the game with confirmation."""
        if query.strip().upper() == "YES":
            return _play_command(app, request, "restart")
        return Redirect("/play")


def register_routes(app: Xitzin) -> None:
    """Register gameplay routes."""
    _register_action_routes(app)
    _register_info_routes(app)
