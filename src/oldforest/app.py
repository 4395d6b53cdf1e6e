"""Xitzin application factory for the Old Forest."""

from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine
from xitzin import Xitzin

from .config import Config
from .logging import get_logger
from .session import SessionRegistry

logger = get_logger(__name__)


def create_app(config: Config | None = None) -> Xitzin:
    """Create and configure the Xitzin application."""
    config = config or Config.from_env()

    templates_dir = Path(__file__).parent / "templates"

    app = Xitzin(
        title="The Old Forest",
        version="0.1.0",
        templates_dir=templates_dir,
    )

    engine = create_engine(config.database_url)
    app.state.engine = engine
    app.state.config = config
    app.state.games = SessionRegistry(max_sessions=config.max_sessions)

    @app.on_startup
    async def startup():
        """Initialize the player registry."""
        SQLModel.metadata.create_all(engine)
        logger.debug("database_setup_complete")
        logger.info("startup_complete")

    from .routes import home, play

    home.register_routes(app)
    play.register_routes(app)

    return app


def get_session(app: Xitzin) -> Session:
    """Get a database session from the app."""
    return Session(app.state.engine)
