import logging
from functools import lru_cache

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def get_engine(database_url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(database_url, echo=echo, connect_args=connect_args)


def check_connection(engine: Engine) -> bool:
    """SELECT 1 mot databasen. Loggar och returnerar False vid fel, kastar aldrig."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Databasanslutningen misslyckades (%s)", engine.url.render_as_string(hide_password=True))
        return False
    logger.info("Databasanslutning OK")
    return True


def init_db(engine: Engine) -> None:
    # skapar bara tabeller som saknas, befintliga lämnas orörda
    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    with Session(request.app.state.engine) as session:
        yield session
