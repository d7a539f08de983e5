import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from erp_backend.server.db.session import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
def health(session: Session = Depends(get_session)):
    database = "ok"
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health: databasen svarar inte: %s", e)
        database = "unavailable"
    return {"message": "ok", "database": database}
