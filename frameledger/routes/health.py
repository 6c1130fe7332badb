import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from frameledger.db import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

SessionDep = Depends(get_session)


@router.get("/", summary="Accueil du service")
def root():
    return {
        "ok": True,
        "service": "Frame Ledger API",
        "docs": "/docs",
        "health": "/health",
    }


@router.get("/health", summary="État du service et de la base")
def health(session: Session = SessionDep):
    """Vérifie que la base répond (SELECT 1); 503 sinon."""
    try:
        session.exec(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("[HEALTH] Base injoignable: %s", type(exc).__name__)
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "database": "unavailable"},
        )
    return {"status": "ok", "database": "ok"}


# Requêtes HEAD des moniteurs d'uptime
@router.head("/")
@router.head("/health")
def head_check():
    return Response(status_code=200)
