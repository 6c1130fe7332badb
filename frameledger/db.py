# frameledger/db.py
import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Generator, Iterator, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, create_engine, select

from frameledger.config import get_settings
from frameledger.errors import LedgerError, StorageFailureError
from frameledger.models import LensType

logger = logging.getLogger(__name__)

# Types de verres livrés à l'initialisation (nom, multiplicateur)
DEFAULT_LENS_TYPES = (
    ("Regular", Decimal("1.0")),
    ("Premium", Decimal("1.5")),
    ("Pro", Decimal("2.0")),
)


def mask_db_url(url: str) -> str:
    if not url or "://" not in url or "@" not in url:
        return url
    scheme, rest = url.split("://", 1)
    creds, tail = rest.split("@", 1)
    user = creds.split(":", 1)[0]
    return f"{scheme}://{user}:***@{tail}"


def build_engine(url: str, pool_size: int = 5, max_overflow: int = 10) -> Engine:
    if url.startswith("sqlite:"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=1800,
    )


_INSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


_settings = get_settings()
engine = build_engine(_settings.database_url, _settings.db_pool_size, _settings.db_max_overflow)


def dialect_insert(session: Session):
    """`insert` du dialecte courant (supporte ON CONFLICT), pour les upserts atomiques."""
    dialect = session.get_bind().dialect.name
    insert = _INSERT_DIALECTS.get(dialect)
    if insert is None:
        raise StorageFailureError(f"Dialecte non supporté pour les upserts: {dialect}")
    return insert


def seed_lens_types(session: Session) -> int:
    """Insère les types de verres par défaut s'ils sont absents. Retourne le nombre créé."""
    existing = set(session.exec(select(LensType.name)).all())
    created = 0
    for name, multiplier in DEFAULT_LENS_TYPES:
        if name in existing:
            continue
        session.add(LensType(name=name, price_multiplier=multiplier))
        created += 1
    session.commit()
    return created


def init_db(target: Optional[Engine] = None) -> None:
    target = target or engine
    logger.info("[BOOT] DB URL = %s", mask_db_url(str(target.url)))
    SQLModel.metadata.create_all(target)
    with Session(target) as session:
        created = seed_lens_types(session)
    if created:
        logger.info("[BOOT] Types de verres initialisés: %d", created)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """
    Une opération = une transaction.
    - commit si tout passe
    - rollback sur erreur métier (propagée telle quelle)
    - rollback sur erreur SQL, remontée en StorageFailureError
    """
    try:
        yield session
        session.commit()
    except LedgerError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("[DB] Transaction annulée")
        raise StorageFailureError("Erreur de persistance", details={"reason": type(exc).__name__}) from exc
