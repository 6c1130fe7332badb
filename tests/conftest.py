"""Shared test fixtures."""

from collections.abc import Generator
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine, select

from frameledger.config import Settings, get_settings
from frameledger.db import get_session, init_db
from frameledger.main import app
from frameledger.models import Frame, LensType, Sale, Shop


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite shared by every session of a test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    try:
        yield test_engine
    finally:
        test_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as s:
        yield s


@pytest.fixture
def test_settings() -> Settings:
    return Settings(database_url="sqlite://")


@pytest.fixture
def client(engine: Engine, test_settings: Settings) -> Generator[TestClient, None, None]:
    """TestClient wired to the test engine (startup hooks are not run)."""

    def _session_override() -> Generator[Session, None, None]:
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def shop(session: Session) -> Shop:
    s = Shop(name="Optique Centre", address="12 rue Principale")
    session.add(s)
    session.commit()
    session.refresh(s)
    return s


@pytest.fixture
def other_shop(session: Session) -> Shop:
    s = Shop(name="Optique Nord")
    session.add(s)
    session.commit()
    session.refresh(s)
    return s


@pytest.fixture
def frame(session: Session) -> Frame:
    f = Frame(product_id="F001", name="Aviator", description="Metal", price=Decimal("49.99"))
    session.add(f)
    session.commit()
    session.refresh(f)
    return f


@pytest.fixture
def lens_types(session: Session) -> dict[str, LensType]:
    return {lt.name: lt for lt in session.exec(select(LensType)).all()}


@pytest.fixture
def make_sale(session: Session, lens_types: dict[str, LensType]) -> Callable[..., Sale]:
    """Insert a sale row directly, with an explicit sale date."""

    def _make(
        shop: Shop,
        frame: Frame,
        sale_date: datetime,
        total_price: str = "49.99",
        quantity: int = 1,
        lens_name: str = "Regular",
        billed: bool = False,
        unit_price: Optional[str] = None,
    ) -> Sale:
        sale = Sale(
            shop_id=shop.id,
            frame_id=frame.id,
            lens_type_id=lens_types[lens_name].id,
            quantity=quantity,
            unit_price=Decimal(unit_price or total_price),
            total_price=Decimal(total_price),
            sale_date=sale_date,
            billed=billed,
        )
        session.add(sale)
        session.commit()
        session.refresh(sale)
        return sale

    return _make
