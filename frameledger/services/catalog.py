# frameledger/services/catalog.py
"""Données de référence: boutiques, montures, types de verres."""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from frameledger.db import unit_of_work
from frameledger.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    StorageFailureError,
)
from frameledger.models import MAX_UNIT_PRICE, Frame, LensType, Shop
from frameledger.services.money import to_money

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    v = value.strip()
    return v if v else None


# ----------------------------
#  BOUTIQUES
# ----------------------------

def list_shops(session: Session) -> List[Shop]:
    return list(session.exec(select(Shop).order_by(Shop.id)).all())


def require_shop(session: Session, shop_id: int) -> Shop:
    shop = session.get(Shop, shop_id)
    if not shop:
        raise NotFoundError(f"Boutique introuvable: {shop_id}", details={"shop_id": shop_id})
    return shop


def create_shop(session: Session, name: str, address: Optional[str] = None) -> Shop:
    name = _clean(name)
    if not name:
        raise InvalidArgumentError("Le nom de la boutique est obligatoire")

    shop = Shop(name=name, address=_clean(address))
    with unit_of_work(session):
        session.add(shop)
    session.refresh(shop)
    logger.info("[SHOP] Boutique créée id=%s name=%s", shop.id, shop.name)
    return shop


# ----------------------------
#  MONTURES
# ----------------------------

def list_frames(session: Session) -> List[Frame]:
    return list(session.exec(select(Frame).order_by(Frame.id)).all())


def require_frame(session: Session, frame_id: int) -> Frame:
    frame = session.get(Frame, frame_id)
    if not frame:
        raise NotFoundError(f"Monture introuvable: {frame_id}", details={"frame_id": frame_id})
    return frame


def find_frame_by_product_id(session: Session, product_id: str) -> Optional[Frame]:
    return session.exec(select(Frame).where(Frame.product_id == product_id)).first()


def create_frame(
    session: Session,
    product_id: str,
    name: str,
    price: Decimal,
    description: Optional[str] = None,
) -> Frame:
    product_id = _clean(product_id)
    name = _clean(name)
    if not product_id or not name:
        raise InvalidArgumentError("product_id et name sont obligatoires")
    price = to_money(price, limit=MAX_UNIT_PRICE, field="price")
    if price < 0:
        raise InvalidArgumentError("Le prix doit être un nombre positif", details={"price": str(price)})

    if find_frame_by_product_id(session, product_id):
        raise ConflictError(
            f"product_id déjà utilisé: {product_id}", details={"product_id": product_id}
        )

    frame = Frame(product_id=product_id, name=name, description=_clean(description), price=price)
    try:
        with unit_of_work(session):
            session.add(frame)
    except StorageFailureError as exc:
        # insertion concurrente du même product_id
        if isinstance(exc.__cause__, IntegrityError):
            raise ConflictError(
                f"product_id déjà utilisé: {product_id}", details={"product_id": product_id}
            ) from exc.__cause__
        raise
    session.refresh(frame)
    logger.info("[CATALOG] Monture créée id=%s product_id=%s", frame.id, frame.product_id)
    return frame


# ----------------------------
#  TYPES DE VERRES
# ----------------------------

def list_lens_types(session: Session) -> List[LensType]:
    return list(session.exec(select(LensType).order_by(LensType.id)).all())


def require_lens_type(session: Session, lens_type_id: int) -> LensType:
    lens = session.get(LensType, lens_type_id)
    if not lens:
        raise NotFoundError(
            f"Type de verre introuvable: {lens_type_id}", details={"lens_type_id": lens_type_id}
        )
    return lens
