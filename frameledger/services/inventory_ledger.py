# frameledger/services/inventory_ledger.py
"""
Inventaire par boutique.

Toute modification de quantité passe par `apply_stock_delta`, un upsert
atomique (INSERT ... ON CONFLICT DO UPDATE SET quantity = quantity + delta):
deux écritures concurrentes sur le même couple (boutique, monture) ne
peuvent pas se perdre.
"""

import logging
from typing import List, Tuple

from sqlmodel import Session, select

from frameledger.db import dialect_insert, unit_of_work
from frameledger.errors import InvalidArgumentError
from frameledger.models import Frame, InventoryEntry, InventoryLine, InventoryRead, now_utc
from frameledger.services.catalog import require_frame, require_shop

logger = logging.getLogger(__name__)


def get_inventory(session: Session, shop_id: int) -> List[InventoryLine]:
    require_shop(session, shop_id)

    stmt = (
        select(
            InventoryEntry.id,
            InventoryEntry.frame_id,
            Frame.product_id,
            Frame.name,
            Frame.description,
            Frame.price,
            InventoryEntry.quantity,
        )
        .join(Frame, Frame.id == InventoryEntry.frame_id)
        .where(InventoryEntry.shop_id == shop_id)
        .order_by(Frame.product_id)
    )

    return [
        InventoryLine(
            id=row.id,
            frame_id=row.frame_id,
            product_id=row.product_id,
            name=row.name,
            description=row.description,
            price=float(row.price),
            quantity=row.quantity,
        )
        for row in session.exec(stmt).all()
    ]


def apply_stock_delta(session: Session, shop_id: int, frame_id: int, delta: int) -> Tuple[int, int]:
    """
    Ajoute `delta` (positif ou négatif) au stock du couple, en créant la ligne si besoin.
    Ne commit pas: s'exécute dans la transaction de l'appelant.
    Retourne (inventory_id, nouvelle quantité).
    """
    insert = dialect_insert(session)
    table = InventoryEntry.__table__
    stmt = insert(table).values(
        shop_id=shop_id,
        frame_id=frame_id,
        quantity=delta,
        created_at=now_utc(),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.shop_id, table.c.frame_id],
        set_={"quantity": table.c.quantity + stmt.excluded.quantity},
    ).returning(table.c.id, table.c.quantity)

    inventory_id, quantity = session.exec(stmt).one()
    return inventory_id, quantity


def add_or_increment_stock(session: Session, shop_id: int, frame_id: int, delta: int) -> InventoryRead:
    require_shop(session, shop_id)
    require_frame(session, frame_id)

    with unit_of_work(session):
        inventory_id, quantity = apply_stock_delta(session, shop_id, frame_id, delta)

    logger.info(
        "[INVENTORY] shop=%s frame=%s delta=%+d -> quantity=%d", shop_id, frame_id, delta, quantity
    )
    return InventoryRead(id=inventory_id, shop_id=shop_id, frame_id=frame_id, quantity=quantity)


def decrement_stock(
    session: Session,
    shop_id: int,
    frame_id: int,
    quantity: int,
    *,
    allow_negative: bool = True,
) -> int:
    """
    Débit de stock lié à une vente (appelé uniquement par le journal des ventes).
    Sans ligne existante, elle est créée à -quantity.
    Si `allow_negative` est faux, un stock final < 0 lève InvalidArgumentError
    et la transaction englobante est annulée.
    """
    _, remaining = apply_stock_delta(session, shop_id, frame_id, -quantity)
    if remaining < 0:
        if not allow_negative:
            raise InvalidArgumentError(
                "Stock insuffisant pour cette vente",
                details={"shop_id": shop_id, "frame_id": frame_id, "available": remaining + quantity, "requested": quantity},
            )
        logger.warning("[INVENTORY] Survente: shop=%s frame=%s quantity=%d", shop_id, frame_id, remaining)
    return remaining
