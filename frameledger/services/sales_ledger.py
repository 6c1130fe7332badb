# frameledger/services/sales_ledger.py
"""Journal des ventes: ajout seul, chaque vente débite l'inventaire."""

import logging
from decimal import Decimal
from typing import List, Optional

from sqlmodel import Session, select

from frameledger.db import unit_of_work
from frameledger.errors import InvalidArgumentError
from frameledger.models import MAX_TOTAL_PRICE, MAX_UNIT_PRICE, Frame, LensType, Sale, SaleView, now_utc
from frameledger.services.catalog import require_frame, require_lens_type, require_shop
from frameledger.services.inventory_ledger import decrement_stock
from frameledger.services.money import to_money

logger = logging.getLogger(__name__)


def compute_total_price(unit_price, multiplier, quantity: int) -> Decimal:
    return to_money(
        Decimal(str(unit_price)) * Decimal(str(multiplier)) * quantity,
        limit=MAX_TOTAL_PRICE,
        field="total_price",
    )


def sale_view_statement():
    return (
        select(
            Sale.id,
            Frame.product_id,
            Frame.name.label("frame_name"),
            LensType.name.label("lens_type"),
            Sale.quantity,
            Sale.unit_price,
            Sale.total_price,
            Sale.sale_date,
            Sale.billed,
        )
        .join(Frame, Frame.id == Sale.frame_id)
        .join(LensType, LensType.id == Sale.lens_type_id)
    )


def to_sale_view(row) -> SaleView:
    return SaleView(
        id=row.id,
        product_id=row.product_id,
        frame_name=row.frame_name,
        lens_type=row.lens_type,
        quantity=row.quantity,
        unit_price=float(row.unit_price),
        total_price=float(row.total_price),
        sale_date=row.sale_date,
        billed=bool(row.billed),
    )


def record_sale(
    session: Session,
    shop_id: int,
    frame_id: int,
    lens_type_id: int,
    quantity: int = 1,
    unit_price: Optional[Decimal] = None,
    total_price: Optional[Decimal] = None,
    *,
    allow_negative_stock: bool = True,
) -> Sale:
    """
    Enregistre une vente et débite le stock dans la même transaction:
    les deux écritures passent, ou aucune.

    - unit_price absent -> prix courant de la monture (photographié dans la vente)
    - total_price absent -> unit_price × multiplicateur du verre × quantité
    """
    if quantity is None or int(quantity) <= 0:
        raise InvalidArgumentError("La quantité doit être > 0", details={"quantity": quantity})
    quantity = int(quantity)

    require_shop(session, shop_id)
    frame = require_frame(session, frame_id)
    lens = require_lens_type(session, lens_type_id)

    unit = to_money(
        frame.price if unit_price is None else unit_price, limit=MAX_UNIT_PRICE, field="unit_price"
    )
    if total_price is None:
        total = compute_total_price(unit, lens.price_multiplier, quantity)
    else:
        total = to_money(total_price, limit=MAX_TOTAL_PRICE, field="total_price")
    if unit < 0 or total < 0:
        raise InvalidArgumentError("Les prix ne peuvent pas être négatifs")

    sale = Sale(
        shop_id=shop_id,
        frame_id=frame_id,
        lens_type_id=lens_type_id,
        quantity=quantity,
        unit_price=unit,
        total_price=total,
        sale_date=now_utc(),
        billed=False,
    )

    with unit_of_work(session):
        session.add(sale)
        session.flush()
        remaining = decrement_stock(
            session, shop_id, frame_id, quantity, allow_negative=allow_negative_stock
        )

    session.refresh(sale)
    logger.info(
        "[SALE] id=%s shop=%s frame=%s lens=%s qty=%d total=%s stock=%d",
        sale.id, shop_id, frame_id, lens.name, quantity, total, remaining,
    )
    return sale


def list_sales(session: Session, shop_id: int) -> List[SaleView]:
    """Ventes d'une boutique, plus récentes d'abord."""
    require_shop(session, shop_id)
    stmt = (
        sale_view_statement()
        .where(Sale.shop_id == shop_id)
        .order_by(Sale.sale_date.desc(), Sale.id.desc())
    )
    return [to_sale_view(row) for row in session.exec(stmt).all()]
