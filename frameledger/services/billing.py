# frameledger/services/billing.py
"""Facturation mensuelle et statut facturé des ventes."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Tuple

from sqlalchemy import update
from sqlmodel import Session

from frameledger.db import unit_of_work
from frameledger.errors import InvalidArgumentError
from frameledger.models import BillSummary, MonthlyBill, Sale
from frameledger.services.catalog import require_shop
from frameledger.services.money import to_money
from frameledger.services.sales_ledger import sale_view_statement, to_sale_view

logger = logging.getLogger(__name__)


def month_window(month: int, year: int) -> Tuple[datetime, datetime]:
    """[1er du mois, 1er du mois suivant). Décembre bascule sur janvier de l'année suivante."""
    if not 1 <= month <= 12:
        raise InvalidArgumentError("Le mois doit être compris entre 1 et 12", details={"month": month})
    if not 1 <= year <= 9998:
        raise InvalidArgumentError("Année invalide", details={"year": year})

    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return start, end


def get_monthly_bill(session: Session, shop_id: int, month: int, year: int) -> MonthlyBill:
    require_shop(session, shop_id)
    start, end = month_window(month, year)

    stmt = (
        sale_view_statement()
        .where(
            Sale.shop_id == shop_id,
            Sale.sale_date >= start,
            Sale.sale_date < end,
        )
        .order_by(Sale.sale_date, Sale.id)
    )
    rows = session.exec(stmt).all()

    total_amount = sum((Decimal(str(r.total_price)) for r in rows), Decimal("0"))
    item_count = sum(int(r.quantity) for r in rows)

    return MonthlyBill(
        sales=[to_sale_view(r) for r in rows],
        summary=BillSummary(
            totalAmount=float(to_money(total_amount)),
            itemCount=item_count,
            month=month,
            year=year,
        ),
    )


def mark_billed(session: Session, shop_id: int, sale_ids: Iterable[int]) -> int:
    """
    Passe billed=True pour les ventes listées appartenant à la boutique.
    Ne compte que les lignes réellement modifiées (rejouer l'appel renvoie 0).
    """
    ids = sorted({int(i) for i in (sale_ids or [])})
    if not ids:
        raise InvalidArgumentError("La liste des ventes à facturer est vide")

    require_shop(session, shop_id)

    stmt = (
        update(Sale)
        .where(
            Sale.id.in_(ids),
            Sale.shop_id == shop_id,
            Sale.billed == False,  # noqa: E712
        )
        .values(billed=True)
        .execution_options(synchronize_session=False)
    )

    with unit_of_work(session):
        updated = session.exec(stmt).rowcount

    logger.info("[BILLING] shop=%s ventes demandées=%d facturées=%d", shop_id, len(ids), updated)
    return updated
