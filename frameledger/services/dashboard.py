# frameledger/services/dashboard.py
"""Indicateurs agrégés pour le portail distributeur et le portail boutique."""

from decimal import Decimal

from sqlalchemy import case, func
from sqlmodel import Session, select

from frameledger.models import (
    DistributorDashboard,
    InventoryEntry,
    Sale,
    Shop,
    ShopDashboard,
    ShopRevenue,
)
from frameledger.services.catalog import require_shop
from frameledger.services.money import to_money


def _money(value) -> float:
    return float(to_money(value if value is not None else Decimal("0")))


def distributor_dashboard(session: Session) -> DistributorDashboard:
    stmt = (
        select(
            Shop.id,
            Shop.name,
            func.count(Sale.id).label("sales_count"),
            func.coalesce(func.sum(Sale.total_price), 0).label("revenue"),
            func.coalesce(func.sum(case((Sale.billed == False, 1), else_=0)), 0).label("unbilled"),  # noqa: E712
        )
        .join(Sale, Sale.shop_id == Shop.id, isouter=True)
        .group_by(Shop.id, Shop.name)
        .order_by(Shop.id)
    )
    rows = session.exec(stmt).all()

    shops = [
        ShopRevenue(
            shop_id=r.id,
            name=r.name,
            sales_count=int(r.sales_count),
            revenue=_money(r.revenue),
            unbilled_sales=int(r.unbilled),
        )
        for r in rows
    ]
    return DistributorDashboard(
        total_shops=len(shops),
        total_sales=sum(s.sales_count for s in shops),
        total_revenue=_money(sum((Decimal(str(s.revenue)) for s in shops), Decimal("0"))),
        unbilled_sales=sum(s.unbilled_sales for s in shops),
        shops=shops,
    )


def shop_dashboard(session: Session, shop_id: int) -> ShopDashboard:
    shop = require_shop(session, shop_id)

    sales = session.exec(
        select(
            func.count(Sale.id),
            func.coalesce(func.sum(Sale.total_price), 0),
            func.coalesce(func.sum(case((Sale.billed == False, 1), else_=0)), 0),  # noqa: E712
        ).where(Sale.shop_id == shop_id)
    ).one()
    units = session.exec(
        select(
            func.count(InventoryEntry.id),
            func.coalesce(func.sum(InventoryEntry.quantity), 0),
        ).where(InventoryEntry.shop_id == shop_id)
    ).one()

    return ShopDashboard(
        shop_id=shop.id,
        name=shop.name,
        total_sales=int(sales[0]),
        total_revenue=_money(sales[1]),
        unbilled_sales=int(sales[2]),
        frames_in_inventory=int(units[0]),
        units_on_hand=int(units[1]),
    )
