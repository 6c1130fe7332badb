from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from ._base import MAX_TOTAL_PRICE, MAX_UNIT_PRICE, now_utc


class Sale(SQLModel, table=True):
    """Vente immuable; seul `billed` peut évoluer (False -> True)."""
    __tablename__ = "sales"

    id: Optional[int] = Field(default=None, primary_key=True)
    shop_id: int = Field(index=True, foreign_key="shops.id")
    frame_id: int = Field(foreign_key="frames.id")
    lens_type_id: int = Field(foreign_key="lens_types.id")
    quantity: int = Field(default=1)
    unit_price: Decimal = Field(max_digits=10, decimal_places=2)
    total_price: Decimal = Field(max_digits=12, decimal_places=2)
    sale_date: datetime = Field(default_factory=now_utc, index=True, sa_type=DateTime(timezone=True))
    billed: bool = Field(default=False)


class SaleCreate(SQLModel):
    shop_id: int
    frame_id: int
    lens_type_id: int
    quantity: int = Field(default=1, gt=0)
    # Absents -> calculés depuis le prix de la monture et le multiplicateur
    unit_price: Optional[Decimal] = Field(default=None, ge=0, le=MAX_UNIT_PRICE)
    total_price: Optional[Decimal] = Field(default=None, ge=0, le=MAX_TOTAL_PRICE)


class SaleRead(SQLModel):
    id: int
    shop_id: int
    frame_id: int
    lens_type_id: int
    quantity: int
    unit_price: float
    total_price: float
    sale_date: datetime
    billed: bool


class SaleView(SQLModel):
    """Vente jointe au nom de la monture et du type de verre."""
    id: int
    product_id: str
    frame_name: str
    lens_type: str
    quantity: int
    unit_price: float
    total_price: float
    sale_date: datetime
    billed: bool


class BillSummary(SQLModel):
    totalAmount: float
    itemCount: int
    month: int
    year: int


class MonthlyBill(SQLModel):
    sales: List[SaleView]
    summary: BillSummary


class MarkBilledRequest(SQLModel):
    salesIds: List[int] = Field(default_factory=list)


class MarkBilledResult(SQLModel):
    updated: int
