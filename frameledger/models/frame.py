from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel, Field

from ._base import MAX_UNIT_PRICE, now_utc


class Frame(SQLModel, table=True):
    """Monture du catalogue partagé (product_id = code produit externe)."""
    __tablename__ = "frames"

    id: Optional[int] = Field(default=None, primary_key=True)
    product_id: str = Field(index=True, unique=True)  # ex: "F001"
    name: str
    description: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)

    created_at: datetime = Field(default_factory=now_utc)


class FrameCreate(SQLModel):
    product_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, le=MAX_UNIT_PRICE)


class FrameRead(SQLModel):
    id: int
    product_id: str
    name: str
    description: Optional[str] = None
    price: float
    created_at: datetime
