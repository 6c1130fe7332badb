from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

from ._base import now_utc


class InventoryEntry(SQLModel, table=True):
    """Stock d'une monture dans une boutique (une seule ligne par couple)."""
    __tablename__ = "shop_inventory"
    __table_args__ = (UniqueConstraint("shop_id", "frame_id", name="uq_shop_inventory_shop_frame"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    shop_id: int = Field(index=True, foreign_key="shops.id")
    frame_id: int = Field(index=True, foreign_key="frames.id")
    # Peut devenir négatif en cas de survente (voir ALLOW_NEGATIVE_STOCK)
    quantity: int = Field(default=0)

    created_at: datetime = Field(default_factory=now_utc)


class InventoryIncrement(SQLModel):
    shop_id: int
    frame_id: int
    quantity: int


class InventoryRead(SQLModel):
    id: int
    shop_id: int
    frame_id: int
    quantity: int


class InventoryLine(SQLModel):
    """Ligne d'inventaire jointe aux infos de la monture."""
    id: int
    frame_id: int
    product_id: str
    name: str
    description: Optional[str] = None
    price: float
    quantity: int
