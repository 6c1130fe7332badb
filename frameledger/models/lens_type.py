from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import SQLModel, Field

from ._base import now_utc


class LensType(SQLModel, table=True):
    __tablename__ = "lens_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    price_multiplier: Decimal = Field(max_digits=6, decimal_places=3)

    created_at: datetime = Field(default_factory=now_utc)


class LensTypeRead(SQLModel):
    id: int
    name: str
    price_multiplier: float
