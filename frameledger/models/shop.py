from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from ._base import now_utc


class Shop(SQLModel, table=True):
    __tablename__ = "shops"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    address: Optional[str] = None

    created_at: datetime = Field(default_factory=now_utc)


class ShopCreate(SQLModel):
    name: str = Field(min_length=1)
    address: Optional[str] = None


class ShopRead(SQLModel):
    id: int
    name: str
    address: Optional[str] = None
    created_at: datetime
