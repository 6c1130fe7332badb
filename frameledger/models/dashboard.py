from typing import List

from sqlmodel import SQLModel


class ShopRevenue(SQLModel):
    shop_id: int
    name: str
    sales_count: int
    revenue: float
    unbilled_sales: int


class DistributorDashboard(SQLModel):
    total_shops: int
    total_sales: int
    total_revenue: float
    unbilled_sales: int
    shops: List[ShopRevenue]


class ShopDashboard(SQLModel):
    shop_id: int
    name: str
    total_sales: int
    total_revenue: float
    unbilled_sales: int
    frames_in_inventory: int
    units_on_hand: int
