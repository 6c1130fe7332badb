from .shop import Shop, ShopCreate, ShopRead
from .frame import Frame, FrameCreate, FrameRead
from .lens_type import LensType, LensTypeRead
from .inventory import InventoryEntry, InventoryIncrement, InventoryLine, InventoryRead
from .sale import (
    BillSummary,
    MarkBilledRequest,
    MarkBilledResult,
    MonthlyBill,
    Sale,
    SaleCreate,
    SaleRead,
    SaleView,
)
from .imports import ImportResult, ImportRowError
from .dashboard import DistributorDashboard, ShopDashboard, ShopRevenue
from ._base import MAX_TOTAL_PRICE, MAX_UNIT_PRICE, now_utc

__all__ = [
    "Shop", "ShopCreate", "ShopRead",
    "Frame", "FrameCreate", "FrameRead",
    "LensType", "LensTypeRead",
    "InventoryEntry", "InventoryIncrement", "InventoryLine", "InventoryRead",
    "Sale", "SaleCreate", "SaleRead", "SaleView",
    "BillSummary", "MonthlyBill", "MarkBilledRequest", "MarkBilledResult",
    "ImportResult", "ImportRowError",
    "DistributorDashboard", "ShopDashboard", "ShopRevenue",
    "MAX_TOTAL_PRICE", "MAX_UNIT_PRICE", "now_utc",
]
