from datetime import datetime, timezone
from decimal import Decimal


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


# Bornes des colonnes Numeric(10,2) et Numeric(12,2)
MAX_UNIT_PRICE = Decimal("99999999.99")
MAX_TOTAL_PRICE = Decimal("9999999999.99")
