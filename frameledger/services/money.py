# frameledger/services/money.py
"""Montants en Decimal, arrondis au centime (demi vers le haut)."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from frameledger.errors import InvalidArgumentError

CENT = Decimal("0.01")


def to_money(value, limit: Optional[Decimal] = None, field: str = "amount") -> Decimal:
    """
    Arrondi au centime, demi vers le haut (74.985 -> 74.99).
    Montant illisible, infini ou au-delà de `limit` -> InvalidArgumentError.
    """
    try:
        amount = Decimal(str(value))
        if not amount.is_finite():
            raise InvalidOperation(value)
        amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidArgumentError(f"Montant invalide: {value}", details={field: str(value)})

    if limit is not None and abs(amount) > limit:
        raise InvalidArgumentError(
            f"Montant hors limites: {value}",
            details={field: str(value), "max": str(limit)},
        )
    return amount
