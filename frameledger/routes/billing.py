from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from frameledger.db import get_session
from frameledger.models import MarkBilledRequest, MarkBilledResult, MonthlyBill
from frameledger.services import billing

router = APIRouter(
    prefix="/api/billing",
    tags=["billing"],
)

SessionDep = Depends(get_session)


@router.get(
    "/{shop_id}",
    response_model=MonthlyBill,
    summary="Facture mensuelle d'une boutique",
)
def get_monthly_bill(
    shop_id: int,
    month: Optional[int] = Query(None, ge=1, le=12, description="Mois (1-12), défaut: mois courant"),
    year: Optional[int] = Query(None, ge=1, le=9998, description="Année, défaut: année courante"),
    session: Session = SessionDep,
) -> MonthlyBill:
    now = datetime.now(timezone.utc)
    return billing.get_monthly_bill(
        session,
        shop_id,
        month if month is not None else now.month,
        year if year is not None else now.year,
    )


@router.post(
    "/{shop_id}/mark-billed",
    response_model=MarkBilledResult,
    summary="Marquer des ventes comme facturées",
)
def mark_billed(
    shop_id: int,
    payload: MarkBilledRequest,
    session: Session = SessionDep,
) -> MarkBilledResult:
    """
    Seules les ventes de cette boutique sont modifiées.
    `updated` ne compte que les ventes qui n'étaient pas encore facturées.
    """
    updated = billing.mark_billed(session, shop_id, payload.salesIds)
    return MarkBilledResult(updated=updated)
