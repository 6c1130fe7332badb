from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from frameledger.config import Settings, get_settings
from frameledger.db import get_session
from frameledger.models import SaleCreate, SaleRead, SaleView
from frameledger.services import sales_ledger

router = APIRouter(
    prefix="/api/sales",
    tags=["sales"],
)

SessionDep = Depends(get_session)


@router.get(
    "/{shop_id}",
    response_model=List[SaleView],
    summary="Ventes d'une boutique",
)
def list_sales(
    shop_id: int,
    session: Session = SessionDep,
) -> List[SaleView]:
    """Ventes de la boutique, plus récentes d'abord."""
    return sales_ledger.list_sales(session, shop_id)


@router.post(
    "",
    response_model=SaleRead,
    status_code=201,
    summary="Enregistrer une vente",
)
def record_sale(
    payload: SaleCreate,
    session: Session = SessionDep,
    settings: Settings = Depends(get_settings),
) -> SaleRead:
    """
    Enregistre la vente et débite l'inventaire dans la même transaction.
    unit_price / total_price optionnels: calculés côté serveur si absents.
    """
    return sales_ledger.record_sale(
        session,
        shop_id=payload.shop_id,
        frame_id=payload.frame_id,
        lens_type_id=payload.lens_type_id,
        quantity=payload.quantity,
        unit_price=payload.unit_price,
        total_price=payload.total_price,
        allow_negative_stock=settings.allow_negative_stock,
    )
