from fastapi import APIRouter, Depends
from sqlmodel import Session

from frameledger.db import get_session
from frameledger.models import DistributorDashboard, ShopDashboard
from frameledger.services import dashboard

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
)

SessionDep = Depends(get_session)


@router.get(
    "",
    response_model=DistributorDashboard,
    summary="Tableau de bord distributeur",
)
def distributor_dashboard(
    session: Session = SessionDep,
) -> DistributorDashboard:
    """Boutiques, ventes, chiffre d'affaires et ventes non facturées (par boutique)."""
    return dashboard.distributor_dashboard(session)


@router.get(
    "/{shop_id}",
    response_model=ShopDashboard,
    summary="Tableau de bord boutique",
)
def shop_dashboard(
    shop_id: int,
    session: Session = SessionDep,
) -> ShopDashboard:
    return dashboard.shop_dashboard(session, shop_id)
