from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from frameledger.db import get_session
from frameledger.models import ShopCreate, ShopRead
from frameledger.services import catalog

router = APIRouter(
    prefix="/api/shops",
    tags=["shops"],
)

SessionDep = Depends(get_session)


@router.get(
    "",
    response_model=List[ShopRead],
    summary="Lister toutes les boutiques",
)
def list_shops(
    session: Session = SessionDep,
) -> List[ShopRead]:
    """
    Retourne la liste complète des boutiques.
    Aucun paramètre requis -> ne peut PAS renvoyer 422.
    """
    return catalog.list_shops(session)


@router.get(
    "/{shop_id}",
    response_model=ShopRead,
    summary="Récupérer une boutique",
)
def get_shop(
    shop_id: int,
    session: Session = SessionDep,
) -> ShopRead:
    """Récupérer une boutique par son ID."""
    return catalog.require_shop(session, shop_id)


@router.post(
    "",
    response_model=ShopRead,
    status_code=201,
    summary="Créer une boutique",
)
def create_shop(
    payload: ShopCreate,
    session: Session = SessionDep,
) -> ShopRead:
    """Créer une nouvelle boutique (action distributeur)."""
    return catalog.create_shop(session, payload.name, payload.address)
