from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from frameledger.db import get_session
from frameledger.models import FrameCreate, FrameRead, LensTypeRead
from frameledger.services import catalog

router = APIRouter(
    prefix="/api",
    tags=["catalog"],
)

SessionDep = Depends(get_session)


@router.get(
    "/frames",
    response_model=List[FrameRead],
    summary="Lister le catalogue de montures",
)
def list_frames(
    session: Session = SessionDep,
) -> List[FrameRead]:
    return catalog.list_frames(session)


@router.post(
    "/frames",
    response_model=FrameRead,
    status_code=201,
    summary="Créer une monture",
)
def create_frame(
    payload: FrameCreate,
    session: Session = SessionDep,
) -> FrameRead:
    """Ajoute une monture au catalogue. product_id déjà pris -> 409."""
    return catalog.create_frame(
        session,
        product_id=payload.product_id,
        name=payload.name,
        price=payload.price,
        description=payload.description,
    )


@router.get(
    "/lens-types",
    response_model=List[LensTypeRead],
    summary="Lister les types de verres",
)
def list_lens_types(
    session: Session = SessionDep,
) -> List[LensTypeRead]:
    return catalog.list_lens_types(session)
