# frameledger/routes/inventory.py
from typing import List

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlmodel import Session

from frameledger.config import Settings, get_settings
from frameledger.db import get_session
from frameledger.errors import InvalidArgumentError
from frameledger.models import ImportResult, InventoryIncrement, InventoryLine, InventoryRead
from frameledger.services import inventory_ledger
from frameledger.services.csv_import import import_inventory_csv

router = APIRouter(
    prefix="/api",
    tags=["inventory"],
)

SessionDep = Depends(get_session)
SettingsDep = Depends(get_settings)


def _decode_csv(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise InvalidArgumentError("Le fichier CSV doit être encodé en UTF-8")


@router.get(
    "/inventory/{shop_id}",
    response_model=List[InventoryLine],
    summary="Inventaire d'une boutique",
)
def get_inventory(
    shop_id: int,
    session: Session = SessionDep,
) -> List[InventoryLine]:
    """Stock de la boutique joint aux infos des montures (liste vide si aucun stock)."""
    return inventory_ledger.get_inventory(session, shop_id)


@router.post(
    "/inventory",
    response_model=InventoryRead,
    summary="Ajouter du stock",
)
def increment_inventory(
    payload: InventoryIncrement,
    session: Session = SessionDep,
) -> InventoryRead:
    """
    Ajoute `quantity` au stock du couple (shop_id, frame_id).
    La ligne est créée si elle n'existe pas encore.
    """
    return inventory_ledger.add_or_increment_stock(
        session, payload.shop_id, payload.frame_id, payload.quantity
    )


@router.post(
    "/upload-inventory",
    response_model=ImportResult,
    summary="Importer un fichier CSV d'inventaire",
)
async def upload_inventory(
    csvFile: UploadFile = File(..., description="Fichier CSV"),
    shopId: int = Form(..., description="ID de la boutique"),
    session: Session = SessionDep,
    settings: Settings = SettingsDep,
) -> ImportResult:
    text = _decode_csv(await csvFile.read())
    return await run_in_threadpool(
        import_inventory_csv,
        session,
        shopId,
        text,
        refresh_existing=settings.refresh_existing_frames,
    )


@router.post(
    "/inventory/{shop_id}/import",
    response_model=ImportResult,
    summary="Importer un CSV d'inventaire (texte brut)",
)
async def import_inventory_text(
    shop_id: int,
    request: Request,
    session: Session = SessionDep,
    settings: Settings = SettingsDep,
) -> ImportResult:
    """Corps de la requête = contenu CSV brut (text/csv)."""
    text = _decode_csv(await request.body())
    return await run_in_threadpool(
        import_inventory_csv,
        session,
        shop_id,
        text,
        refresh_existing=settings.refresh_existing_frames,
    )
