# frameledger/services/csv_import.py
"""
Import CSV d'inventaire pour une boutique.

Format: ligne d'en-tête puis une ligne par monture.
- colonnes obligatoires: product_id, name, price
- colonnes optionnelles: description (""), quantity (0)

Découpage naïf sur les virgules: pas de champs entre guillemets.
Les lignes invalides sont ignorées et listées dans `errors`; tout l'import
est une seule transaction.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from sqlmodel import Session, select

from frameledger.db import dialect_insert, unit_of_work
from frameledger.errors import InvalidArgumentError
from frameledger.models import MAX_UNIT_PRICE, Frame, ImportResult, ImportRowError, now_utc
from frameledger.services.catalog import require_shop
from frameledger.services.inventory_ledger import apply_stock_delta
from frameledger.services.money import to_money

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("product_id", "name", "price")
OPTIONAL_COLUMNS = ("description", "quantity")


@dataclass(frozen=True)
class CsvFrameRow:
    line: int
    product_id: str
    name: str
    description: str
    price: Decimal
    quantity: int


class RowError(ValueError):
    pass


def parse_header(header_line: str) -> Dict[str, int]:
    """Index de chaque colonne connue (insensible à la casse)."""
    headers = [h.strip().lower() for h in header_line.split(",")]
    index: Dict[str, int] = {}
    for column in REQUIRED_COLUMNS + OPTIONAL_COLUMNS:
        if column in headers:
            index[column] = headers.index(column)

    missing = [c for c in REQUIRED_COLUMNS if c not in index]
    if missing:
        raise InvalidArgumentError(
            "Le CSV doit contenir les colonnes product_id, name et price",
            details={"missing_columns": missing},
        )
    return index


def _field(columns: List[str], index: Dict[str, int], name: str) -> Optional[str]:
    pos = index.get(name)
    if pos is None:
        return None
    if pos >= len(columns):
        raise RowError(f"colonne '{name}' absente")
    return columns[pos].strip()


def parse_row(line_no: int, raw: str, index: Dict[str, int]) -> CsvFrameRow:
    columns = raw.split(",")

    product_id = _field(columns, index, "product_id") or ""
    name = _field(columns, index, "name") or ""
    price_raw = _field(columns, index, "price") or ""
    description = _field(columns, index, "description") or ""
    quantity_raw = _field(columns, index, "quantity") or ""

    if not product_id:
        raise RowError("product_id vide")
    if not name:
        raise RowError("name vide")

    try:
        price = to_money(price_raw, limit=MAX_UNIT_PRICE, field="price")
    except InvalidArgumentError:
        raise RowError(f"prix invalide '{price_raw}'")
    if price < 0:
        raise RowError(f"prix négatif '{price_raw}'")

    quantity = 0
    if quantity_raw:
        try:
            quantity = int(quantity_raw)
        except ValueError:
            raise RowError(f"quantité invalide '{quantity_raw}'")

    return CsvFrameRow(
        line=line_no,
        product_id=product_id,
        name=name,
        description=description,
        price=price,
        quantity=quantity,
    )


def upsert_frame(session: Session, row: CsvFrameRow, refresh_existing: bool = False) -> int:
    """
    Crée la monture si le product_id est inconnu.
    Existante: laissée telle quelle, sauf si `refresh_existing` (nom, description, prix).
    Retourne l'id de la monture.
    """
    insert = dialect_insert(session)
    table = Frame.__table__
    stmt = insert(table).values(
        product_id=row.product_id,
        name=row.name,
        description=row.description or None,
        price=row.price,
        created_at=now_utc(),
    )
    if refresh_existing:
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.product_id],
            set_={
                "name": stmt.excluded["name"],
                "description": stmt.excluded["description"],
                "price": stmt.excluded["price"],
            },
        )
    else:
        stmt = stmt.on_conflict_do_nothing(index_elements=[table.c.product_id])
    session.exec(stmt)

    return session.exec(select(Frame.id).where(Frame.product_id == row.product_id)).one()


def import_inventory_csv(
    session: Session,
    shop_id: int,
    csv_text: str,
    *,
    refresh_existing: bool = False,
) -> ImportResult:
    require_shop(session, shop_id)

    lines = (csv_text or "").lstrip("\ufeff").splitlines()
    if not lines or not lines[0].strip():
        raise InvalidArgumentError("Fichier CSV vide")

    index = parse_header(lines[0])

    processed = 0
    errors: List[ImportRowError] = []

    with unit_of_work(session):
        for line_no, raw in enumerate(lines[1:], start=2):
            if not raw.strip():
                continue
            try:
                row = parse_row(line_no, raw, index)
            except RowError as exc:
                errors.append(ImportRowError(row=line_no, message=f"Ligne {line_no}: {exc}"))
                continue

            frame_id = upsert_frame(session, row, refresh_existing=refresh_existing)
            apply_stock_delta(session, shop_id, frame_id, row.quantity)
            processed += 1

    logger.info(
        "[IMPORT CSV] shop=%s montures traitées: %d | lignes ignorées: %d",
        shop_id, processed, len(errors),
    )
    return ImportResult(
        message=f"Processed {processed} frames",
        processedCount=processed,
        errors=errors,
    )
