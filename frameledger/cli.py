"""Commandes d'administration: initialisation de la base et import CSV."""

import logging
from pathlib import Path
from typing import Optional

import typer
from sqlmodel import Session

from frameledger.config import get_settings
from frameledger.db import engine, init_db
from frameledger.errors import LedgerError
from frameledger.services.csv_import import import_inventory_csv

app = typer.Typer(
    name="frameledger",
    help="Administration du ledger inventaire / ventes / facturation.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


@app.command("init-db")
def init_db_command() -> None:
    """Crée les tables et les types de verres par défaut."""
    init_db(engine)
    typer.echo("[BOOT] Base initialisée")


@app.command("import-csv")
def import_csv(
    csv_path: Path = typer.Argument(
        ...,
        help="Fichier CSV (product_id,name,price[,description][,quantity])",
        exists=True,
        dir_okay=False,
    ),
    shop_id: int = typer.Option(..., "--shop-id", help="ID de la boutique cible"),
    refresh: Optional[bool] = typer.Option(
        None,
        "--refresh/--no-refresh",
        help="Rafraîchir nom/description/prix des montures existantes",
    ),
) -> None:
    """Importe un CSV d'inventaire dans une boutique (une seule transaction)."""
    refresh_existing = get_settings().refresh_existing_frames if refresh is None else refresh
    text = csv_path.read_text(encoding="utf-8")

    init_db(engine)
    with Session(engine) as session:
        try:
            result = import_inventory_csv(session, shop_id, text, refresh_existing=refresh_existing)
        except LedgerError as exc:
            typer.echo(f"[IMPORT CSV] Échec ({exc.code}): {exc.message}", err=True)
            raise typer.Exit(code=1)

    typer.echo(
        f"[IMPORT CSV] Montures importées: {result.processedCount} | "
        f"Lignes ignorées: {len(result.errors)}"
    )
    for error in result.errors:
        typer.echo(f"  - {error.message}", err=True)


if __name__ == "__main__":
    app()
