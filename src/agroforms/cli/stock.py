"""
Comando CLI de nivel de stock.
"""

from pathlib import Path
from typing import Annotated, List, Optional

import typer
from pydantic import TypeAdapter, ValidationError

from agroforms.cli.theme import ConsoleNotifier, print_error
from agroforms.config import get_settings
from agroforms.database import get_database
from agroforms.inventory import check_stock
from agroforms.models import StockItem


STOCK_COLLECTION = "fertilizers"


def _load_items(file: Optional[Path], db: Optional[Path]) -> List[StockItem]:
    if file is not None:
        return TypeAdapter(List[StockItem]).validate_json(file.read_text(encoding="utf-8"))

    database = get_database(db or get_settings().resolved_db_path())
    return [StockItem.model_validate(r) for r in database.list_records(STOCK_COLLECTION)]


def show_stock(
    item: Annotated[str, typer.Argument(help="Nombre del ítem (ej: Urea)")],
    file: Annotated[Optional[Path], typer.Option(
        "--file", "-f", exists=True, dir_okay=False, help="Inventario en JSON",
    )] = None,
    db: Annotated[Optional[Path], typer.Option("--db", help="Ruta a la base SQLite")] = None,
) -> None:
    """
    Muestra el stock disponible de un ítem.

    Ejemplo:
        agroforms stock Urea --file inventario.json
    """
    try:
        items = _load_items(file, db)
    except ValidationError as e:
        print_error(f"Inventario inválido: {e.error_count()} errores")
        raise typer.Exit(1)

    check_stock(items, item, ConsoleNotifier())
