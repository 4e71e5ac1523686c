#!/usr/bin/env python3
"""
Script para poblar la base de datos con registros de prueba.

Genera:
- Registros de rendimiento recientes (para probar 'agroforms edit')
- Inventario de fertilizantes (para probar 'agroforms stock')
"""

import sys
import os
from datetime import date, datetime, time, timedelta
from pathlib import Path

# Forzar UTF-8 en Windows
if sys.platform == "win32":
    os.environ["PYTHONIOENCODING"] = "utf-8"
    sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    sys.stderr.reconfigure(encoding='utf-8', errors='replace')

from agroforms.config import get_settings
from agroforms.database import get_database
from agroforms.models import StockItem, YieldRecord


def _days_ago(n: int) -> datetime:
    return datetime.combine(date.today() - timedelta(days=n), time())


def populate(db_path: Path = None):
    """Limpia la base y carga registros de ejemplo."""
    db = get_database(db_path or get_settings().resolved_db_path())

    print("Limpiando base de datos...")
    with db.connection() as conn:
        conn.execute("DELETE FROM records WHERE collection IN ('yield', 'fertilizers')")
    print("Base de datos limpiada.\n")

    # =========================================================================
    # Rendimiento
    # =========================================================================
    yields = [
        YieldRecord(cropType="Coconut", harvestdate=_days_ago(1), fieldNumber="AA1",
                    quantity=1200, unit="Kg", treesPicked=340, storageLocation="LL1"),
        YieldRecord(cropType="Coconut", harvestdate=_days_ago(3), fieldNumber="CC1",
                    quantity=2, unit="MetricTon", treesPicked=610, storageLocation="LL3"),
    ]
    for record in yields:
        created = db.create_record("yield", record.model_dump(mode="json"))
        print(f"Rendimiento: {created['id']} - {record.fieldNumber.value} ({record.quantity} {record.unit.value})")

    # =========================================================================
    # Inventario
    # =========================================================================
    stock = [
        StockItem(name="Urea", quantity=120, unit="kg"),
        StockItem(name="Urea", quantity=40, unit="kg", status="Expired"),
        StockItem(name="Potash", quantity=0, unit="kg", status="Out Of Stock"),
        StockItem(name="Glyphosate", quantity=25, unit="l"),
    ]
    for item in stock:
        db.create_record("fertilizers", item.model_dump(mode="json"))

    print()
    print("=" * 60)
    print("RESUMEN")
    print("=" * 60)
    print(f"Registros de rendimiento: {db.count_records('yield')}")
    print(f"Ítems de inventario: {db.count_records('fertilizers')}")
    print(f"Base de datos: {db.db_path}")


if __name__ == "__main__":
    populate(Path(sys.argv[1]) if len(sys.argv) > 1 else None)
