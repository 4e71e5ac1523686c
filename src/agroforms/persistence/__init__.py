"""
Adaptadores de persistencia de registros.

- base: contrato PersistenceAdapter y PersistenceResult
- sqlite: almacén local (Database)
- http: API REST (httpx)
"""

from pathlib import Path
from typing import Optional

from agroforms.config import Backend, Settings
from agroforms.persistence.base import PersistenceAdapter, PersistenceError, PersistenceResult
from agroforms.persistence.http import HttpRecordAdapter
from agroforms.persistence.sqlite import SQLiteRecordAdapter


def build_adapter(settings: Settings, collection: str, db_path: Optional[Path] = None) -> PersistenceAdapter:
    """Crea el adaptador configurado para una colección."""
    if settings.backend == Backend.HTTP:
        return HttpRecordAdapter(settings.api_url, collection, timeout=settings.timeout)

    from agroforms.database import get_database
    return SQLiteRecordAdapter(get_database(db_path or settings.resolved_db_path()), collection)


__all__ = [
    "PersistenceAdapter",
    "PersistenceError",
    "PersistenceResult",
    "HttpRecordAdapter",
    "SQLiteRecordAdapter",
    "build_adapter",
]
