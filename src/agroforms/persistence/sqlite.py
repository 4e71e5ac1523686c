"""
Adaptador de persistencia sobre la base SQLite local.
"""

import asyncio
import logging
import sqlite3
from typing import Any, Dict, Iterable, Optional

from agroforms.database import Database
from agroforms.persistence.base import PersistenceAdapter, PersistenceResult


logger = logging.getLogger(__name__)


class SQLiteRecordAdapter(PersistenceAdapter):
    """
    Persiste registros de una colección en la base local.

    Las operaciones corren en un hilo aparte para no bloquear el bucle de
    eventos; cada una abre su propia conexión.
    """

    def __init__(self, database: Database, collection: str, unique_fields: Iterable[str] = ()):
        """
        Args:
            database: Base de datos local
            collection: Colección destino (ej: "harvest")
            unique_fields: Campos cuya combinación no puede repetirse
        """
        self.database = database
        self.collection = collection
        self.unique_fields = tuple(unique_fields)

    async def create(self, payload: Dict[str, Any]) -> PersistenceResult:
        try:
            if self.unique_fields:
                criteria = {key: payload.get(key) for key in self.unique_fields}
                existing = await asyncio.to_thread(self.database.records.find, self.collection, **criteria)
                if existing:
                    logger.info("%s: registro duplicado %s", self.collection, criteria)
                    return PersistenceResult.failure("duplicate")
            record = await asyncio.to_thread(self.database.create_record, self.collection, payload)
        except sqlite3.Error as exc:
            logger.error("%s: error creando registro: %s", self.collection, exc)
            return PersistenceResult.failure(str(exc))

        logger.info("%s: registro creado %s", self.collection, record["id"])
        return PersistenceResult.success(record)

    async def update(self, record_id: str, payload: Dict[str, Any]) -> PersistenceResult:
        try:
            record = await asyncio.to_thread(
                self.database.update_record, self.collection, record_id, payload
            )
        except sqlite3.Error as exc:
            logger.error("%s: error actualizando %s: %s", self.collection, record_id, exc)
            return PersistenceResult.failure(str(exc))

        if record is None:
            return PersistenceResult.failure(f"Record not found: {record_id}")
        logger.info("%s: registro actualizado %s", self.collection, record["id"])
        return PersistenceResult.success(record)

    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        return await asyncio.to_thread(self.database.get_record, self.collection, record_id)
