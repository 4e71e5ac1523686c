"""
Operaciones de base de datos para registros.
"""

import json
from typing import Optional

from agroforms.database.connection import DatabaseConnection, _json_dict
from agroforms.models.base import generate_id, generate_timestamp


def _id_prefix(record_id: str) -> str:
    """Patrón LIKE para un ID parcial, con % y _ escapados."""
    escaped = record_id.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{escaped}%"


class RecordRepository:
    """Repositorio para operaciones CRUD de registros por colección."""

    def __init__(self, db: DatabaseConnection):
        """
        Inicializa el repositorio.

        Args:
            db: Instancia de DatabaseConnection
        """
        self._db = db

    def create(self, collection: str, data: dict) -> dict:
        """Crea un nuevo registro en la colección."""
        record_id = generate_id()
        now = generate_timestamp()

        with self._db.connection() as conn:
            conn.execute(
                """
                INSERT INTO records (id, collection, data, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (record_id, collection, json.dumps(data), now, now)
            )

        return {**data, "id": record_id, "created_at": now, "updated_at": now}

    def get(self, collection: str, record_id: str) -> Optional[dict]:
        """Obtiene un registro por ID (parcial o completo)."""
        if not record_id:
            return None

        with self._db.connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM records WHERE collection = ? AND (id = ? OR id LIKE ? ESCAPE '\\')",
                (collection, record_id, _id_prefix(record_id))
            )
            row = cursor.fetchone()

            if row is None:
                return None

            return self._row_to_dict(row)

    def _row_to_dict(self, row) -> dict:
        """Convierte una fila de la BD a diccionario de registro."""
        return {
            **_json_dict(row["data"]),
            "id": row["id"],
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }

    def list_all(self, collection: str) -> list[dict]:
        """Lista los registros de una colección, más recientes primero."""
        with self._db.connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM records WHERE collection = ? ORDER BY created_at DESC",
                (collection,)
            )
            return [self._row_to_dict(row) for row in cursor]

    def find(self, collection: str, **criteria) -> list[dict]:
        """Registros de la colección cuyos campos coinciden con criteria."""
        return [
            record for record in self.list_all(collection)
            if all(record.get(key) == value for key, value in criteria.items())
        ]

    def count(self, collection: str) -> int:
        """Cantidad de registros de una colección."""
        with self._db.connection() as conn:
            cursor = conn.execute(
                "SELECT COUNT(*) AS n FROM records WHERE collection = ?",
                (collection,)
            )
            return cursor.fetchone()["n"]

    def update(self, collection: str, record_id: str, data: dict) -> Optional[dict]:
        """Reemplaza los datos de un registro existente."""
        current = self.get(collection, record_id)
        if current is None:
            return None

        now = generate_timestamp()
        with self._db.connection() as conn:
            conn.execute(
                "UPDATE records SET data = ?, updated_at = ? WHERE id = ?",
                (json.dumps(data), now, current["id"])
            )

        return {**data, "id": current["id"], "created_at": current["created_at"], "updated_at": now}

    def delete(self, collection: str, record_id: str) -> bool:
        """Elimina un registro."""
        if not record_id:
            return False

        with self._db.connection() as conn:
            cursor = conn.execute(
                "DELETE FROM records WHERE collection = ? AND (id = ? OR id LIKE ? ESCAPE '\\')",
                (collection, record_id, _id_prefix(record_id))
            )
            return cursor.rowcount > 0
