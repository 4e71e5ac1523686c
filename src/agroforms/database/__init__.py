"""
Módulo de base de datos SQLite para AgroForms.

Almacén local de documentos: cada formulario guarda sus registros en una
colección (harvest, maintenance, yield, fertilizers).
"""

from pathlib import Path
from typing import Optional

from agroforms.database.connection import DatabaseConnection
from agroforms.database.records import RecordRepository


class Database:
    """
    Gestor de base de datos SQLite para AgroForms.

    Fachada sobre el repositorio de registros.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Inicializa la conexión a la base de datos.

        Args:
            db_path: Ruta al archivo SQLite. Default: ~/.agroforms/agroforms.db
        """
        self._conn = DatabaseConnection(db_path)
        self._records = RecordRepository(self._conn)

    @property
    def db_path(self) -> Path:
        """Ruta al archivo de base de datos."""
        return self._conn.db_path

    @property
    def records(self) -> RecordRepository:
        return self._records

    def connection(self):
        """Context manager para conexiones a la base de datos."""
        return self._conn.connection()

    def get_schema_version(self) -> int:
        return self._conn.get_schema_version()

    # ========================================================================
    # Operaciones de Registros
    # ========================================================================

    def create_record(self, collection: str, data: dict) -> dict:
        """Crea un registro en una colección."""
        return self._records.create(collection, data)

    def get_record(self, collection: str, record_id: str) -> Optional[dict]:
        """Obtiene un registro por ID (parcial o completo)."""
        return self._records.get(collection, record_id)

    def list_records(self, collection: str) -> list[dict]:
        """Lista los registros de una colección."""
        return self._records.list_all(collection)

    def update_record(self, collection: str, record_id: str, data: dict) -> Optional[dict]:
        """Actualiza un registro; None si no existe."""
        return self._records.update(collection, record_id, data)

    def delete_record(self, collection: str, record_id: str) -> bool:
        """Elimina un registro."""
        return self._records.delete(collection, record_id)

    def count_records(self, collection: str) -> int:
        return self._records.count(collection)


# Instancia global (lazy)
_database: Optional[Database] = None


def get_database(db_path: Optional[Path] = None) -> Database:
    """Obtiene la instancia global de la base de datos."""
    global _database
    if _database is None or (db_path is not None and _database.db_path != Path(db_path)):
        _database = Database(db_path)
    return _database


def reset_database() -> None:
    """Resetea la instancia global (útil para tests)."""
    global _database
    _database = None


__all__ = ["Database", "DatabaseConnection", "RecordRepository", "get_database", "reset_database"]
