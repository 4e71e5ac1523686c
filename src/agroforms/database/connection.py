"""
Módulo de conexión a base de datos SQLite.

Proporciona la clase base con manejo de conexión y esquema del almacén de
documentos: cada registro es un documento JSON dentro de una colección.
"""

import json
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional, TypeVar


# ============================================================================
# Helpers para JSON
# ============================================================================

T = TypeVar("T")


def _json_loads(value: Optional[str], default: T = None) -> T | Any:
    """
    Deserializa JSON de forma segura.

    Args:
        value: String JSON o None
        default: Valor por defecto si value es None o vacío

    Returns:
        Objeto deserializado o default
    """
    if not value:
        return default
    return json.loads(value)


def _json_dict(value: Optional[str]) -> dict:
    """Deserializa JSON a dict, retorna dict vacío si es None."""
    return _json_loads(value, {})


# ============================================================================
# Esquema de la Base de Datos
# ============================================================================

SCHEMA_VERSION = 2

SCHEMA_SQL = """
-- Tabla de registros (documentos por colección)
CREATE TABLE IF NOT EXISTS records (
    id TEXT PRIMARY KEY,
    collection TEXT NOT NULL,
    data TEXT NOT NULL,  -- JSON dict
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

-- Índices para búsquedas rápidas
CREATE INDEX IF NOT EXISTS idx_records_collection ON records(collection);

-- Tabla de metadatos
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


# ============================================================================
# Clase DatabaseConnection
# ============================================================================

class DatabaseConnection:
    """Gestor de conexión a base de datos SQLite."""

    def __init__(self, db_path: Optional[Path] = None):
        """
        Inicializa la conexión a la base de datos.

        Args:
            db_path: Ruta al archivo SQLite. Default: ~/.agroforms/agroforms.db
        """
        if db_path is None:
            db_path = Path.home() / ".agroforms" / "agroforms.db"

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_database()

    def _init_database(self) -> None:
        """Inicializa el esquema de la base de datos."""
        with self.connection() as conn:
            conn.executescript(SCHEMA_SQL)

            # Verificar/establecer versión del esquema
            cursor = conn.execute(
                "SELECT value FROM metadata WHERE key = 'schema_version'"
            )
            row = cursor.fetchone()

            if row is None:
                conn.execute(
                    "INSERT INTO metadata (key, value) VALUES (?, ?)",
                    ("schema_version", str(SCHEMA_VERSION))
                )
            else:
                current_version = int(row["value"])
                if current_version < SCHEMA_VERSION:
                    self._migrate(conn, current_version)

    def _migrate(self, conn: sqlite3.Connection, from_version: int) -> None:
        """Ejecuta migraciones incrementales del esquema."""
        if from_version < 2:
            # Migración v1 -> v2: índice por colección
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_records_collection ON records(collection)"
            )

        conn.execute(
            "UPDATE metadata SET value = ? WHERE key = 'schema_version'",
            (str(SCHEMA_VERSION),)
        )

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager para conexiones: commit al salir, rollback si falla."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_schema_version(self) -> int:
        """Obtiene la versión actual del esquema."""
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT value FROM metadata WHERE key = 'schema_version'"
            )
            row = cursor.fetchone()
            return int(row["value"]) if row else 0
