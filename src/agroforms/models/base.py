"""
Clases base para modelos Pydantic.

Proporciona los generadores de ID y timestamp usados por el almacén local
y la base común de los payloads de registros.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


def generate_id() -> str:
    """Genera un ID corto único (8 caracteres)."""
    return str(uuid.uuid4())[:8]


def generate_timestamp() -> str:
    """Genera timestamp ISO actual."""
    return datetime.now().isoformat()


class RecordPayload(BaseModel):
    """
    Base de los payloads enviados al almacén.

    Rechaza campos desconocidos para detectar desajustes entre la definición
    del formulario y el modelo del registro.
    """

    model_config = ConfigDict(extra="forbid")
