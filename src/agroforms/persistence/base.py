"""
Contrato del adaptador de persistencia.

El adaptador crea, actualiza u obtiene un registro de una colección. Las
fallas esperables (validación del servidor, duplicados, red) se reportan
como PersistenceResult.failure, nunca como excepción.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


class PersistenceError(RuntimeError):
    """Error no recuperable del almacén de registros."""


@dataclass(frozen=True)
class PersistenceResult:
    """Resultado de una operación de escritura."""
    ok: bool
    record: Optional[Dict[str, Any]] = None
    message: str = ""

    @classmethod
    def success(cls, record: Optional[Dict[str, Any]] = None) -> "PersistenceResult":
        return cls(ok=True, record=record)

    @classmethod
    def failure(cls, message: str) -> "PersistenceResult":
        return cls(ok=False, message=message)


class PersistenceAdapter(ABC):
    """Adaptador de persistencia de una colección de registros."""

    collection: str

    @abstractmethod
    async def create(self, payload: Dict[str, Any]) -> PersistenceResult:
        """Crea un registro."""

    @abstractmethod
    async def update(self, record_id: str, payload: Dict[str, Any]) -> PersistenceResult:
        """Actualiza un registro existente."""

    @abstractmethod
    async def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Obtiene un registro o None si no existe."""

    async def aclose(self) -> None:
        """Libera recursos del adaptador."""
