"""Configuración de pytest para tests de agroforms."""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import pytest

from agroforms.database import Database, reset_database
from agroforms.notifications import NotificationLog
from agroforms.persistence import PersistenceAdapter, PersistenceResult


class FakeAdapter(PersistenceAdapter):
    """Adaptador en memoria que registra cada llamada."""

    collection = "fake"

    def __init__(self, results: Optional[List[Any]] = None, records: Optional[Dict[str, dict]] = None):
        """
        Args:
            results: Resultados a devolver en orden (PersistenceResult o excepción);
                al agotarse se devuelve éxito
            records: Registros existentes para get()
        """
        self.results = list(results or [])
        self.records = dict(records or {})
        self.created: List[dict] = []
        self.updated: List[tuple] = []

    def _next(self, payload: dict) -> PersistenceResult:
        if not self.results:
            return PersistenceResult.success({**payload, "id": "abc12345"})
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def create(self, payload):
        self.created.append(payload)
        return self._next(payload)

    async def update(self, record_id, payload):
        self.updated.append((record_id, payload))
        return self._next(payload)

    async def get(self, record_id):
        return self.records.get(record_id)

    @property
    def calls(self) -> int:
        return len(self.created) + len(self.updated)


def fill(session, values: Dict[str, Any]) -> None:
    """Ingresa valores en el orden dado."""
    for field_id, value in values.items():
        session.on_field_change(field_id, value)


@pytest.fixture(autouse=True)
def _reset_global_database():
    """La base global no se comparte entre tests."""
    reset_database()
    yield
    reset_database()


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def harvest_values(today) -> Dict[str, str]:
    """Valores válidos del formulario de cosecha."""
    return {
        "cropType": "Coconut",
        "harvestDate": today.isoformat(),
        "startTime": "08:00",
        "endTime": "10:00",
        "fieldNumber": "AA1",
        "numberOfWorkers": "12",
    }


@pytest.fixture
def yield_record(today) -> Dict[str, Any]:
    """Registro de rendimiento tal como lo devuelve el almacén."""
    return {
        "_id": "r1",
        "cropType": "Coconut",
        "harvestdate": f"{(today - timedelta(days=2)).isoformat()}T12:00:00.000Z",
        "fieldNumber": "BB1",
        "quantity": 500,
        "unit": "Kg",
        "treesPicked": 20,
        "storageLocation": "LL2",
    }


@pytest.fixture
def adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def notifications() -> NotificationLog:
    return NotificationLog()


@pytest.fixture
def temp_db(tmp_path) -> Database:
    """Base de datos temporal."""
    return Database(tmp_path / "test.db")
