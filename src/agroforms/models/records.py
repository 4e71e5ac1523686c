"""
Modelos de registros de la finca.

Cada formulario produce un payload con valores ya convertidos: fechas como
timestamp ISO-8601, horas como HH:MM y cantidades enteras.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from agroforms.config import CropType, FieldNumber, StockStatus, StorageLocation, YieldUnit
from agroforms.models.base import RecordPayload


HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


class HarvestSchedule(RecordPayload):
    """Programación de una jornada de cosecha."""

    cropType: CropType
    harvestDate: datetime
    startTime: str = Field(..., pattern=HHMM)
    endTime: str = Field(..., pattern=HHMM)
    fieldNumber: FieldNumber
    numberOfWorkers: int = Field(..., ge=1, le=40)


class MaintenanceRecord(RecordPayload):
    """Registro de mantenimiento por enfermedades del cultivo."""

    dateOfMaintenance: datetime
    task: str = Field(..., min_length=1)
    managerInCharge: str = Field(..., min_length=1)
    progress: str = Field(..., description="Porcentaje de avance (ej: 40%)")


class YieldRecord(RecordPayload):
    """Registro de rendimiento de una cosecha."""

    cropType: CropType
    harvestdate: datetime
    fieldNumber: FieldNumber
    quantity: int = Field(..., ge=1)
    unit: YieldUnit
    treesPicked: int = Field(..., ge=1, le=1_000_000)
    storageLocation: StorageLocation


class StockItem(BaseModel):
    """Ítem de inventario de fertilizantes y agroquímicos."""

    name: str = Field(..., min_length=1)
    quantity: int = Field(default=0, ge=0)
    unit: str = ""
    status: str = StockStatus.IN_STOCK.value
