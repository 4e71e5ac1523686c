"""
Modelos de datos para AgroForms.

Este módulo contiene los modelos Pydantic de los registros persistidos.
"""

from agroforms.models.base import (
    RecordPayload,
    generate_id,
    generate_timestamp,
)
from agroforms.models.records import (
    HarvestSchedule,
    MaintenanceRecord,
    YieldRecord,
    StockItem,
)

__all__ = [
    # Clases base
    "RecordPayload",
    "generate_id",
    "generate_timestamp",
    # Registros
    "HarvestSchedule",
    "MaintenanceRecord",
    "YieldRecord",
    "StockItem",
]
