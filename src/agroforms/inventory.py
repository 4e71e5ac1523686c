"""
Niveles de stock de fertilizantes y agroquímicos.

Suma las existencias disponibles de un ítem y emite una alerta cuando el
total llega a cero.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from agroforms.config import StockStatus
from agroforms.models import StockItem
from agroforms.notifications import Notification, Notifier, Severity


logger = logging.getLogger(__name__)

# Estados que no cuentan como stock disponible
UNAVAILABLE = {StockStatus.OUT_OF_STOCK.value.lower(), StockStatus.EXPIRED.value.lower()}


@dataclass(frozen=True)
class StockLevel:
    """Total disponible de un ítem."""
    name: str
    total: int
    unit: Optional[str]

    @property
    def depleted(self) -> bool:
        return self.total == 0


def available_items(items: Iterable[StockItem], name: str) -> List[StockItem]:
    """Ítems con ese nombre que no están agotados ni vencidos."""
    return [
        item for item in items
        if item.name == name and item.status.lower() not in UNAVAILABLE
    ]


def stock_level(items: Iterable[StockItem], name: str) -> StockLevel:
    """Calcula el total disponible de un ítem."""
    available = available_items(items, name)
    total = sum(item.quantity for item in available)
    unit = available[0].unit if available else None
    return StockLevel(name=name, total=total, unit=unit)


def check_stock(items: Iterable[StockItem], name: str, notifier: Notifier) -> StockLevel:
    """
    Calcula el stock de un ítem y notifica el resultado.

    Un total de cero genera una advertencia de stock bajo.
    """
    level = stock_level(items, name)
    if level.depleted:
        logger.warning("Stock agotado: %s", name)
        notifier.notify(Notification(
            severity=Severity.WARNING,
            title="Low Stock Alert",
            message=f"Stock level for {name} is low ({level.unit or 'no units'} remaining). Please restock soon.",
        ))
    else:
        notifier.notify(Notification(
            severity=Severity.SUCCESS,
            title="Stock Level",
            message=f"Total quantity for {name} is {level.total} {level.unit or ''}".rstrip() + ".",
        ))
    return level
