"""
Notificaciones al usuario.

Los componentes emiten Notification (severidad, título, mensaje) a un
Notifier. La CLI imprime paneles Rich; NotificationLog las acumula.
"""

from enum import Enum
from typing import List, Protocol

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Severidad de una notificación."""
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    """Notificación al usuario."""
    severity: Severity
    title: str = Field(..., min_length=1)
    message: str = ""


class Notifier(Protocol):
    """Destino de notificaciones."""

    def notify(self, notification: Notification) -> None:
        ...


class NotificationLog:
    """Notifier que acumula las notificaciones recibidas."""

    def __init__(self):
        self.items: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.items.append(notification)

    @property
    def last(self) -> Notification:
        return self.items[-1]

    def by_severity(self, severity: Severity) -> List[Notification]:
        return [n for n in self.items if n.severity == severity]

    def clear(self) -> None:
        self.items.clear()

    def __len__(self) -> int:
        return len(self.items)
