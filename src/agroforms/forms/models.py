"""
Modelos de datos para los formularios secuenciales.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Tuple

if TYPE_CHECKING:
    from .rules import ValidationRule


_DIGITS = re.compile(r"^[0-9]+$")


class FieldType(Enum):
    """Tipos de campo disponibles."""
    TEXT = "text"
    SELECT = "select"
    DATE = "date"
    TIME = "time"
    INTEGER = "integer"


# ============================================================================
# Errores
# ============================================================================

class FormDefinitionError(ValueError):
    """Definición de formulario inconsistente (error de programación)."""


class UnknownFormError(KeyError):
    """Tipo de formulario no registrado."""


class UnknownFieldError(KeyError):
    """Campo inexistente en el formulario."""


class SessionClosedError(RuntimeError):
    """La sesión ya fue descartada."""


class FormIncompleteError(ValueError):
    """El formulario no está completo ni válido."""

    def __init__(self, errors: dict):
        self.errors = errors
        detail = ", ".join(sorted(errors)) if errors else "campos bloqueados o pendientes"
        super().__init__(f"Formulario incompleto: {detail}")


# ============================================================================
# Conversión de valores
# ============================================================================

def is_empty(value: Any) -> bool:
    """Un valor vacío es None o un texto sin contenido."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def parse_value(field_type: FieldType, raw: Any) -> Any:
    """
    Convierte el valor crudo de un campo a su tipo.

    Raises:
        ValueError: Si el valor no tiene el formato esperado
    """
    if isinstance(raw, str):
        raw = raw.strip()

    if field_type == FieldType.DATE:
        if isinstance(raw, datetime):
            return raw.date()
        if isinstance(raw, date):
            return raw
        return datetime.strptime(raw, "%Y-%m-%d").date()

    if field_type == FieldType.TIME:
        if isinstance(raw, time):
            return raw.replace(second=0, microsecond=0)
        return datetime.strptime(raw, "%H:%M").time()

    if field_type == FieldType.INTEGER:
        if isinstance(raw, bool):
            raise ValueError("booleano no es entero")
        if isinstance(raw, int):
            return raw
        if not _DIGITS.match(str(raw)):
            raise ValueError(f"No es un entero: {raw!r}")
        return int(raw)

    return str(raw)


def to_raw(field_type: FieldType, value: Any) -> Optional[str]:
    """Convierte un valor persistido a la representación cruda del campo."""
    if value is None:
        return None

    if field_type == FieldType.DATE:
        if isinstance(value, date) and not isinstance(value, datetime):
            return value.isoformat()
        if not isinstance(value, datetime):
            value = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        # Marcas con zona se leen en hora local
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date().isoformat()

    if field_type == FieldType.TIME:
        if isinstance(value, time):
            return value.strftime("%H:%M")
        return str(value)[:5]

    return str(value)


def serialize_value(field_type: FieldType, raw: Any) -> Any:
    """Valor para el payload: fechas ISO-8601, horas HH:MM y enteros."""
    parsed = parse_value(field_type, raw)
    if field_type == FieldType.DATE:
        return datetime.combine(parsed, time()).isoformat()
    if field_type == FieldType.TIME:
        return parsed.strftime("%H:%M")
    return parsed


# ============================================================================
# Definición de campos
# ============================================================================

@dataclass(frozen=True)
class FieldSpec:
    """Definición estática de un campo del formulario."""
    id: str
    order: int
    label: str = ""
    field_type: FieldType = FieldType.TEXT
    rules: Tuple["ValidationRule", ...] = ()
    depends_on: Optional[str] = None  # Campo que debe estar válido antes
    required: bool = True
    required_message: str = "This field is required."
    options: Tuple[str, ...] = ()  # Para SELECT
    numeric_only: bool = False  # Rechaza teclas no numéricas
    allow_paste: bool = True
    hint: str = ""

    @property
    def display_label(self) -> str:
        return self.label or self.id

    def accepts(self, raw_value: Any, pasted: bool = False) -> bool:
        """Filtro de entrada: rechaza pegado y caracteres no numéricos."""
        if pasted and not self.allow_paste:
            return False
        if self.numeric_only and not is_empty(raw_value):
            if isinstance(raw_value, int) and not isinstance(raw_value, bool):
                return True
            return bool(_DIGITS.match(str(raw_value)))
        return True

    def references(self) -> Tuple[str, ...]:
        """Campos leídos por las reglas cruzadas de este campo."""
        refs = []
        for rule in self.rules:
            refs.extend(rule.references())
        return tuple(refs)


@dataclass(frozen=True)
class SubmissionMessages:
    """Textos de confirmación y resultado del envío."""
    confirm_title: str = "Confirmation Required"
    confirm_text: str = "Are you sure you want to submit this record?"
    success_title: str = "Success"
    success_text: str = "Record saved successfully!"
    failure_title: str = "Error"
    failure_text: str = "There was an error saving the record."
    failure_fallback: str = "Please try again."
