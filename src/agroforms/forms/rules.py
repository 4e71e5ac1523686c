"""
Reglas de validación de campos.

Cada regla recibe el valor crudo del campo y una instantánea de los demás
valores del formulario, y retorna un ValidationOutcome. Las reglas son
funciones puras: no conocen la sesión ni el estado de bloqueo.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Tuple

from .models import FieldSpec, FieldType, is_empty, parse_value


class Validity(Enum):
    """Estado de validación de un campo."""
    VALID = "valid"
    INVALID = "invalid"
    PENDING = "pending"  # Sin evaluar o bloqueado


@dataclass(frozen=True)
class ValidationOutcome:
    """Resultado de evaluar un campo."""
    validity: Validity
    message: str = ""

    @property
    def is_valid(self) -> bool:
        return self.validity == Validity.VALID

    @property
    def is_invalid(self) -> bool:
        return self.validity == Validity.INVALID

    @classmethod
    def invalid(cls, message: str) -> "ValidationOutcome":
        return cls(Validity.INVALID, message)


VALID = ValidationOutcome(Validity.VALID)
PENDING = ValidationOutcome(Validity.PENDING)

# Mensajes de formato para campos tipados
FORMAT_MESSAGES = {
    FieldType.DATE: "Invalid date (YYYY-MM-DD).",
    FieldType.TIME: "Invalid time (HH:MM).",
}

ALPHABETIC = r"^[a-zA-Z\s]*$"

_DIGITS = re.compile(r"^[0-9]+$")


class ValidationRule(ABC):
    """Regla base."""

    @abstractmethod
    def check(self, value: Any, spec: FieldSpec, snapshot: Mapping[str, Any]) -> ValidationOutcome:
        """Evalúa un valor no vacío."""

    def references(self) -> Tuple[str, ...]:
        """Otros campos que lee la regla."""
        return ()


@dataclass(frozen=True)
class PatternRule(ValidationRule):
    """El valor debe coincidir con una expresión regular."""
    pattern: str
    message: str

    def check(self, value, spec, snapshot):
        if re.search(self.pattern, str(value)):
            return VALID
        return ValidationOutcome.invalid(self.message)


@dataclass(frozen=True)
class ChoiceRule(ValidationRule):
    """El valor debe ser una de las opciones del campo."""
    message: str = "Please select a valid option."

    def check(self, value, spec, snapshot):
        if str(value) in spec.options:
            return VALID
        return ValidationOutcome.invalid(self.message)


@dataclass(frozen=True)
class RangeRule(ValidationRule):
    """
    Entero dentro de un rango cerrado.

    El valor debe ser una cadena de dígitos (se admite un sufijo opcional,
    ej: "%") y cumplir min_value <= v <= max_value.
    """
    min_value: Optional[int]
    max_value: Optional[int]
    message: str
    numeric_message: str = "Only numeric characters are allowed."
    suffix: Optional[str] = None

    def check(self, value, spec, snapshot):
        if isinstance(value, int) and not isinstance(value, bool):
            text = str(value)
        else:
            text = str(value).strip()
        if self.suffix and text.endswith(self.suffix):
            text = text[: -len(self.suffix)]
        if not _DIGITS.match(text):
            return ValidationOutcome.invalid(self.numeric_message)

        number = int(text)
        if self.min_value is not None and number < self.min_value:
            return ValidationOutcome.invalid(self.message)
        if self.max_value is not None and number > self.max_value:
            return ValidationOutcome.invalid(self.message)
        return VALID


class Relation(Enum):
    """Relaciones para reglas cruzadas."""
    AFTER = "after"
    BEFORE = "before"
    NOT_SAME = "not_same"


@dataclass(frozen=True)
class CrossFieldRule(ValidationRule):
    """
    Compara el valor del campo contra el valor actual de otro campo.

    Solo se evalúa cuando ambos operandos existen; si alguno falta la regla
    no se dispara y el resultado es válido.
    """
    other: str
    relation: Relation
    message: str
    value_type: FieldType = FieldType.TIME

    def check(self, value, spec, snapshot):
        other_value = snapshot.get(self.other)
        if is_empty(value) or is_empty(other_value):
            return VALID

        try:
            mine = parse_value(self.value_type, value)
        except (TypeError, ValueError):
            return ValidationOutcome.invalid(self.message)
        try:
            theirs = parse_value(self.value_type, other_value)
        except (TypeError, ValueError):
            # El otro campo reporta su propio error de formato
            return VALID

        if self.relation == Relation.AFTER:
            ok = mine > theirs
        elif self.relation == Relation.BEFORE:
            ok = mine < theirs
        else:
            ok = mine != theirs
        return VALID if ok else ValidationOutcome.invalid(self.message)

    def references(self):
        return (self.other,)


# ============================================================================
# Ventanas de fechas
# ============================================================================

def today(current: date) -> date:
    return current


def end_of_year(current: date) -> date:
    return date(current.year, 12, 31)


def days_ago(n: int) -> Callable[[date], date]:
    """Límite inferior de n días hacia atrás."""
    def bound(current: date) -> date:
        return date.fromordinal(current.toordinal() - n)
    return bound


@dataclass(frozen=True)
class DateWindowRule(ValidationRule):
    """La fecha debe caer dentro de una ventana relativa al día actual."""
    message: str
    earliest: Optional[Callable[[date], date]] = None
    latest: Optional[Callable[[date], date]] = None
    clock: Callable[[], date] = date.today

    def check(self, value, spec, snapshot):
        try:
            day = parse_value(FieldType.DATE, value)
        except (TypeError, ValueError):
            return ValidationOutcome.invalid(FORMAT_MESSAGES[FieldType.DATE])

        current = self.clock()
        if self.earliest is not None and day < self.earliest(current):
            return ValidationOutcome.invalid(self.message)
        if self.latest is not None and day > self.latest(current):
            return ValidationOutcome.invalid(self.message)
        return VALID


# ============================================================================
# Evaluador
# ============================================================================

def evaluate_field(spec: FieldSpec, raw_value: Any, snapshot: Mapping[str, Any]) -> ValidationOutcome:
    """
    Evalúa un campo contra sus reglas.

    Args:
        spec: Definición del campo
        raw_value: Valor crudo ingresado
        snapshot: Valores actuales del resto del formulario

    Returns:
        VALID o INVALID con el mensaje de la primera regla que falla
    """
    if is_empty(raw_value):
        if spec.required:
            return ValidationOutcome.invalid(spec.required_message)
        return VALID

    format_message = FORMAT_MESSAGES.get(spec.field_type)
    if format_message:
        try:
            parse_value(spec.field_type, raw_value)
        except (TypeError, ValueError):
            return ValidationOutcome.invalid(format_message)

    for rule in spec.rules:
        outcome = rule.check(raw_value, spec, snapshot)
        if not outcome.is_valid:
            return outcome
    return VALID
