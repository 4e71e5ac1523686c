"""
Estado de un formulario en edición.

La sesión guarda los valores crudos, el resultado de validación de cada
campo y el estado de bloqueo. Un campo queda bloqueado hasta que el campo
del que depende esté desbloqueado, completo y válido; al bloquearse de nuevo
conserva su valor para que reaparezca cuando se repare la dependencia.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Set, Tuple

from .models import (
    FieldSpec,
    FormIncompleteError,
    SessionClosedError,
    is_empty,
    serialize_value,
    to_raw,
)
from .registry import FormDefinition
from .rules import PENDING, ValidationOutcome, evaluate_field


logger = logging.getLogger(__name__)


class FormSession:
    """Sesión de edición de un formulario."""

    def __init__(self, definition: FormDefinition, values: Optional[Mapping[str, Any]] = None):
        """
        Inicializa la sesión.

        Args:
            definition: Formulario a editar
            values: Valores iniciales (flujos de edición)
        """
        self.definition = definition
        self.record_id: Optional[str] = None
        self.closed = False
        self._values: Dict[str, Any] = {spec.id: None for spec in definition.fields}
        self._outcomes: Dict[str, Optional[ValidationOutcome]] = {spec.id: None for spec in definition.fields}
        self._locked: Dict[str, bool] = {}
        self._touched: Set[str] = set()

        for field_id, value in (values or {}).items():
            definition.get(field_id)
            self._values[field_id] = value
            if not is_empty(value):
                self._touched.add(field_id)

        self._refresh()

    @classmethod
    def from_record(cls, definition: FormDefinition, record: Mapping[str, Any]) -> "FormSession":
        """Crea una sesión pre-cargada desde un registro existente."""
        values = {}
        for spec in definition.fields:
            if record.get(spec.id) is not None:
                values[spec.id] = to_raw(spec.field_type, record[spec.id])
        session = cls(definition, values)
        record_id = record.get("id") or record.get("_id")
        session.record_id = str(record_id) if record_id is not None else None
        return session

    # ------------------------------------------------------------------
    # Eventos
    # ------------------------------------------------------------------

    def on_field_change(self, field_id: str, raw_value: Any, pasted: bool = False) -> bool:
        """
        Procesa un cambio de valor.

        Returns:
            True si el cambio se aplicó, False si el campo está bloqueado
            o la entrada fue rechazada
        """
        self._ensure_open()
        spec = self.definition.get(field_id)

        if self._locked[field_id]:
            logger.debug("%s: campo bloqueado, cambio ignorado", field_id)
            return False
        if not spec.accepts(raw_value, pasted=pasted):
            logger.debug("%s: entrada rechazada %r", field_id, raw_value)
            return False

        self._values[field_id] = raw_value
        self._touched.add(field_id)
        self._refresh(changed=field_id)
        return True

    def discard(self) -> None:
        """Descarta la sesión (tras un envío exitoso o al salir)."""
        self._values = {spec.id: None for spec in self.definition.fields}
        self._outcomes = {spec.id: None for spec in self.definition.fields}
        self._touched.clear()
        self.closed = True

    # ------------------------------------------------------------------
    # Recalculo
    # ------------------------------------------------------------------

    def _refresh(self, changed: Optional[str] = None) -> None:
        """Recalcula validez y bloqueo recorriendo los campos en orden."""
        to_evaluate = set()
        if changed is not None:
            to_evaluate.add(changed)
            to_evaluate.update(self.definition.referrers(changed))

        for spec in self.definition.fields:
            was_locked = self._locked.get(spec.id, True)
            locked = self._compute_locked(spec)
            self._locked[spec.id] = locked

            if locked:
                if not was_locked:
                    logger.debug("%s: bloqueado", spec.id)
                continue
            if was_locked or spec.id in to_evaluate:
                self._evaluate(spec)

    def _compute_locked(self, spec: FieldSpec) -> bool:
        if spec.depends_on is None:
            return False
        parent = spec.depends_on
        outcome = self._outcomes[parent]
        return (
            self._locked[parent]
            or is_empty(self._values[parent])
            or outcome is None
            or not outcome.is_valid
        )

    def _evaluate(self, spec: FieldSpec) -> None:
        value = self._values[spec.id]
        if is_empty(value) and spec.required and spec.id not in self._touched:
            # Campo requerido sin tocar: pendiente, sin error prematuro
            self._outcomes[spec.id] = None
            return
        self._outcomes[spec.id] = evaluate_field(spec, value, self._values)

    def _ensure_open(self) -> None:
        if self.closed:
            raise SessionClosedError(f"Sesión de '{self.definition.kind}' descartada")

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    @property
    def values(self) -> Dict[str, Any]:
        """Valores crudos (incluye los de campos bloqueados)."""
        return dict(self._values)

    @property
    def locked(self) -> Dict[str, bool]:
        return dict(self._locked)

    @property
    def validity(self) -> Dict[str, ValidationOutcome]:
        """Resultado efectivo por campo; PENDING si está bloqueado o sin evaluar."""
        return {spec.id: self.outcome(spec.id) for spec in self.definition.fields}

    def outcome(self, field_id: str) -> ValidationOutcome:
        self.definition.get(field_id)
        if self._locked[field_id]:
            return PENDING
        return self._outcomes[field_id] or PENDING

    def is_locked(self, field_id: str) -> bool:
        self.definition.get(field_id)
        return self._locked[field_id]

    def value(self, field_id: str) -> Any:
        self.definition.get(field_id)
        return self._values[field_id]

    def is_form_valid(self) -> bool:
        """True si todos los campos son válidos y ninguno está bloqueado."""
        if self.closed:
            return False
        return all(
            not self._locked[spec.id] and self.outcome(spec.id).is_valid
            for spec in self.definition.fields
        )

    def errors(self) -> Dict[str, str]:
        """Mensajes de los campos inválidos visibles."""
        return {
            field_id: outcome.message
            for field_id, outcome in self.validity.items()
            if outcome.is_invalid
        }

    def count_valid(self) -> Tuple[int, int]:
        """Retorna (campos_válidos, total_campos)."""
        valid = sum(1 for outcome in self.validity.values() if outcome.is_valid)
        return valid, len(self.definition.fields)

    def payload(self) -> Dict[str, Any]:
        """
        Valores convertidos para persistir.

        Fechas como timestamp ISO-8601, horas como HH:MM y números enteros.

        Raises:
            FormIncompleteError: Si el formulario no es válido
        """
        if not self.is_form_valid():
            raise FormIncompleteError(self.errors())

        data = {}
        for spec in self.definition.fields:
            value = self._values[spec.id]
            data[spec.id] = None if is_empty(value) else serialize_value(spec.field_type, value)

        model = self.definition.payload_model
        if model is not None:
            data = model.model_validate(data).model_dump(mode="json")
        return data
