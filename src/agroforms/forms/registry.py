"""
Registro de formularios.

Un FormDefinition es la secuencia ordenada e inmutable de FieldSpec de un
tipo de formulario. El grafo de dependencias se verifica al registrar, de
modo que una definición inválida falla al arrancar y no durante el uso.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel

from .models import (
    FieldSpec,
    FormDefinitionError,
    SubmissionMessages,
    UnknownFieldError,
    UnknownFormError,
)
from .rules import ValidationOutcome, evaluate_field


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormDefinition:
    """Definición completa de un tipo de formulario."""
    kind: str
    title: str
    fields: Tuple[FieldSpec, ...]
    collection: str
    messages: SubmissionMessages = field(default_factory=SubmissionMessages)
    return_route: str = "/"
    payload_model: Optional[Type[BaseModel]] = None

    def __post_init__(self):
        ordered = tuple(sorted(self.fields, key=lambda f: f.order))
        object.__setattr__(self, "fields", ordered)
        _check_graph(self.kind, ordered)

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    @property
    def field_ids(self) -> List[str]:
        return [f.id for f in self.fields]

    def get(self, field_id: str) -> FieldSpec:
        """Obtiene un campo por su id."""
        for spec in self.fields:
            if spec.id == field_id:
                return spec
        raise UnknownFieldError(field_id)

    def descendants(self, field_id: str) -> List[str]:
        """Campos cuya cadena de dependencias incluye field_id, en orden."""
        self.get(field_id)
        reached = {field_id}
        result = []
        for spec in self.fields:
            if spec.depends_on in reached:
                reached.add(spec.id)
                result.append(spec.id)
        return result

    def referrers(self, field_id: str) -> List[str]:
        """Campos cuyas reglas cruzadas leen field_id."""
        return [f.id for f in self.fields if field_id in f.references()]

    def evaluate(self, field_id: str, raw_value: Any, snapshot: Mapping[str, Any]) -> ValidationOutcome:
        """Evalúa un valor para un campo del formulario."""
        return evaluate_field(self.get(field_id), raw_value, snapshot)


def _check_graph(kind: str, fields: Tuple[FieldSpec, ...]) -> None:
    """Verifica ids, orden y dependencias de un formulario."""
    if not fields:
        raise FormDefinitionError(f"{kind}: el formulario no tiene campos")

    by_id: Dict[str, FieldSpec] = {}
    orders = set()
    for spec in fields:
        if spec.id in by_id:
            raise FormDefinitionError(f"{kind}: campo duplicado '{spec.id}'")
        if spec.order < 0:
            raise FormDefinitionError(f"{kind}: orden negativo en '{spec.id}'")
        if spec.order in orders:
            raise FormDefinitionError(f"{kind}: orden {spec.order} repetido en '{spec.id}'")
        by_id[spec.id] = spec
        orders.add(spec.order)

    for spec in fields:
        if spec.depends_on is not None:
            parent = by_id.get(spec.depends_on)
            if parent is None:
                raise FormDefinitionError(
                    f"{kind}: '{spec.id}' depende de campo inexistente '{spec.depends_on}'"
                )
            if parent.order >= spec.order:
                raise FormDefinitionError(
                    f"{kind}: '{spec.id}' (orden {spec.order}) debe ir después de "
                    f"'{parent.id}' (orden {parent.order})"
                )
        for ref in spec.references():
            if ref not in by_id:
                raise FormDefinitionError(
                    f"{kind}: regla de '{spec.id}' referencia campo inexistente '{ref}'"
                )

    # Ciclos: con el orden estricto no deberían existir, se verifica igual
    for spec in fields:
        seen = {spec.id}
        current = spec.depends_on
        while current is not None:
            if current in seen:
                raise FormDefinitionError(f"{kind}: dependencia cíclica en '{spec.id}'")
            seen.add(current)
            current = by_id[current].depends_on


class FormRegistry:
    """Registro de tipos de formulario."""

    def __init__(self, definitions: Iterable[FormDefinition] = ()):
        self._forms: Dict[str, FormDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: FormDefinition) -> FormDefinition:
        """Registra un formulario; falla si el tipo ya existe."""
        if definition.kind in self._forms:
            raise FormDefinitionError(f"Formulario ya registrado: {definition.kind}")
        self._forms[definition.kind] = definition
        logger.debug("Formulario registrado: %s (%d campos)", definition.kind, len(definition.fields))
        return definition

    def get(self, kind: str) -> FormDefinition:
        """Obtiene la definición de un tipo de formulario."""
        try:
            return self._forms[kind]
        except KeyError:
            raise UnknownFormError(kind) from None

    def kinds(self) -> List[str]:
        return list(self._forms)

    def __contains__(self, kind: str) -> bool:
        return kind in self._forms

    def __iter__(self):
        return iter(self._forms.values())

    def __len__(self) -> int:
        return len(self._forms)
