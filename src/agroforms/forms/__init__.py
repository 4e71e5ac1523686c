"""
Motor de formularios secuenciales.

Cada campo se desbloquea solo cuando el campo del que depende está completo
y válido. La compuerta de envío protege la creación/actualización remota
detrás de la validación completa y la confirmación del usuario.
"""

from .models import (
    FieldType,
    FieldSpec,
    SubmissionMessages,
    FormDefinitionError,
    UnknownFormError,
    UnknownFieldError,
    SessionClosedError,
    FormIncompleteError,
)
from .rules import (
    Validity,
    ValidationOutcome,
    ValidationRule,
    PatternRule,
    ChoiceRule,
    RangeRule,
    CrossFieldRule,
    DateWindowRule,
    Relation,
    evaluate_field,
)
from .registry import FormDefinition, FormRegistry
from .session import FormSession
from .gate import (
    GateState,
    AttemptResult,
    SubmissionAttempt,
    ConfirmPrompt,
    SubmissionGate,
)
from .definitions import HARVEST_SCHEDULE, MAINTENANCE, YIELD_RECORD, registry

__all__ = [
    "FieldType",
    "FieldSpec",
    "SubmissionMessages",
    "FormDefinitionError",
    "UnknownFormError",
    "UnknownFieldError",
    "SessionClosedError",
    "FormIncompleteError",
    "Validity",
    "ValidationOutcome",
    "ValidationRule",
    "PatternRule",
    "ChoiceRule",
    "RangeRule",
    "CrossFieldRule",
    "DateWindowRule",
    "Relation",
    "evaluate_field",
    "FormDefinition",
    "FormRegistry",
    "FormSession",
    "GateState",
    "AttemptResult",
    "SubmissionAttempt",
    "ConfirmPrompt",
    "SubmissionGate",
    "HARVEST_SCHEDULE",
    "MAINTENANCE",
    "YIELD_RECORD",
    "registry",
]
