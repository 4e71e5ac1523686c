"""
Compuerta de envío de formularios.

Máquina de estados:

    IDLE -> CONFIRM_PENDING -> SUBMITTING -> SUCCEEDED
                 |                  |
                 v                  v
               IDLE         FAILED -> IDLE

Solo un formulario válido pasa a CONFIRM_PENDING; la confirmación del
usuario es el único paso hacia SUBMITTING, donde el adaptador se invoca una
sola vez. Mientras hay un envío en curso los nuevos intentos se ignoran.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from agroforms.notifications import Notification, Notifier, Severity
from agroforms.persistence.base import PersistenceAdapter, PersistenceError, PersistenceResult

from .session import FormSession


logger = logging.getLogger(__name__)


class GateState(Enum):
    """Estados de la compuerta."""
    IDLE = "idle"
    CONFIRM_PENDING = "confirm_pending"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AttemptResult(Enum):
    """Resultado de un intento de envío."""
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class SubmissionAttempt:
    """Intento de envío; vive hasta que se muestra su resultado."""
    confirmed: bool = False
    result: AttemptResult = AttemptResult.PENDING
    reason: str = ""
    record: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ConfirmPrompt:
    """Pregunta de confirmación sí/no."""
    title: str
    text: str


Confirmer = Callable[[ConfirmPrompt], Union[bool, Awaitable[bool]]]
SuccessCallback = Callable[[str, Optional[Dict[str, Any]]], None]


class SubmissionGate:
    """Controla el envío de una sesión al adaptador de persistencia."""

    def __init__(
        self,
        session: FormSession,
        adapter: PersistenceAdapter,
        notifier: Optional[Notifier] = None,
        confirmer: Optional[Confirmer] = None,
        on_success: Optional[SuccessCallback] = None,
    ):
        """
        Args:
            session: Sesión a enviar
            adapter: Destino del registro
            notifier: Recibe las notificaciones de éxito/error
            confirmer: Pregunta sí/no; sin confirmer se confirma siempre
            on_success: Se llama con (ruta_de_retorno, registro) al terminar
        """
        self.session = session
        self.adapter = adapter
        self.notifier = notifier
        self.confirmer = confirmer
        self.on_success = on_success
        self.state = GateState.IDLE
        self.history: List[GateState] = [GateState.IDLE]
        self.attempt: Optional[SubmissionAttempt] = None

    @property
    def messages(self):
        return self.session.definition.messages

    def _transition(self, new_state: GateState) -> None:
        logger.info(
            "%s: %s -> %s",
            self.session.definition.kind, self.state.value, new_state.value,
        )
        self.state = new_state
        self.history.append(new_state)

    def _notify(self, severity: Severity, title: str, message: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(Notification(severity=severity, title=title, message=message))

    # ------------------------------------------------------------------
    # Transiciones
    # ------------------------------------------------------------------

    def request_submit(self) -> bool:
        """IDLE -> CONFIRM_PENDING, solo si el formulario es válido."""
        if self.state != GateState.IDLE:
            logger.debug("Intento de envío ignorado en estado %s", self.state.value)
            return False
        if not self.session.is_form_valid():
            logger.debug("Intento de envío rechazado: formulario inválido")
            return False
        self._transition(GateState.CONFIRM_PENDING)
        return True

    def decline(self) -> None:
        """El usuario rechaza la confirmación; el formulario no cambia."""
        if self.state == GateState.CONFIRM_PENDING:
            self._transition(GateState.IDLE)

    async def confirm(self) -> Optional[SubmissionAttempt]:
        """
        CONFIRM_PENDING -> SUBMITTING y llamada al adaptador.

        Returns:
            El intento con su resultado, o None si no había confirmación pendiente
        """
        if self.state != GateState.CONFIRM_PENDING:
            logger.debug("Confirmación ignorada en estado %s", self.state.value)
            return None
        if not self.session.is_form_valid():
            self._transition(GateState.IDLE)
            return None

        attempt = SubmissionAttempt(confirmed=True)
        self.attempt = attempt
        payload = self.session.payload()
        self._transition(GateState.SUBMITTING)

        try:
            if self.session.record_id is not None:
                result = await self.adapter.update(self.session.record_id, payload)
            else:
                result = await self.adapter.create(payload)
        except PersistenceError as exc:
            result = PersistenceResult.failure(str(exc))
        except Exception as exc:
            logger.exception("%s: error inesperado del adaptador", self.session.definition.kind)
            result = PersistenceResult.failure(str(exc))

        if result.ok:
            self._succeed(attempt, result)
        else:
            self._fail(attempt, result)
        return attempt

    async def submit(self) -> Optional[SubmissionAttempt]:
        """
        Flujo completo: validar, confirmar y enviar.

        Returns:
            El intento, o None si el envío fue rechazado o ignorado
        """
        if not self.request_submit():
            return None

        if not await self._ask_confirmation():
            self.decline()
            return SubmissionAttempt(confirmed=False)

        return await self.confirm()

    async def _ask_confirmation(self) -> bool:
        if self.confirmer is None:
            return True
        prompt = ConfirmPrompt(self.messages.confirm_title, self.messages.confirm_text)
        answer = self.confirmer(prompt)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    # ------------------------------------------------------------------
    # Resultados
    # ------------------------------------------------------------------

    def _succeed(self, attempt: SubmissionAttempt, result: PersistenceResult) -> None:
        attempt.result = AttemptResult.SUCCESS
        attempt.record = result.record
        self._transition(GateState.SUCCEEDED)
        self._notify(Severity.SUCCESS, self.messages.success_title, self.messages.success_text)

        route = self.session.definition.return_route
        self.session.discard()
        if self.on_success is not None:
            self.on_success(route, result.record)

    def _fail(self, attempt: SubmissionAttempt, result: PersistenceResult) -> None:
        attempt.result = AttemptResult.FAILURE
        attempt.reason = result.message
        self._transition(GateState.FAILED)
        logger.warning("%s: envío fallido: %s", self.session.definition.kind, result.message)

        reason = result.message or self.messages.failure_fallback
        self._notify(
            Severity.ERROR,
            self.messages.failure_title,
            f"{self.messages.failure_text} {reason}",
        )
        self._transition(GateState.IDLE)
