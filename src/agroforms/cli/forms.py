"""
Comandos CLI para llenar y editar formularios.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Any, Dict, Optional

import typer
from pydantic import ValidationError

from agroforms.cli import prompts
from agroforms.cli.theme import (
    ConsoleNotifier,
    print_error,
    print_forms_table,
    print_header,
    print_info,
    print_session_status,
    print_success,
    print_warning,
)
from agroforms.config import Settings, get_settings
from agroforms.forms import (
    AttemptResult,
    ConfirmPrompt,
    FormDefinition,
    FormIncompleteError,
    FormSession,
    SubmissionAttempt,
    SubmissionGate,
    UnknownFormError,
    registry,
)
from agroforms.persistence import PersistenceAdapter, PersistenceError, build_adapter


RETRY_PROMPT = ConfirmPrompt("Retry", "Submit the record again?")


def list_forms() -> None:
    """Lista los formularios disponibles."""
    print_forms_table(registry)


def _get_definition(kind: str) -> FormDefinition:
    try:
        return registry.get(kind)
    except UnknownFormError:
        print_error(f"Formulario no encontrado: {kind}")
        print_info(f"Disponibles: {', '.join(registry.kinds())}")
        raise typer.Exit(1)


def _on_success(route: str, record: Optional[Dict[str, Any]]) -> None:
    record_id = (record or {}).get("id") or (record or {}).get("_id")
    if record_id:
        print_success(f"Registro {record_id} guardado. Volver a {route}")
    else:
        print_info(f"Volver a {route}")


async def _submit(gate: SubmissionGate, adapter: PersistenceAdapter) -> Optional[SubmissionAttempt]:
    """Envía la sesión; ante un fallo ofrece reintentar."""
    try:
        attempt = await gate.submit()
        while attempt is not None and attempt.result == AttemptResult.FAILURE:
            if not await prompts.confirm_prompt(RETRY_PROMPT):
                break
            attempt = await gate.submit()
        return attempt
    finally:
        await adapter.aclose()


async def _fetch(adapter: PersistenceAdapter, record_id: str) -> Optional[Dict[str, Any]]:
    try:
        return await adapter.get(record_id)
    finally:
        await adapter.aclose()


def _complete_and_submit(session: FormSession, settings: Settings, db: Optional[Path]) -> None:
    definition = session.definition
    subtitle = f"Editando {session.record_id}" if session.record_id else definition.collection
    print_header(definition.title, subtitle)

    if not prompts.fill_session(session):
        print_warning("Formulario cancelado.")
        raise typer.Exit(1)
    print_session_status(session)

    adapter = build_adapter(settings, definition.collection, db)
    gate = SubmissionGate(
        session,
        adapter,
        notifier=ConsoleNotifier(),
        confirmer=prompts.confirm_prompt,
        on_success=_on_success,
    )
    try:
        attempt = asyncio.run(_submit(gate, adapter))
    except (FormIncompleteError, ValidationError) as e:
        print_error(f"Formulario inválido: {e}")
        raise typer.Exit(1)

    if attempt is None:
        print_error("El formulario no es válido.")
        raise typer.Exit(1)
    if not attempt.confirmed:
        print_info("Envío cancelado.")
        return
    if attempt.result != AttemptResult.SUCCESS:
        raise typer.Exit(1)


def fill_form(
    kind: Annotated[str, typer.Argument(help="Tipo de formulario (ver 'agroforms forms')")],
    db: Annotated[Optional[Path], typer.Option("--db", help="Ruta a la base SQLite")] = None,
) -> None:
    """
    Completa un formulario nuevo y lo envía.

    Ejemplo:
        agroforms fill harvest_schedule
    """
    definition = _get_definition(kind)
    _complete_and_submit(FormSession(definition), get_settings(), db)


def edit_form(
    kind: Annotated[str, typer.Argument(help="Tipo de formulario")],
    record_id: Annotated[str, typer.Argument(help="ID del registro (parcial o completo)")],
    db: Annotated[Optional[Path], typer.Option("--db", help="Ruta a la base SQLite")] = None,
) -> None:
    """
    Edita un registro existente.

    Ejemplo:
        agroforms edit yield_record a1b2c3d4
    """
    definition = _get_definition(kind)
    settings = get_settings()

    try:
        record = asyncio.run(_fetch(build_adapter(settings, definition.collection, db), record_id))
    except PersistenceError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if record is None:
        print_error(f"Registro no encontrado: {record_id}")
        raise typer.Exit(1)

    _complete_and_submit(FormSession.from_record(definition, record), settings, db)
