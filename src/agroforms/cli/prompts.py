"""
Llenado interactivo de formularios con questionary.

Los campos se piden en orden; cada respuesta pasa por la sesión y el campo
se vuelve a pedir hasta que sea válido.
"""

import logging
from typing import Callable, Optional

import questionary
from questionary import Style

from agroforms.cli.theme import get_palette, print_error, print_warning
from agroforms.forms import ConfirmPrompt, FieldSpec, FieldType, FormSession


logger = logging.getLogger(__name__)

Asker = Callable[[FieldSpec, Optional[str]], Optional[str]]


def get_prompt_style() -> Style:
    """Estilo de questionary basado en el tema actual."""
    p = get_palette()
    return Style([
        ('qmark', f'fg:{p.accent} bold'),
        ('question', 'bold'),
        ('answer', f'fg:{p.success} bold'),
        ('pointer', f'fg:{p.accent} bold'),
        ('highlighted', f'fg:{p.primary} bold'),
        ('instruction', f'fg:{p.muted} italic'),
        ('text', ''),
    ])


def _message(spec: FieldSpec) -> str:
    if spec.hint:
        return f"{spec.display_label} ({spec.hint}):"
    return f"{spec.display_label}:"


def ask_field(spec: FieldSpec, current: Optional[str] = None) -> Optional[str]:
    """
    Pide el valor de un campo.

    Returns:
        Texto ingresado, o None si el usuario canceló (Ctrl+C)
    """
    style = get_prompt_style()
    if spec.field_type == FieldType.SELECT and spec.options:
        default = current if current in spec.options else None
        return questionary.select(
            _message(spec),
            choices=list(spec.options),
            default=default,
            style=style,
        ).ask()

    return questionary.text(
        _message(spec),
        default=current or "",
        style=style,
    ).ask()


async def confirm_prompt(prompt: ConfirmPrompt) -> bool:
    """Pregunta sí/no dentro del bucle de eventos."""
    answer = await questionary.confirm(
        f"{prompt.title}: {prompt.text}",
        default=False,
        style=get_prompt_style(),
    ).ask_async()
    return bool(answer)


def fill_session(session: FormSession, ask: Optional[Asker] = None) -> bool:
    """
    Recorre los campos en orden hasta completar el formulario.

    Args:
        session: Sesión a completar (vacía o pre-cargada)
        ask: Función que obtiene la respuesta de un campo; por defecto ask_field

    Returns:
        True si el formulario quedó válido, False si el usuario canceló
    """
    ask = ask or ask_field

    for spec in session.definition.fields:
        while True:
            if session.is_locked(spec.id):
                # No debería ocurrir recorriendo en orden
                logger.warning("%s: campo bloqueado durante el llenado", spec.id)
                return False

            current = session.value(spec.id)
            answer = ask(spec, None if current is None else str(current))
            if answer is None:
                return False

            if not session.on_field_change(spec.id, answer.strip()):
                print_warning(f"{spec.display_label}: entrada no permitida (solo dígitos).")
                continue

            outcome = session.outcome(spec.id)
            if outcome.is_valid:
                break
            print_error(f"{spec.display_label}: {outcome.message}")

    return session.is_form_valid()
