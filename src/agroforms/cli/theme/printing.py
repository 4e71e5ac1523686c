"""
Funciones que imprimen directamente a la consola.
"""

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from agroforms.cli.theme.palette import get_console, get_palette
from agroforms.forms.rules import Validity
from agroforms.notifications import Notification, Severity

if TYPE_CHECKING:
    from agroforms.forms import FormRegistry, FormSession


def print_header(text: str, subtitle: str = None) -> None:
    """Imprime un encabezado."""
    p = get_palette()
    content = Text(text, style=f"bold {p.primary}")
    if subtitle:
        content.append(f"\n{subtitle}", style=p.muted)
    get_console().print(Panel(content, border_style=p.border, box=box.ROUNDED, padding=(0, 2)))


def print_success(text: str) -> None:
    """Imprime mensaje de éxito."""
    get_console().print(Text(f"[+] {text}", style=get_palette().success))


def print_warning(text: str) -> None:
    """Imprime advertencia."""
    get_console().print(Text(f"[!] {text}", style=get_palette().warning))


def print_error(text: str) -> None:
    """Imprime error."""
    get_console().print(Text(f"[x] {text}", style=get_palette().error))


def print_info(text: str) -> None:
    """Imprime información."""
    get_console().print(Text(f"[i] {text}", style=get_palette().info))


def _severity_color(severity: Severity) -> str:
    p = get_palette()
    return {
        Severity.SUCCESS: p.success,
        Severity.WARNING: p.warning,
        Severity.ERROR: p.error,
    }[severity]


def print_notification(notification: Notification) -> None:
    """Imprime una notificación como panel."""
    color = _severity_color(notification.severity)
    get_console().print(Panel(
        Text(notification.message),
        title=f"[bold {color}]{notification.title}[/]",
        title_align="left",
        border_style=color,
        box=box.ROUNDED,
        padding=(0, 1),
    ))


class ConsoleNotifier:
    """Notifier que imprime cada notificación en la consola."""

    def notify(self, notification: Notification) -> None:
        print_notification(notification)


def print_forms_table(registry: "FormRegistry") -> None:
    """Imprime la lista de formularios registrados."""
    p = get_palette()
    table = Table(
        title="Formularios",
        title_style=f"bold {p.primary}",
        border_style=p.border,
        header_style=f"bold {p.secondary}",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("Tipo", style=p.accent)
    table.add_column("Título")
    table.add_column("Colección")
    table.add_column("Campos", justify="right")

    for definition in registry:
        table.add_row(
            definition.kind,
            definition.title,
            definition.collection,
            str(len(definition.fields)),
        )
    get_console().print(table)


def print_session_status(session: "FormSession") -> None:
    """Imprime el estado de cada campo de la sesión."""
    p = get_palette()
    table = Table(border_style=p.border, header_style=f"bold {p.secondary}", box=box.SIMPLE)
    table.add_column("Campo")
    table.add_column("Valor", style=p.accent)
    table.add_column("Estado")

    for spec in session.definition.fields:
        outcome = session.outcome(spec.id)
        value = session.value(spec.id)
        if session.is_locked(spec.id):
            status = Text("bloqueado", style=p.muted)
        elif outcome.validity == Validity.VALID:
            status = Text("ok", style=p.success)
        elif outcome.validity == Validity.INVALID:
            status = Text(outcome.message, style=p.error)
        else:
            status = Text("pendiente", style=p.warning)
        table.add_row(spec.display_label, "" if value is None else str(value), status)

    valid, total = session.count_valid()
    table.caption = f"{valid}/{total} campos válidos"
    get_console().print(table)
