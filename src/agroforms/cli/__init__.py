"""
CLI de AgroForms - Formularios de registro de la finca.

Comandos:
- forms: Lista de formularios disponibles
- fill: Completa y envía un formulario nuevo
- edit: Edita un registro existente
- stock: Nivel de stock de un ítem de inventario
"""

import logging

import typer

from agroforms.cli.theme import CLITheme, ThemeName
from agroforms.config import get_settings

# Crear aplicación principal
app = typer.Typer(
    name="agroforms",
    help="Formularios de registro de cosecha, mantenimiento y rendimiento.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Muestra mensajes de depuración"),
    theme: ThemeName = typer.Option(ThemeName.DEFAULT, "--theme", help="Tema de colores"),
):
    """
    AgroForms - Registro de operaciones de la finca.

    La configuración se lee de variables AGROFORMS_* o de un archivo .env.
    """
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    CLITheme.set_theme(theme)


@app.command("forms")
def forms():
    """Lista los formularios disponibles."""
    from agroforms.cli.forms import list_forms
    list_forms()


def _register_commands():
    """Registra los comandos con argumentos."""
    from agroforms.cli.forms import edit_form, fill_form
    from agroforms.cli.stock import show_stock

    app.command("fill")(fill_form)
    app.command("edit")(edit_form)
    app.command("stock")(show_stock)


_register_commands()


__all__ = [
    "app",
]
