"""
Sistema de temas para la interfaz CLI de agroforms.

- palette: Definicion de paletas y gestion de temas (CLITheme, ColorPalette)
- printing: Funciones que imprimen directamente a consola
"""

from agroforms.cli.theme.palette import (
    ThemeName,
    ColorPalette,
    THEME_DEFAULT,
    THEME_MINIMAL,
    THEMES,
    CLITheme,
    get_console,
    get_palette,
)
from agroforms.cli.theme.printing import (
    print_header,
    print_success,
    print_warning,
    print_error,
    print_info,
    print_notification,
    print_forms_table,
    print_session_status,
    ConsoleNotifier,
)

__all__ = [
    "ThemeName",
    "ColorPalette",
    "THEME_DEFAULT",
    "THEME_MINIMAL",
    "THEMES",
    "CLITheme",
    "get_console",
    "get_palette",
    "print_header",
    "print_success",
    "print_warning",
    "print_error",
    "print_info",
    "print_notification",
    "print_forms_table",
    "print_session_status",
    "ConsoleNotifier",
]
