"""
AgroForms - Formularios de registro para la gestión de la finca.

Motor de validación secuencial de campos (cosecha, mantenimiento y
rendimiento) con compuerta de envío hacia el almacén de registros.
"""

__version__ = "0.3.0"
