"""Modelos Pydantic para configuración y catálogos de la finca."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Backend(str, Enum):
    """Backends de persistencia disponibles."""
    SQLITE = "sqlite"
    HTTP = "http"


class CropType(str, Enum):
    """Cultivos de la finca."""
    COCONUT = "Coconut"
    BANANA = "Banana"
    PEPPER = "Pepper"
    PAPAYA = "Papaya"
    PINEAPPLE = "Pineapple"


class FieldNumber(str, Enum):
    """Parcelas de cultivo."""
    AA1 = "AA1"
    BB1 = "BB1"
    CC1 = "CC1"
    DD1 = "DD1"


class StorageLocation(str, Enum):
    """Ubicaciones de almacenamiento de cosecha."""
    LL1 = "LL1"
    LL2 = "LL2"
    LL3 = "LL3"
    LL4 = "LL4"


class YieldUnit(str, Enum):
    """Unidades de cantidad cosechada."""
    KG = "Kg"
    METRIC_TON = "MetricTon"


class StockStatus(str, Enum):
    """Estados de un ítem de inventario."""
    IN_STOCK = "In Stock"
    OUT_OF_STOCK = "Out Of Stock"
    EXPIRED = "Expired"


# ============================================================================
# Configuración de ejecución
# ============================================================================

def default_db_path() -> Path:
    """Ruta por defecto de la base de datos local."""
    return Path.home() / ".agroforms" / "agroforms.db"


class Settings(BaseSettings):
    """
    Configuración de la aplicación.

    Se lee de variables de entorno con prefijo AGROFORMS_ o de un archivo .env.
    """
    model_config = SettingsConfigDict(
        env_prefix="AGROFORMS_",
        env_file=".env",
        extra="ignore",
    )

    backend: Backend = Field(default=Backend.SQLITE, description="Backend de persistencia")
    api_url: str = Field(default="http://localhost:5000", description="URL base de la API REST")
    db_path: Optional[Path] = Field(default=None, description="Ruta a la base SQLite")
    timeout: float = Field(default=10.0, gt=0, description="Timeout HTTP (s)")
    log_level: str = Field(default="WARNING", description="Nivel de logging")

    def resolved_db_path(self) -> Path:
        """Ruta efectiva de la base de datos."""
        return self.db_path or default_db_path()


def get_settings() -> Settings:
    """Construye la configuración desde el entorno."""
    return Settings()
