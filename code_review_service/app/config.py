"""
Módulo de configuración del servicio de revisión de código (Gemini).

Utiliza `pydantic-settings` para cargar la configuración desde variables
de entorno y/o archivos `.env`. Todos los atributos definidos en `Settings`
pueden sobreescribirse mediante variables de entorno con el mismo nombre.

Ejemplo de `.env`:
    AI_API_KEY=tu_api_key
    GEMINI_MODEL=gemini-2.5-flash
    ANALYSIS_MODE=program
    STRICT_REPORT_SCHEMA=false
    PORT=3000
"""

from typing import Literal

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .schemas import AnalysisMode


class Settings(BaseSettings):
    """
    Configuración central del servicio.

    Se construye una sola vez al arrancar y se comparte (solo lectura) con
    la aplicación a través de `app.state.settings`.

    Atributos principales:
        AI_API_KEY:
            API key de Google Gemini. Obligatoria: sin ella el proceso no arranca.
        GEMINI_MODEL:
            Identificador fijo del modelo; no se puede cambiar por petición.
        ANALYSIS_MODE:
            "program" (un único informe) o "per_file" (un informe por archivo).
        STRICT_REPORT_SCHEMA:
            Si es True, la respuesta del modelo se valida contra el esquema
            del informe además de parsearse como JSON.
        HOST, PORT, LOG_LEVEL:
            Parámetros del servidor Uvicorn y del logging.
    """

    AI_API_KEY: str
    GEMINI_MODEL: str = "gemini-2.5-flash"

    ANALYSIS_MODE: AnalysisMode = AnalysisMode.PROGRAM
    STRICT_REPORT_SCHEMA: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
        frozen=True,
    )

    @field_validator("AI_API_KEY")
    @classmethod
    def _api_key_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("AI_API_KEY está vacía")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


def load_settings(**overrides) -> Settings:
    """
    Construye `Settings` desde el entorno.

    Raises:
        ConfigurationError: si falta la API key o algún valor es inválido.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        hints = []
        if "AI_API_KEY" in fields:
            hints.append("defina AI_API_KEY en el entorno o en .env")
        others = [f for f in fields if f != "AI_API_KEY"]
        if others:
            hints.append(f"revise el valor de {', '.join(others)}")
        raise ConfigurationError(
            f"Configuración inválida ({', '.join(fields)}): {'; '.join(hints)}"
        ) from e
