"""
Punto de entrada principal del servicio de revisión de código.

Expone una función `create_app` para facilitar el testeo y la integración
con servidores ASGI, y una función `main` que valida la configuración y
arranca Uvicorn. Si falta `AI_API_KEY`, `main` termina el proceso con
código 1 antes de aceptar conexiones.

Uso con Uvicorn directamente (la configuración se lee del entorno):
    uvicorn app.main:create_app --factory --port 3000

Las rutas se definen en el paquete `routers`:
    - health:  endpoint de salud.
    - analyze: `POST /analyze`, revisión de código con Gemini.
"""

import logging
import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from .config import Settings, load_settings
from .errors import ConfigurationError
from .providers.gemini import GeminiProvider
from .routers import analyze, health

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configura el logging raíz una sola vez para todo el proceso."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[GeminiProvider] = None,
) -> FastAPI:
    """
    Crea y configura la aplicación FastAPI.

    - Guarda `settings` y el proveedor Gemini en `app.state` (solo lectura).
    - Configura CORS sin lista de orígenes: se acepta cualquier origen.
    - Registra los routers de salud y de análisis.

    Args:
        settings: Configuración ya cargada. Si es None se lee del entorno.
        provider: Proveedor Gemini. Si es None se construye desde `settings`.

    Returns:
        Instancia configurada de `FastAPI`.

    Raises:
        ConfigurationError: si `settings` es None y falta la API key.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title="Code Review Service",
        description="Revisión de código (scam, validez, contenido, datos, lógica) delegada en Gemini",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.provider = provider or GeminiProvider(settings)

    # --- CORS Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, analyze.request_validation_handler)

    # --- Rutas de healthcheck ---
    app.include_router(health.router, prefix="/health", tags=["health"])

    # --- Rutas de análisis ---
    app.include_router(analyze.router, tags=["analysis"])

    logger.info(
        "Code Review Service inicializado - modelo=%s, modo=%s, esquema_estricto=%s",
        settings.GEMINI_MODEL,
        settings.ANALYSIS_MODE.value,
        settings.STRICT_REPORT_SCHEMA,
    )
    return app


def main() -> None:
    """Carga la configuración y arranca el servidor; sale con 1 si falta la API key."""
    configure_logging()
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("Error: %s", e)
        sys.exit(1)

    configure_logging(settings.LOG_LEVEL)
    app = create_app(settings)
    logger.info("Analiza enviando POST a http://%s:%d/analyze", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
