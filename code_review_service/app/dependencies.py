"""Dependencias FastAPI: acceso a la configuración y al proveedor del proceso."""

from fastapi import Request

from .config import Settings
from .providers.gemini import GeminiProvider


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_provider(request: Request) -> GeminiProvider:
    return request.app.state.provider
