"""Code Review Service Application.

Servicio HTTP que delega la revisión de código en Google Gemini.

Arquitectura:
    - routers/: FastAPI endpoints (HTTP layer)
    - providers/: Cliente del modelo externo (Gemini)
    - prompts.py: Construcción del prompt
    - validator.py: Parseo de la respuesta del modelo
    - schemas.py: Request/Response models (Pydantic)
    - config.py: Configuración (pydantic-settings)
"""
