"""Endpoint de salud del servicio (no consulta a Gemini)."""

from fastapi import APIRouter

router = APIRouter()


@router.get("", summary="Healthcheck")
def health() -> dict:
    """Indica que el proceso está vivo y aceptando peticiones."""
    return {"status": "ok", "service": "code_review_service"}
