"""
Endpoint `POST /analyze`.

Flujo de una petición:
    1. Validación de forma (`codeFiles` debe ser una lista no vacía) -> 400
    2. Construcción del prompt
    3. Llamada a Gemini -> 500 con mensaje genérico si falla
    4. Parseo del JSON devuelto -> 500 con fragmento del texto si no es JSON
    5. Respuesta 200 con el análisis tal cual lo devolvió el modelo
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config import Settings
from ..dependencies import get_provider, get_settings
from ..errors import ModelCommunicationError
from ..prompts import build_prompt
from ..providers.gemini import GeminiProvider
from ..schemas import AnalyzeRequest, BadRequestResponse, ErrorResponse
from ..validator import parse_model_output

router = APIRouter()
logger = logging.getLogger(__name__)

MISSING_FILES_MESSAGE = "분석할 'codeFiles' 배열이 요청 본문에 포함되어야 합니다."
INVALID_BODY_MESSAGE = "요청 본문 형식이 올바르지 않습니다."
SERVER_ERROR_MESSAGE = "서버 내부에서 분석을 처리하는 중 오류가 발생했습니다."
FORMAT_ERROR_MESSAGE = "Gemini 모델이 요청된 JSON 형식을 따르지 않았습니다."


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def _server_error(message: str, detail: str) -> JSONResponse:
    body = ErrorResponse(message=message, detail=detail)
    return JSONResponse(status_code=500, content=body.model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Convierte los errores de validación de FastAPI en 400 `{error}`.

    Si el problema está en `codeFiles` (ausente o no es una lista) se usa el
    mensaje específico; cualquier otro problema de forma usa uno genérico.
    """
    errors = exc.errors()
    logger.info("Petición rechazada en %s: %d errores de validación", request.url.path, len(errors))
    for err in errors:
        loc = err.get("loc", ())
        if len(loc) == 2 and loc[-1] == "codeFiles":
            return _bad_request(MISSING_FILES_MESSAGE)
    return _bad_request(INVALID_BODY_MESSAGE)


@router.post(
    "/analyze",
    responses={400: {"model": BadRequestResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    payload: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
    provider: GeminiProvider = Depends(get_provider),
):
    """Analiza un programa (lista de archivos) con Gemini y reenvía su veredicto."""
    if not payload.codeFiles:
        return _bad_request(MISSING_FILES_MESSAGE)

    try:
        logger.info(
            "Solicitud recibida: programMeta=%s, archivos=%d",
            payload.programMeta.model_dump(),
            len(payload.codeFiles),
        )
        prompt = build_prompt(payload.programMeta.title, payload.codeFiles, settings.ANALYSIS_MODE)
        raw = await provider.generate(prompt)

        result = parse_model_output(raw, settings.ANALYSIS_MODE, settings.STRICT_REPORT_SCHEMA)
        if not result.ok:
            logger.error("Respuesta del modelo no válida: %s | raw=%r", result.error, result.snippet)
            return _server_error(FORMAT_ERROR_MESSAGE, f"모델 응답: {result.snippet}...")

        return {"status": "success", "analysis": result.data}

    except ModelCommunicationError as e:
        logger.error("Fallo de comunicación con el modelo: %s", e.message)
        return _server_error(SERVER_ERROR_MESSAGE, e.message)
    except Exception:
        logger.exception("Error inesperado procesando /analyze")
        return _server_error(SERVER_ERROR_MESSAGE, SERVER_ERROR_MESSAGE)
