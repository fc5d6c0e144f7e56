"""Validación de la respuesta cruda de Gemini.

El texto del modelo se parsea como JSON y, si es válido, se reenvía sin
modificar. Los fallos no lanzan excepción: se devuelven como un
`ParseResult` con un fragmento del texto original para diagnóstico.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from .schemas import AnalysisMode, ModelReportEntry, PerFileReport

SNIPPET_LENGTH = 100


@dataclass(frozen=True)
class ParseResult:
    """Resultado de `parse_model_output`.

    Si `ok` es True, `data` contiene el JSON parseado. Si no, `error`
    describe el problema y `snippet` guarda los primeros 100 caracteres
    del texto recibido.
    """

    ok: bool
    data: Any = None
    error: Optional[str] = None
    snippet: str = ""


def _failure(raw: str, error: str) -> ParseResult:
    return ParseResult(ok=False, error=error, snippet=raw[:SNIPPET_LENGTH])


def _reject_constant(name: str) -> float:
    raise ValueError(f"constante no permitida en JSON: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"número fuera de rango: {text[:20]}")
    return value


def parse_model_output(
    raw: Optional[str],
    mode: AnalysisMode = AnalysisMode.PROGRAM,
    strict: bool = False,
) -> ParseResult:
    """
    Parsea el texto del modelo.

    Args:
        raw: Texto devuelto por Gemini.
        mode: Modo activo; solo se usa con `strict=True` para elegir el esquema.
        strict: Si es True, además del JSON se exige la forma del informe.

    Returns:
        `ParseResult` con los datos o con el fallo.
    """
    raw = raw or ""
    try:
        data = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as e:
        return _failure(raw, f"JSON inválido: {e.msg} (línea {e.lineno}, columna {e.colno})")
    except (ValueError, RecursionError) as e:
        # límite de dígitos de int, NaN/Infinity o anidamiento excesivo
        return _failure(raw, f"JSON inválido: {type(e).__name__}: {e}")

    if strict:
        schema = PerFileReport if mode is AnalysisMode.PER_FILE else ModelReportEntry
        try:
            schema.model_validate(data)
        except ValidationError as e:
            return _failure(raw, f"El JSON no cumple el esquema del informe ({e.error_count()} errores)")

    return ParseResult(ok=True, data=data)
