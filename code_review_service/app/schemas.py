"""
Esquemas Pydantic utilizados por la capa de api del servicio de revisión.

Agrupa los modelos de entrada/salida del endpoint `/analyze`:

- request:
    Metadatos del programa y lista ordenada de archivos de código.

- report:
    Forma documentada del informe que devuelve Gemini. Solo se usa para la
    validación estricta opcional; por defecto el JSON del modelo se reenvía
    tal cual.
"""

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel


class AnalysisMode(str, Enum):
    """Variante de prompt/respuesta activa en el proceso."""

    PROGRAM = "program"
    PER_FILE = "per_file"


# ---------------------------------------------------------------------------
# request
# ---------------------------------------------------------------------------


class ProgramMeta(BaseModel):
    """
    Metadatos del programa enviado.

    Atributos:
        title:
            Título del programa; se imprime en la cabecera del contexto.
    """

    model_config = ConfigDict(extra="allow")

    title: str = ""


class CodeFile(BaseModel):
    """Un archivo del programa: nombre y contenido textual."""

    fileName: str
    content: str


class AnalyzeRequest(BaseModel):
    """
    Petición de análisis.

    Atributos:
        programMeta:
            Metadatos del programa (opcional).
        codeFiles:
            Archivos a analizar. El orden se conserva en el prompt. La
            comprobación de lista vacía se hace en la ruta para responder 400.
    """

    programMeta: ProgramMeta = Field(default_factory=ProgramMeta)
    codeFiles: Optional[List[CodeFile]] = None


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------

FinalDecision = Literal["SCAM_DETECTED", "INVALID_FORMAT", "CONTENT_WARNING", "CLEAN"]


class DetectionCheck(BaseModel):
    """Resultado de un chequeo de detección (scam, sensacionalismo, datos, lógica)."""

    detected: bool
    issues: List[str]


class ValidityCheck(BaseModel):
    """Resultado del chequeo de validez sintáctica."""

    valid: bool
    issues: List[str]


class ReportDetails(BaseModel):
    scamCheck: DetectionCheck
    validityCheck: ValidityCheck
    sensationalCheck: DetectionCheck
    dataCollectionCheck: DetectionCheck
    logicCheck: DetectionCheck


class ModelReportEntry(BaseModel):
    """
    Informe de Gemini para un programa (o un archivo en modo `per_file`).

    `runId`, `status` y `processedAt` aparecen en el ejemplo del prompt y
    son meramente ilustrativos. Los campos desconocidos se conservan.
    """

    model_config = ConfigDict(extra="allow")

    runId: Optional[str] = None
    status: Optional[str] = None
    processedAt: Optional[str] = None
    finalDecision: FinalDecision
    summary: str
    reportDetails: ReportDetails


class PerFileReport(RootModel[Dict[str, ModelReportEntry]]):
    """Respuesta en modo `per_file`: nombre de archivo -> informe."""


# ---------------------------------------------------------------------------
# responses
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Cuerpo 500: fallo de comunicación o de formato del modelo."""

    status: Literal["error"] = "error"
    message: str
    detail: str


class BadRequestResponse(BaseModel):
    """Cuerpo 400: la petición no trae una lista `codeFiles` válida."""

    error: str
