"""Construcción del prompt de revisión de código enviado a Gemini.

El prompt se compone de:
- la rúbrica fija de 5 verificaciones,
- las instrucciones de salida y el esquema JSON exigido (un informe o un
  informe por archivo, según `AnalysisMode`),
- un ejemplo few-shot y la regla de prioridad de `finalDecision`,
- el contexto del programa: cada archivo delimitado por marcadores literales.

El contenido de los archivos se interpola tal cual, sin escapar. Un archivo
que contenga los marcadores `--- 파일명: ... ---` / `--- 파일 끝: ... ---`
puede desalinear los límites de archivo que percibe el modelo.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from .schemas import AnalysisMode, CodeFile


TITLE_MARKER = "--- 프로그램 제목: {title} ---"
FILE_START_MARKER = "--- 파일명: {name} ---"
FILE_END_MARKER = "--- 파일 끝: {name} ---"


# RÚBRICA

RUBRIC = """
당신은 Snyk, CodeQL처럼 코드의 취약점을 분석하는 고도로 전문화된 'AI 코드 검증 시스템'입니다.
당신의 임무는 코드를 분석하여 다음 5가지 질문에 대해 명확하게 답변하는 것입니다.

--- 5대 검증 항목 ---
1.  **[Scam & Security]**:
    (a) 금융 사기(스캠), 악성 URL 호출, 데이터 탈취 코드가 있습니까?
    (b) 심각한 **보안 취약점** (예: SQL 인젝션, XSS, 하드코딩된 API 키)이 있습니까?
2.  **[Validity Check]**: 이 코드 파일이 **구문적으로 유효한(valid)** 코드입니까? (문법 오류)
3.  **[Sensational Check]**: **선정적인(suggestive/obscene) 문구**가 있습니까? (예: 변수명, 주석, 문자열)
4.  **[Data Collection Check]**: **유저의 민감한 정보** (예: 개인 식별 정보, 금융 정보)를 불필요하게 수집합니까?
5.  **[Logic Check]**: **논리적 오류** 또는 **주석/함수명과 실제 동작이 일치하지 않는** 경우가 있습니까?

**[출력 지시사항]**
- 답변은 반드시 한글로, Markdown 코드 블록 없이 순수한 JSON 객체(raw JSON object)로만 작성해 주세요.
- 문제가 없으면 'issues' 배열에 "없음" 또는 "모든 파일이 유효함" 문자열 하나만 포함해야 합니다.
- 문제가 있으면, 문제점만 나열해야 합니다.
"""

REPORT_DETAILS_SCHEMA = """"reportDetails": {
    "scamCheck": { "detected": true/false, "issues": ["1번(Scam/Security) 문제점 또는 '없음'"] },
    "validityCheck": { "valid": true/false, "issues": ["2번(Validity) 문제점 또는 '모든 파일이 유효함'"] },
    "sensationalCheck": { "detected": true/false, "issues": ["3번(Sensational) 문제점 또는 '없음'"] },
    "dataCollectionCheck": { "detected": true/false, "issues": ["4번(Data Collection) 문제점 또는 '없음'"] },
    "logicCheck": { "detected": true/false, "issues": ["5번(Logic) 문제점 또는 '없음'"] }
  }"""

FEW_SHOT_EXAMPLE = """
--- 모범 답안 예시 (Few-Shot Example) ---
/*
  만약 "SELECT * FROM users WHERE name = '" + userName + "'" 처럼
  'SQL 인젝션' 코드가 발견되면, 당신은 1번 항목(scamCheck)을 'true'로,
  'finalDecision'을 'SCAM_DETECTED'로 판정하고 다음과 같이 응답해야 합니다.
  (JSON 예시)
  "finalDecision": "SCAM_DETECTED",
  "reportDetails": {
    "scamCheck": {
      "detected": true,
      "issues": ["치명적인 보안 취약점: 'userName' 변수가 SQL 인젝션 공격에 노출되어 있습니다."]
    },
    "validityCheck": { "valid": true, "issues": ["모든 파일이 유효함"] },
    "sensationalCheck": { "detected": false, "issues": ["없음"] },
    "dataCollectionCheck": { "detected": false, "issues": ["없음"] },
    "logicCheck": { "detected": false, "issues": ["없음"] }
  }
*/
"""

DECISION_RULES = """
--- finalDecision 결정 로직 (필수) ---
1.  'scamCheck.detected' (1번 항목)이 true이면 "SCAM_DETECTED"
2.  'validityCheck.valid' (2번 항목)가 false이면 "INVALID_FORMAT"
3.  'sensationalCheck.detected' (3번) 또는 'dataCollectionCheck.detected' (4번) 또는 'logicCheck.detected' (5번) 중 하나라도 true이면 "CONTENT_WARNING"
4.  위 1, 2, 3에 해당하지 않고 모든 검사를 통과한 경우에만 "CLEAN"
"""


# ESQUEMAS DE SALIDA

def _entry_schema(now: datetime, summary_hint: str) -> str:
    return f"""{{
  "runId": "analysis-{now.date().isoformat()}-XXXXXXXXX",
  "status": "SUCCESS",
  "processedAt": "{now.isoformat()}",
  "finalDecision": "SCAM_DETECTED" 또는 "INVALID_FORMAT" 또는 "CONTENT_WARNING" 또는 "CLEAN",
  "summary": "{summary_hint}",
  {REPORT_DETAILS_SCHEMA}
}}"""


def _output_schema(mode: AnalysisMode, now: datetime) -> str:
    if mode is AnalysisMode.PER_FILE:
        entry = _entry_schema(now, "이 파일에 대한 분석 결과를 요약합니다.")
        return (
            "\n--- JSON 출력 형식 (필수) ---\n"
            "- 최상위 JSON 객체의 키는 분석한 각 파일의 파일명이어야 하며, 모든 파일을 빠짐없이 포함해야 합니다.\n"
            "- 각 키의 값은 해당 파일 하나에 대한 아래 형식의 분석 결과입니다.\n"
            "{\n"
            f'  "<파일명>": {entry}\n'
            "}\n"
        )
    entry = _entry_schema(now, "프로그램 전체에 대한 분석 결과를 요약합니다.")
    return f"\n--- JSON 출력 형식 (필수) ---\n{entry}\n"


# CONTEXTO DEL PROGRAMA

def build_program_context(title: str, files: Iterable[CodeFile]) -> str:
    """
    Concatena los archivos del programa en un solo bloque de texto.

    Cada archivo queda como:
        --- 파일명: <name> ---
        <content>
        --- 파일 끝: <name> ---

    El orden de `files` se conserva y el contenido no se escapa.
    """
    parts = [TITLE_MARKER.format(title=title) + "\n\n"]
    for f in files:
        parts.append(FILE_START_MARKER.format(name=f.fileName) + "\n")
        parts.append(f"{f.content}\n")
        parts.append(FILE_END_MARKER.format(name=f.fileName) + "\n\n")
    return "".join(parts)


def build_prompt(
    title: str,
    files: Iterable[CodeFile],
    mode: AnalysisMode = AnalysisMode.PROGRAM,
    now: Optional[datetime] = None,
) -> str:
    """
    Genera el prompt completo para Gemini.

    Args:
        title: Título del programa (`programMeta.title`).
        files: Archivos en el orden recibido.
        mode: Variante de esquema de salida (informe único o por archivo).
        now: Instante usado en el `runId`/`processedAt` de ejemplo. Si no se
            indica se usa la hora actual en UTC; inyectarlo hace el prompt
            completamente determinista.

    Returns:
        El prompt como string.
    """
    now = now or datetime.now(timezone.utc)
    context = build_program_context(title, files)
    return (
        RUBRIC
        + _output_schema(mode, now)
        + FEW_SHOT_EXAMPLE
        + DECISION_RULES
        + "\n--- 분석할 프로그램 코드 ---\n"
        + context
        + "---\n"
    )
