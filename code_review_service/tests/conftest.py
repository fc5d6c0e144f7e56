"""Fixtures compartidos: configuración de prueba y un proveedor Gemini falso."""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import get_provider
from app.main import create_app
from app.schemas import AnalysisMode


class FakeProvider:
    """Sustituto de `GeminiProvider`: devuelve un texto fijo o lanza un error."""

    def __init__(self, reply: str = "{}", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def make_settings(**overrides) -> Settings:
    values = {
        "AI_API_KEY": "test-key",
        "GEMINI_MODEL": "gemini-2.5-flash",
        "ANALYSIS_MODE": AnalysisMode.PROGRAM,
        "STRICT_REPORT_SCHEMA": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(settings: Settings, provider: FakeProvider) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[get_provider] = lambda: provider
    return TestClient(app)


CLEAN_REPORT = {
    "finalDecision": "CLEAN",
    "summary": "문제 없음",
    "reportDetails": {
        "scamCheck": {"detected": False, "issues": ["없음"]},
        "validityCheck": {"valid": True, "issues": ["모든 파일이 유효함"]},
        "sensationalCheck": {"detected": False, "issues": ["없음"]},
        "dataCollectionCheck": {"detected": False, "issues": ["없음"]},
        "logicCheck": {"detected": False, "issues": ["없음"]},
    },
}
