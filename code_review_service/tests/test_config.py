"""Pruebas de configuración y del arranque del proceso."""

import pytest

from app import main as main_module
from app.config import load_settings
from app.errors import ConfigurationError
from app.schemas import AnalysisMode


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # Sin .env en el directorio actual y sin variables del servicio.
    monkeypatch.chdir(tmp_path)
    for name in ("AI_API_KEY", "GEMINI_MODEL", "ANALYSIS_MODE", "STRICT_REPORT_SCHEMA", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_from_environment(clean_env):
    clean_env.setenv("AI_API_KEY", "k")
    settings = load_settings()
    assert settings.AI_API_KEY == "k"
    assert settings.GEMINI_MODEL == "gemini-2.5-flash"
    assert settings.ANALYSIS_MODE is AnalysisMode.PROGRAM
    assert settings.STRICT_REPORT_SCHEMA is False
    assert settings.PORT == 3000


def test_reads_dotenv_file(clean_env, tmp_path):
    (tmp_path / ".env").write_text("AI_API_KEY=from-file\nANALYSIS_MODE=per_file\n")
    settings = load_settings()
    assert settings.AI_API_KEY == "from-file"
    assert settings.ANALYSIS_MODE is AnalysisMode.PER_FILE


def test_missing_api_key_is_configuration_error(clean_env):
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert "AI_API_KEY" in str(exc_info.value)


def test_blank_api_key_is_configuration_error(clean_env):
    clean_env.setenv("AI_API_KEY", "   ")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_invalid_mode_is_configuration_error(clean_env):
    clean_env.setenv("AI_API_KEY", "k")
    clean_env.setenv("ANALYSIS_MODE", "everything")
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    message = str(exc_info.value)
    assert "ANALYSIS_MODE" in message
    assert "defina AI_API_KEY" not in message


def test_log_level_is_case_insensitive(clean_env):
    clean_env.setenv("AI_API_KEY", "k")
    clean_env.setenv("LOG_LEVEL", "debug")
    assert load_settings().LOG_LEVEL == "DEBUG"


def test_unknown_log_level_is_configuration_error(clean_env):
    clean_env.setenv("AI_API_KEY", "k")
    clean_env.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert "LOG_LEVEL" in str(exc_info.value)


def test_settings_are_immutable(clean_env):
    clean_env.setenv("AI_API_KEY", "k")
    settings = load_settings()
    with pytest.raises(Exception):
        settings.GEMINI_MODEL = "other"


def test_main_exits_nonzero_without_api_key(clean_env, caplog):
    started = []
    clean_env.setattr(main_module.uvicorn, "run", lambda *a, **kw: started.append(a))

    with pytest.raises(SystemExit) as exc_info:
        main_module.main()

    assert exc_info.value.code == 1
    assert started == []
    assert "AI_API_KEY" in caplog.text


def test_main_starts_server_with_configured_port(clean_env):
    clean_env.setenv("AI_API_KEY", "k")
    clean_env.setenv("PORT", "8123")
    started = []
    clean_env.setattr(main_module.uvicorn, "run", lambda app, **kw: started.append(kw))

    main_module.main()

    assert started and started[0]["port"] == 8123


def test_main_exits_nonzero_with_invalid_log_level(clean_env, caplog):
    clean_env.setenv("AI_API_KEY", "k")
    clean_env.setenv("LOG_LEVEL", "verbose")
    started = []
    clean_env.setattr(main_module.uvicorn, "run", lambda *a, **kw: started.append(a))

    with pytest.raises(SystemExit) as exc_info:
        main_module.main()

    assert exc_info.value.code == 1
    assert started == []
    assert "LOG_LEVEL" in caplog.text
