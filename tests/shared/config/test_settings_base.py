# -*- coding: utf-8 -*-
import pytest

from app.shared.config.settings_base import BaseAppSettings


def test_database_url_builds_from_parts(monkeypatch):
    monkeypatch.setenv("DB_USER", "alice")
    monkeypatch.setenv("DB_PASSWORD", "s3cr3t!")
    monkeypatch.setenv("DB_HOST", "db.local")
    monkeypatch.setenv("DB_PORT", "5433")
    monkeypatch.setenv("DB_NAME", "tesis_db")
    s = BaseAppSettings()
    assert s.database_url.startswith("postgresql+asyncpg://alice:s3cr3t%21@")
    assert "db.local:5433/tesis_db" in s.database_url
    assert s.is_sqlite is False


def test_database_url_uses_DB_URL_and_normalizes(monkeypatch):
    monkeypatch.setenv("DB_URL", "postgres://u:p@h:5432/db")
    s = BaseAppSettings()
    assert s.database_url == "postgresql+asyncpg://u:p@h:5432/db"


def test_sqlite_url_kept_as_is(monkeypatch):
    monkeypatch.setenv("DB_URL", "sqlite+aiosqlite:///./tesis.db")
    s = BaseAppSettings()
    assert s.database_url == "sqlite+aiosqlite:///./tesis.db"
    assert s.is_sqlite is True


def test_cors_origins_parsing_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.com, https://b.com , 'http://localhost:8080'")
    s = BaseAppSettings()
    assert s.get_cors_origins() == ["https://a.com", "https://b.com", "http://localhost:8080"]


def test_cors_origins_wildcard(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "*")
    s = BaseAppSettings()
    assert s.get_cors_origins() == ["*"]


def test_workflow_defaults():
    s = BaseAppSettings()
    assert s.dias_habiles_evaluacion == 15
    assert s.dias_habiles_correccion == 30
    assert s.duracion_sustentacion_minutos == 120
    assert s.max_document_size_bytes == 25 * 1024 * 1024


@pytest.mark.parametrize("var,value", [
    ("DIAS_HABILES_EVALUACION", "0"),
    ("DURACION_SUSTENTACION_MINUTOS", "5"),
    ("NOTIFICATION_MODE", "sms"),
])
def test_invalid_values_rejected(monkeypatch, var, value):
    from pydantic import ValidationError

    monkeypatch.setenv(var, value)
    with pytest.raises(ValidationError):
        BaseAppSettings()


def test_workflow_params_follow_settings(monkeypatch):
    from app.modules.thesis.facades.thesis_state_machine import WorkflowParams

    monkeypatch.setenv("DIAS_HABILES_EVALUACION", "10")
    monkeypatch.setenv("DIAS_HABILES_CORRECCION", "20")
    params = WorkflowParams.from_settings(BaseAppSettings())
    assert (params.dias_habiles_evaluacion, params.dias_habiles_correccion) == (10, 20)


def test_short_correction_window_warns(monkeypatch, caplog):
    monkeypatch.setenv("DIAS_HABILES_EVALUACION", "15")
    monkeypatch.setenv("DIAS_HABILES_CORRECCION", "5")
    s = BaseAppSettings()
    with caplog.at_level("WARNING"):
        s._security_checks()
    assert "DIAS_HABILES_CORRECCION" in caplog.text
# Fin del archivo backend/tests/shared/config/test_settings_base.py
