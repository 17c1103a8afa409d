from __future__ import annotations

import pytest

from mdpad_engine.runtime import telemetry


def test_env_flag_reads_prefixed_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MDPAD_ENGINE_WRAP_AROUND", "no")
    assert telemetry.env_flag("WRAP_AROUND", True) is False

    monkeypatch.setenv("MDPAD_ENGINE_WRAP_AROUND", "On")
    assert telemetry.env_flag("WRAP_AROUND", False) is True

    monkeypatch.delenv("MDPAD_ENGINE_WRAP_AROUND")
    assert telemetry.env_flag("WRAP_AROUND", True) is True


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_span_reraises_body_errors() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("test::boom", component=True):
            raise KeyError("boom")
