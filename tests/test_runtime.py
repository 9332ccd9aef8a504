from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from vibevim.runtime import telemetry
from vibevim.runtime.config import EngineConfig, config_dir, keybinds_path


def test_config_dir_prefers_xdg(tmp_path: Path) -> None:
    env = {"XDG_CONFIG_HOME": str(tmp_path)}

    assert config_dir(env) == tmp_path / "vibevim"
    assert keybinds_path(env) == tmp_path / "vibevim" / "keybinds.json"


def test_keybinds_override_and_numbers_from_env(tmp_path: Path) -> None:
    env = {
        "VIBEVIM_KEYBINDS": str(tmp_path / "mine.json"),
        "VIBEVIM_TAB_WIDTH": "2",
        "VIBEVIM_VIEWPORT_HEIGHT": "not-a-number",
    }

    config = EngineConfig.from_env(env)

    assert config.keybinds_path == tmp_path / "mine.json"
    assert config.tab_width == 2
    assert config.viewport_height == 24


def test_config_from_process_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("VIBEVIM_KEYBINDS", raising=False)
    monkeypatch.setenv("VIBEVIM_TAB_WIDTH", "-3")

    config = EngineConfig.from_env()

    assert config.keybinds_path == tmp_path / "vibevim" / "keybinds.json"
    assert config.tab_width == 4


def test_get_logger_is_namespaced() -> None:
    log = telemetry.get_logger("modes")

    assert log.name == "vibevim.modes"
    assert telemetry.get_logger("vibevim.modes") is log


def test_span_records_failure_and_reraises(tmp_path: Path) -> None:
    log_file = tmp_path / "events.log"
    config = (
        telemetry.TelemetryConfig()
        .with_min_level("debug")
        .with_json_format(True)
        .with_file_output(str(log_file))
    )
    telemetry.configure(config=config)
    try:
        with pytest.raises(RuntimeError):
            with telemetry.span("test::boom", component=True) as handle:
                handle.add_metadata("step", 1)
                raise RuntimeError("boom")
        telemetry.record_event("test.event", data={"answer": 42})
        for handler in logging.getLogger("vibevim").handlers:
            handler.flush()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
    finally:
        telemetry.configure()

    failure = next(r for r in records if r["message"].startswith("span::fail"))
    assert failure["span"] == "test::boom"
    assert failure["component"] == "test::boom"
    assert failure["reason"] == "boom"
    assert failure["step"] == "1"
    event = next(r for r in records if r.get("event") == "test.event")
    assert event["answer"] == "42"


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=telemetry.TelemetryConfig(), preset="development")
    with pytest.raises(ValueError):
        telemetry.configure(preset="nope")
