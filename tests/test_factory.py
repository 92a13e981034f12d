"""create_evaluator のユニットテスト"""

from pathlib import Path
from typing import Any

import pytest
import structlog
from k1s0_flag_engine import (
    EngineConfig,
    Environment,
    EvaluationContext,
    EvaluationReason,
    create_evaluator,
)


def test_create_from_flag_file(tmp_path: Path) -> None:
    """設定のフラグファイルから Evaluator を生成できること。"""
    flags_path = tmp_path / "flags.yaml"
    flags_path.write_text(
        "flags:\n"
        "  - key: new_ui\n"
        "    enabled: true\n"
        "    conditions:\n"
        "      minVersion: \"2.0.0\"\n"
    )
    config = EngineConfig(flags_path=str(flags_path), strict_version=True)
    evaluator = create_evaluator(config, EvaluationContext(environment=Environment.PRODUCTION))
    assert evaluator.is_enabled("new_ui") is False
    assert evaluator.evaluate("new_ui").reason == EvaluationReason.VERSION_MISSING
    ctx = EvaluationContext(environment=Environment.PRODUCTION, version="2.1.0")
    assert evaluator.is_enabled("new_ui", ctx) is True


def test_create_with_presets_and_overrides(tmp_path: Path) -> None:
    """プリセットにファイルの定義が上書きされること。"""
    flags_path = tmp_path / "flags.yaml"
    flags_path.write_text("- key: custom_dashboards\n  enabled: false\n  environment: beta\n")
    config = EngineConfig(environment=Environment.BETA, use_presets=True, flags_path=str(flags_path))
    evaluator = create_evaluator(config, EvaluationContext(environment=Environment.BETA))
    assert evaluator.is_enabled("enhanced_analytics") is True
    assert evaluator.is_enabled("custom_dashboards") is False
    assert len(evaluator.list_flags()) == 7


def test_create_empty() -> None:
    """フラグなしの設定では全フラグが無効。"""
    evaluator = create_evaluator(EngineConfig())
    assert evaluator.list_flags() == []
    assert evaluator.is_enabled("anything", EvaluationContext(environment=Environment.PRODUCTION)) is False


def test_each_call_creates_new_instance() -> None:
    """呼び出しごとに独立したインスタンスが生成されること。"""
    config = EngineConfig(use_presets=True)
    first = create_evaluator(config)
    second = create_evaluator(config)
    assert first is not second
    assert first.registry is not second.registry
    first.registry.update("enhanced_analytics", {"enabled": False})
    flag = second.get_flag("enhanced_analytics")
    assert flag is not None
    assert flag.enabled is True


def test_given_logger_is_used_without_configuring(monkeypatch: pytest.MonkeyPatch) -> None:
    """logger を渡した場合は structlog を設定し直さないこと。"""

    def fail_new_logger(**kwargs: Any) -> Any:
        raise AssertionError("new_logger must not be called")

    monkeypatch.setattr("k1s0_flag_engine.factory.new_logger", fail_new_logger)
    events: list[tuple[str, dict[str, Any]]] = []

    class Recorder:
        def warning(self, event: str, **kw: Any) -> None:
            events.append((event, kw))

    evaluator = create_evaluator(EngineConfig(), logger=Recorder())
    evaluator.is_enabled("missing", EvaluationContext(environment=Environment.PRODUCTION))
    assert events == [("flag_not_found", {"flag_key": "missing"})]


def test_configured_structlog_is_left_alone(monkeypatch: pytest.MonkeyPatch) -> None:
    """structlog が設定済みならホストの設定を上書きしないこと。"""
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(structlog, "is_configured", lambda: True)
    monkeypatch.setattr(
        "k1s0_flag_engine.factory.new_logger", lambda **kwargs: calls.append(kwargs)
    )
    create_evaluator(EngineConfig())
    create_evaluator(EngineConfig())
    assert calls == []
