"""フラグ定義ファイル読み込みのユニットテスト"""

from pathlib import Path

import pytest
from k1s0_flag_engine import Environment, FeatureFlagError, FeatureFlagErrorCodes, load_flags

BASE_YAML = """\
flags:
  - key: enhanced_analytics
    name: Enhanced Analytics
    enabled: true
    rolloutPercentage: 100
  - key: ai_insights_v2
    enabled: true
    rolloutPercentage: 10
    environment: beta
    conditions:
      minVersion: "1.4.0"
      userProperty: plan
"""


def test_load_yaml(tmp_path: Path) -> None:
    """YAML のフラグ定義を読み込めること。"""
    path = tmp_path / "flags.yaml"
    path.write_text(BASE_YAML)
    flags = load_flags(path)
    assert [flag.key for flag in flags] == ["enhanced_analytics", "ai_insights_v2"]
    assert flags[1].environment is Environment.BETA
    assert flags[1].conditions is not None
    assert flags[1].conditions.min_version == "1.4.0"


def test_load_json(tmp_path: Path) -> None:
    """JSON のフラグ定義（リスト形式）も読み込めること。"""
    path = tmp_path / "flags.json"
    path.write_text('[{"key": "x", "enabled": true, "rolloutPercentage": 5}]')
    flags = load_flags(path)
    assert flags[0].key == "x"
    assert flags[0].rollout_percentage == 5


def test_load_empty_file(tmp_path: Path) -> None:
    """空ファイルはフラグなし。"""
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_flags(path) == []


def test_load_with_env_override(tmp_path: Path) -> None:
    """環境別ファイルは key 単位でマージされること。"""
    base = tmp_path / "flags.yaml"
    base.write_text(BASE_YAML)
    env = tmp_path / "flags.prod.yaml"
    env.write_text(
        "flags:\n"
        "  - key: ai_insights_v2\n"
        "    rolloutPercentage: 50\n"
        "    conditions:\n"
        "      minVersion: \"2.0.0\"\n"
        "  - key: debug_mode\n"
        "    enabled: false\n"
    )
    flags = {flag.key: flag for flag in load_flags(base, env)}
    assert list(flags) == ["enhanced_analytics", "ai_insights_v2", "debug_mode"]
    merged = flags["ai_insights_v2"]
    assert merged.rollout_percentage == 50
    assert merged.enabled is True
    assert merged.environment is Environment.BETA
    assert merged.conditions is not None
    assert merged.conditions.min_version == "2.0.0"
    assert merged.conditions.user_property == "plan"


def test_load_env_not_exists(tmp_path: Path) -> None:
    """env_path が存在しない場合は base のみ使用。"""
    base = tmp_path / "flags.yaml"
    base.write_text(BASE_YAML)
    assert len(load_flags(base, tmp_path / "missing.yaml")) == 2


def test_load_file_not_found(tmp_path: Path) -> None:
    """存在しないファイルは READ_FILE_ERROR。"""
    with pytest.raises(FeatureFlagError) as exc_info:
        load_flags(tmp_path / "missing.yaml")
    assert exc_info.value.code == FeatureFlagErrorCodes.READ_FILE


def test_load_invalid_yaml(tmp_path: Path) -> None:
    """不正 YAML は PARSE_YAML_ERROR。"""
    path = tmp_path / "bad.yaml"
    path.write_text("flags: {invalid: yaml: content:\n")
    with pytest.raises(FeatureFlagError) as exc_info:
        load_flags(path)
    assert exc_info.value.code == FeatureFlagErrorCodes.PARSE_YAML


def test_load_validation_error(tmp_path: Path) -> None:
    """検証に失敗した定義は VALIDATION_ERROR。"""
    path = tmp_path / "bad_flags.yaml"
    path.write_text("flags:\n  - key: x\n    rolloutPercentage: 150\n")
    with pytest.raises(FeatureFlagError) as exc_info:
        load_flags(path)
    assert exc_info.value.code == FeatureFlagErrorCodes.VALIDATION
