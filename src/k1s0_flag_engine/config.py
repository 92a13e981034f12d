"""エンジン設定（pydantic BaseModel）"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .loader import read_yaml
from .merger import deep_merge
from .models import Environment


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class EngineConfig(BaseModel):
    """フラグ評価エンジン設定。"""

    environment: Environment = Environment.PRODUCTION
    strict_version: bool = False
    flags_path: str | None = None
    flags_env_path: str | None = None
    use_presets: bool = False
    log: LogSection = Field(default_factory=LogSection)


def load_config(base_path: Path, env_path: Path | None = None) -> EngineConfig:
    """設定ファイルを読み込んで EngineConfig を返す。

    base_path: ベース設定ファイルパス（必須）
    env_path: 環境別設定ファイルパス（オプション）。存在する場合はベースにマージ。
    """
    data = read_yaml(base_path) or {}
    if env_path is not None and env_path.exists():
        data = deep_merge(data, read_yaml(env_path) or {})
    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        raise FeatureFlagError(
            code=FeatureFlagErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
