"""フラグ定義ファイル読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .merger import merge_flag_dicts
from .models import FlagDefinition
from .schema import parse_flag_dicts, parse_flags


def read_yaml(path: Path) -> Any:
    """YAML（または JSON）ファイルを読み込む。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FeatureFlagError(
            code=FeatureFlagErrorCodes.READ_FILE,
            message=f"Failed to read file: {path}",
            cause=e,
        ) from e
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FeatureFlagError(
            code=FeatureFlagErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e


def load_flags(base_path: Path, env_path: Path | None = None) -> list[FlagDefinition]:
    """フラグ定義ファイルを読み込んで FlagDefinition のリストを返す。

    base_path: ベース定義ファイルパス（必須）
    env_path: 環境別定義ファイルパス（オプション）。存在する場合は key 単位でマージ。
    """
    items = parse_flag_dicts(read_yaml(base_path))
    if env_path is not None and env_path.exists():
        items = merge_flag_dicts(items, parse_flag_dicts(read_yaml(env_path)))
    return parse_flags(items)
