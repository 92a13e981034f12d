"""EngineConfig から Evaluator を組み立てる"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from .config import EngineConfig
from .evaluator import Evaluator
from .loader import load_flags
from .logger import DEFAULT_LOGGER_NAME, new_logger
from .models import EvaluationContext, FlagDefinition
from .presets import flags_for_environment
from .registry import FlagRegistry


def create_evaluator(
    config: EngineConfig,
    context: EvaluationContext | None = None,
    *,
    logger: Any | None = None,
) -> Evaluator:
    """設定に従って新しい FlagRegistry と Evaluator を生成する。

    プリセットを使う場合はファイルの定義が同じ key のプリセットを上書きする。
    生成したインスタンスは呼び出し側が保持して必要な箇所へ渡す。

    logger を渡した場合はそれを使う。省略時、structlog が未設定であれば
    config.log に従って一度だけ設定し、設定済みであればホストの設定をそのまま使う。
    """
    flags: list[FlagDefinition] = []
    if config.use_presets:
        flags.extend(flags_for_environment(config.environment))
    if config.flags_path is not None:
        env_path = Path(config.flags_env_path) if config.flags_env_path else None
        flags.extend(load_flags(Path(config.flags_path), env_path))

    if logger is None:
        if structlog.is_configured():
            logger = structlog.stdlib.get_logger(DEFAULT_LOGGER_NAME)
        else:
            logger = new_logger(level=config.log.level, format=config.log.format)
    return Evaluator(
        FlagRegistry(flags),
        context,
        strict_version=config.strict_version,
        logger=logger,
    )
