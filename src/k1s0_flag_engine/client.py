"""FeatureFlagClient プロトコル"""

from __future__ import annotations

from typing import Protocol

from .models import EvaluationContext, EvaluationResult, FlagDefinition


class FeatureFlagClientProtocol(Protocol):
    """フィーチャーフラグクライアントプロトコル。

    評価は同期的に完了し、I/O を伴わない。
    """

    def evaluate(
        self, flag_key: str, context: EvaluationContext | None = None
    ) -> EvaluationResult: ...

    def get_flag(self, flag_key: str) -> FlagDefinition | None: ...

    def is_enabled(self, flag_key: str, context: EvaluationContext | None = None) -> bool: ...
