"""Evaluator 実装"""

from __future__ import annotations

from typing import Any

import structlog

from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .hashing import bucket_for
from .models import (
    EvaluationContext,
    EvaluationReason,
    EvaluationResult,
    FlagConditions,
    FlagDefinition,
)
from .registry import FlagRegistry
from .version import compare_versions

FULL_ROLLOUT = 100


class Evaluator:
    """フラグ定義とコンテキストから有効/無効を決定する。

    判定は次の順で行い、最初に不成立となったゲートで打ち切る:
    存在 -> マスタースイッチ -> 環境 -> 対象ユーザー -> 対象組織 -> 条件 -> ロールアウト率。
    I/O は行わず、同じ入力には常に同じ結果を返す。
    """

    def __init__(
        self,
        registry: FlagRegistry,
        context: EvaluationContext | None = None,
        *,
        strict_version: bool = False,
        logger: Any | None = None,
    ) -> None:
        self._registry = registry
        self._context = context
        self._strict_version = strict_version
        self._logger = logger or structlog.stdlib.get_logger(__name__)

    @property
    def registry(self) -> FlagRegistry:
        return self._registry

    @property
    def context(self) -> EvaluationContext | None:
        return self._context

    def evaluate(
        self, flag_key: str, context: EvaluationContext | None = None
    ) -> EvaluationResult:
        """フラグを評価し、判定理由付きの結果を返す。

        Raises:
            FeatureFlagError: コンテキストが与えられていない場合 (CONTEXT_REQUIRED)
        """
        ctx = self._resolve_context(context)
        flag = self._registry.get(flag_key)
        if flag is None:
            self._logger.warning("flag_not_found", flag_key=flag_key)
            return EvaluationResult(flag_key, False, EvaluationReason.FLAG_NOT_FOUND)
        return self._evaluate_flag(flag, ctx)

    def is_enabled(self, flag_key: str, context: EvaluationContext | None = None) -> bool:
        """フラグが有効かどうかを返す。存在しないフラグは False。"""
        return self.evaluate(flag_key, context).enabled

    def evaluate_all(self, context: EvaluationContext | None = None) -> dict[str, bool]:
        """現在のスナップショットの全フラグを評価する。"""
        ctx = self._resolve_context(context)
        snapshot = self._registry.snapshot()
        return {key: self._evaluate_flag(flag, ctx).enabled for key, flag in snapshot.items()}

    def get_flag(self, flag_key: str) -> FlagDefinition | None:
        """フラグ定義を取得する。"""
        return self._registry.get(flag_key)

    def list_flags(self) -> list[FlagDefinition]:
        """全フラグ定義のコピーを返す。"""
        return self._registry.list()

    def _resolve_context(self, context: EvaluationContext | None) -> EvaluationContext:
        ctx = context if context is not None else self._context
        if ctx is None:
            raise FeatureFlagError(
                code=FeatureFlagErrorCodes.CONTEXT_REQUIRED,
                message="An evaluation context is required",
            )
        return ctx

    def _evaluate_flag(self, flag: FlagDefinition, ctx: EvaluationContext) -> EvaluationResult:
        def result(
            enabled: bool, reason: EvaluationReason, bucket: int | None = None
        ) -> EvaluationResult:
            return EvaluationResult(flag.key, enabled, reason, bucket)

        if not flag.enabled:
            return result(False, EvaluationReason.FLAG_DISABLED)

        if flag.environment is not None and flag.environment != ctx.environment:
            return result(False, EvaluationReason.ENVIRONMENT_MISMATCH)

        if flag.target_users and ctx.user_id not in flag.target_users:
            return result(False, EvaluationReason.USER_NOT_TARGETED)

        if flag.target_organizations and ctx.organization_id not in flag.target_organizations:
            return result(False, EvaluationReason.ORGANIZATION_NOT_TARGETED)

        if flag.conditions is not None:
            failed = self._check_conditions(flag.key, flag.conditions, ctx)
            if failed is not None:
                return result(False, failed)

        if flag.rollout_percentage >= FULL_ROLLOUT:
            return result(True, EvaluationReason.FLAG_ENABLED)

        bucket = bucket_for(ctx.hash_identity, flag.key)
        if bucket < flag.rollout_percentage:
            return result(True, EvaluationReason.ROLLOUT_INCLUDED, bucket)
        return result(False, EvaluationReason.ROLLOUT_EXCLUDED, bucket)

    def _check_conditions(
        self, flag_key: str, conditions: FlagConditions, ctx: EvaluationContext
    ) -> EvaluationReason | None:
        """不成立の条件があればその理由を返す。"""
        if conditions.min_version is not None:
            if ctx.version is None:
                if self._strict_version:
                    return EvaluationReason.VERSION_MISSING
            else:
                try:
                    if compare_versions(ctx.version, conditions.min_version) < 0:
                        return EvaluationReason.VERSION_TOO_LOW
                except FeatureFlagError:
                    self._logger.warning(
                        "invalid_version",
                        flag_key=flag_key,
                        version=ctx.version,
                        min_version=conditions.min_version,
                    )
                    return EvaluationReason.INVALID_VERSION

        if conditions.user_property is not None and conditions.user_value is not None:
            actual = ctx.user_properties.get(conditions.user_property)
            if not _property_matches(actual, conditions.user_value):
                return EvaluationReason.PROPERTY_MISMATCH

        return None


def _property_matches(actual: object, expected: object) -> bool:
    """userProperties の値が期待値と一致するか判定する。

    bool は bool とのみ一致する（True と 1 は別の値）。int と float は同じ
    数値として値で比較し、それ以外は同じ型で等しい場合のみ一致とする。
    """
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if isinstance(actual, (int, float)) and isinstance(expected, (int, float)):
        return actual == expected
    return type(actual) is type(expected) and actual == expected
