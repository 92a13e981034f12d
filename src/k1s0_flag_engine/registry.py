"""FlagRegistry 実装"""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .models import FlagConditions, FlagDefinition
from .schema import FlagConditionsModel

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset(
    f.name for f in dataclasses.fields(FlagDefinition) if f.name != "key"
)


class FlagRegistry:
    """フラグ定義のスナップショットを保持するレジストリ。

    スナップショットは読み取り専用のマッピングで、更新時は新しいマッピングを
    組み立てて参照ごと差し替える。読み取り側はロックを取らず、常に更新前か
    更新後のどちらか一方の完全なスナップショットを参照する。
    """

    def __init__(self, flags: Iterable[FlagDefinition] | None = None) -> None:
        self._snapshot: Mapping[str, FlagDefinition] = MappingProxyType({})
        self._write_lock = threading.Lock()
        if flags is not None:
            self.load(flags)

    def load(self, flags: Iterable[FlagDefinition]) -> None:
        """スナップショット全体を置き換える。重複キーは後勝ち。"""
        snapshot = {flag.key: flag for flag in flags}
        with self._write_lock:
            self._snapshot = MappingProxyType(snapshot)
        logger.debug("flags_loaded", extra={"count": len(snapshot)})

    def get(self, key: str) -> FlagDefinition | None:
        """フラグ定義を取得する。存在しなければ None。"""
        return self._snapshot.get(key)

    def update(self, key: str, fields: Mapping[str, Any]) -> bool:
        """既存の定義に fields をマージした新しい定義で差し替える。

        キーが存在しない場合は何もせず False を返す。

        Raises:
            FeatureFlagError: 未知のフィールド、key の変更、不正な値を含む場合 (INVALID_FIELD)
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise FeatureFlagError(
                code=FeatureFlagErrorCodes.INVALID_FIELD,
                message=f"Cannot update fields {sorted(unknown)} of flag: {key}",
            )
        with self._write_lock:
            current = self._snapshot.get(key)
            if current is None:
                return False
            try:
                updated = dataclasses.replace(current, **_coerce_fields(key, fields))
            except ValueError as e:
                raise FeatureFlagError(
                    code=FeatureFlagErrorCodes.INVALID_FIELD,
                    message=f"Invalid value for flag {key}: {e}",
                    cause=e,
                ) from e
            snapshot = dict(self._snapshot)
            snapshot[key] = updated
            self._snapshot = MappingProxyType(snapshot)
        return True

    def list(self) -> list[FlagDefinition]:
        """現在のフラグ定義のコピーを返す。"""
        return list(self._snapshot.values())

    def snapshot(self) -> Mapping[str, FlagDefinition]:
        """現在のスナップショット（読み取り専用）を返す。"""
        return self._snapshot

    def keys(self) -> list[str]:
        return list(self._snapshot)

    def __len__(self) -> int:
        return len(self._snapshot)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot


def _invalid_field(key: str, name: str, value: Any) -> FeatureFlagError:
    return FeatureFlagError(
        code=FeatureFlagErrorCodes.INVALID_FIELD,
        message=f"Invalid value for {name} of flag {key}: {value!r}",
    )


def _coerce_fields(key: str, fields: Mapping[str, Any]) -> dict[str, Any]:
    """update に渡された値を FlagDefinition のフィールド型に揃える。

    conditions は辞書（camelCase / snake_case）も受け付ける。
    """
    coerced = dict(fields)
    for name in ("target_users", "target_organizations"):
        if name not in coerced:
            continue
        value = coerced[name]
        # 文字列は 1 文字ずつのリストとして扱われてしまうため拒否する
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            raise _invalid_field(key, name, value)
        items = tuple(value)
        if not all(isinstance(item, str) for item in items):
            raise _invalid_field(key, name, value)
        coerced[name] = items

    if "conditions" in coerced:
        value = coerced["conditions"]
        if isinstance(value, Mapping):
            try:
                value = FlagConditionsModel.model_validate(dict(value)).to_conditions()
            except ValidationError as e:
                raise FeatureFlagError(
                    code=FeatureFlagErrorCodes.INVALID_FIELD,
                    message=f"Invalid conditions for flag {key}: {e}",
                    cause=e,
                ) from e
        elif value is not None and not isinstance(value, FlagConditions):
            raise _invalid_field(key, "conditions", value)
        coerced["conditions"] = value
    return coerced
