"""flag_engine データモデル"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

# userProperties / userValue に許される値の型
PropertyValue = str | int | float | bool

ANONYMOUS_IDENTITY = "anonymous"


class Environment(StrEnum):
    """デプロイ環境。"""

    DEVELOPMENT = "development"
    BETA = "beta"
    PRODUCTION = "production"


class EvaluationReason(StrEnum):
    """評価結果を決定したゲート。"""

    FLAG_NOT_FOUND = "FLAG_NOT_FOUND"
    FLAG_DISABLED = "FLAG_DISABLED"
    ENVIRONMENT_MISMATCH = "ENVIRONMENT_MISMATCH"
    USER_NOT_TARGETED = "USER_NOT_TARGETED"
    ORGANIZATION_NOT_TARGETED = "ORGANIZATION_NOT_TARGETED"
    VERSION_MISSING = "VERSION_MISSING"
    VERSION_TOO_LOW = "VERSION_TOO_LOW"
    INVALID_VERSION = "INVALID_VERSION"
    PROPERTY_MISMATCH = "PROPERTY_MISMATCH"
    ROLLOUT_EXCLUDED = "ROLLOUT_EXCLUDED"
    ROLLOUT_INCLUDED = "ROLLOUT_INCLUDED"
    FLAG_ENABLED = "FLAG_ENABLED"


@dataclass(frozen=True)
class FlagConditions:
    """フラグの追加条件。

    None でないフィールドのみ評価対象。False や 0 も期待値として有効。
    """

    min_version: str | None = None
    user_property: str | None = None
    user_value: PropertyValue | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.min_version is not None:
            data["minVersion"] = self.min_version
        if self.user_property is not None:
            data["userProperty"] = self.user_property
        if self.user_value is not None:
            data["userValue"] = self.user_value
        return data


@dataclass(frozen=True)
class FlagDefinition:
    """フィーチャーフラグ定義。"""

    key: str
    name: str = ""
    description: str = ""
    enabled: bool = False
    rollout_percentage: int = 100
    target_users: tuple[str, ...] = ()
    target_organizations: tuple[str, ...] = ()
    environment: Environment | None = None
    conditions: FlagConditions | None = None

    def __post_init__(self) -> None:
        # list で渡されても共有されないよう tuple に固定する
        object.__setattr__(self, "target_users", tuple(self.target_users))
        object.__setattr__(self, "target_organizations", tuple(self.target_organizations))
        if self.environment is not None:
            object.__setattr__(self, "environment", Environment(self.environment))

    def to_dict(self) -> dict[str, Any]:
        """JSON 形式（camelCase）の辞書を返す。"""
        data: dict[str, Any] = {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "enabled": self.enabled,
            "rolloutPercentage": self.rollout_percentage,
        }
        if self.target_users:
            data["targetUsers"] = list(self.target_users)
        if self.target_organizations:
            data["targetOrganizations"] = list(self.target_organizations)
        if self.environment is not None:
            data["environment"] = self.environment.value
        if self.conditions is not None:
            data["conditions"] = self.conditions.to_dict()
        return data


@dataclass(frozen=True)
class EvaluationContext:
    """フラグ評価コンテキスト。"""

    environment: Environment
    user_id: str | None = None
    organization_id: str | None = None
    version: str | None = None
    user_properties: Mapping[str, PropertyValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "environment", Environment(self.environment))
        object.__setattr__(
            self, "user_properties", MappingProxyType(dict(self.user_properties))
        )

    @property
    def hash_identity(self) -> str:
        """ロールアウトのハッシュに使う識別子。"""
        return self.user_id or ANONYMOUS_IDENTITY


@dataclass(frozen=True)
class EvaluationResult:
    """フラグ評価結果。"""

    flag_key: str
    enabled: bool
    reason: EvaluationReason
    bucket: int | None = None
