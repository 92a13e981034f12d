"""JSON 形式のフラグ定義の検証（pydantic BaseModel）"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from .exceptions import FeatureFlagError, FeatureFlagErrorCodes
from .models import Environment, FlagConditions, FlagDefinition


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class FlagConditionsModel(_CamelModel):
    """conditions セクション。"""

    min_version: str | None = None
    user_property: str | None = None
    # 厳密型で受け、True が 1 に変換されないようにする
    user_value: StrictBool | StrictInt | StrictFloat | StrictStr | None = None

    def to_conditions(self) -> FlagConditions:
        return FlagConditions(
            min_version=self.min_version,
            user_property=self.user_property,
            user_value=self.user_value,
        )


class FlagDefinitionModel(_CamelModel):
    """フラグ定義 1 件。"""

    key: str = Field(min_length=1)
    name: str = ""
    description: str = ""
    enabled: bool = False
    rollout_percentage: int = Field(default=100, ge=0, le=100)
    target_users: list[str] = Field(default_factory=list)
    target_organizations: list[str] = Field(default_factory=list)
    environment: Environment | None = None
    conditions: FlagConditionsModel | None = None

    def to_definition(self) -> FlagDefinition:
        return FlagDefinition(
            key=self.key,
            name=self.name,
            description=self.description,
            enabled=self.enabled,
            rollout_percentage=self.rollout_percentage,
            target_users=tuple(self.target_users),
            target_organizations=tuple(self.target_organizations),
            environment=self.environment,
            conditions=self.conditions.to_conditions() if self.conditions is not None else None,
        )


class FlagDocument(BaseModel):
    """フラグ定義ファイル全体。"""

    flags: list[FlagDefinitionModel] = Field(default_factory=list)


def parse_flag_dicts(data: Any) -> list[dict[str, Any]]:
    """定義リストまたは {"flags": [...]} から定義の辞書リストを取り出す。"""
    if data is None:
        return []
    if isinstance(data, dict):
        if "flags" not in data:
            raise FeatureFlagError(
                code=FeatureFlagErrorCodes.VALIDATION,
                message=f"Expected a 'flags' key, got keys {sorted(map(str, data))}",
            )
        data = data["flags"] or []
    if not isinstance(data, list):
        raise FeatureFlagError(
            code=FeatureFlagErrorCodes.VALIDATION,
            message=f"Expected a list of flag definitions, got {type(data).__name__}",
        )
    for item in data:
        if not isinstance(item, dict):
            raise FeatureFlagError(
                code=FeatureFlagErrorCodes.VALIDATION,
                message=f"Expected a flag definition mapping, got {type(item).__name__}",
            )
    return data


def parse_flags(data: Any) -> list[FlagDefinition]:
    """JSON 形式のデータを検証して FlagDefinition のリストを返す。

    Raises:
        FeatureFlagError: 検証に失敗した場合 (VALIDATION_ERROR)
    """
    items = parse_flag_dicts(data)
    try:
        document = FlagDocument.model_validate({"flags": items})
    except ValidationError as e:
        raise FeatureFlagError(
            code=FeatureFlagErrorCodes.VALIDATION,
            message=f"Flag definition validation failed: {e}",
            cause=e,
        ) from e
    return [model.to_definition() for model in document.flags]
