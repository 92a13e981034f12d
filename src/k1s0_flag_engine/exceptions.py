"""flag_engine ライブラリの例外型定義"""

from __future__ import annotations


class FeatureFlagError(Exception):
    """flag_engine ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class FeatureFlagErrorCodes:
    """FeatureFlagError のエラーコード定数。"""

    FLAG_NOT_FOUND: str = "FLAG_NOT_FOUND"
    CONTEXT_REQUIRED: str = "CONTEXT_REQUIRED"
    INVALID_VERSION: str = "INVALID_VERSION"
    INVALID_FIELD: str = "INVALID_FIELD"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
