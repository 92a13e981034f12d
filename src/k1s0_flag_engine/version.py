"""ドット区切り整数バージョンの比較"""

from __future__ import annotations

import re

from .exceptions import FeatureFlagError, FeatureFlagErrorCodes

_COMPONENT_RE = re.compile(r"^[0-9]+$")


def parse_version(version: str) -> tuple[int, ...]:
    """バージョン文字列 "1.4.0" を (1, 4, 0) に変換する。

    Raises:
        FeatureFlagError: 数字以外の要素や空要素を含む場合 (INVALID_VERSION)
    """
    parts = version.strip().split(".")
    if not all(_COMPONENT_RE.match(part) for part in parts):
        raise FeatureFlagError(
            code=FeatureFlagErrorCodes.INVALID_VERSION,
            message=f"Invalid version: {version!r}",
        )
    return tuple(int(part) for part in parts)


def compare_versions(a: str, b: str) -> int:
    """a < b なら -1、等しければ 0、a > b なら 1 を返す。

    短い方の末尾は 0 で補う（"2" と "2.0.0" は等しい）。
    """
    left = parse_version(a)
    right = parse_version(b)
    width = max(len(left), len(right))
    left += (0,) * (width - len(left))
    right += (0,) * (width - len(right))
    if left < right:
        return -1
    if left > right:
        return 1
    return 0
