"""フラグ定義（辞書形式）のマージ"""

from __future__ import annotations

from typing import Any


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """base に override を重ねた新しい辞書を返す。

    ネストした辞書（conditions, log など）は再帰的に重ね、それ以外の値は
    override 側で置き換える。targetUsers のようなリストも置換。
    """
    merged = {**base}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def merge_flag_dicts(
    base: list[dict[str, Any]], override: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """同じ key の定義を override 側でディープマージする。

    base の並び順を保ち、override にしかない key は末尾に追加する。
    """
    merged: dict[str, dict[str, Any]] = {}
    for item in base:
        merged[item.get("key", "")] = item
    for item in override:
        key = item.get("key", "")
        merged[key] = deep_merge(merged[key], item) if key in merged else item
    return list(merged.values())
