"""ロールアウト用の決定的ハッシュ

Java の String.hashCode と同じアルゴリズム（UTF-16 コードユニット単位の
h = 31 * h + c を符号付き 32bit で折り返す）を使う。既存の TypeScript
クライアントと同じバケットになるよう固定している。組み込みの hash() は
プロセスごとにランダム化されるため使わない。
"""

from __future__ import annotations

import struct

_MASK_32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000

BUCKET_COUNT = 100


def string_hash(text: str) -> int:
    """text の符号付き 32bit ハッシュを返す。"""
    h = 0
    # 対になっていないサロゲートも 1 コードユニットとして扱う
    for (unit,) in struct.iter_unpack("<H", text.encode("utf-16-le", "surrogatepass")):
        h = (31 * h + unit) & _MASK_32
    if h & _SIGN_BIT:
        h -= 1 << 32
    return h


def stable_hash(identity: str, key: str) -> int:
    """identity と flag key から非負の安定ハッシュを返す。"""
    return abs(string_hash(f"{identity}:{key}"))


def bucket_for(identity: str, key: str) -> int:
    """[0, 100) のバケット番号を返す。"""
    return stable_hash(identity, key) % BUCKET_COUNT
