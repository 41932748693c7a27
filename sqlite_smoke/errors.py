"""
ハーネスの例外定義

拡張ロード失敗・クエリ失敗・バージョン不一致を区別するための例外階層。
いずれも回復処理は行わず、呼び出し元へそのまま伝播させる前提。
"""

from __future__ import annotations


class SmokeError(Exception):
    """スモークテストで発生する例外の基底クラス。"""


class ExtensionLoadError(SmokeError):
    """
    拡張のロードに失敗した。

    パスが解決できない、ロード可能なモジュールではない、
    拡張ロードが許可されていない、のいずれか。
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class QueryError(SmokeError):
    """SQLの実行に失敗した（構文エラー・未登録関数・結果なし）。"""

    def __init__(self, message: str, *, sql: str) -> None:
        super().__init__(message)
        self.sql = sql


class VersionMismatchError(SmokeError):
    """拡張が返したバージョンが期待値と一致しない。"""

    def __init__(self, reported: str, expected: str) -> None:
        super().__init__(f"version mismatch: reported={reported!r}, expected={expected!r}")
        self.reported = reported
        self.expected = expected
