"""
SQLite環境チェック

拡張機能のロードに対応しているか、リンクされている SQLite の
バージョンは何かを事前に確認するために使う。
"""

from __future__ import annotations

import platform
import sqlite3

from sqlite_smoke.loader import supports_load_extension


def check_sqlite_capabilities() -> dict[str, object]:
    """
    SQLiteの機能をチェックして結果を返す。

    enable_load_extension のサポート状況、SQLiteとPythonのバージョンを確認する。
    """
    return {
        "sqlite_version": sqlite3.sqlite_version,
        "python_version": platform.python_version(),
        "enable_load_extension": supports_load_extension(),
    }


def format_capabilities(caps: dict[str, object]) -> str:
    """CLI表示用に整形する。"""
    supported = "サポートされています" if caps.get("enable_load_extension") else "サポートされていません"
    return "\n".join(
        [
            f"enable_load_extension: {supported}",
            f"sqlite3 version: {caps.get('sqlite_version')}",
            f"python version: {caps.get('python_version')}",
        ]
    )
