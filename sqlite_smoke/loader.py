"""
拡張ローダー

SQLite の拡張ロードは接続ごとのオプトイン（セキュリティゲート）なので、
有効化 → ロード → 無効化 をスコープとして扱い、失敗時も必ず無効化へ戻す。
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from typing import Iterator, Optional

from sqlite_smoke.errors import ExtensionLoadError

logger = logging.getLogger(__name__)


def supports_load_extension() -> bool:
    """この Python の sqlite3 が拡張ロードをサポートしているかを返す。"""
    return hasattr(sqlite3.Connection, "enable_load_extension")


@contextlib.contextmanager
def load_extension_enabled(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    拡張ロードを一時的に有効化するスコープ。

    with を抜けるときは成功・失敗にかかわらず無効化する。
    """
    if not supports_load_extension():
        raise ExtensionLoadError("sqlite3 module was built without extension loading support")
    conn.enable_load_extension(True)
    try:
        yield conn
    finally:
        conn.enable_load_extension(False)


def load_extension_raw(
    conn: sqlite3.Connection,
    path: str,
    entrypoint: Optional[str] = None,
) -> None:
    """
    有効化フラグには触れずに拡張をロードする。

    ゲートの管理は呼び出し側の責任。失敗は ExtensionLoadError へ変換する。
    """
    try:
        if entrypoint:
            conn.load_extension(path, entrypoint=entrypoint)
        else:
            conn.load_extension(path)
    except TypeError as exc:
        # entrypoint 引数は Python 3.12 以降
        raise ExtensionLoadError(
            f"custom entrypoint {entrypoint!r} is not supported by this sqlite3 module", path=path
        ) from exc
    except AttributeError as exc:
        raise ExtensionLoadError(
            "sqlite3 module was built without extension loading support", path=path
        ) from exc
    except sqlite3.Error as exc:
        logger.error("SQLite拡張のロードに失敗しました: %s", path, exc_info=exc)
        raise ExtensionLoadError(f"cannot load extension {path!r}: {exc}", path=path) from exc
    logger.info("loaded extension path=%s", path)


def load_extension(
    conn: sqlite3.Connection,
    path: str,
    entrypoint: Optional[str] = None,
) -> None:
    """拡張ロードを有効化したスコープ内で拡張をロードする。"""
    with load_extension_enabled(conn):
        load_extension_raw(conn, path, entrypoint)
