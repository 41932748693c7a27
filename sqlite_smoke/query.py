"""単一スカラー値を返すクエリの実行。"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from sqlite_smoke.errors import QueryError

logger = logging.getLogger(__name__)


def scalar(conn: sqlite3.Connection, sql: str) -> Any:
    """
    パラメータなしのSQLを実行し、1行目1列目の値を返す。

    SQLの誤りや未登録関数は QueryError。結果が0行の場合も
    None を返さず QueryError にする。
    """
    try:
        row = conn.execute(sql).fetchone()
    except sqlite3.Error as exc:
        raise QueryError(f"query failed: {exc}", sql=sql) from exc
    if row is None:
        raise QueryError("query returned no rows", sql=sql)
    logger.debug("scalar query sql=%s value=%r", sql, row[0])
    return row[0]
