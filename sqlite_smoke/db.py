"""DB 接続（インメモリ）と拡張付きエンジンの作成。"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from typing import Iterator, Sequence

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from sqlite_smoke.loader import load_extension

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"
MEMORY_DB_URL = "sqlite://"


def open_database(path: str = MEMORY_DB) -> sqlite3.Connection:
    """DB ハンドルを開く。既定はプロセス終了で消えるインメモリDB。"""
    conn = sqlite3.connect(path)
    logger.debug("opened database path=%s", path)
    return conn


@contextlib.contextmanager
def database_scope(path: str = MEMORY_DB) -> Iterator[sqlite3.Connection]:
    """DB ハンドルのスコープ。抜けるときに必ず閉じる。"""
    conn = open_database(path)
    try:
        yield conn
    finally:
        conn.close()


def create_engine_with_extensions(
    paths: Sequence[str],
    db_url: str = MEMORY_DB_URL,
) -> Engine:
    """
    拡張を自動ロードする SQLAlchemy エンジンを作成する。

    DBAPI 接続が作られるたびに、拡張ロードを有効化してロードし、無効化へ戻す。
    インメモリDBは接続ごとに別DBになるため、接続を1本に固定する。
    """
    connect_args = {"check_same_thread": False}
    if db_url in (MEMORY_DB_URL, f"sqlite:///{MEMORY_DB}"):
        engine = create_engine(db_url, future=True, connect_args=connect_args, poolclass=StaticPool)
    else:
        engine = create_engine(db_url, future=True, connect_args=connect_args)

    ext_paths = [str(p) for p in paths]

    @event.listens_for(engine, "connect")
    def load_sqlite_extensions(dbapi_conn, connection_record):
        for path in ext_paths:
            load_extension(dbapi_conn, path)

    return engine
