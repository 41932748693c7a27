from sqlalchemy import text

from sqlite_smoke.db import create_engine_with_extensions, database_scope


def test_database_scope_is_in_memory():
    with database_scope() as conn:
        conn.execute("CREATE TABLE t (x)")
        conn.execute("INSERT INTO t VALUES (1)")
        assert conn.execute("SELECT count(*) FROM t").fetchone()[0] == 1
    with database_scope() as conn:
        tables = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        assert tables == []


def test_engine_loads_extensions_on_connect(vec_path):
    engine = create_engine_with_extensions([vec_path])
    try:
        with engine.connect() as conn:
            version = conn.execute(text("SELECT vec_version()")).scalar()
        assert version.startswith("v")
    finally:
        engine.dispose()
