"""
sqlite_smoke テスト共通フィクスチャ

実拡張を使うテストは sqlite-vec（loadable_path() と vec_version() を提供）を使う。
Python の sqlite3 が拡張ロード非対応ならスキップする。
"""

import sqlite3
import sys

import pytest

from sqlite_smoke.loader import supports_load_extension


@pytest.fixture()
def sqlite_vec():
    if not supports_load_extension():
        pytest.skip("sqlite3 built without extension loading support")
    return pytest.importorskip("sqlite_vec")


@pytest.fixture()
def vec_path(sqlite_vec):
    return sqlite_vec.loadable_path()


@pytest.fixture()
def conn():
    c = sqlite3.connect(":memory:")
    try:
        yield c
    finally:
        c.close()


@pytest.fixture()
def app_home(tmp_path, monkeypatch):
    monkeypatch.setenv("SQLITE_SMOKE_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture()
def load_support():
    if not supports_load_extension():
        pytest.skip("sqlite3 built without extension loading support")


FAKE_HELPER_BODY = '''
from os import path

__version__ = "1.2.0a1"


def loadable_path():
    return path.normpath(path.join(path.dirname(__file__), "fake0"))


def load(conn):
    conn.create_function("fake_version", 0, lambda: "v1.2.0-alpha.1")
'''

BROKEN_HELPER_BODY = '''
from os import path


def loadable_path():
    return path.normpath(path.join(path.dirname(__file__), "broken0"))


def load(conn):
    conn.load_extension(loadable_path())
'''


def _install_helper(tmp_path, monkeypatch, name: str, body: str) -> str:
    pkg = tmp_path / name
    pkg.mkdir()
    (pkg / "__init__.py").write_text(body, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, name, raising=False)
    return name


@pytest.fixture()
def fake_helper(tmp_path, monkeypatch):
    """load(conn) で Python 関数 fake_version() を登録するだけのヘルパー。"""
    return _install_helper(tmp_path, monkeypatch, "sqlite_fake_helper", FAKE_HELPER_BODY)


@pytest.fixture()
def broken_helper(tmp_path, monkeypatch):
    """load(conn) が存在しない拡張バイナリを読もうとするヘルパー。"""
    return _install_helper(tmp_path, monkeypatch, "sqlite_broken_helper", BROKEN_HELPER_BODY)
