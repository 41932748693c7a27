import os
import textwrap

import pytest

from sqlite_smoke.errors import ExtensionLoadError
from sqlite_smoke.loader import load_extension_raw
from sqlite_smoke.packaging import (
    ExtensionSpec,
    extension_base_name,
    helper_module_name,
    load_via_helper,
    package_version,
    resolve_loadable_path,
)


def _make_helper(tmp_path, name: str, body: str) -> None:
    pkg = tmp_path / name
    pkg.mkdir()
    (pkg / "__init__.py").write_text(textwrap.dedent(body), encoding="utf-8")


def test_helper_module_name():
    assert helper_module_name("sqlite-hello") == "sqlite_hello"


@pytest.mark.parametrize(
    "path, name",
    [
        ("/opt/ext/hello0.so", "hello"),
        ("vec0", "vec"),
        ("libsample.dylib", "sample"),
        ("C:/ext/Xsv0.dll", "xsv"),
    ],
)
def test_extension_base_name(path, name):
    assert extension_base_name(path) == name


def test_spec_requires_path_or_package():
    with pytest.raises(ValueError):
        ExtensionSpec()


def test_resolve_direct_path():
    assert resolve_loadable_path(ExtensionSpec(path="./ext/../ext/hello0")) == os.path.normpath("ext/hello0")


def test_resolve_via_loadable_path(tmp_path, monkeypatch):
    _make_helper(
        tmp_path,
        "sqlite_hello_fake",
        """
        from os import path

        __version__ = "1.0.0"

        def loadable_path():
            return path.normpath(path.join(path.dirname(__file__), "hello0"))
        """,
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    resolved = resolve_loadable_path(ExtensionSpec(package="sqlite-hello-fake"))
    assert resolved == os.path.normpath(str(tmp_path / "sqlite_hello_fake" / "hello0"))
    assert package_version("sqlite-hello-fake") == "1.0.0"


def test_resolve_falls_back_to_default_entry(tmp_path, monkeypatch):
    _make_helper(tmp_path, "sqlite_legacy_fake", "")
    monkeypatch.syspath_prepend(str(tmp_path))
    resolved = resolve_loadable_path(ExtensionSpec(package="sqlite_legacy_fake"))
    assert resolved == os.path.normpath(str(tmp_path / "sqlite_legacy_fake" / "legacy_fake0"))
    assert package_version("sqlite_legacy_fake") is None


def test_missing_helper_is_load_error():
    with pytest.raises(ExtensionLoadError):
        resolve_loadable_path(ExtensionSpec(package="sqlite_smoke_no_such_helper"))


def test_load_via_helper(conn, load_support, fake_helper, tmp_path):
    load_via_helper(conn, fake_helper)
    assert conn.execute("SELECT fake_version()").fetchone()[0] == "v1.2.0-alpha.1"
    # スコープを抜けたあとは拡張ロードが無効に戻っている
    with pytest.raises(ExtensionLoadError, match="not authorized"):
        load_extension_raw(conn, str(tmp_path / "other0"))


def test_load_via_helper_failure_is_load_error(conn, load_support, broken_helper, tmp_path):
    with pytest.raises(ExtensionLoadError, match="load\\(\\) failed"):
        load_via_helper(conn, broken_helper)
    with pytest.raises(ExtensionLoadError, match="not authorized"):
        load_extension_raw(conn, str(tmp_path / "other0"))


def test_load_via_helper_without_load(conn, tmp_path, monkeypatch):
    _make_helper(tmp_path, "sqlite_noload_fake", "")
    monkeypatch.syspath_prepend(str(tmp_path))
    with pytest.raises(ExtensionLoadError, match="has no load"):
        load_via_helper(conn, "sqlite-noload-fake")
