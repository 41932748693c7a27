"""
拡張パッケージ（ヘルパー）からのロード可能パス解決

配布用のPythonパッケージは、同梱した拡張バイナリのパスを返す
loadable_path() と、接続へロードする load(conn) を公開している。
ここではそのヘルパーを import してパスを取り出す。
"""

from __future__ import annotations

import importlib
import logging
import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sqlite_smoke.errors import ExtensionLoadError
from sqlite_smoke.loader import load_extension_enabled

logger = logging.getLogger(__name__)

# loadable_path() を持たない古いヘルパー向けの既定エントリ名
DEFAULT_ENTRY_NAME = "{name}0"


@dataclass(frozen=True)
class ExtensionSpec:
    """ロード対象の拡張。path か package のどちらかを指定する。"""

    path: Optional[str] = None
    package: Optional[str] = None
    entrypoint: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.path and not self.package:
            raise ValueError("ExtensionSpec requires either path or package")


def helper_module_name(package_name: str) -> str:
    """配布名（sqlite-vec）から import 名（sqlite_vec）へ変換する。"""
    return package_name.strip().replace("-", "_")


def extension_base_name(path: str | Path) -> str:
    """
    拡張ファイル名から拡張名を取り出す。

    SQLite が既定の初期化関数名 sqlite3_<name>_init を決めるのと同じ規則:
    先頭の "lib" を除き、最初の "." までの英字だけを小文字で残す。
    """
    name = Path(path).name
    if name.startswith("lib"):
        name = name[3:]
    name = name.split(".", 1)[0]
    return "".join(ch for ch in name if ch.isascii() and ch.isalpha()).lower()


def import_helper(package: str):
    """ヘルパーパッケージを import する。失敗はロード失敗として扱う。"""
    module_name = helper_module_name(package)
    try:
        return importlib.import_module(module_name)
    except ImportError as exc:
        logger.error("拡張ヘルパーパッケージの import に失敗しました: %s", module_name, exc_info=exc)
        raise ExtensionLoadError(
            f"extension helper package not importable: {module_name}"
        ) from exc


def resolve_loadable_path(spec: ExtensionSpec) -> str:
    """
    拡張バイナリのパスを解決する。

    path 指定ならそれを正規化して返す。package 指定ならヘルパーの
    loadable_path() を呼ぶ。loadable_path が無い場合はパッケージ直下の
    既定エントリ名（例: vec0）を使う。拡張子は SQLite 側が補うので付けない。
    """
    if spec.path:
        return os.path.normpath(os.path.expanduser(spec.path))

    module = import_helper(spec.package or "")
    loadable_path = getattr(module, "loadable_path", None)
    if callable(loadable_path):
        resolved = str(loadable_path())
    else:
        short = helper_module_name(spec.package or "")
        if short.startswith("sqlite_"):
            short = short[len("sqlite_"):]
        resolved = str(Path(module.__file__).parent / DEFAULT_ENTRY_NAME.format(name=short))
    logger.debug("resolved loadable path package=%s path=%s", spec.package, resolved)
    return os.path.normpath(resolved)


def package_version(package: str) -> Optional[str]:
    """ヘルパーパッケージの __version__ を返す（無ければ None）。"""
    module = import_helper(package)
    version = getattr(module, "__version__", None)
    return str(version) if version else None


def load_via_helper(conn: sqlite3.Connection, package: str) -> None:
    """
    ヘルパー自身の load(conn) で拡張をロードする。

    拡張ロードの有効化はこの関数の中でスコープとして行い、抜けるときに無効化する。
    load を持たないヘルパーや、ロード時の sqlite3.Error は ExtensionLoadError にする。
    """
    module = import_helper(package)
    load = getattr(module, "load", None)
    if not callable(load):
        raise ExtensionLoadError(f"extension helper {module.__name__} has no load(conn)")

    with load_extension_enabled(conn):
        try:
            load(conn)
        except sqlite3.Error as exc:
            logger.error("拡張ヘルパー経由のロードに失敗しました: %s", module.__name__, exc_info=exc)
            raise ExtensionLoadError(f"{module.__name__}.load() failed: {exc}") from exc
    logger.info("loaded extension via helper package=%s", module.__name__)
