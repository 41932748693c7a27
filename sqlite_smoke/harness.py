"""
拡張スモークテスト本体

インメモリDBを開き、拡張ロードを有効化し、ヘルパー経由で拡張のパスを解決して
ロードし、拡張が登録したバージョン関数を呼んで結果を返す。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlite_smoke.db import MEMORY_DB, database_scope
from sqlite_smoke.errors import VersionMismatchError
from sqlite_smoke.loader import load_extension
from sqlite_smoke.packaging import (
    ExtensionSpec,
    extension_base_name,
    load_via_helper,
    package_version,
    resolve_loadable_path,
)
from sqlite_smoke.query import scalar
from sqlite_smoke.versioning import versions_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmokeResult:
    """スモークテストの結果。"""

    extension_path: str
    sql: str
    value: Any
    expected_version: Optional[str] = None

    @property
    def version_checked(self) -> bool:
        return self.expected_version is not None


def default_version_function(extension_path: str) -> str:
    """拡張名から既定のバージョン関数名（<name>_version）を作る。"""
    name = extension_base_name(extension_path)
    if not name:
        raise ValueError(f"cannot derive extension name from path: {extension_path!r}")
    return f"{name}_version"


def build_sql(extension_path: str, function: Optional[str] = None, sql: Optional[str] = None) -> str:
    """実行するSQLを決める。sql 指定が最優先、次に関数名。"""
    if sql:
        return sql
    fn = function or default_version_function(extension_path)
    return f"SELECT {fn}()"


def run_smoke(
    spec: ExtensionSpec,
    *,
    function: Optional[str] = None,
    sql: Optional[str] = None,
    expected_version: Optional[str] = None,
    expect_package_version: bool = False,
    use_helper_load: bool = False,
    db_path: str = MEMORY_DB,
) -> SmokeResult:
    """
    スモークテストを1回実行する。

    expected_version が与えられた場合（または expect_package_version で
    ヘルパーの __version__ を期待値にした場合）は結果と突き合わせ、
    一致しなければ VersionMismatchError。その他の失敗もそのまま伝播する。
    use_helper_load ならパスを直接ロードせず、ヘルパーの load(conn) に任せる。
    """
    if use_helper_load and not spec.package:
        raise ValueError("use_helper_load requires a helper package")
    path = resolve_loadable_path(spec)
    statement = build_sql(path, function=function, sql=sql)

    expected = expected_version
    if expected is None and expect_package_version and spec.package:
        expected = package_version(spec.package)

    with database_scope(db_path) as conn:
        if use_helper_load:
            load_via_helper(conn, spec.package)
        else:
            load_extension(conn, path, spec.entrypoint)
        value = scalar(conn, statement)

    logger.info("smoke query sql=%s value=%r", statement, value)
    if expected is not None and not versions_match(str(value), expected):
        raise VersionMismatchError(str(value), expected)
    return SmokeResult(
        extension_path=path,
        sql=statement,
        value=value,
        expected_version=expected,
    )
