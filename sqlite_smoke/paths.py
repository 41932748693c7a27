"""実行時パス解決。

設定ファイルやログなどの置き場所はアプリルート配下に集約する。

方針:
- 環境変数 SQLITE_SMOKE_HOME があれば最優先
- それ以外は CWD をアプリルートとする（run.py と相性が良い）
"""

from __future__ import annotations

import os
from pathlib import Path


def get_app_root_dir() -> Path:
    """アプリのルートディレクトリを返す。

    優先順位:
    1) 環境変数 SQLITE_SMOKE_HOME
    2) カレントディレクトリ
    """

    env_home = os.getenv("SQLITE_SMOKE_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.cwd().resolve()


def get_config_dir() -> Path:
    """設定ディレクトリ（config/）を返す。作成はしない。"""

    return get_app_root_dir() / "config"


def get_default_config_file_path() -> Path:
    """既定の設定ファイルパス（config/smoke.toml）を返す。"""

    return get_config_dir() / "smoke.toml"


def resolve_path_under_app_root(path: str | Path) -> Path:
    """相対パスをアプリルート基準の絶対パスに解決する。

    - 絶対パスはそのまま返す
    - 相対パスは app_root / path として解決する
    """

    p = Path(path)
    if p.is_absolute():
        return p
    return (get_app_root_dir() / p).resolve()
