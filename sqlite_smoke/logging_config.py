"""
ロギング設定

ハーネスのログ出力を設定する。
標準loggingの初期化と、外部ライブラリのログ抑制を行う。
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import pathlib


def setup_logging(
    level: str = "INFO",
    *,
    log_file_enabled: bool = False,
    log_file_path: str = "logs/sqlite_smoke.log",
) -> None:
    """
    ロギングを初期化する。

    標準loggingのフォーマット設定と、外部ライブラリのログレベル調整を行う。
    ログはstderrへ出し、stdoutはクエリ結果の出力専用にする。
    """
    root_level = getattr(logging, level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file_enabled:
        log_path = pathlib.Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        # ファイルログは最大1MBでローテーションしてサイズ超過を防ぐ。
        handlers.append(
            RotatingFileHandler(
                log_path,
                maxBytes=1_000_000,
                backupCount=1,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=root_level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        handlers=handlers,
    )
    # SQLAlchemy のエンジンログは DEBUG 時でもSQLを垂れ流さないよう抑制する
    for name, lib_level in [
        ("sqlalchemy.engine", logging.WARNING),
        ("sqlalchemy.pool", logging.WARNING),
    ]:
        logging.getLogger(name).setLevel(lib_level)
