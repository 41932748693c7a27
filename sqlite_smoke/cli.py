"""sqlite_smoke コマンドライン。"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from sqlite_smoke import paths
from sqlite_smoke.capabilities import check_sqlite_capabilities, format_capabilities
from sqlite_smoke.config import Config, load_config
from sqlite_smoke.harness import run_smoke
from sqlite_smoke.logging_config import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlite-smoke",
        description="load a SQLite extension into an in-memory database and print its version",
    )
    parser.add_argument("--config", dest="config", default=None, help="TOML config path (default: config/smoke.toml)")
    parser.add_argument("--extension", dest="extension_path", default=None, help="path to the loadable extension")
    parser.add_argument("--package", dest="package", default=None, help="helper package exposing loadable_path()")
    parser.add_argument("--entrypoint", dest="entrypoint", default=None, help="extension init symbol")
    parser.add_argument("--function", dest="function", default=None, help="zero-argument SQL function to call")
    parser.add_argument("--sql", dest="sql", default=None, help="SQL to run instead of SELECT <function>()")
    parser.add_argument("--expect", dest="expected_version", default=None, help="expected version string")
    parser.add_argument(
        "--expect-package-version",
        dest="expect_package_version",
        action="store_true",
        help="compare the result with the helper package __version__",
    )
    parser.add_argument(
        "--helper-load",
        dest="helper_load",
        action="store_true",
        help="load through the helper package load(conn) instead of its loadable path",
    )
    parser.add_argument("--log-level", dest="log_level", default=None, help="logging level (default: INFO)")
    parser.add_argument("--log-file", dest="log_file", default=None, help="also write logs to this file (rotated at 1MB)")
    parser.add_argument("--check", dest="check", action="store_true", help="print sqlite capabilities and exit")
    return parser


def _load_base_config(config_path: Optional[str]) -> Config:
    # --config 明示時は存在しなければエラー。既定パスは無ければ空設定。
    if config_path:
        return load_config(paths.resolve_path_under_app_root(config_path))
    default_path = paths.get_default_config_file_path()
    if default_path.exists():
        return load_config(default_path)
    return Config()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.check:
        print(format_capabilities(check_sqlite_capabilities()))
        return 0

    config = _load_base_config(args.config).merged(
        extension_path=args.extension_path,
        package=args.package,
        entrypoint=args.entrypoint,
        function=args.function,
        sql=args.sql,
        expected_version=args.expected_version,
        log_level=args.log_level,
    )
    if args.log_file:
        setup_logging(
            config.log_level,
            log_file_enabled=True,
            log_file_path=str(paths.resolve_path_under_app_root(args.log_file)),
        )
    else:
        setup_logging(config.log_level)

    if not config.extension_path and not config.package:
        parser.error("no extension given: use --extension, --package or a config file")

    result = run_smoke(
        config.extension_spec(),
        function=config.function,
        sql=config.sql,
        expected_version=config.expected_version,
        expect_package_version=args.expect_package_version,
        use_helper_load=args.helper_load,
    )
    print(result.value)
    return 0
