"""設定読み込み（TOML）。"""

from __future__ import annotations

import dataclasses
import pathlib
from dataclasses import dataclass
from typing import Optional

import tomli

from sqlite_smoke.packaging import ExtensionSpec

ALLOWED_KEYS = (
    "extension_path",
    "package",
    "entrypoint",
    "function",
    "sql",
    "expected_version",
    "log_level",
)


@dataclass
class Config:
    """スモークテストの設定（TOML + CLI上書き）。"""

    extension_path: Optional[str] = None
    package: Optional[str] = None
    entrypoint: Optional[str] = None
    function: Optional[str] = None
    sql: Optional[str] = None
    expected_version: Optional[str] = None
    log_level: str = "INFO"

    def extension_spec(self) -> ExtensionSpec:
        """ロード対象の拡張指定を組み立てる。"""
        if not self.extension_path and not self.package:
            raise ValueError("either 'extension_path' or 'package' is required")
        return ExtensionSpec(
            path=self.extension_path,
            package=self.package,
            entrypoint=self.entrypoint,
        )

    def merged(self, **overrides: Optional[str]) -> "Config":
        """None 以外の値で上書きした新しいConfigを返す。"""
        values = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **values)


def _optional_str(config_dict: dict, key: str) -> Optional[str]:
    value = config_dict.get(key)
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise ValueError(f"config key '{key}' must be a string")
    return value


def load_config(path: str | pathlib.Path) -> Config:
    """TOML設定を読み込む。"""
    config_path = pathlib.Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    with config_path.open("rb") as f:
        data = tomli.load(f)

    unknown_keys = sorted(set(data.keys()) - set(ALLOWED_KEYS))
    if unknown_keys:
        keys = ", ".join(repr(k) for k in unknown_keys)
        allowed = ", ".join(repr(k) for k in ALLOWED_KEYS)
        raise ValueError(f"unknown config key(s): {keys} (allowed: {allowed})")

    config = Config(
        extension_path=_optional_str(data, "extension_path"),
        package=_optional_str(data, "package"),
        entrypoint=_optional_str(data, "entrypoint"),
        function=_optional_str(data, "function"),
        sql=_optional_str(data, "sql"),
        expected_version=_optional_str(data, "expected_version"),
        log_level=_optional_str(data, "log_level") or "INFO",
    )
    return config
