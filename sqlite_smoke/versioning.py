"""
バージョン文字列ユーティリティ

拡張が返すバージョン（例: "v0.0.1-alpha.1"）と、
Pythonパッケージ側の __version__（例: "0.0.1a1"）を突き合わせるための正規化。
"""

from __future__ import annotations

import re

_SEMVER_RE = re.compile(
    r"^(?P<base>\d+\.\d+\.\d+)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)

# semver のプレリリース識別子 -> pip(PEP 440) の表記
_PRE_RELEASE_TAGS = {
    "alpha": "a",
    "beta": "b",
    "rc": "rc",
}


def normalize_version(text: str) -> str:
    """
    バージョン文字列を比較用の形式へ正規化する。

    先頭の "v" を除去し、semver のプレリリース（alpha.N / beta.N / rc.N）を
    PEP 440 形式（aN / bN / rcN）へ変換する。ビルドメタデータは捨てる。
    semver として解釈できない文字列は前後の空白を除いてそのまま返す。
    """
    value = _strip_v(text)
    m = _SEMVER_RE.match(value)
    if not m:
        return value

    base = m.group("base")
    pre = m.group("pre")
    if not pre:
        return base

    label, _, number = pre.partition(".")
    tag = _PRE_RELEASE_TAGS.get(label.lower())
    if tag is None or not number.isdigit():
        raise ValueError(f"unsupported pre-release identifier: {pre!r}")
    return f"{base}{tag}{number}"


def versions_match(reported: str, expected: str) -> bool:
    """
    正規化後のバージョン文字列が一致するかを返す。

    未対応のプレリリース識別子（例: -dev.1）を含む場合は、
    先頭の "v" だけ除いた文字列同士で比較する。
    """
    try:
        return normalize_version(reported) == normalize_version(expected)
    except ValueError:
        return _strip_v(reported) == _strip_v(expected)


def _strip_v(text: str) -> str:
    value = str(text).strip()
    if value[:1] in ("v", "V"):
        value = value[1:]
    return value
