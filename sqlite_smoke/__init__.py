"""sqlite_smoke package."""

from .errors import ExtensionLoadError, QueryError, SmokeError, VersionMismatchError  # noqa: F401
from .harness import SmokeResult, run_smoke  # noqa: F401
from .packaging import ExtensionSpec  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "capabilities",
    "cli",
    "config",
    "db",
    "errors",
    "harness",
    "loader",
    "packaging",
    "query",
    "versioning",
]
