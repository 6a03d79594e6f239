"""Package version, read from installed metadata."""

from __future__ import annotations

import importlib.metadata

_PACKAGE_NAME = "mackerel-plugin-aws-dynamodb"


def _get_package_version() -> str:
    """Return the package version from installed metadata."""
    try:
        return importlib.metadata.version(_PACKAGE_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


VERSION: str = _get_package_version()
