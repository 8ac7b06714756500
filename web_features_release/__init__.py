"""Release automation for the web-features npm package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("web-features-release")
except PackageNotFoundError:
    __version__ = "0.0.0"
