"""Package manifest version helpers.

npm owns the actual bump; these helpers only read the result back and turn it
into the strings the release commit and pull request use.
"""

from __future__ import annotations

import json
from pathlib import Path

import semver

from .errors import ConfigError


def parse_version(version_str: str) -> semver.Version:
    """Parse a full semver string such as "1.2.3" or "2.0.0-alpha.1".

    Raises:
        ConfigError: If the string is not valid semver.
    """
    try:
        return semver.Version.parse(version_str)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid package version {version_str!r}") from exc


def read_manifest_version(package_dir: Path) -> str:
    """Return the version field of package_dir/package.json."""
    manifest = package_dir / "package.json"
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read {manifest}: {exc}") from exc
    version = data.get("version") if isinstance(data, dict) else None
    if not isinstance(version, str):
        raise ConfigError(f"No version field in {manifest}")
    return str(parse_version(version))


def commit_message(level: str, version: str) -> str:
    """Commit message for a version bump, e.g. "Increment patch version to v1.0.1"."""
    return f"Increment {level} version to v{version}"


def release_title(package: str, version: str) -> str:
    return f"📦 Release {package}@{version}"


def predict_version(version_str: str, level: str) -> str:
    """Compute the version ``npm version <level>`` would produce.

    Used by dry runs, where npm is not invoked. Follows npm's rules for
    prereleases:
    - "1.2.3" patch → "1.2.4", but "1.2.4-0" patch → "1.2.4"
    - "1.2.3" prerelease → "1.2.4-0"; "1.2.4-0" prerelease → "1.2.4-1"
    - "1.2.4-beta" prerelease → "1.2.4-beta.0"
    - "1.2.4-alpha.1.beta" prerelease → "1.2.4-alpha.2.beta"
    """
    v = parse_version(version_str)
    if level == "major":
        if v.prerelease and v.minor == 0 and v.patch == 0:
            return str(v.finalize_version())
        return str(v.bump_major())
    if level == "minor":
        if v.prerelease and v.patch == 0:
            return str(v.finalize_version())
        return str(v.bump_minor())
    if level == "patch":
        if v.prerelease:
            return str(v.finalize_version())
        return str(v.bump_patch())
    if level == "prerelease":
        if not v.prerelease:
            return str(v.bump_patch().replace(prerelease="0"))
        identifiers = v.prerelease.split(".")
        for i in reversed(range(len(identifiers))):
            if identifiers[i].isdigit():
                identifiers[i] = str(int(identifiers[i]) + 1)
                return str(v.replace(prerelease=".".join(identifiers)))
        return str(v.replace(prerelease=f"{v.prerelease}.0"))
    raise ValueError(f"Unknown semver level {level!r}")
