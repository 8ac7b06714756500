"""Release configuration.

Settings default to the values the web-features repository uses. They can be
overridden from a ``[tool.web-features-release]`` table in the repository's
pyproject.toml, or from a standalone TOML file passed with ``--config``.

Uses tomlkit so the same parser reads both sources.
"""

from __future__ import annotations

from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict, ValidationError
from tomlkit.exceptions import TOMLKitError

from .errors import ConfigError

TEMPLATES_DIR = Path(__file__).parent / "templates"
TOOL_TABLE = "web-features-release"


class ReleaseConfig(BaseModel):
    """Settings for one repository.

    Attributes:
        package: npm package name, used for install and the PR title.
        package_dir: Directory holding the package's package.json and
                     generated data file, relative to the repository root.
        data_file: Generated JSON file compared between releases.
        base_branch: Branch releases start from and merge into.
        remote: Git remote the release branch is pushed to.
        reviewer: GitHub login requested for review.
        repo: Repository the pull request is opened against.
        body_template: Static pull request description.
    """

    model_config = ConfigDict(extra="forbid")

    package: str = "web-features"
    package_dir: Path = Path("packages/web-features")
    data_file: str = "index.json"
    base_branch: str = "main"
    remote: str = "origin"
    reviewer: str = "ddbeck"
    # TODO: point at web-platform-dx/web-features once the workflow is proven
    repo: str = "ddbeck/feature-set"
    body_template: Path = TEMPLATES_DIR / "release-pull-description.md"

    def resolve(self, root: Path) -> ReleaseConfig:
        """Return a copy with relative paths anchored at root."""
        return self.model_copy(
            update={
                "package_dir": root / self.package_dir,
                "body_template": root / self.body_template,
            }
        )


def _read_toml(path: Path) -> tomlkit.TOMLDocument:
    try:
        return tomlkit.parse(path.read_text())
    except (OSError, TOMLKitError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc


def load_config(root: Path, path: Path | None = None) -> ReleaseConfig:
    """Load settings for the repository at root.

    Args:
        root: Repository root; relative paths in the result resolve against it.
        path: Explicit config file holding the settings, either as top-level
              keys or under ``[tool.web-features-release]``.
              When omitted, ``[tool.web-features-release]`` in
              root/pyproject.toml is used if present.

    Raises:
        ConfigError: If the file cannot be parsed or holds unknown keys.
    """
    data: dict = {}
    source = path
    if path is not None:
        data = _read_toml(path).unwrap()
        if "tool" in data:
            data = data["tool"].get(TOOL_TABLE, {})
    elif (root / "pyproject.toml").exists():
        source = root / "pyproject.toml"
        data = _read_toml(source).unwrap().get("tool", {}).get(TOOL_TABLE, {})

    try:
        config = ReleaseConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid release settings in {source}:\n{exc}") from exc
    return config.resolve(root)
