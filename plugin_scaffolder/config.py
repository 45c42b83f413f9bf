"""plugin-scaffolder configuration.

Centralised, typed configuration for the scaffolding wizards. All settings use
Pydantic v2 models so they are validated at construction time and can be
built from environment variables without boiler-plate.

The host application's own ``package.json`` is read once through
:class:`HostManifest` -- a static, validated load -- so generated packages
pin the dependency versions the host declares at the moment of creation.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .utils import load_json

_PACKAGE_DIR = Path(__file__).parent
_SCAFFOLDER_DIR = _PACKAGE_DIR / "scaffolder"


class HostManifest(BaseModel):
    """The subset of the host application's ``package.json`` the wizards read."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(default="")
    version: str = Field(default="0.0.0")
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(
        default_factory=dict, alias="devDependencies"
    )

    def dependency_version(self, package_name: str, default: str = "") -> str:
        """Return the version the host declares for *package_name*.

        Runtime dependencies win over development dependencies; *default* is
        returned when the host does not depend on the package at all.
        """
        return (
            self.dependencies.get(package_name)
            or self.dev_dependencies.get(package_name)
            or default
        )

    @classmethod
    def load(cls, path: str | Path) -> "HostManifest":
        """Load and validate a ``package.json`` file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)


class ScaffoldConfig(BaseModel):
    """Global scaffolding configuration.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to the wizards.
    """

    host_name: str = Field(default="sonarwhal", description="Host application name")
    official_scope: str = Field(
        default="@sonarwhal", description="npm scope of official packages"
    )
    community_prefix: str = Field(
        default="sonarwhal", description="Name prefix of community packages"
    )
    config_file_name: str = Field(default=".sonarwhalrc")
    monorepo_name: str = Field(
        default="@sonarwhal/monorepo",
        description="package.json name that marks the official monorepo",
    )
    host_manifest_path: Path = Field(default=_PACKAGE_DIR / "host" / "package.json")
    template_dir: Path = Field(default=_SCAFFOLDER_DIR / "templates")
    files_dir: Path = Field(default=_SCAFFOLDER_DIR / "files" / "shared")
    community_files_dir: Path = Field(default=_SCAFFOLDER_DIR / "files" / "community")
    max_rounds: int = Field(
        default=50, ge=1, description="Upper bound on repeated prompt rounds"
    )
    registry_url: str = Field(default="https://registry.npmjs.org")
    registry_timeout: int = Field(default=30, ge=1, description="Seconds")
    node_modules_dir: Path | None = Field(default=None)
    cwd: Path | None = Field(
        default=None, description="Working directory; defaults to the process cwd"
    )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def working_dir(self) -> Path:
        """Directory new packages and configuration files are created in."""
        return self.cwd if self.cwd is not None else Path.cwd()

    @property
    def node_modules_path(self) -> Path:
        """Where installed host resources are looked up."""
        if self.node_modules_dir is not None:
            return self.node_modules_dir
        return self.working_dir / "node_modules"

    def package_name(self, kind: str, normalized_name: str, official: bool) -> str:
        """Return the npm package name for a generated package.

        Official packages live under the host scope
        (``@sonarwhal/rule-no-https``); community packages use the
        community prefix (``sonarwhal-rule-no-https``).
        """
        if official:
            return f"{self.official_scope}/{kind}-{normalized_name}"
        return f"{self.community_prefix}-{kind}-{normalized_name}"

    def load_host_manifest(self) -> HostManifest:
        """Read the host ``package.json`` configured for this run."""
        return HostManifest.load(self.host_manifest_path)

    def is_official(self) -> bool:
        """Return ``True`` when the working directory is inside the host monorepo.

        The working directory and each of its ancestors are checked for a
        ``package.json`` whose ``name`` equals :attr:`monorepo_name`.
        """
        start = self.working_dir.resolve()
        for directory in (start, *start.parents):
            manifest = directory / "package.json"
            if not manifest.is_file():
                continue
            try:
                data = load_json(manifest)
            except (OSError, json.JSONDecodeError):
                continue
            if data.get("name") == self.monorepo_name:
                return True
        return False

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_HOST_MANIFEST, SCAFFOLD_TEMPLATE_DIR, SCAFFOLD_REGISTRY_URL,
            SCAFFOLD_REGISTRY_TIMEOUT, SCAFFOLD_MAX_ROUNDS, SCAFFOLD_NODE_MODULES.

        Keyword *overrides* take precedence over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_HOST_MANIFEST"):
            kwargs["host_manifest_path"] = Path(os.environ["SCAFFOLD_HOST_MANIFEST"])
        if os.environ.get("SCAFFOLD_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["SCAFFOLD_TEMPLATE_DIR"])
        if os.environ.get("SCAFFOLD_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["SCAFFOLD_REGISTRY_URL"]
        if os.environ.get("SCAFFOLD_REGISTRY_TIMEOUT"):
            kwargs["registry_timeout"] = int(os.environ["SCAFFOLD_REGISTRY_TIMEOUT"])
        if os.environ.get("SCAFFOLD_MAX_ROUNDS"):
            kwargs["max_rounds"] = int(os.environ["SCAFFOLD_MAX_ROUNDS"])
        if os.environ.get("SCAFFOLD_NODE_MODULES"):
            kwargs["node_modules_dir"] = Path(os.environ["SCAFFOLD_NODE_MODULES"])
        kwargs.update(overrides)
        return cls(**kwargs)
