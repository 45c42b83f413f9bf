"""Discovery of host resources for the configuration wizard.

Two sources are consulted:

* the npm registry search API, for the *official* packages of a resource
  type (``@sonarwhal/configuration-*`` and friends);
* the local ``node_modules`` folder, for resources that are already
  installed, official or community.

Typical usage::

    catalog = ResourceCatalog(config)
    configurations = await catalog.official_packages(ResourceType.CONFIGURATION)
    rules = catalog.installed_resources(ResourceType.RULE)
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import httpx
from pydantic import BaseModel, Field

from .config import ScaffoldConfig
from .scaffolder.models import ResourceType
from .utils import print_warning


class ResourceUnavailableError(Exception):
    """Raised when no resource of a required type can be offered."""

    def __init__(self, resource_type: ResourceType, hint: str = "") -> None:
        self.resource_type = resource_type
        message = f"Couldn't find any installed {resource_type.value}s."
        if hint:
            message = f"{message} Visit {hint}."
        super().__init__(message)


class RegistryPackage(BaseModel):
    """One search hit from the npm registry."""

    name: str
    version: str = Field(default="")
    description: str = Field(default="")


class ResourceCatalog:
    """Lists official and installed host resources.

    Registry errors are reported as warnings and yield an empty list, so an
    offline run ends with a clean "nothing available" outcome.
    """

    def __init__(self, config: ScaffoldConfig) -> None:
        self.config = config
        self.base_url = config.registry_url.rstrip("/")
        self.timeout = config.registry_timeout

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    def official_prefix(self, resource_type: ResourceType) -> str:
        """``@sonarwhal/rule-`` for rules, and so on."""
        return f"{self.config.official_scope}/{resource_type.value}-"

    def community_prefix(self, resource_type: ResourceType) -> str:
        """``sonarwhal-rule-`` for rules, and so on."""
        return f"{self.config.community_prefix}-{resource_type.value}-"

    def search_url(self, resource_type: ResourceType) -> str:
        """Human-facing search page for a resource type."""
        query = self.official_prefix(resource_type).replace("@", "%40").replace("/", "%2F")
        return f"https://www.npmjs.com/search?q={query}"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def official_packages(self, resource_type: ResourceType) -> list[RegistryPackage]:
        """Return the official packages of *resource_type* published on npm.

        Returns an empty list if the registry is unreachable or answers with
        an error.
        """
        prefix = self.official_prefix(resource_type)
        params = {"text": prefix, "size": 250}

        try:
            async with self._client() as client:
                response = await client.get("/-/v1/search", params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.ConnectError:
            print_warning(f"Cannot connect to the npm registry at {self.base_url}.")
            return []
        except httpx.TimeoutException:
            print_warning(f"Request to the npm registry timed out after {self.timeout}s.")
            return []
        except httpx.HTTPStatusError as exc:
            print_warning(f"npm registry returned HTTP {exc.response.status_code}.")
            return []

        packages: list[RegistryPackage] = []
        for hit in data.get("objects", []):
            meta = hit.get("package", {})
            name = meta.get("name", "")
            if not name.startswith(prefix):
                continue
            packages.append(
                RegistryPackage(
                    name=name,
                    version=meta.get("version", ""),
                    description=meta.get("description", ""),
                )
            )
        return sorted(packages, key=lambda p: p.name)

    def installed_resources(self, resource_type: ResourceType) -> list[str]:
        """Return the short names of installed resources of *resource_type*.

        ``node_modules/@sonarwhal/rule-no-https`` and
        ``node_modules/sonarwhal-rule-no-https`` both yield ``"no-https"``.
        """
        root = self.config.node_modules_path
        scope_dir = root / self.config.official_scope
        official = self.official_prefix(resource_type).split("/", 1)[1]
        community = self.community_prefix(resource_type)

        names = set(_strip_prefixed_dirs(scope_dir, official))
        names.update(_strip_prefixed_dirs(root, community))
        return sorted(names)

    def short_name(self, package_name: str, resource_type: ResourceType) -> str:
        """``@sonarwhal/configuration-web-recommended`` -> ``web-recommended``."""
        for prefix in (self.official_prefix(resource_type), self.community_prefix(resource_type)):
            if package_name.startswith(prefix):
                return package_name[len(prefix):]
        return package_name

    def require(self, resources: Sequence[object], resource_type: ResourceType) -> None:
        """Raise :class:`ResourceUnavailableError` when *resources* is empty."""
        if not resources:
            raise ResourceUnavailableError(resource_type, self.search_url(resource_type))


def _strip_prefixed_dirs(directory: Path, prefix: str) -> list[str]:
    if not directory.is_dir():
        return []
    return [
        child.name[len(prefix):]
        for child in directory.iterdir()
        if child.is_dir() and child.name.startswith(prefix) and len(child.name) > len(prefix)
    ]
