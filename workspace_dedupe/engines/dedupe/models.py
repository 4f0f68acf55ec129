"""Data models for the deduplication engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from workspace_dedupe.exceptions import NoDefaultPackageError


# ── JSON inputs (validated once at load time) ───────────────────────────


class PackageDependency(BaseModel):
    """One ``{"package": "name[@version]"}`` entry of a package directory."""

    model_config = ConfigDict(extra="ignore")

    package: str

    @property
    def package_name(self) -> str:
        """Name without the ``@version`` suffix."""
        return self.package.split("@")[0]


class PackageDirectory(BaseModel):
    """A sub-project registered in ``packageDirectories``."""

    model_config = ConfigDict(extra="ignore")

    path: str
    package: str
    default: bool = False
    dependencies: tuple[PackageDependency, ...] = ()


class PackageManifest(BaseModel):
    """The fields of an installed ``package.json`` the engine reads."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    version: str


class WorkspaceDescriptor(BaseModel):
    """Parsed workspace descriptor. Read-only to the engine."""

    model_config = ConfigDict(extra="ignore")

    packages: list[PackageDirectory] = Field(alias="packageDirectories")

    @property
    def default_package(self) -> PackageDirectory:
        """The single package directory flagged ``default: true``."""
        defaults = [pkg for pkg in self.packages if pkg.default]
        if not defaults:
            raise NoDefaultPackageError("No default package defined in packageDirectories")
        if len(defaults) > 1:
            names = ", ".join(pkg.package for pkg in defaults)
            raise NoDefaultPackageError(f"Multiple default packages defined: {names}")
        return defaults[0]

    @property
    def dependency_packages(self) -> list[PackageDirectory]:
        """Package directories the default package declares as dependencies.

        Returned in ``packageDirectories`` order. Declared dependencies that
        are not registered in this workspace (e.g. released package versions)
        are ignored.
        """
        wanted = {dep.package_name for dep in self.default_package.dependencies}
        return [pkg for pkg in self.packages if pkg.package in wanted]

    def find_package(self, query: str) -> PackageDirectory | None:
        """Resolve an install target by name, path, or last path segment.

        Matching is case-insensitive; the first match in descriptor order wins.
        """
        needle = query.strip().lower().rstrip("/")
        for pkg in self.packages:
            pkg_path = pkg.path.lower().rstrip("/")
            if needle in (pkg.package.lower(), pkg_path, pkg_path.split("/")[-1]):
                return pkg
        return None


# ── Engine records ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class InstalledDependency:
    """One physical installation of a dependency on disk."""

    name: str
    package: str  # logical name of the sub-project holding it
    path: Path  # absolute installation directory
    version: str


@dataclass
class DependencyGroup:
    """Every installation sharing one dependency name, in scan order."""

    name: str
    records: list[InstalledDependency] = field(default_factory=list)

    @property
    def packages(self) -> list[str]:
        """Distinct holding sub-projects, first-seen order."""
        return list(dict.fromkeys(r.package for r in self.records))

    @property
    def is_shared(self) -> bool:
        return len(self.records) > 1


@dataclass
class CleanResult:
    """Result of a full clean pipeline run."""

    install_total: int
    removed_total: int
    logs: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "installTotal": self.install_total,
            "removedTotal": self.removed_total,
            "logs": list(self.logs),
        }
