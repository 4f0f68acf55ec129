"""Custom exceptions for workspace-dedupe."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from workspace_dedupe.engines.dedupe.models import InstalledDependency


class DedupeError(Exception):
    """Base exception for all workspace-dedupe errors."""


class MissingDescriptorError(DedupeError):
    """Raised when the workspace descriptor file does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Workspace descriptor not found: {path}")


class InvalidDescriptorError(DedupeError):
    """Raised when the workspace descriptor cannot be parsed or validated."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid workspace descriptor {path}: {reason}")


class NoDefaultPackageError(DedupeError):
    """Raised when the descriptor flags zero or several packages as default."""


class VersionMismatchError(DedupeError):
    """Raised when one dependency is installed at different versions.

    ``records`` holds every installation of the dependency, in scan order.
    """

    def __init__(self, name: str, records: list[InstalledDependency], details: list[str]):
        self.name = name
        self.records = records
        super().__init__(
            f"Mismatched versions for node module: {name}\n\n"
            + "\n".join(details)
            + f'\n\nYou must ensure all versions of "{name}" are the same across all packages.'
        )


class UnknownPackageError(DedupeError):
    """Raised when an install target matches no package directory."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No package directory matches '{query}'")


class InstallError(DedupeError):
    """Raised when the package manager exits with a non-zero status."""

    def __init__(self, cwd: Path, returncode: int, stderr: str):
        self.cwd = cwd
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(
            f"npm install failed in {cwd} (exit {returncode}): {stderr.strip()}"
        )
