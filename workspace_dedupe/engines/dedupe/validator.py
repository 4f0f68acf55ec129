"""Version validator — every copy of a dependency must share one version."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePath

from workspace_dedupe.core.config import DEFAULT_SETTINGS, Settings
from workspace_dedupe.engines.dedupe.models import DependencyGroup, InstalledDependency
from workspace_dedupe.exceptions import VersionMismatchError


def relative_install_path(path: PurePath, install_root: str) -> str:
    """Path of an installation below the first *install_root* segment.

    ``/ws/pkg-b/node_modules/foo/node_modules/lodash`` -> ``foo/node_modules/lodash``
    """
    parts = path.parts
    if install_root not in parts:
        return str(path)
    return "/".join(parts[parts.index(install_root) + 1 :])


def describe(record: InstalledDependency, install_root: str) -> str:
    rel = relative_install_path(record.path, install_root)
    return f"{record.package}: {record.version} ({rel})"


def validate_versions(
    groups: Mapping[str, DependencyGroup],
    settings: Settings | None = None,
) -> None:
    """Raise VersionMismatchError for the first group whose versions differ.

    Runs over every group before anything is removed, so a single conflict
    blocks the whole run.
    """
    settings = settings or DEFAULT_SETTINGS
    for group in groups.values():
        if not group.is_shared:
            continue
        version = group.records[0].version
        if all(r.version == version for r in group.records):
            continue
        raise VersionMismatchError(
            group.name,
            list(group.records),
            [describe(r, settings.install_root) for r in group.records],
        )
