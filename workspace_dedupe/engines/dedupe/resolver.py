"""Resolver — pick one owning package per dependency and remove the rest."""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from pathlib import Path

import structlog

from workspace_dedupe.core.config import DEFAULT_SETTINGS, Settings
from workspace_dedupe.engines.dedupe.models import (
    DependencyGroup,
    PackageDirectory,
    WorkspaceDescriptor,
)
from workspace_dedupe.engines.dedupe.scanner import install_root
from workspace_dedupe.engines.dedupe.sink import LogSink

log = structlog.get_logger("workspace_dedupe.engine")


def select_owner(
    group: DependencyGroup,
    descriptor: WorkspaceDescriptor,
) -> PackageDirectory | None:
    """Choose the package that keeps its copy of *group*.

    Priority:
      1. the default package, if it holds the dependency
      2. the first package (descriptor order) declared as a dependency of the
         default package that holds the dependency
      3. none — the group is left untouched
    """
    holders = set(group.packages)

    default = descriptor.default_package
    if default.package in holders:
        return default

    for pkg in descriptor.dependency_packages:
        if pkg.package in holders:
            return pkg

    return None


def _location(path: Path) -> Path:
    """Real location of *path* itself; a final symlink is not followed."""
    return Path(os.path.realpath(path.parent)) / path.name


def _protected_paths(group: DependencyGroup, owner: PackageDirectory) -> set[Path]:
    """Where the owner's copies live, both as linked and as resolved."""
    protected: set[Path] = set()
    for record in group.records:
        if record.package == owner.package:
            protected.add(_location(record.path))
            protected.add(record.path.resolve())
    return protected


def _touches(path: Path, protected: set[Path]) -> bool:
    return any(p == path or p in path.parents or path in p.parents for p in protected)


def _removal_targets(
    group: DependencyGroup,
    package: PackageDirectory,
    root: Path,
    settings: Settings,
    protected: set[Path],
) -> list[Path]:
    """Directories to delete for *group* inside *package*.

    The top-level install directory first, then every other recorded copy.
    Copies nested under an earlier target are dropped, and so is anything
    outside the package install root. A target overlapping one of the
    *protected* owner copies once symlinks are resolved is skipped; for a
    symlink only the location of the link itself counts.
    """
    modules = install_root(package, root, settings)
    candidates = [Path(os.path.normpath(modules / group.name))]
    candidates += [r.path for r in group.records if r.package == package.package]

    targets: list[Path] = []
    for path in candidates:
        if modules not in path.parents:
            continue
        if any(path == t or t in path.parents for t in targets):
            continue
        if path.is_symlink():
            link = _location(path)
            kept = any(p == link or p in link.parents for p in protected)
        else:
            kept = _touches(path.resolve(), protected)
        if kept:
            log.debug("resolver.owner_copy_kept", dependency=group.name, path=str(path))
            continue
        targets.append(path)
    return targets


def _delete(target: Path) -> bool:
    if target.is_symlink():
        target.unlink()
        return True
    if target.exists():
        shutil.rmtree(target)
        return True
    return False


def remove_duplicates(
    groups: Mapping[str, DependencyGroup],
    descriptor: WorkspaceDescriptor,
    root: Path,
    sink: LogSink,
    settings: Settings | None = None,
) -> int:
    """Delete redundant installations; return the number of packages cleaned.

    A package counts, and gets a log line, only when something was actually
    deleted from it. Deletion errors propagate. Removals already done are not
    rolled back.
    """
    settings = settings or DEFAULT_SETTINGS
    removed = 0

    for group in groups.values():
        holders = group.packages
        if len(holders) < 2:
            continue

        owner = select_owner(group, descriptor)
        if owner is None:
            log.debug("resolver.no_owner", dependency=group.name, packages=holders)
            continue

        protected = _protected_paths(group, owner)
        for pkg in descriptor.packages:
            if pkg.package == owner.package or pkg.package not in holders:
                continue
            deleted = False
            for target in _removal_targets(group, pkg, root, settings, protected):
                deleted = _delete(target) or deleted
            if not deleted:
                continue
            log.debug(
                "resolver.removed",
                dependency=group.name,
                package=pkg.package,
                owner=owner.package,
            )
            sink.log(f'Removed package from "{pkg.package}": {group.name}')
            removed += 1

    return removed
