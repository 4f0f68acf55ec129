"""Dependency scanner — find every installed manifest under each package."""

from __future__ import annotations

import json
import os
from pathlib import Path

import structlog
from pydantic import ValidationError

from workspace_dedupe.core.config import DEFAULT_SETTINGS, Settings
from workspace_dedupe.engines.dedupe.models import (
    InstalledDependency,
    PackageDirectory,
    PackageManifest,
    WorkspaceDescriptor,
)
from workspace_dedupe.engines.dedupe.sink import LogSink

log = structlog.get_logger("workspace_dedupe.engine")


def install_root(package: PackageDirectory, root: Path, settings: Settings | None = None) -> Path:
    settings = settings or DEFAULT_SETTINGS
    return (root / package.path / settings.install_root).resolve()


def read_manifest(path: Path) -> PackageManifest | None:
    """Parse an installed manifest, or None when it is unusable."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return PackageManifest.model_validate(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        log.debug("scanner.manifest_skipped", path=str(path), error=str(e))
        return None


def scan_package(
    package: PackageDirectory,
    root: Path,
    sink: LogSink,
    settings: Settings | None = None,
) -> list[InstalledDependency]:
    """Walk one package's install root and return every installation found.

    Every directory holding a manifest yields a record. The walk descends into
    each subdirectory whose name contains no ``.``, whether or not the current
    directory held a manifest, so nested installations are found at any depth.
    Symlinked modules (``npm link``, ``file:`` installs) are followed and
    recorded under their link path; a directory already reached through
    another path is not walked again.
    """
    settings = settings or DEFAULT_SETTINGS
    modules_path = install_root(package, root, settings)
    if not modules_path.is_dir():
        sink.log(f"Modules path not found for package: {package.path}")
        return []

    records: list[InstalledDependency] = []
    seen: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(modules_path, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in seen:
            dirnames[:] = []
            continue
        seen.add(real)
        # Dotted names cover hidden dirs (.bin, .cache) and metadata dirs
        dirnames[:] = sorted(d for d in dirnames if "." not in d)

        if settings.manifest_file not in filenames:
            continue
        current = Path(dirpath)
        manifest = read_manifest(current / settings.manifest_file)
        if manifest is None:
            continue
        records.append(
            InstalledDependency(
                name=manifest.name,
                package=package.package,
                path=current,
                version=manifest.version,
            )
        )

    log.debug("scanner.package_scanned", package=package.package, found=len(records))
    return records


def scan_workspace(
    descriptor: WorkspaceDescriptor,
    root: Path,
    sink: LogSink,
    settings: Settings | None = None,
) -> list[InstalledDependency]:
    """Scan every package directory, in descriptor order."""
    records: list[InstalledDependency] = []
    for package in descriptor.packages:
        records.extend(scan_package(package, root, sink, settings))
    return records
