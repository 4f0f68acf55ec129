"""ModuleCleaner — run the scan -> group -> validate -> remove pipeline."""

from __future__ import annotations

from pathlib import Path

import structlog

from workspace_dedupe.core.config import DEFAULT_SETTINGS, Settings
from workspace_dedupe.engines.dedupe.aggregator import group_by_name
from workspace_dedupe.engines.dedupe.models import CleanResult, DependencyGroup, PackageDirectory
from workspace_dedupe.engines.dedupe.resolver import remove_duplicates
from workspace_dedupe.engines.dedupe.scanner import scan_workspace
from workspace_dedupe.engines.dedupe.sink import CollectingSink, LogSink, StructlogSink
from workspace_dedupe.engines.dedupe.validator import validate_versions
from workspace_dedupe.engines.dedupe.workspace import load_workspace

log = structlog.get_logger("workspace_dedupe.engine")


class ModuleCleaner:
    """Remove duplicate node modules across the packages of a workspace.

    The descriptor is loaded on construction, so a missing or malformed
    ``sfdx-project.json`` fails before anything is scanned. Every progress
    line goes to *sink* (structlog by default) and is also kept in the
    returned :class:`CleanResult`.
    """

    def __init__(
        self,
        root_path: str | Path | None = None,
        sink: LogSink | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.root_path = Path(root_path or Path.cwd()).resolve()
        self.settings = settings or DEFAULT_SETTINGS
        self.sink: LogSink = sink or StructlogSink()
        self.descriptor = load_workspace(self.root_path, self.settings)
        self.groups: dict[str, DependencyGroup] = {}
        self._removed = 0

    @property
    def packages(self) -> list[PackageDirectory]:
        return self.descriptor.packages

    @property
    def default_package(self) -> PackageDirectory:
        return self.descriptor.default_package

    @property
    def dependencies(self) -> list[PackageDirectory]:
        return self.descriptor.dependency_packages

    def clean(self) -> CleanResult:
        """Scan, validate and deduplicate every package.

        Raises NoDefaultPackageError or VersionMismatchError before any
        directory is deleted.
        """
        # Missing or ambiguous default fails before the scan
        _ = self.default_package

        collector = CollectingSink(self.sink)
        collector.log("Fetching all package modules...")
        records = scan_workspace(self.descriptor, self.root_path, collector, self.settings)
        self.groups = group_by_name(records)
        log.debug("cleaner.scanned", records=len(records), names=len(self.groups))

        validate_versions(self.groups, self.settings)

        self._removed = remove_duplicates(
            self.groups, self.descriptor, self.root_path, collector, self.settings
        )

        collector.log("Finished cleaning modules!")
        return CleanResult(
            install_total=self.count_installed(),
            removed_total=self.count_removed(),
            logs=collector.messages,
        )

    def count_installed(self) -> int:
        """Number of distinct dependency names found by the last scan."""
        return len(self.groups)

    def count_removed(self) -> int:
        """Number of redundant installations removed by the last run."""
        return self._removed
