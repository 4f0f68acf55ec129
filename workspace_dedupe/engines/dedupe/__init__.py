"""Deduplication engine — remove node modules installed in several packages."""

from workspace_dedupe.engines.dedupe.cleaner import ModuleCleaner
from workspace_dedupe.engines.dedupe.models import (
    CleanResult,
    DependencyGroup,
    InstalledDependency,
    PackageDirectory,
    WorkspaceDescriptor,
)
from workspace_dedupe.engines.dedupe.sink import CollectingSink, LogSink, StructlogSink
from workspace_dedupe.engines.dedupe.workspace import load_workspace

__all__ = [
    "CleanResult",
    "CollectingSink",
    "DependencyGroup",
    "InstalledDependency",
    "LogSink",
    "ModuleCleaner",
    "PackageDirectory",
    "StructlogSink",
    "WorkspaceDescriptor",
    "load_workspace",
]
