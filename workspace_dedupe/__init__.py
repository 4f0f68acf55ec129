"""workspace-dedupe: share node modules across the packages of an sfdx workspace."""

__version__ = "0.1.0"

from workspace_dedupe.engines.dedupe import (
    CleanResult,
    CollectingSink,
    LogSink,
    ModuleCleaner,
    StructlogSink,
    WorkspaceDescriptor,
    load_workspace,
)
from workspace_dedupe.exceptions import (
    DedupeError,
    InstallError,
    InvalidDescriptorError,
    MissingDescriptorError,
    NoDefaultPackageError,
    UnknownPackageError,
    VersionMismatchError,
)

__all__ = [
    "CleanResult",
    "CollectingSink",
    "DedupeError",
    "InstallError",
    "InvalidDescriptorError",
    "LogSink",
    "MissingDescriptorError",
    "ModuleCleaner",
    "NoDefaultPackageError",
    "StructlogSink",
    "UnknownPackageError",
    "VersionMismatchError",
    "WorkspaceDescriptor",
    "load_workspace",
]
