"""Runtime settings, read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """File and executable names used across the engine.

    Reads from environment variables:
        WORKSPACE_DEDUPE_DESCRIPTOR   — workspace descriptor (default: sfdx-project.json)
        WORKSPACE_DEDUPE_INSTALL_ROOT — install root directory (default: node_modules)
        WORKSPACE_DEDUPE_MANIFEST     — dependency manifest (default: package.json)
        WORKSPACE_DEDUPE_NPM          — package manager executable (default: npm)
    """

    descriptor_file: str = "sfdx-project.json"
    install_root: str = "node_modules"
    manifest_file: str = "package.json"
    npm_executable: str = "npm"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            descriptor_file=os.environ.get("WORKSPACE_DEDUPE_DESCRIPTOR", cls.descriptor_file),
            install_root=os.environ.get("WORKSPACE_DEDUPE_INSTALL_ROOT", cls.install_root),
            manifest_file=os.environ.get("WORKSPACE_DEDUPE_MANIFEST", cls.manifest_file),
            npm_executable=os.environ.get("WORKSPACE_DEDUPE_NPM", cls.npm_executable),
        )


DEFAULT_SETTINGS = Settings()
