"""Installer — run ``npm install`` inside workspace packages."""

from workspace_dedupe.engines.installer.installer import PackageInstaller

__all__ = ["PackageInstaller"]
