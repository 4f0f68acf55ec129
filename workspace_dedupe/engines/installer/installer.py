"""PackageInstaller — delegate installs to the npm executable."""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

from workspace_dedupe.core.config import DEFAULT_SETTINGS, Settings
from workspace_dedupe.engines.dedupe.models import PackageDirectory, WorkspaceDescriptor
from workspace_dedupe.engines.dedupe.sink import LogSink, StructlogSink
from workspace_dedupe.engines.dedupe.workspace import load_workspace
from workspace_dedupe.exceptions import InstallError, UnknownPackageError

log = structlog.get_logger("workspace_dedupe.installer")


class PackageInstaller:
    """Install node modules into one or every package of a workspace."""

    def __init__(
        self,
        root_path: str | Path | None = None,
        sink: LogSink | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.root_path = Path(root_path or Path.cwd()).resolve()
        self.settings = settings or DEFAULT_SETTINGS
        self.sink: LogSink = sink or StructlogSink("workspace_dedupe.installer")
        self.descriptor: WorkspaceDescriptor = load_workspace(self.root_path, self.settings)

    def resolve_target(self, target: str | None) -> PackageDirectory:
        """Package to install into: by name, path or folder; default when empty."""
        if not target:
            return self.descriptor.default_package
        pkg = self.descriptor.find_package(target)
        if pkg is None:
            raise UnknownPackageError(target)
        return pkg

    def install_all(self) -> int:
        """Run ``npm install`` in every package that has a package.json.

        Returns the number of packages installed.
        """
        installed = 0
        for pkg in self.descriptor.packages:
            if self.run_install(self.root_path / pkg.path):
                installed += 1
        return installed

    def install_module(self, module: str, target: str | None = None, save: bool = False) -> PackageDirectory:
        """Install a single *module* into the *target* package."""
        pkg = self.resolve_target(target)
        self.run_install(self.root_path / pkg.path, module=module, save=save)
        return pkg

    def run_install(self, package_path: Path, module: str | None = None, save: bool = False) -> bool:
        """Install in *package_path* if it holds a manifest; False when skipped."""
        package_path = package_path.resolve()
        if not (package_path / self.settings.manifest_file).is_file():
            self.sink.log(f"No package.json file found in path: {package_path}")
            return False

        self.sink.log(f"Running npm install for path: {package_path}")
        self._npm_install(package_path, module, save)
        return True

    def _npm_install(self, cwd: Path, module: str | None, save: bool) -> None:
        cmd = [self.settings.npm_executable, "install"]
        if module:
            cmd.append(module)
        if save:
            cmd.append("--save")

        self.sink.log(" ".join(cmd))
        try:
            proc = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise InstallError(cwd, 127, f"{self.settings.npm_executable} not found: {e}") from e
        for line in proc.stdout.splitlines():
            if line.strip():
                self.sink.log(line)

        if proc.returncode != 0:
            log.warning("installer.failed", cwd=str(cwd), returncode=proc.returncode)
            raise InstallError(cwd, proc.returncode, proc.stderr)
        log.debug("installer.done", cwd=str(cwd), module=module)
