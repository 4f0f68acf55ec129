"""Shared fixtures for workspace-dedupe tests — real workspaces under tmp_path."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


class WorkspaceBuilder:
    """Write an sfdx-project.json and fake node_modules trees."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.entries: list[dict] = []

    def package(
        self,
        name: str,
        path: str | None = None,
        default: bool = False,
        dependencies: list[str] | None = None,
    ) -> WorkspaceBuilder:
        entry: dict = {"path": path or name, "package": name, "default": default}
        if dependencies is not None:
            entry["dependencies"] = [{"package": d} for d in dependencies]
        self.entries.append(entry)
        (self.root / entry["path"]).mkdir(parents=True, exist_ok=True)
        return self

    def write(self) -> Path:
        descriptor = {"packageDirectories": self.entries, "sourceApiVersion": "48.0"}
        (self.root / "sfdx-project.json").write_text(json.dumps(descriptor, indent=2))
        return self.root

    def install(self, package_path: str, name: str, version: str, under: str | None = None) -> Path:
        """Create ``<package_path>/node_modules/[<under>/node_modules/]<name>``."""
        modules = self.root / package_path / "node_modules"
        if under:
            modules = modules / under / "node_modules"
        target = modules / name
        target.mkdir(parents=True, exist_ok=True)
        (target / "package.json").write_text(json.dumps({"name": name, "version": version}))
        (target / "index.js").write_text("module.exports = {};\n")
        return target


class ListSink:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def log(self, message: str) -> None:
        self.messages.append(message)


def _snapshot(root: Path) -> dict[str, bytes]:
    """Every file under *root* with its content."""
    return {
        str(p.relative_to(root)): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()
    }


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    return WorkspaceBuilder(tmp_path)


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


@pytest.fixture
def snapshot():
    return _snapshot
