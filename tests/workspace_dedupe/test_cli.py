"""Tests for the workspace-dedupe CLI."""

from __future__ import annotations

import json
import subprocess
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from workspace_dedupe.cli import main

_RUN = "workspace_dedupe.engines.installer.installer.subprocess.run"


@pytest.fixture
def ws(workspace):
    workspace.package("pkg-a", default=True).package("pkg-b")
    workspace.write()
    (workspace.root / "pkg-a/package.json").write_text("{}")
    (workspace.root / "pkg-b/package.json").write_text("{}")
    workspace.install("pkg-a", "lodash", "4.17.0")
    workspace.install("pkg-b", "lodash", "4.17.0")
    return workspace


# ── clean ──


class TestClean:
    def test_human_output(self, ws):
        result = CliRunner().invoke(main, ["clean", "--root", str(ws.root)])
        assert result.exit_code == 0
        assert 'Removed package from "pkg-b": lodash' in result.output
        assert "Installed modules: 1" in result.output
        assert "Duplicates removed: 1" in result.output

    def test_json_output(self, ws):
        result = CliRunner().invoke(main, ["clean", "--root", str(ws.root), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["installTotal"] == 1
        assert data["removedTotal"] == 1
        assert data["logs"][-1] == "Finished cleaning modules!"

    def test_version_mismatch_exit_code(self, ws):
        ws.install("pkg-b", "lodash", "4.16.0")
        result = CliRunner().invoke(main, ["clean", "--root", str(ws.root)])
        assert result.exit_code == 1
        assert "Mismatched versions for node module: lodash" in result.output
        assert (ws.root / "pkg-b/node_modules/lodash").is_dir()

    def test_missing_descriptor(self, tmp_path):
        result = CliRunner().invoke(main, ["clean", "--root", str(tmp_path)])
        assert result.exit_code == 1
        assert "Workspace descriptor not found" in result.output

    def test_root_must_exist(self, tmp_path):
        result = CliRunner().invoke(main, ["clean", "--root", str(tmp_path / "nope")])
        assert result.exit_code != 0


# ── install ──


class TestInstall:
    def test_install_all_then_clean(self, ws):
        done = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch(_RUN, return_value=done) as run:
            result = CliRunner().invoke(main, ["install", "--root", str(ws.root)])
        assert result.exit_code == 0, result.output
        assert run.call_count == 2
        assert "Duplicates removed: 1" in result.output

    def test_install_module_prompts_for_package(self, ws):
        done = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch(_RUN, return_value=done) as run:
            result = CliRunner().invoke(
                main,
                ["install", "moment", "--root", str(ws.root), "--save", "--no-clean"],
                input="pkg-b\n",
            )
        assert result.exit_code == 0, result.output
        assert "Which package do you want to install this into" in result.output
        assert run.call_args.args[0] == ["npm", "install", "moment", "--save"]
        assert run.call_args.kwargs["cwd"] == (ws.root / "pkg-b").resolve()
        assert (ws.root / "pkg-b/node_modules/lodash").is_dir()

    def test_install_module_prompt_default(self, ws):
        done = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch(_RUN, return_value=done) as run:
            result = CliRunner().invoke(
                main, ["install", "moment", "--root", str(ws.root), "--no-clean"], input="\n"
            )
        assert result.exit_code == 0, result.output
        assert run.call_args.kwargs["cwd"] == (ws.root / "pkg-a").resolve()

    def test_unknown_package(self, ws):
        with patch(_RUN) as run:
            result = CliRunner().invoke(
                main, ["install", "moment", "--root", str(ws.root), "--package", "ghost"]
            )
        assert result.exit_code == 1
        assert "No package directory matches 'ghost'" in result.output
        run.assert_not_called()

    def test_npm_failure(self, ws):
        failed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="boom")
        with patch(_RUN, return_value=failed):
            result = CliRunner().invoke(main, ["install", "--root", str(ws.root)])
        assert result.exit_code == 1
        assert "npm install failed" in result.output
