"""CLI entry point: workspace-dedupe.

Subcommands:
    workspace-dedupe clean                      # Remove duplicate node modules
    workspace-dedupe install                    # npm install in every package, then clean
    workspace-dedupe install lodash --save      # Install one module (prompts for the package)
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from workspace_dedupe.core.config import Settings
from workspace_dedupe.core.logging import setup_logging
from workspace_dedupe.engines.dedupe import CleanResult, CollectingSink, ModuleCleaner
from workspace_dedupe.engines.installer import PackageInstaller
from workspace_dedupe.exceptions import DedupeError


class EchoSink:
    """Print each log line to stdout (silenced for --json output)."""

    def __init__(self, quiet: bool = False) -> None:
        self.quiet = quiet

    def log(self, message: str) -> None:
        if not self.quiet:
            click.echo(message)


def _root_option(fn):
    return click.option(
        "--root",
        "root",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=None,
        help="Workspace root holding sfdx-project.json (default: current directory)",
    )(fn)


def _report(result: CleanResult, as_json: bool, logs: list[str]) -> None:
    if as_json:
        payload = result.to_dict()
        payload["logs"] = logs
        click.echo(json.dumps(payload, indent=2))
        return
    click.echo(f"\nInstalled modules: {result.install_total}")
    click.echo(f"Duplicates removed: {result.removed_total}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """workspace-dedupe: share node modules across sfdx packages."""
    setup_logging("DEBUG" if verbose else None)
    ctx.obj = Settings.from_env()


@main.command("clean")
@_root_option
@click.option("--json", "as_json", is_flag=True, help="Output the result as JSON")
@click.pass_obj
def clean(settings: Settings, root: Path | None, as_json: bool) -> None:
    """Remove node modules installed in more than one package."""
    sink = CollectingSink(EchoSink(quiet=as_json))
    try:
        result = ModuleCleaner(root, sink=sink, settings=settings).clean()
    except DedupeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    _report(result, as_json, sink.messages)


@main.command("install")
@click.argument("module", required=False)
@_root_option
@click.option("-s", "--save", is_flag=True, help="Save the module to the package's package.json")
@click.option("-p", "--package", "target", default=None, help="Package name or path to install into")
@click.option("--no-clean", is_flag=True, help="Skip duplicate removal after installing")
@click.option("--json", "as_json", is_flag=True, help="Output the result as JSON")
@click.pass_obj
def install(
    settings: Settings,
    module: str | None,
    root: Path | None,
    save: bool,
    target: str | None,
    no_clean: bool,
    as_json: bool,
) -> None:
    """Install MODULE into one package, or every package when omitted."""
    sink = CollectingSink(EchoSink(quiet=as_json))
    try:
        installer = PackageInstaller(root, sink=sink, settings=settings)
        if module:
            if target is None:
                target = click.prompt(
                    "Which package do you want to install this into",
                    default=installer.descriptor.default_package.package,
                )
            installer.install_module(module, target=target, save=save)
        else:
            installer.install_all()

        if no_clean:
            return
        result = ModuleCleaner(root, sink=sink, settings=settings).clean()
    except DedupeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    _report(result, as_json, sink.messages)


if __name__ == "__main__":
    main()
