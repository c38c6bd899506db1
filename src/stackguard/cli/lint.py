"""``stackguard lint PATH...`` — Lint ESTree JSON files.

Each PATH is a JSON file holding an ESTree ``Program``, or a directory
searched recursively for ``*.json`` files. Ignore patterns apply to
files found inside directories; by default they skip ``node_modules/``,
``cdk.out/``, ``dist/`` and the project files ``package.json``,
``package-lock.json``, ``tsconfig*.json``, ``cdk.json`` and
``cdk.context.json``.

Exit Codes:
    0 — No error-severity diagnostics.
    1 — One or more error-severity diagnostics.
    2 — No input files found, a file failed to load, or invalid usage.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from stackguard.cli.output import print_report, report_to_json
from stackguard.config import load_config
from stackguard.core.engine import Linter
from stackguard.core.models import LintReport
from stackguard.exceptions import ConfigError
from stackguard.rules.registry import default_registry


def _exit_code(report: LintReport) -> int:
    if report.has_errors:
        return 1
    if not report.files or report.failed_files:
        return 2
    return 0


@click.command("lint")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ./stackguard.yaml if present).",
)
def lint_command(
    paths: tuple[Path, ...],
    output_format: str,
    config_path: Path | None,
) -> None:
    """Lint ESTree syntax trees for CDK stack rule violations.

    Directories are searched for *.json files, skipping node_modules/,
    cdk.out/, dist/, package.json, package-lock.json, tsconfig*.json,
    cdk.json and cdk.context.json unless the config sets its own ignores.

    Exit code 0 if clean, 1 if any error-level diagnostics exist.
    """
    registry = default_registry()
    try:
        config = load_config(config_path, registry)
    except ConfigError as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc

    linter = Linter(registry=registry, config=config)
    report = linter.lint_paths(paths)

    if not report.files:
        if output_format == "json":
            click.echo(json.dumps([]))
        else:
            click.echo("No ESTree JSON files found.")
        sys.exit(2)

    if output_format == "json":
        click.echo(json.dumps(report_to_json(report), indent=2))
    else:
        print_report(report)

    sys.exit(_exit_code(report))
