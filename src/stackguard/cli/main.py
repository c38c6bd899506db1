"""stackguard CLI — Static checks for CDK stack declarations.

Entry point for the ``stackguard`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    lint   — Lint ESTree JSON files (or directories of them).
    rules  — List the built-in rules.

Usage::

    stackguard lint build/ast
    stackguard lint build/ast/app-stack.json --format json
    stackguard --verbose lint build/ast --config ci/stackguard.yaml
    stackguard rules
"""

from __future__ import annotations

import logging

import click

from stackguard import __version__
from stackguard.cli.lint import lint_command
from stackguard.cli.rules_cmd import rules_command


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log debug details (files linted, files ignored) to stderr.",
)
def cli(verbose: bool) -> None:
    """stackguard: Static checks for CDK stack declarations.

    Lints ESTree syntax trees of TypeScript/JavaScript infrastructure code
    and reports CDK stacks that leave termination protection disabled.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register all subcommands
cli.add_command(lint_command)
cli.add_command(rules_command)
