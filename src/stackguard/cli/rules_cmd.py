"""``stackguard rules`` — List the built-in lint rules.

Exit Codes:
    0 — Always (informational command, cannot fail).
"""

from __future__ import annotations

import click

from stackguard.cli.output import print_rules
from stackguard.rules.registry import default_registry


@click.command("rules")
def rules_command() -> None:
    """List all built-in rules with their type and description."""
    print_rules(default_registry())
