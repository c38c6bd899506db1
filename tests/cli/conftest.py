"""Shared fixtures for CLI tests.

Provides directories of ESTree JSON files in the states the ``lint``
command distinguishes: clean, violating, unloadable, and empty.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.estree_builders import (
    cdk_import,
    export_named,
    ident,
    obj,
    program,
    protection_prop,
    spread,
    stack_class,
    super_forward,
    write_tree,
)


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    """Create an empty directory with no ESTree files."""
    return tmp_path


@pytest.fixture
def protected_dir(tmp_path: Path) -> Path:
    """A project whose only stack enables termination protection."""
    write_tree(
        tmp_path / "lib" / "data-stack.json",
        program(
            cdk_import(),
            export_named(
                stack_class(
                    name="DataStack",
                    ctor_body=[super_forward(obj(spread(ident("props")), protection_prop()))],
                )
            ),
        ),
    )
    return tmp_path


@pytest.fixture
def unprotected_dir(tmp_path: Path) -> Path:
    """A project with one stack that forwards props unchanged."""
    write_tree(
        tmp_path / "lib" / "app-stack.json",
        program(cdk_import(), export_named(stack_class(name="AppStack", line=4))),
    )
    return tmp_path


@pytest.fixture
def broken_dir(tmp_path: Path) -> Path:
    """A project with one clean tree and one file that is not an ESTree program."""
    write_tree(
        tmp_path / "lib" / "data-stack.json",
        program(stack_class(name="DataStack", ctor_body=[super_forward(obj(protection_prop()))])),
    )
    write_tree(tmp_path / "lib" / "outputs.json", {"DataStack": {"BucketName": "data"}})
    return tmp_path
