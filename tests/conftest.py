"""Shared fixtures for stackguard tests."""

import pathlib

import pytest


@pytest.fixture
def estree_fixture_dir() -> pathlib.Path:
    """Directory of checked-in ESTree JSON dumps."""
    return pathlib.Path(__file__).resolve().parent / "fixtures" / "estree"


@pytest.fixture
def app_stacks_tree(estree_fixture_dir: pathlib.Path) -> pathlib.Path:
    """typescript-estree dump of a module declaring three CDK stacks.

    ``NetworkStack`` forwards props unchanged; ``DatabaseStack`` and
    ``MonitoringStack`` enable termination protection.
    """
    return estree_fixture_dir / "app-stacks.json"
