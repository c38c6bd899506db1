"""stackguard configuration: per-rule severity levels and ignore patterns.

Configuration lives in ``stackguard.yaml`` (or ``.stackguard.yaml``) in
the working directory, or in a file passed with ``--config``::

    rules:
      cdk-stack-termination-protection: error   # error | warn | off
    ignores:
      - node_modules/
      - cdk.out/
      - "*.d.json"

Rule levels accept ``off``/``warn``/``error`` or the numbers ``0``/``1``/``2``.
A list form such as ``[error, {...}]`` is rejected when it carries options,
because no built-in rule accepts options.

Ignore patterns ending in ``/`` match any path that contains that
directory. Other patterns are glob-matched against both the file name
and the full POSIX path.

Without an ``ignores`` key the defaults in ``DEFAULT_IGNORES`` apply:
build output directories and the project files (``package.json``,
``tsconfig*.json``, ``cdk.json`` and friends) that share the ``.json``
suffix with tree dumps. A configured list replaces the defaults.
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from stackguard.core.models import Severity
from stackguard.exceptions import ConfigError
from stackguard.rules.registry import RuleRegistry

logger = logging.getLogger(__name__)

CONFIG_FILENAMES: tuple[str, ...] = ("stackguard.yaml", ".stackguard.yaml")

# Build output plus the JSON config files an npm/CDK project keeps beside its sources.
DEFAULT_IGNORES: tuple[str, ...] = (
    "node_modules/",
    "cdk.out/",
    "dist/",
    "package.json",
    "package-lock.json",
    "tsconfig*.json",
    "cdk.json",
    "cdk.context.json",
)

_LEVELS: dict[Any, Severity | None] = {
    "off": None,
    "warn": Severity.WARNING,
    "error": Severity.ERROR,
    0: None,
    1: Severity.WARNING,
    2: Severity.ERROR,
}


@dataclass
class LintConfig:
    """Resolved linter configuration.

    Attributes:
        rule_levels: Rule id to severity. A value of None disables the rule.
            Rules absent from the mapping run at their default level.
        ignores: Path patterns excluded from directory expansion.
    """

    rule_levels: dict[str, Severity | None] = field(default_factory=dict)
    ignores: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORES))

    def level_for(self, rule_id: str, recommended: bool = True) -> Severity | None:
        """Return the effective severity for a rule, or None if it is off."""
        if rule_id in self.rule_levels:
            return self.rule_levels[rule_id]
        return Severity.ERROR if recommended else None

    def is_ignored(self, path: Path) -> bool:
        """Check whether ``path`` matches any ignore pattern."""
        posix = path.as_posix()
        dirs = path.parts[:-1]
        for pattern in self.ignores:
            if pattern.endswith("/"):
                wanted = tuple(p for p in pattern.split("/") if p)
                width = len(wanted)
                if width and any(
                    dirs[i:i + width] == wanted for i in range(len(dirs) - width + 1)
                ):
                    return True
                continue
            if fnmatch.fnmatch(path.name, pattern) or fnmatch.fnmatch(posix, pattern):
                return True
        return False


def _parse_level(rule_id: str, value: Any) -> Severity | None:
    """Parse one rule level entry."""
    if isinstance(value, list):
        if not value:
            raise ConfigError(f"Empty level for rule {rule_id!r}")
        if len(value) > 1:
            raise ConfigError(
                f"Rule {rule_id!r} does not accept options: {value[1:]!r}"
            )
        value = value[0]
    # YAML 1.1 reads a bare ``off`` (or ``no``) as False.
    if value is False:
        return None
    key = value.lower() if isinstance(value, str) else value
    # bool is an int subclass; ``true`` is not a valid level.
    if isinstance(key, bool) or not isinstance(key, (str, int)) or key not in _LEVELS:
        raise ConfigError(
            f"Invalid level {value!r} for rule {rule_id!r} "
            f"(expected off, warn, error, 0, 1 or 2)"
        )
    return _LEVELS[key]


def config_from_dict(data: Any, registry: RuleRegistry) -> LintConfig:
    """Validate a decoded configuration mapping against a rule registry.

    Args:
        data: The decoded YAML document. None is treated as empty.
        registry: The rules that may be configured.

    Returns:
        The resolved ``LintConfig``.

    Raises:
        ConfigError: On unknown keys, unknown rule ids or invalid levels.
    """
    if data is None:
        return LintConfig()
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    unknown = set(data) - {"rules", "ignores"}
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

    rules = data.get("rules") or {}
    if not isinstance(rules, dict):
        raise ConfigError("'rules' must be a mapping of rule id to level")

    levels: dict[str, Severity | None] = {}
    for rule_id, value in rules.items():
        if rule_id not in registry:
            raise ConfigError(f"Unknown rule: {rule_id}")
        levels[rule_id] = _parse_level(rule_id, value)

    ignores = data.get("ignores", list(DEFAULT_IGNORES))
    if ignores is None:
        ignores = []
    if not isinstance(ignores, list) or not all(isinstance(p, str) for p in ignores):
        raise ConfigError("'ignores' must be a list of path patterns")

    return LintConfig(rule_levels=levels, ignores=list(ignores))


def find_config_file(directory: Path) -> Path | None:
    """Return the first known config file in ``directory``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None, registry: RuleRegistry) -> LintConfig:
    """Load configuration from ``path``, or from the working directory.

    Args:
        path: Explicit config file, or None to look for ``stackguard.yaml``
            / ``.stackguard.yaml`` in the current directory.
        registry: The rules that may be configured.

    Returns:
        The resolved ``LintConfig``; defaults when no file is found.

    Raises:
        ConfigError: If the file cannot be read or is invalid.
    """
    if path is None:
        path = find_config_file(Path.cwd())
        if path is None:
            logger.debug("No configuration file found; using defaults")
            return LintConfig()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    logger.debug("Loaded configuration from %s", path)
    return config_from_dict(data, registry)
