"""stackguard exception hierarchy.

All public exceptions inherit from StackGuardError, giving callers a single
base class to catch when they want to handle any stackguard-specific failure
without swallowing unrelated errors.
"""


class StackGuardError(Exception):
    """Base exception for all stackguard errors."""


class TreeLoadError(StackGuardError):
    """Raised when an input file cannot be loaded as an ESTree program.

    Covers unreadable files, invalid JSON, and JSON documents whose root
    is not a ``Program`` node. The linter captures this per file so one
    bad input never aborts the rest of the run.
    """


class ConfigError(StackGuardError):
    """Raised for invalid stackguard configuration.

    Covers unreadable or malformed YAML, unknown rule identifiers,
    unknown severity levels, and options passed to rules that take none.
    """


class RuleRegistryError(StackGuardError):
    """Raised when a rule is registered twice or looked up by an unknown id."""
