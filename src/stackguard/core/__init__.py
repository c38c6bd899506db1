"""Linter core: result models and the host driver.

Submodules
----------
- ``models``: Data types (Severity, Diagnostic, FileResult, LintReport).
- ``engine``: The ``Linter`` that feeds class declarations to rules.

Only the models are re-exported here; import the linter from
``stackguard.core.engine`` directly::

    from stackguard.core import Diagnostic, Severity
    from stackguard.core.engine import Linter
"""

from stackguard.core.models import Diagnostic, FileResult, LintReport, Severity

__all__ = [
    "Diagnostic",
    "FileResult",
    "LintReport",
    "Severity",
]
