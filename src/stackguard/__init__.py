"""stackguard: Static analysis for CDK stack declarations in ESTree syntax trees."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
