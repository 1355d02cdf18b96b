"""Exceptions raised by the jump environment.

Both error kinds are caller programming errors. They subclass ``ValueError``
so existing ``except ValueError`` handlers keep working.
"""

from __future__ import annotations


class JumpEnvError(ValueError):
    """Base class for jump environment errors."""


class InvalidConfiguration(JumpEnvError):
    """Raised when an environment is constructed from an inconsistent config."""


class InvalidAction(JumpEnvError):
    """Raised when ``step`` receives an action outside ``{0, 1}``."""
