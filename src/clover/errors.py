"""Clover exception hierarchy.

Shared across the resolver, engine registry, and server so every module
raises and catches the same types. A missing view or asset file is never
an error: it is the signal to try the next candidate.
"""

from collections.abc import Iterable


class CloverError(Exception):
    """Base for all clover-specific errors."""


class ConfigurationError(CloverError):
    """Raised when resolver or server configuration is invalid.

    Also raised when configuration is changed after the resolver has
    been frozen for serving.
    """


class PatternError(ConfigurationError):
    """A route pattern cannot be compiled.

    Raised at registration time, never during resolution.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


class MissingEngineError(ConfigurationError):
    """No template engine is registered for one or more view extensions."""

    def __init__(self, extensions: Iterable[str]) -> None:
        self.extensions = tuple(extensions)
        listed = ", ".join(self.extensions)
        super().__init__(
            f"No template engine registered for: {listed}. "
            "Register one with EngineRegistry.register(extension, engine)."
        )


class RenderError(CloverError):
    """A template engine failed while rendering a view."""

    def __init__(self, template_path: str, cause: Exception) -> None:
        self.template_path = template_path
        self.cause = cause
        super().__init__(f"Failed to render {template_path}: {cause}")
