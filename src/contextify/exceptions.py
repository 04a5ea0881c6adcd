"""Custom exceptions for Contextify."""


class ContextifyError(Exception):
    """Base exception for all Contextify errors."""


class ConfigError(ContextifyError):
    """Configuration file errors."""


class RenderError(ContextifyError):
    """Output rendering errors."""


class OutputError(ContextifyError):
    """Raised when the rendered context cannot be written."""
