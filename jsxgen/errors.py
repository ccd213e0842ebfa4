"""Exception types raised by jsxgen."""

from __future__ import annotations


class JsxGenError(RuntimeError):
    """Base class for converter failures."""


class ConfigError(JsxGenError):
    """Raised when the configuration file cannot be parsed or is invalid."""


class TreeError(JsxGenError):
    """Raised when an input tree document is unreadable or malformed."""


class FormatterError(JsxGenError):
    """Raised by formatter runners when generated source cannot be formatted."""


__all__ = ["ConfigError", "FormatterError", "JsxGenError", "TreeError"]
