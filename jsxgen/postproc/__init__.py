"""Post-processing of generated source."""

from .formatter import FormatRequest, SourceFormatter, prettier_arguments

__all__ = ["FormatRequest", "SourceFormatter", "prettier_arguments"]
