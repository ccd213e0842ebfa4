"""Identifier casing helpers for component and prop names."""

from __future__ import annotations

import re

_SEPARATOR_RUN = re.compile(r"[-_ ]+([a-zA-Z0-9])")
_KEBAB_LETTER = re.compile(r"-([a-z])")
_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_WORD = re.compile(r"[^a-zA-Z0-9_\-\s]")
_WORD_SPLIT = re.compile(r"[\s_-]+")


def to_camel_case(value: str) -> str:
    """``nav-link text`` -> ``navLinkText``; a leading capital is lowered."""
    result = _SEPARATOR_RUN.sub(lambda match: match.group(1).upper(), value)
    if result[:1].isupper():
        result = result[0].lower() + result[1:]
    return result


def kebab_to_camel_case(value: str) -> str:
    """``stroke-width`` -> ``strokeWidth``."""
    return _KEBAB_LETTER.sub(lambda match: match.group(1).upper(), value)


def to_pascal_case(value: object) -> str:
    """Collapse ``value`` into a single capitalised identifier.

    Non-alphanumerics are stripped and the rest is lowercased, so ``nav-bar``
    becomes ``Navbar``. Blank input yields ``Unnamed`` and input with no usable
    characters yields ``UnnamedComponent``.
    """
    if value is None:
        return "Unnamed"
    text = str(value)
    if not text.strip():
        return "Unnamed"
    cleaned = _NON_ALNUM.sub("", text.lower())
    if cleaned:
        return cleaned[0].upper() + cleaned[1:]
    words = [word for word in _WORD_SPLIT.split(_NON_WORD.sub("", text)) if word]
    if words:
        return "".join(word[0].upper() + word[1:].lower() for word in words)
    return "UnnamedComponent"


def unique_name(base: str, taken: set[str]) -> str:
    """Return ``base`` or the first free ``base1``, ``base2``, ..."""
    candidate = base
    counter = 1
    while candidate in taken:
        candidate = f"{base}{counter}"
        counter += 1
    return candidate


__all__ = ["kebab_to_camel_case", "to_camel_case", "to_pascal_case", "unique_name"]
