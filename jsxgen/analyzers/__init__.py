"""Structural analysis: signatures, pattern detection and prop inference."""

from __future__ import annotations

from .base import Detector
from .patterns import LAYOUT, REPETITION, PatternDetector
from .props import infer_props, read_prop_value
from .signature import children_signature, structural_signature

__all__ = [
    "Detector",
    "LAYOUT",
    "PatternDetector",
    "REPETITION",
    "children_signature",
    "infer_props",
    "read_prop_value",
    "structural_signature",
]
