"""Registries and asset storage shared across a conversion batch."""

from .assets import AssetFailure, AssetStore
from .registry import (
    ComponentRecord,
    GlobalRegistry,
    RegisteredComponent,
    Resolution,
    TreeRegistry,
    component_fingerprint,
)

__all__ = [
    "AssetFailure",
    "AssetStore",
    "ComponentRecord",
    "GlobalRegistry",
    "RegisteredComponent",
    "Resolution",
    "TreeRegistry",
    "component_fingerprint",
]
