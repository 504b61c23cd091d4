"""Modification definitions, mass correction tags and the modification registry."""

from .definition import (
    ModificationDefinition,
    ModificationType,
    ResidueTerminusState,
    masses_match,
)
from .registry import ModificationRegistry
from .tags import MassCorrectionTagTable

__all__ = [
    "ModificationDefinition",
    "ModificationType",
    "ResidueTerminusState",
    "masses_match",
    "ModificationRegistry",
    "MassCorrectionTagTable",
]
