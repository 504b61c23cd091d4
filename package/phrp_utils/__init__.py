from .config import ProcessingOptions
from .data import AminoAcidModInfo, SearchResult
from .exceptions import (
    CleavageAgentNotSupported,
    InvalidResidueLocation,
    ModificationTypeNotSupported,
    RegistryNotInitialized,
    UnresolvedNumericModification,
)
from .modifications import (
    MassCorrectionTagTable,
    ModificationDefinition,
    ModificationRegistry,
    ModificationType,
    ResidueTerminusState,
)
from .peptide import (
    CleavageAgent,
    PeptideCleavageState,
    PeptideCleavageStateCalculator,
    PeptideMassCalculator,
    PeptideTerminusState,
)
from .processing import ProcessingResult, ResultProcessor

__all__ = [
    "ProcessingOptions",
    "AminoAcidModInfo",
    "SearchResult",
    "CleavageAgentNotSupported",
    "InvalidResidueLocation",
    "ModificationTypeNotSupported",
    "RegistryNotInitialized",
    "UnresolvedNumericModification",
    "MassCorrectionTagTable",
    "ModificationDefinition",
    "ModificationRegistry",
    "ModificationType",
    "ResidueTerminusState",
    "CleavageAgent",
    "PeptideCleavageState",
    "PeptideCleavageStateCalculator",
    "PeptideMassCalculator",
    "PeptideTerminusState",
    "ProcessingResult",
    "ResultProcessor",
]
