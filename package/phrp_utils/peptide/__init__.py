from .cleavage import (
    CleavageAgent,
    PeptideCleavageState,
    PeptideCleavageStateCalculator,
    PeptideTerminusState,
    extract_clean_sequence_from_sequence_with_mods,
    split_prefix_and_suffix_from_sequence,
)
from .mass import PeptideMassCalculator, PeptideSequenceModInfo, mass_to_ppm, ppm_to_mass

__all__ = [
    "CleavageAgent",
    "PeptideCleavageState",
    "PeptideCleavageStateCalculator",
    "PeptideTerminusState",
    "extract_clean_sequence_from_sequence_with_mods",
    "split_prefix_and_suffix_from_sequence",
    "PeptideMassCalculator",
    "PeptideSequenceModInfo",
    "mass_to_ppm",
    "ppm_to_mass",
]
