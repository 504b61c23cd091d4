from dataclasses import dataclass
from typing import Optional

from .constants import MASS_DIGITS_OF_PRECISION, MASS_DIGITS_OF_PRECISION_LOOSE, MASS_PROTON
from .modifications import ModificationRegistry
from .peptide import CleavageAgent, PeptideCleavageStateCalculator, PeptideMassCalculator

MOD_FORMATS = ("symbol", "mass")


@dataclass
class ProcessingOptions:
    """
    Options for processing a table of peptide hits.

    `mod_format` tells how modifications are written in the peptide column:
    'symbol' for single-character symbols (PEPT*IDE) or 'mass' for inline
    mass deltas (PEPT+79.966IDE). Terminus masses of None keep the
    calculator defaults (H and OH).
    """
    modification_definitions_path: str = ""
    mass_correction_tags_path: str = ""
    mass_precision_digits: int = MASS_DIGITS_OF_PRECISION
    loose_precision_digits: int = MASS_DIGITS_OF_PRECISION_LOOSE
    consider_modification_symbol: bool = False
    cleavage_agent: str = "trypsin"
    mod_format: str = "symbol"
    allow_duplicate_terminus_mods: bool = True
    peptide_n_terminus_mass: Optional[float] = None
    peptide_c_terminus_mass: Optional[float] = None
    charge_carrier_mass: float = MASS_PROTON
    max_error_log_entries: int = 250
    show_progress: bool = True

    def __post_init__(self):
        if self.mod_format not in MOD_FORMATS:
            raise ValueError(f"Invalid mod_format: {self.mod_format}. Allowed values are: {list(MOD_FORMATS)}")
        # Raises CleavageAgentNotSupported for unknown labels
        CleavageAgent.select(self.cleavage_agent)

    def build_registry(self) -> ModificationRegistry:
        return ModificationRegistry.from_files(
            self.modification_definitions_path,
            self.mass_correction_tags_path,
            self.consider_modification_symbol,
        )

    def build_mass_calculator(self) -> PeptideMassCalculator:
        calculator = PeptideMassCalculator(charge_carrier_mass=self.charge_carrier_mass)
        if self.peptide_n_terminus_mass is not None:
            calculator.peptide_n_terminus_mass = self.peptide_n_terminus_mass
        if self.peptide_c_terminus_mass is not None:
            calculator.peptide_c_terminus_mass = self.peptide_c_terminus_mass
        return calculator

    def build_cleavage_calculator(self) -> PeptideCleavageStateCalculator:
        return PeptideCleavageStateCalculator(CleavageAgent.select(self.cleavage_agent))
