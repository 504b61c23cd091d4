"""Monoisotopic peptide mass calculations."""

import logging
import re
from typing import Dict, Iterable, NamedTuple, Optional

from pyteomics import mass

from ..constants import (
    AMINO_ACID_MASSES,
    MASS_HYDROGEN,
    MASS_OXYGEN,
    MASS_PROTON,
    NO_AFFECTED_ATOM_SYMBOL,
    RESIDUE_FORMULA_OVERRIDES,
)
from .cleavage import split_prefix_and_suffix_from_sequence

logger = logging.getLogger(__name__)

DEFAULT_N_TERMINUS_MASS_CHANGE = MASS_HYDROGEN
DEFAULT_C_TERMINUS_MASS_CHANGE = MASS_OXYGEN + MASS_HYDROGEN

MOD_MASS_PATTERN = re.compile(r"[+-][0-9.]+")


class PeptideSequenceModInfo(NamedTuple):
    """Mass contribution of one modification on a peptide."""

    residue_loc_in_peptide: int
    mass: float
    affected_atom: str = NO_AFFECTED_ATOM_SYMBOL


def residue_composition(residue: str) -> Optional[mass.Composition]:
    """Elemental composition of a residue, or None when it has none."""
    if residue in RESIDUE_FORMULA_OVERRIDES:
        formula = RESIDUE_FORMULA_OVERRIDES[residue]
        return mass.Composition(formula=formula) if formula else None
    if residue in mass.std_aa_comp:
        return mass.Composition(mass.std_aa_comp[residue])
    return None


def mass_to_ppm(mass_to_convert: float, current_mz: float) -> float:
    return mass_to_convert * 1e6 / current_mz


def ppm_to_mass(ppm_to_convert: float, current_mass: float) -> float:
    return ppm_to_convert / 1e6 * current_mass


class PeptideMassCalculator:
    """
    Compute monoisotopic masses of peptides, with or without modifications.

    Residue masses start from the values in `AMINO_ACID_MASSES` and can be
    overridden with `set_amino_acid_mass`. The peptide N- and C-terminus
    masses default to H and OH; they can be changed at any time and the new
    values apply to every following calculation.

    Parameters
    ----------
    charge_carrier_mass: float
        Mass used when converting between charge states.
    remove_prefix_and_suffix: bool
        Strip flanking residues (e.g. 'K.PEPTIDE.R') before computing masses.

    Example
    -------
    >>> calculator = PeptideMassCalculator()
    >>> round(calculator.compute_sequence_mass('PEPTIDE'), 2)
    799.36
    """

    def __init__(self, charge_carrier_mass: float = MASS_PROTON, remove_prefix_and_suffix: bool = False):
        self.charge_carrier_mass = charge_carrier_mass
        self.remove_prefix_and_suffix = remove_prefix_and_suffix
        self.error_message = ""
        self._amino_acid_masses: Dict[str, float] = {}
        self._amino_acid_compositions: Dict[str, Optional[mass.Composition]] = {}
        self.peptide_n_terminus_mass = DEFAULT_N_TERMINUS_MASS_CHANGE
        self.peptide_c_terminus_mass = DEFAULT_C_TERMINUS_MASS_CHANGE
        self.reset_amino_acid_masses()

    def reset_terminus_masses(self) -> None:
        self.peptide_n_terminus_mass = DEFAULT_N_TERMINUS_MASS_CHANGE
        self.peptide_c_terminus_mass = DEFAULT_C_TERMINUS_MASS_CHANGE

    def reset_amino_acid_masses(self) -> None:
        self._amino_acid_masses = dict(AMINO_ACID_MASSES)
        self._amino_acid_compositions = {
            residue: residue_composition(residue) for residue in AMINO_ACID_MASSES
        }

    def get_amino_acid_mass(self, residue: str) -> float:
        """Residue mass, or 0 for an unknown symbol."""
        return self._amino_acid_masses.get(residue, 0.0)

    def set_amino_acid_mass(self, residue: str, residue_mass: float) -> bool:
        if residue not in self._amino_acid_masses:
            return False
        self._amino_acid_masses[residue] = residue_mass
        return True

    def set_amino_acid_composition(self, residue: str, formula: str) -> bool:
        if residue not in self._amino_acid_compositions:
            return False
        self._amino_acid_compositions[residue] = mass.Composition(formula=formula)
        return True

    def _primary_sequence(self, sequence: str, strip_prefix_suffix: Optional[bool]) -> str:
        if strip_prefix_suffix is None:
            strip_prefix_suffix = self.remove_prefix_and_suffix
        if strip_prefix_suffix:
            parts = split_prefix_and_suffix_from_sequence(sequence)
            if parts is not None and parts[0]:
                return parts[0]
        return sequence

    def sequence_composition(self, sequence: str) -> mass.Composition:
        """Summed elemental composition of the residues (termini excluded)."""
        composition = mass.Composition()
        for residue in sequence:
            residue_comp = self._amino_acid_compositions.get(residue)
            if residue_comp is not None:
                composition += residue_comp
        return composition

    def compute_sequence_mass(
        self,
        sequence: str,
        modifications: Optional[Iterable[PeptideSequenceModInfo]] = None,
        strip_prefix_suffix: Optional[bool] = None,
    ) -> float:
        """
        Compute the monoisotopic mass of a clean peptide sequence.

        Parameters
        ----------
        sequence: str
            Residues only (flanking residues are allowed when stripping is enabled).
        modifications: list of PeptideSequenceModInfo
            Positional modifications add their mass once. Isotopic modifications
            (affected atom set) add their mass once per atom of that element in
            the peptide.
        strip_prefix_suffix: bool
            Overrides `remove_prefix_and_suffix` for this call.

        Returns
        -------
        float
            The monoisotopic mass; -1 when the sequence holds an unknown residue
            or a modification names an unknown element; 0 for an empty sequence.
        """
        primary = self._primary_sequence(sequence, strip_prefix_suffix)
        self.error_message = ""

        peptide_mass = 0.0
        valid_residues = 0
        for residue in primary:
            if residue not in self._amino_acid_masses:
                self.error_message = f"Unknown symbol {residue} in sequence {primary}"
                return -1
            peptide_mass += self._amino_acid_masses[residue]
            valid_residues += 1

        if valid_residues > 0:
            peptide_mass += self.peptide_n_terminus_mass + self.peptide_c_terminus_mass

        if not modifications:
            return peptide_mass

        composition = None
        for mod_info in modifications:
            if not mod_info.affected_atom or mod_info.affected_atom == NO_AFFECTED_ATOM_SYMBOL:
                peptide_mass += mod_info.mass
                continue

            if mod_info.affected_atom not in mass.nist_mass:
                self.error_message = f"Unknown Affected Atom '{mod_info.affected_atom}'"
                return -1

            if composition is None:
                composition = self.sequence_composition(primary)
            element_count = composition.get(mod_info.affected_atom, 0)
            if element_count == 0:
                logger.warning(
                    f"No amino acids in {primary} contain element {mod_info.affected_atom}"
                )
            else:
                peptide_mass += element_count * mod_info.mass

        return peptide_mass

    def compute_sequence_mass_numeric_mods(self, sequence: str, strip_prefix_suffix: Optional[bool] = None) -> float:
        """
        Compute the mass of a sequence with inline numeric modifications, e.g. 'PEPT+79.966IDE'.

        Returns -1 when the residues cannot be resolved.
        """
        primary = self._primary_sequence(sequence, strip_prefix_suffix)

        mod_mass_total = 0.0
        for match in MOD_MASS_PATTERN.finditer(primary):
            try:
                mod_mass_total += float(match.group())
            except ValueError:
                continue

        peptide_mass = self.compute_sequence_mass(
            MOD_MASS_PATTERN.sub("", primary), strip_prefix_suffix=False
        )
        return -1 if peptide_mass < 0 else peptide_mass + mod_mass_total

    def convolute_mass(
        self,
        mass_mz: float,
        current_charge: int,
        desired_charge: int = 1,
        charge_carrier_mass: Optional[float] = None,
    ) -> float:
        """
        Convert an m/z value from one charge state to another.

        A charge of 0 means a neutral mass, 1 means M+H. Negative charges are
        not supported and give 0.
        """
        if not charge_carrier_mass:
            charge_carrier_mass = self.charge_carrier_mass or MASS_PROTON

        if current_charge == desired_charge:
            return mass_mz

        if current_charge == 1:
            mh = mass_mz
        elif current_charge > 1:
            mh = mass_mz * current_charge - charge_carrier_mass * (current_charge - 1)
        elif current_charge == 0:
            mh = mass_mz + charge_carrier_mass
        else:
            return 0.0

        if desired_charge > 1:
            return (mh + charge_carrier_mass * (desired_charge - 1)) / desired_charge
        if desired_charge == 1:
            return mh
        if desired_charge == 0:
            return mh - charge_carrier_mass
        return 0.0

    def mh_to_monoisotopic_mass(self, mh: float) -> float:
        return self.convolute_mass(mh, 1, 0)

    def monoisotopic_mass_to_mz(self, monoisotopic_mass: float, desired_charge: int) -> float:
        return self.convolute_mass(monoisotopic_mass, 0, desired_charge)
