"""Per-peptide search result: modification resolution and computed peptide attributes."""

import logging
import re
from typing import List, NamedTuple, Optional, Tuple

from ..constants import (
    C_TERMINAL_PEPTIDE_SYMBOL,
    C_TERMINAL_PROTEIN_SYMBOL,
    MASS_C13,
    MASS_DIGITS_OF_PRECISION,
    N_TERMINAL_PEPTIDE_SYMBOL,
    N_TERMINAL_PROTEIN_SYMBOL,
    NO_AFFECTED_ATOM_SYMBOL,
    TERMINUS_SYMBOL_SEQUEST,
    TERMINUS_SYMBOL_XTANDEM_CTERMINUS,
    TERMINUS_SYMBOL_XTANDEM_NTERMINUS,
)
from ..exceptions import InvalidResidueLocation, UnresolvedNumericModification
from ..modifications import (
    ModificationDefinition,
    ModificationRegistry,
    ModificationType,
    ResidueTerminusState,
    masses_match,
)
from ..peptide.cleavage import (
    PeptideCleavageState,
    PeptideCleavageStateCalculator,
    PeptideTerminusState,
    extract_clean_sequence_from_sequence_with_mods,
    split_prefix_and_suffix_from_sequence,
)
from ..peptide.mass import (
    MOD_MASS_PATTERN,
    PeptideMassCalculator,
    PeptideSequenceModInfo,
    mass_to_ppm,
)

logger = logging.getLogger(__name__)

MOD_LIST_SEP_CHAR = ","

# Residue letters and inline numeric mass deltas, e.g. PEPT+79.966IDE
_MASS_STRING_TOKEN = re.compile(r"[A-Za-z]|[+-][0-9.]+|.")


class AminoAcidModInfo(NamedTuple):
    """A modification attached to one residue of a peptide."""

    definition: ModificationDefinition
    residue: str
    residue_loc_in_peptide: int
    residue_terminus_state: ResidueTerminusState = ResidueTerminusState.NONE


def _is_letter(char: str) -> bool:
    return ("A" <= char <= "Z") or ("a" <= char <= "z")


class SearchResult:
    """
    One peptide hit and the modifications resolved for it.

    The modification definitions are owned by the shared `ModificationRegistry`;
    a search result only references them, so occurrence counts add up over all
    results of a run.

    Parameters
    ----------
    registry: ModificationRegistry
        Modifications known in this run.
    mass_calculator: PeptideMassCalculator
        Calculator used for the monoisotopic mass. A default calculator is
        created when omitted.
    cleavage_calculator: PeptideCleavageStateCalculator
        Calculator for cleavage and terminus states. Trypsin when omitted.

    Example
    -------
    >>> result = SearchResult(registry)
    >>> result.set_peptide_sequence_with_mods('K.PEPT*IDE.K')
    >>> result.add_modifications_and_compute_mass()
    True
    >>> result.mod_description
    'Phosph:4'
    """

    def __init__(
        self,
        registry: ModificationRegistry,
        mass_calculator: Optional[PeptideMassCalculator] = None,
        cleavage_calculator: Optional[PeptideCleavageStateCalculator] = None,
    ):
        self.registry = registry
        self.mass_calculator = mass_calculator if mass_calculator is not None else PeptideMassCalculator()
        self.cleavage_calculator = (
            cleavage_calculator if cleavage_calculator is not None else PeptideCleavageStateCalculator()
        )
        self.modifications: List[AminoAcidModInfo] = []
        self.clear()

    def clear(self) -> None:
        """Reset every field to its default value."""
        self.result_id = 0
        self.group_id = 0
        self.scan = ""
        self.charge = ""
        self.protein_name = ""
        self.precursor_mz = None
        self.observed_mh = None
        self.protein_seq_residue_number_start = 0
        self.protein_seq_residue_number_end = 0
        self.error_message = ""
        self.clear_peptide_details()

    def clear_peptide_details(self) -> None:
        self._pre_residues = ""
        self._post_residues = ""
        self._clean_sequence = ""
        self.sequence_with_mods = ""
        self.cleavage_state = PeptideCleavageState.NON_SPECIFIC
        self.peptide_terminus_state = PeptideTerminusState.NONE
        self.monoisotopic_mass = 0.0
        self.mod_description = ""
        self.modifications = []

    ### PEPTIDE SEQUENCE

    @property
    def pre_residues(self) -> str:
        return self._pre_residues

    @pre_residues.setter
    def pre_residues(self, value: str) -> None:
        self._pre_residues = value or ""
        self.compute_peptide_cleavage_state_in_protein()

    @property
    def post_residues(self) -> str:
        return self._post_residues

    @post_residues.setter
    def post_residues(self, value: str) -> None:
        self._post_residues = value or ""
        self.compute_peptide_cleavage_state_in_protein()

    @property
    def clean_sequence(self) -> str:
        return self._clean_sequence

    @clean_sequence.setter
    def clean_sequence(self, value: str) -> None:
        self._clean_sequence = value or ""
        self.compute_peptide_cleavage_state_in_protein()

    @property
    def modification_count(self) -> int:
        return len(self.modifications)

    def compute_peptide_cleavage_state_in_protein(self) -> None:
        self.cleavage_state = self.cleavage_calculator.compute_cleavage_state(
            self._clean_sequence, self._pre_residues, self._post_residues
        )
        self.peptide_terminus_state = self.cleavage_calculator.compute_terminus_state(
            self._clean_sequence, self._pre_residues, self._post_residues
        )

    def set_peptide_sequence_with_mods(
        self,
        sequence_with_mods: str,
        check_for_prefix_and_suffix_residues: bool = True,
        auto_populate_clean_sequence: bool = True,
    ) -> None:
        """
        Store a peptide string such as 'K.PEPT*IDE.R'.

        Parameters
        ----------
        sequence_with_mods: str
            Peptide with modification symbols, optionally with flanking residues.
        check_for_prefix_and_suffix_residues: bool
            Split off the flanking residues.
        auto_populate_clean_sequence: bool
            Also set the flanking residues and the clean sequence, which updates
            the cleavage and terminus state.
        """
        primary_sequence = sequence_with_mods
        if check_for_prefix_and_suffix_residues:
            parts = split_prefix_and_suffix_from_sequence(sequence_with_mods)
            if parts is not None:
                primary_sequence, prefix, suffix = parts
                if auto_populate_clean_sequence:
                    self._pre_residues = prefix
                    self._post_residues = suffix

        if auto_populate_clean_sequence:
            self.clean_sequence = extract_clean_sequence_from_sequence_with_mods(primary_sequence, False)

        self.sequence_with_mods = primary_sequence

    def sequence_with_prefix_and_suffix(self, with_mods: bool = True) -> str:
        """Peptide with a single flanking residue on each side, e.g. 'K.PEPTIDE.-'."""
        prefix = TERMINUS_SYMBOL_SEQUEST
        work = self._pre_residues.strip()
        if work:
            prefix = work[-1]
            if prefix == TERMINUS_SYMBOL_XTANDEM_NTERMINUS:
                prefix = TERMINUS_SYMBOL_SEQUEST

        suffix = TERMINUS_SYMBOL_SEQUEST
        work = self._post_residues.strip()
        if work:
            suffix = work[0]
            if suffix == TERMINUS_SYMBOL_XTANDEM_CTERMINUS:
                suffix = TERMINUS_SYMBOL_SEQUEST

        if with_mods and self.sequence_with_mods:
            return f"{prefix}.{self.sequence_with_mods}.{suffix}"
        return f"{prefix}.{self._clean_sequence}.{suffix}"

    def determine_residue_terminus_state(self, residue_loc_in_peptide: int) -> ResidueTerminusState:
        """
        Location of a residue (1-based) relative to the peptide and protein termini.
        """
        length = len(self._clean_sequence)
        at_protein_n = self.peptide_terminus_state.at_protein_n_terminus
        at_protein_c = self.peptide_terminus_state.at_protein_c_terminus

        if residue_loc_in_peptide == 1:
            if at_protein_n:
                if at_protein_c:
                    return ResidueTerminusState.PROTEIN_N_AND_C_TERMINUS
                return ResidueTerminusState.PROTEIN_N_TERMINUS
            return ResidueTerminusState.PEPTIDE_N_TERMINUS

        if residue_loc_in_peptide == length:
            if at_protein_c:
                return ResidueTerminusState.PROTEIN_C_TERMINUS
            return ResidueTerminusState.PEPTIDE_C_TERMINUS

        return ResidueTerminusState.NONE

    ### MODIFICATIONS

    def clear_modifications(self) -> None:
        self.modifications = []

    def get_modification_by_index(self, index: int) -> Optional[AminoAcidModInfo]:
        if 0 <= index < len(self.modifications):
            return self.modifications[index]
        return None

    def add_modification(
        self,
        definition: ModificationDefinition,
        residue: str,
        residue_loc_in_peptide: int,
        residue_terminus_state: ResidueTerminusState = ResidueTerminusState.NONE,
        update_counts: bool = True,
    ) -> AminoAcidModInfo:
        """
        Attach a modification definition to a residue.

        Raises
        ------
        InvalidResidueLocation
            If the location is outside the peptide; isotopic modifications
            use location 0.
        """
        if definition.mod_type is not ModificationType.ISOTOPIC and not (
            1 <= residue_loc_in_peptide <= max(len(self._clean_sequence), 1)
        ):
            raise InvalidResidueLocation(residue_loc_in_peptide, self._clean_sequence)

        if update_counts:
            definition.occurrence_count += 1

        mod_info = AminoAcidModInfo(definition, residue, residue_loc_in_peptide, residue_terminus_state)
        self.modifications.append(mod_info)
        return mod_info

    def add_dynamic_modification(
        self,
        symbol: str,
        residue: str,
        residue_loc_in_peptide: int,
        residue_terminus_state: ResidueTerminusState = ResidueTerminusState.NONE,
        update_counts: bool = True,
    ) -> bool:
        """
        Attach the dynamic modification that uses `symbol` on `residue`.

        Unknown symbols are attached as a zero-mass placeholder so that the
        peptide keeps a complete modification list.

        Returns
        -------
        bool
            False when the symbol did not match a registered modification.
        """
        definition, found = self.registry.resolve_dynamic_by_symbol_and_residue(
            symbol, residue, residue_terminus_state
        )
        if not found:
            self.error_message = (
                f"Modification symbol not found: {symbol}; TerminusState = {residue_terminus_state.name}"
            )
            logger.warning(f"{self.error_message}; ResultID = {self.result_id}")

        self.add_modification(definition, residue, residue_loc_in_peptide, residue_terminus_state, update_counts)
        return found

    def add_modification_by_mass(
        self,
        modification_mass: float,
        residue: str,
        residue_loc_in_peptide: int,
        residue_terminus_state: ResidueTerminusState = ResidueTerminusState.NONE,
        update_counts: bool = True,
        precision: int = MASS_DIGITS_OF_PRECISION,
        loose_precision: int = MASS_DIGITS_OF_PRECISION,
    ) -> AminoAcidModInfo:
        """Attach a modification given its mass; unknown masses are registered."""
        if residue_loc_in_peptide < 1:
            raise InvalidResidueLocation(residue_loc_in_peptide, self._clean_sequence)

        definition = self.registry.resolve_by_mass(
            modification_mass,
            residue,
            residue_terminus_state,
            add_if_unknown=True,
            precision=precision,
            loose_precision=loose_precision,
        )
        return self.add_modification(definition, residue, residue_loc_in_peptide, residue_terminus_state, update_counts)

    def add_isotopic_modifications(self, update_counts: bool = True) -> bool:
        """Attach every registered isotopic modification once, at location 0."""
        added = False
        for definition in self.registry.definitions_of_type(ModificationType.ISOTOPIC):
            self.add_modification(
                definition, NO_AFFECTED_ATOM_SYMBOL, 0, ResidueTerminusState.NONE, update_counts
            )
            added = True
        return added

    def add_static_residue_mods(self, residue: str, residue_loc_in_peptide: int, update_counts: bool = True) -> None:
        """Attach every static modification targeting `residue`, in registry order."""
        for definition in self.registry.definitions_of_type(ModificationType.STATIC):
            if definition.target_residues_contain(residue):
                self.add_modification(
                    definition,
                    residue,
                    residue_loc_in_peptide,
                    self.determine_residue_terminus_state(residue_loc_in_peptide),
                    update_counts,
                )

    def add_dynamic_and_static_residue_mods(self, update_counts: bool = True) -> None:
        """
        Scan `sequence_with_mods` left to right.

        Each letter gets the static modifications for that residue; each other
        character is resolved as a dynamic modification symbol of the most
        recent residue. Symbols before the first residue are ignored.
        """
        most_recent_letter = ""
        residue_loc_in_peptide = 0

        for char in self.sequence_with_mods:
            if _is_letter(char):
                most_recent_letter = char
                residue_loc_in_peptide += 1
                self.add_static_residue_mods(char, residue_loc_in_peptide, update_counts)
            elif most_recent_letter:
                self.add_dynamic_modification(
                    char,
                    most_recent_letter,
                    residue_loc_in_peptide,
                    self.determine_residue_terminus_state(residue_loc_in_peptide),
                    update_counts,
                )

    def _terminus_mod_location(
        self, definition: ModificationDefinition
    ) -> Optional[Tuple[int, ResidueTerminusState]]:
        at_protein_n = self.peptide_terminus_state.at_protein_n_terminus
        at_protein_c = self.peptide_terminus_state.at_protein_c_terminus
        last = len(self._clean_sequence)

        if definition.mod_type is ModificationType.TERMINAL_PEPTIDE_STATIC:
            if definition.target_residues == N_TERMINAL_PEPTIDE_SYMBOL:
                state = ResidueTerminusState.PROTEIN_N_TERMINUS if at_protein_n else ResidueTerminusState.PEPTIDE_N_TERMINUS
                return 1, state
            if definition.target_residues == C_TERMINAL_PEPTIDE_SYMBOL:
                state = ResidueTerminusState.PROTEIN_C_TERMINUS if at_protein_c else ResidueTerminusState.PEPTIDE_C_TERMINUS
                return last, state
            return None

        # Protein terminus mods only apply to peptides at that terminus
        if definition.target_residues == N_TERMINAL_PROTEIN_SYMBOL and at_protein_n:
            return 1, ResidueTerminusState.PROTEIN_N_TERMINUS
        if definition.target_residues == C_TERMINAL_PROTEIN_SYMBOL and at_protein_c:
            return last, ResidueTerminusState.PROTEIN_C_TERMINUS
        return None

    def _terminus_mod_present(self, definition: ModificationDefinition, residue_loc_in_peptide: int) -> bool:
        for mod_info in self.modifications:
            if mod_info.definition is definition:
                return True
            if mod_info.residue_loc_in_peptide != residue_loc_in_peptide:
                continue
            if mod_info.definition.mass_correction_tag == definition.mass_correction_tag:
                return True
            if masses_match(mod_info.definition.mass, definition.mass):
                return True
        return False

    def add_static_terminus_mods(self, allow_duplicate_mod_on_terminus: bool = True, update_counts: bool = True) -> None:
        """
        Attach peptide and protein terminus static modifications.

        Peptide terminus modifications always apply; protein terminus
        modifications only when the peptide is at that protein terminus.

        Parameters
        ----------
        allow_duplicate_mod_on_terminus: bool
            When False, skip a modification if the terminal residue already
            carries a modification with the same tag or mass.
        update_counts: bool
            Increment the occurrence count of attached definitions.
        """
        if not self._clean_sequence:
            return

        for definition in self.registry.definitions_of_type(
            ModificationType.TERMINAL_PEPTIDE_STATIC, ModificationType.PROTEIN_TERMINUS_STATIC
        ):
            location = self._terminus_mod_location(definition)
            if location is None:
                continue
            residue_loc_in_peptide, state = location

            if not allow_duplicate_mod_on_terminus and self._terminus_mod_present(definition, residue_loc_in_peptide):
                continue

            self.add_modification(
                definition,
                self._clean_sequence[residue_loc_in_peptide - 1],
                residue_loc_in_peptide,
                state,
                update_counts,
            )

    def add_modifications_and_compute_mass(
        self, update_counts: bool = True, allow_duplicate_mod_on_terminus: bool = True
    ) -> bool:
        """
        Resolve the modification symbols in `sequence_with_mods` and compute the mass.

        Isotopic modifications are added first, then the static and dynamic
        residue modifications, then terminus static modifications. Finally the
        monoisotopic mass and the modification description are updated.

        Raises
        ------
        UnresolvedNumericModification
            If the sequence still holds an inline numeric mass.
        """
        self.clear_modifications()
        self.error_message = ""

        match = MOD_MASS_PATTERN.search(self.sequence_with_mods)
        if match:
            raise UnresolvedNumericModification(self.result_id, match.group())

        self.add_isotopic_modifications(update_counts)
        self.add_dynamic_and_static_residue_mods(update_counts)
        self.add_static_terminus_mods(allow_duplicate_mod_on_terminus, update_counts)
        self.compute_monoisotopic_mass()
        self.update_mod_description()
        return True

    def add_modifications_from_mass_string(
        self,
        update_counts: bool = True,
        allow_duplicate_mod_on_terminus: bool = True,
        precision: int = MASS_DIGITS_OF_PRECISION,
        loose_precision: int = MASS_DIGITS_OF_PRECISION,
    ) -> bool:
        """
        Resolve inline numeric mass deltas, e.g. 'PEPT+79.966IDE' or '+42.011PEPTIDE'.

        Each delta is resolved with `ModificationRegistry.resolve_by_mass`
        against the residue before it. Deltas before the first residue belong
        to residue 1 (N-terminus). Deltas matching a static modification are
        not attached twice. Afterwards `sequence_with_mods` holds the
        modification symbols instead of the masses.
        """
        self.clear_modifications()
        self.error_message = ""
        self.add_isotopic_modifications(update_counts)

        pending_n_terminal: List[float] = []
        most_recent_letter = ""
        residue_loc_in_peptide = 0
        resolved: List[Tuple[float, str, int, ResidueTerminusState]] = []

        for token in _MASS_STRING_TOKEN.findall(self.sequence_with_mods):
            if _is_letter(token):
                most_recent_letter = token
                residue_loc_in_peptide += 1
                self.add_static_residue_mods(token, residue_loc_in_peptide, update_counts)
                if residue_loc_in_peptide == 1 and pending_n_terminal:
                    state = self.determine_residue_terminus_state(1)
                    resolved.extend((mass, token, 1, state) for mass in pending_n_terminal)
                    pending_n_terminal = []
                continue

            if not MOD_MASS_PATTERN.fullmatch(token):
                continue
            try:
                modification_mass = float(token)
            except ValueError:
                logger.warning(f"Could not parse modification mass {token}; ResultID = {self.result_id}")
                continue

            if not most_recent_letter:
                pending_n_terminal.append(modification_mass)
            else:
                resolved.append(
                    (
                        modification_mass,
                        most_recent_letter,
                        residue_loc_in_peptide,
                        self.determine_residue_terminus_state(residue_loc_in_peptide),
                    )
                )

        for modification_mass, residue, location, state in resolved:
            if self._static_mod_present(modification_mass, location, precision):
                continue
            self.add_modification_by_mass(
                modification_mass, residue, location, state, update_counts, precision, loose_precision
            )

        self.sequence_with_mods = self.modified_sequence()
        self.add_static_terminus_mods(allow_duplicate_mod_on_terminus, update_counts)
        self.compute_monoisotopic_mass()
        self.update_mod_description()
        return True

    def _static_mod_present(self, modification_mass: float, residue_loc_in_peptide: int, precision: int) -> bool:
        for mod_info in self.modifications:
            if mod_info.residue_loc_in_peptide != residue_loc_in_peptide:
                continue
            if mod_info.definition.mod_type is ModificationType.STATIC and masses_match(
                mod_info.definition.mass, modification_mass, precision
            ):
                return True
        return False

    ### COMPUTED ATTRIBUTES

    def compute_monoisotopic_mass(self) -> float:
        mod_infos = [
            PeptideSequenceModInfo(
                mod_info.residue_loc_in_peptide,
                mod_info.definition.mass,
                mod_info.definition.affected_atom,
            )
            for mod_info in self.modifications
        ]
        self.monoisotopic_mass = self.mass_calculator.compute_sequence_mass(self._clean_sequence, mod_infos)
        if self.monoisotopic_mass < 0:
            self.error_message = self.mass_calculator.error_message
        return self.monoisotopic_mass

    def sorted_modifications(self) -> List[AminoAcidModInfo]:
        """Modifications sorted by residue location, then by mass correction tag."""
        return sorted(
            self.modifications,
            key=lambda m: (m.residue_loc_in_peptide, m.definition.mass_correction_tag),
        )

    def update_mod_description(self) -> str:
        """
        Build the modification description, e.g. 'Acetyl:1,Plus1Oxy:4'.

        Isotopic modifications are listed with location 0.
        """
        self.mod_description = MOD_LIST_SEP_CHAR.join(
            f"{m.definition.mass_correction_tag.strip()}:{m.residue_loc_in_peptide}"
            for m in self.sorted_modifications()
        )
        return self.mod_description

    def modified_sequence(self) -> str:
        """Clean sequence with the symbols of dynamic (and unknown) modifications inserted."""
        sequence = list(self._clean_sequence)
        for mod_info in reversed(self.sorted_modifications()):
            if mod_info.definition.mod_type not in (ModificationType.DYNAMIC, ModificationType.UNKNOWN):
                continue
            sequence.insert(mod_info.residue_loc_in_peptide, mod_info.definition.symbol)
        return "".join(sequence)

    def apply_modification_information(self) -> None:
        self.sequence_with_mods = self.modified_sequence()
        self.update_mod_description()

    def missed_cleavages(self) -> int:
        return self.cleavage_calculator.compute_number_of_missed_cleavages(self._clean_sequence)

    @staticmethod
    def compute_del_m_corrected_ppm(
        del_m: float,
        precursor_mono_mass: float,
        adjust_precursor_mass_for_c13: bool,
        peptide_monoisotopic_mass: float,
    ) -> float:
        """
        Compute the precursor mass error in ppm, correcting for C13 isotope selection errors.

        Parameters
        ----------
        del_m: float
            Mass difference (Da) between precursor and peptide.
        precursor_mono_mass: float
            Monoisotopic mass of the precursor.
        adjust_precursor_mass_for_c13: bool
            Shift the precursor mass by the number of C13 corrections.
        peptide_monoisotopic_mass: float
            Theoretical monoisotopic mass of the peptide.

        Returns
        -------
        float
            Mass error in ppm.
        """
        correction_count = 0
        if del_m >= -0.5:
            while del_m > 0.5:
                del_m -= MASS_C13
                correction_count += 1
        else:
            while del_m < -0.5:
                del_m += MASS_C13
                correction_count -= 1

        if correction_count != 0:
            if adjust_precursor_mass_for_c13:
                precursor_mono_mass -= correction_count * MASS_C13
            del_m = precursor_mono_mass - peptide_monoisotopic_mass

        return mass_to_ppm(del_m, peptide_monoisotopic_mass)

    def to_proforma(self) -> str:
        """
        ProForma string with the modifications written as mass deltas.

        Terminus-only modifications on the first or last residue are written
        as N- or C-terminal modifications. Isotopic modifications are not
        represented.
        """
        residue_mods = {i: [] for i in range(1, len(self._clean_sequence) + 1)}
        n_term, c_term = [], []

        for mod_info in self.sorted_modifications():
            definition = mod_info.definition
            if definition.mod_type is ModificationType.ISOTOPIC or mod_info.residue_loc_in_peptide < 1:
                continue
            label = f"[{definition.mass:+.4f}]"
            if not definition.can_affect_peptide_residues():
                if mod_info.residue_terminus_state.is_n_terminal and mod_info.residue_loc_in_peptide == 1:
                    n_term.append(label)
                    continue
                if mod_info.residue_terminus_state.is_c_terminal:
                    c_term.append(label)
                    continue
            residue_mods[mod_info.residue_loc_in_peptide].append(label)

        proforma = "".join(n_term) + "-" if n_term else ""
        proforma += "".join(
            residue + "".join(residue_mods[i]) for i, residue in enumerate(self._clean_sequence, start=1)
        )
        if c_term:
            proforma += "-" + "".join(c_term)
        return proforma
