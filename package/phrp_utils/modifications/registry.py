"""Registry of modification definitions used while processing search results."""

import logging
import os
from collections import deque
from typing import List, Optional, Tuple

from ..constants import (
    C_TERMINAL_PEPTIDE_SYMBOL,
    C_TERMINAL_PROTEIN_SYMBOL,
    DEFAULT_MODIFICATION_SYMBOLS,
    INITIAL_UNKNOWN_MASS_CORRECTION_TAG_NAME,
    LAST_RESORT_MODIFICATION_SYMBOL,
    MASS_DIGITS_OF_PRECISION,
    N_TERMINAL_PEPTIDE_SYMBOL,
    N_TERMINAL_PROTEIN_SYMBOL,
    NO_AFFECTED_ATOM_SYMBOL,
    NO_SYMBOL_MODIFICATION_SYMBOL,
    STANDARD_REFINEMENT_MODIFICATIONS,
    TERMINUS_SYMBOLS,
    UNIMOD_NAME_MASSES,
)
from .definition import (
    ModificationDefinition,
    ModificationType,
    ResidueTerminusState,
    masses_match,
)
from .tags import MassCorrectionTagTable

logger = logging.getLogger(__name__)

RESOLVABLE_BY_SYMBOL = (ModificationType.DYNAMIC, ModificationType.UNKNOWN)
RESOLVABLE_BY_MASS = (
    ModificationType.DYNAMIC,
    ModificationType.STATIC,
    ModificationType.UNKNOWN,
)


def build_symbol_queue(symbols: str, used: str = "") -> deque:
    """
    Build the queue of symbols available for new dynamic modifications.

    Duplicates, the two reserved symbols and anything in `used` are left out.
    """
    queue = deque()
    for symbol in symbols:
        if symbol in (LAST_RESORT_MODIFICATION_SYMBOL, NO_SYMBOL_MODIFICATION_SYMBOL):
            continue
        if symbol in queue or symbol in used:
            continue
        queue.append(symbol)
    return queue


def clean_target_residues(residues: str) -> str:
    """Keep uppercase residue letters and terminus symbols."""
    residues = residues.strip().upper()
    return "".join(
        r for r in residues if ("A" <= r <= "Z") or r in TERMINUS_SYMBOLS
    )


def _closest(candidates: List[Tuple[float, ModificationDefinition]]) -> ModificationDefinition:
    # Strict comparison: on ties the first candidate wins
    best_diff, best = candidates[0]
    for diff, definition in candidates[1:]:
        if diff < best_diff:
            best_diff, best = diff, definition
    return best


def _terminus_target(terminus_state: ResidueTerminusState) -> Optional[str]:
    """Terminus symbol a mass-resolved modification is registered against."""
    if terminus_state.is_n_terminal:
        return N_TERMINAL_PEPTIDE_SYMBOL
    if terminus_state in (
        ResidueTerminusState.PEPTIDE_C_TERMINUS,
        ResidueTerminusState.PROTEIN_C_TERMINUS,
    ):
        return C_TERMINAL_PEPTIDE_SYMBOL
    return None


class ModificationRegistry:
    """
    Container for every modification known during a processing run.

    The registry owns three things:

    - the ordered list of modification definitions (first match wins on lookup),
    - the queue of symbols still available for new dynamic modifications,
    - the mass correction tag table.

    One registry is built per run and shared by every search result, so
    that occurrence counts and symbol assignments are consistent across
    the whole run.

    Parameters
    ----------
    mass_correction_tags: MassCorrectionTagTable
        Tag table to use. A table with the default tags is created when omitted.
    consider_modification_symbol: bool
        When merging definitions, only merge those with identical symbols.

    Example
    -------
    >>> registry = ModificationRegistry()
    >>> registry.add_modification("*", 79.9663, "STY", ModificationType.DYNAMIC)
    0
    >>> registry.resolve_dynamic_by_symbol_and_residue("*", "S")
    (DYNAMIC Phosph, 79.9663; STY, True)
    """

    def __init__(
        self,
        mass_correction_tags: Optional[MassCorrectionTagTable] = None,
        consider_modification_symbol: bool = False,
    ):
        self.mass_correction_tags = (
            mass_correction_tags if mass_correction_tags is not None else MassCorrectionTagTable()
        )
        self.consider_modification_symbol = consider_modification_symbol
        self.definitions: List[ModificationDefinition] = []
        self.available_symbols = build_symbol_queue(DEFAULT_MODIFICATION_SYMBOLS)
        self.error_message = ""
        self.standard_refinement_modifications: List[ModificationDefinition] = []
        self._update_standard_refinement_modifications()

    def __len__(self):
        return len(self.definitions)

    def __iter__(self):
        return iter(self.definitions)

    @property
    def modification_count(self) -> int:
        return len(self.definitions)

    def clear(self, keep_tags: bool = True) -> None:
        """Remove all definitions and restore the full symbol queue, optionally the default tags too."""
        self.definitions.clear()
        self.available_symbols = build_symbol_queue(DEFAULT_MODIFICATION_SYMBOLS)
        if not keep_tags:
            self.mass_correction_tags.reset_to_defaults()
            self._update_standard_refinement_modifications()

    def get_modification_by_index(self, index: int) -> ModificationDefinition:
        """Return the definition at `index`, or an empty definition when out of range."""
        if 0 <= index < len(self.definitions):
            return self.definitions[index]
        return ModificationDefinition()

    def get_modification_type_by_index(self, index: int) -> ModificationType:
        if 0 <= index < len(self.definitions):
            return self.definitions[index].mod_type
        return ModificationType.UNKNOWN

    def definitions_of_type(self, *mod_types: ModificationType) -> List[ModificationDefinition]:
        return [d for d in self.definitions if d.mod_type in mod_types]

    def reset_occurrence_counts(self) -> None:
        for definition in self.definitions:
            definition.occurrence_count = 0

    def lookup_mass_correction_tag(
        self,
        mass: float,
        precision: int = MASS_DIGITS_OF_PRECISION,
        create_if_missing: bool = True,
        loose_precision: Optional[int] = None,
    ) -> str:
        """Shortcut to `MassCorrectionTagTable.lookup_or_create`."""
        if loose_precision is None:
            return self.mass_correction_tags.lookup_or_create(mass, precision, create_if_missing)
        return self.mass_correction_tags.lookup_or_create(
            mass, precision, create_if_missing, loose_precision
        )

    def lookup_modification_mass_by_name(self, name: str) -> Tuple[float, bool]:
        """
        Find the mass of a modification given a tag name or a common UniMod name.

        Returns
        -------
        tuple
            (mass, found). Mass is 0 when the name is unknown.
        """
        for tag_name, mass in self.mass_correction_tags.items():
            if tag_name.lower() == name.strip().lower():
                return mass, True

        mass = UNIMOD_NAME_MASSES.get(name.strip().lower())
        if mass is None:
            return 0.0, False
        return mass, True

    def add_or_merge(self, definition: ModificationDefinition, use_next_symbol: bool) -> int:
        """
        Add a definition, or merge it into an equivalent one already present.

        Equivalent definitions share mass (at 3 decimals), kind, mass correction
        tag and affected atom. When the match is a dynamic or static modification,
        the target residues of `definition` are appended to it.

        Parameters
        ----------
        definition: ModificationDefinition
            The definition to register. Ownership passes to the registry when added.
        use_next_symbol: bool
            Give a newly added definition the next available symbol.

        Returns
        -------
        int
            Index of the added or matched definition.
        """
        for index, existing in enumerate(self.definitions):
            if not existing.is_equivalent(definition, self.consider_modification_symbol):
                continue

            if existing.mod_type in (ModificationType.DYNAMIC, ModificationType.STATIC):
                existing.add_target_residues(definition.target_residues)
            return index

        if use_next_symbol:
            if self.available_symbols:
                definition.symbol = self.available_symbols.popleft()
            else:
                logger.warning(
                    f"No modification symbols left; {definition!r} keeps symbol '{definition.symbol}'"
                )

        self.definitions.append(definition)
        return len(self.definitions) - 1

    def add_modification(
        self,
        symbol: str,
        mass: float,
        target_residues: str = "",
        mod_type: ModificationType = ModificationType.DYNAMIC,
        mass_correction_tag: Optional[str] = None,
        affected_atom: str = NO_AFFECTED_ATOM_SYMBOL,
        use_next_symbol: bool = False,
    ) -> int:
        """
        Create a definition and register it with `add_or_merge`.

        The mass correction tag is looked up by mass when not given. A symbol
        taken from the queue of available symbols is removed from that queue.
        """
        if mass_correction_tag is None or mass_correction_tag == INITIAL_UNKNOWN_MASS_CORRECTION_TAG_NAME:
            mass_correction_tag = self.lookup_mass_correction_tag(mass)

        if mod_type.is_static or mod_type is ModificationType.ISOTOPIC:
            symbol = NO_SYMBOL_MODIFICATION_SYMBOL
        elif symbol in self.available_symbols:
            self.available_symbols.remove(symbol)

        definition = ModificationDefinition(
            symbol=symbol,
            mass=mass,
            target_residues=target_residues,
            mod_type=mod_type,
            mass_correction_tag=mass_correction_tag,
            affected_atom=affected_atom,
        )
        return self.add_or_merge(definition, use_next_symbol)

    def resolve_dynamic_by_symbol_and_residue(
        self,
        symbol: str,
        residue: str,
        terminus_state: ResidueTerminusState = ResidueTerminusState.NONE,
    ) -> Tuple[ModificationDefinition, bool]:
        """
        Find the dynamic modification for a symbol found after `residue`.

        Searched in order:

        1. definitions with target residues that contain `residue` or a terminus
           symbol consistent with `terminus_state`; a protein terminus also
           satisfies the matching peptide terminus symbol,
        2. definitions without target residues,
        3. any definition with the symbol.

        Returns
        -------
        tuple
            (definition, found). When nothing matches, a new unregistered definition
            with mass 0 is returned and found is False.
        """
        candidates = self.definitions_of_type(*RESOLVABLE_BY_SYMBOL)

        if residue or terminus_state != ResidueTerminusState.NONE:
            for definition in candidates:
                if not definition.is_targeted or definition.symbol != symbol:
                    continue
                if self._symbol_target_matches(definition, residue, terminus_state):
                    return definition, True

        for definition in candidates:
            if not definition.is_targeted and definition.symbol == symbol:
                return definition, True

        for definition in candidates:
            if definition.symbol == symbol:
                return definition, True

        placeholder = ModificationDefinition(
            symbol=symbol,
            mass=0.0,
            mass_correction_tag=self.lookup_mass_correction_tag(0.0),
        )
        return placeholder, False

    @staticmethod
    def _symbol_target_matches(
        definition: ModificationDefinition, residue: str, terminus_state: ResidueTerminusState
    ) -> bool:
        if definition.target_residues_contain(residue):
            return True

        if terminus_state in (
            ResidueTerminusState.PROTEIN_N_TERMINUS,
            ResidueTerminusState.PROTEIN_N_AND_C_TERMINUS,
        ):
            if definition.target_residues_contain(N_TERMINAL_PROTEIN_SYMBOL):
                return True
        elif terminus_state == ResidueTerminusState.PEPTIDE_N_TERMINUS:
            if definition.target_residues_contain(N_TERMINAL_PEPTIDE_SYMBOL):
                return True

        if terminus_state in (
            ResidueTerminusState.PROTEIN_C_TERMINUS,
            ResidueTerminusState.PROTEIN_N_AND_C_TERMINUS,
        ):
            if definition.target_residues_contain(C_TERMINAL_PROTEIN_SYMBOL):
                return True
        elif terminus_state == ResidueTerminusState.PEPTIDE_C_TERMINUS:
            if definition.target_residues_contain(C_TERMINAL_PEPTIDE_SYMBOL):
                return True

        # Residues at a protein terminus are also at the peptide terminus
        if terminus_state in (
            ResidueTerminusState.PROTEIN_N_TERMINUS,
            ResidueTerminusState.PROTEIN_N_AND_C_TERMINUS,
        ) and definition.target_residues_contain(N_TERMINAL_PEPTIDE_SYMBOL):
            return True
        if terminus_state in (
            ResidueTerminusState.PROTEIN_C_TERMINUS,
            ResidueTerminusState.PROTEIN_N_AND_C_TERMINUS,
        ) and definition.target_residues_contain(C_TERMINAL_PEPTIDE_SYMBOL):
            return True

        return False

    @staticmethod
    def _mass_target_matches(
        definition: ModificationDefinition, residue: str, terminus_state: ResidueTerminusState
    ) -> bool:
        if residue and definition.target_residues_contain(residue):
            return True
        terminus_symbol = _terminus_target(terminus_state)
        return terminus_symbol is not None and definition.target_residues_contain(terminus_symbol)

    def resolve_by_mass(
        self,
        mass: float,
        residue: str = "",
        terminus_state: ResidueTerminusState = ResidueTerminusState.NONE,
        add_if_unknown: bool = True,
        precision: int = MASS_DIGITS_OF_PRECISION,
        loose_precision: int = MASS_DIGITS_OF_PRECISION,
    ) -> ModificationDefinition:
        """
        Find the modification for a numeric mass found on `residue`.

        Matching precedence:

        1. dynamic, static or unknown definitions within tolerance that target
           `residue` or the terminus the residue is on (closest mass wins),
        2. untargeted definitions within tolerance,
        3. standard refinement modifications (NH3 loss on Q, H2O loss on E),
        4. dynamic or unknown definitions within tolerance, whatever their
           targets; `residue` is added to the targets of the match,
        5. a new dynamic definition.

        Parameters
        ----------
        mass: float
            Modification mass.
        residue: str
            The modified residue; empty for a terminal modification.
        terminus_state: ResidueTerminusState
            Location of the residue within the peptide and protein.
        add_if_unknown: bool
            Register definitions created in step 3 and 5.
        precision: int
            Digits after the decimal point used when comparing masses.
        loose_precision: int
            Lenient precision for the mass correction tag of a new definition.

        Returns
        -------
        ModificationDefinition
        """
        if residue or terminus_state != ResidueTerminusState.NONE:
            matched = []
            for definition in self.definitions_of_type(*RESOLVABLE_BY_MASS):
                if not definition.is_targeted:
                    continue
                if not masses_match(definition.mass, mass, precision):
                    continue
                if self._mass_target_matches(definition, residue, terminus_state):
                    matched.append((abs(definition.mass - mass), definition))
            if matched:
                return _closest(matched)

        matched = [
            (abs(definition.mass - mass), definition)
            for definition in self.definitions_of_type(*RESOLVABLE_BY_MASS)
            if not definition.is_targeted and masses_match(definition.mass, mass, precision)
        ]
        if matched:
            return _closest(matched)

        if residue:
            for refinement in self.standard_refinement_modifications:
                if not masses_match(refinement.mass, mass, precision):
                    continue
                if not refinement.target_residues_contain(residue):
                    continue

                definition = refinement.copy()
                definition.symbol = LAST_RESORT_MODIFICATION_SYMBOL
                if add_if_unknown and self.available_symbols:
                    return self.definitions[self.add_or_merge(definition, use_next_symbol=True)]
                return definition

        matched = [
            (abs(definition.mass - mass), definition)
            for definition in self.definitions_of_type(*RESOLVABLE_BY_SYMBOL)
            if masses_match(definition.mass, mass, precision)
        ]
        if matched:
            definition = _closest(matched)
            if residue:
                definition.add_target_residues(residue)
            return definition

        return self._add_unknown_modification(
            mass,
            ModificationType.DYNAMIC,
            residue,
            terminus_state,
            add_if_unknown=add_if_unknown,
            use_next_symbol=True,
            symbol=LAST_RESORT_MODIFICATION_SYMBOL,
            precision=precision,
            loose_precision=loose_precision,
        )

    def resolve_by_mass_and_kind(
        self,
        mass: float,
        mod_type: ModificationType,
        residue: str = "",
        terminus_state: ResidueTerminusState = ResidueTerminusState.NONE,
        add_if_unknown: bool = True,
        precision: int = MASS_DIGITS_OF_PRECISION,
        loose_precision: int = MASS_DIGITS_OF_PRECISION,
    ) -> ModificationDefinition:
        """
        Like `resolve_by_mass`, but only considers definitions of kind `mod_type`.

        Static kinds get the no-symbol symbol and never consume a symbol from
        the queue; other kinds get the last resort symbol and take the next
        available symbol when registered.
        """
        if mod_type.is_static:
            symbol = NO_SYMBOL_MODIFICATION_SYMBOL
            use_next_symbol = False
        else:
            symbol = LAST_RESORT_MODIFICATION_SYMBOL
            use_next_symbol = True

        same_kind = self.definitions_of_type(mod_type)

        if residue or terminus_state != ResidueTerminusState.NONE:
            for definition in same_kind:
                if not definition.is_targeted or not masses_match(definition.mass, mass, precision):
                    continue
                if self._mass_target_matches(definition, residue, terminus_state):
                    return definition

        for definition in same_kind:
            if not definition.is_targeted and masses_match(definition.mass, mass, precision):
                return definition

        if residue:
            for refinement in self.standard_refinement_modifications:
                if not masses_match(refinement.mass, mass, precision):
                    continue
                if not refinement.target_residues_contain(residue):
                    continue

                definition = refinement.copy()
                definition.symbol = symbol
                definition.mod_type = mod_type
                if not add_if_unknown or not self.available_symbols:
                    return definition
                return self.definitions[self.add_or_merge(definition, use_next_symbol=True)]

        for definition in same_kind:
            if masses_match(definition.mass, mass, precision):
                if residue:
                    definition.add_target_residues(residue)
                return definition

        return self._add_unknown_modification(
            mass,
            mod_type,
            residue,
            terminus_state,
            add_if_unknown=add_if_unknown,
            use_next_symbol=use_next_symbol,
            symbol=symbol,
            precision=precision,
            loose_precision=loose_precision,
        )

    def _add_unknown_modification(
        self,
        mass: float,
        mod_type: ModificationType,
        residue: str,
        terminus_state: ResidueTerminusState,
        add_if_unknown: bool,
        use_next_symbol: bool,
        symbol: str,
        precision: int,
        loose_precision: int,
    ) -> ModificationDefinition:
        target_residues = residue or ""
        if terminus_state != ResidueTerminusState.NONE:
            target_residues = _terminus_target(terminus_state)

        if not use_next_symbol:
            symbol = NO_SYMBOL_MODIFICATION_SYMBOL

        definition = ModificationDefinition(
            symbol=symbol,
            mass=mass,
            target_residues=target_residues,
            mod_type=mod_type,
            mass_correction_tag=self.lookup_mass_correction_tag(
                mass, precision, True, loose_precision
            ),
            affected_atom=NO_AFFECTED_ATOM_SYMBOL,
            unknown_mod_auto_defined=True,
        )

        if not add_if_unknown:
            return definition

        index = self.add_or_merge(
            definition, use_next_symbol=use_next_symbol and len(self.available_symbols) > 0
        )
        if definition.symbol == LAST_RESORT_MODIFICATION_SYMBOL and self.definitions[index] is definition:
            logger.warning(
                f"Modification symbols exhausted; mass {mass:.4f} registered with symbol '{LAST_RESORT_MODIFICATION_SYMBOL}'"
            )
        return self.definitions[index]

    def verify_modification_present(
        self,
        mass: float,
        target_residues: str,
        mod_type: ModificationType,
        precision: int = MASS_DIGITS_OF_PRECISION,
    ) -> bool:
        """
        Make sure a modification with this kind, mass and target residues is registered.

        A new definition (with the next available symbol) is added when missing.
        """
        precision = max(precision, 0)
        for definition in self.definitions_of_type(mod_type):
            if not masses_match(definition.mass, mass, precision):
                continue
            if all(definition.target_residues_contain(r) for r in target_residues):
                return True

        definition = ModificationDefinition(
            mass=mass,
            target_residues=target_residues,
            mod_type=mod_type,
            mass_correction_tag=self.lookup_mass_correction_tag(mass),
        )
        self.add_or_merge(definition, use_next_symbol=True)
        return True

    def append_standard_refinement_modifications(self) -> None:
        for refinement in self.standard_refinement_modifications:
            self.verify_modification_present(
                refinement.mass, refinement.target_residues, refinement.mod_type
            )

    def _update_standard_refinement_modifications(self) -> None:
        self.standard_refinement_modifications = [
            ModificationDefinition(
                symbol=LAST_RESORT_MODIFICATION_SYMBOL,
                mass=mass,
                target_residues=residues,
                mod_type=ModificationType.DYNAMIC,
                mass_correction_tag=self.lookup_mass_correction_tag(mass),
            )
            for mass, residues in STANDARD_REFINEMENT_MODIFICATIONS
        ]

    def read_mass_correction_tags_file(self, file_path: str) -> Tuple[bool, bool]:
        """
        Load mass correction tags, replacing the current ones.

        Returns
        -------
        tuple
            (success, file_not_found)
        """
        success, file_not_found = self.mass_correction_tags.read_file(file_path)
        if file_not_found:
            self.error_message = f"Mass Correction Tags File Not Found: {file_path}"
        elif not success:
            self.error_message = f"Error reading Mass Correction Tags File: {file_path}"
        self._update_standard_refinement_modifications()
        return success, file_not_found

    def read_modification_definitions_file(self, file_path: str) -> Tuple[bool, bool]:
        """
        Load modification definitions from a tab-delimited file.

        Columns:

        1. modification symbol (single character)
        2. modification mass
        3. target residues; uppercase letters and the terminus symbols < > [ ]
        4. modification type: D, S, T, I or P; anything else means dynamic
        5. mass correction tag
        6. affected atom (isotopic modifications)

        Lines whose first column is not a single character, or whose second
        column is not a number, are skipped. A missing file leaves the registry
        empty with the default symbol queue.

        Returns
        -------
        tuple
            (success, file_not_found)
        """
        self.clear()
        if not file_path or not file_path.strip():
            return True, False

        if not os.path.isfile(file_path):
            self.error_message = f"Modification Definition File Not Found: {file_path}"
            logger.warning(self.error_message)
            return False, True

        try:
            with open(file_path, "r", encoding="utf-8") as handle:
                for line in handle:
                    definition = self._parse_definition_line(line.rstrip("\r\n"))
                    if definition is not None:
                        self.add_or_merge(definition, use_next_symbol=False)
        except (OSError, UnicodeDecodeError) as e:
            self.error_message = f"Error reading Modification Definition File {file_path}: {e}"
            logger.warning(self.error_message)
            self.clear()
            return False, False

        # Symbols in use may not be handed out again
        used = "".join(d.symbol for d in self.definitions)
        self.available_symbols = build_symbol_queue(DEFAULT_MODIFICATION_SYMBOLS, used)

        logger.info(f"Loaded {len(self.definitions)} modification definitions from {file_path}")
        return True, False

    def _parse_definition_line(self, line: str) -> Optional[ModificationDefinition]:
        columns = line.split("\t")
        if len(columns) < 2 or len(columns[0].strip()) != 1:
            return None
        try:
            mass = float(columns[1].strip())
        except ValueError:
            return None

        definition = ModificationDefinition(symbol=columns[0].strip(), mass=mass)

        if len(columns) >= 3:
            definition.target_residues = clean_target_residues(columns[2])

            if len(columns) >= 4:
                if len(columns[3].strip()) == 1:
                    definition.mod_type = ModificationType.select(columns[3])
                if definition.mod_type is ModificationType.UNKNOWN:
                    definition.mod_type = ModificationType.DYNAMIC

                if len(columns) >= 5:
                    definition.mass_correction_tag = columns[4].strip()

                    if len(columns) >= 6:
                        atom = columns[5].strip()
                        definition.affected_atom = atom[0] if atom else NO_AFFECTED_ATOM_SYMBOL

        if definition.mod_type is ModificationType.STATIC and len(definition.target_residues) == 1:
            if definition.target_residues in (N_TERMINAL_PEPTIDE_SYMBOL, C_TERMINAL_PEPTIDE_SYMBOL):
                definition.mod_type = ModificationType.TERMINAL_PEPTIDE_STATIC
            elif definition.target_residues in (N_TERMINAL_PROTEIN_SYMBOL, C_TERMINAL_PROTEIN_SYMBOL):
                definition.mod_type = ModificationType.PROTEIN_TERMINUS_STATIC

        valid = True
        if definition.mod_type is ModificationType.ISOTOPIC:
            definition.symbol = NO_SYMBOL_MODIFICATION_SYMBOL
            valid = definition.affected_atom != NO_AFFECTED_ATOM_SYMBOL
        elif definition.mod_type is ModificationType.TERMINAL_PEPTIDE_STATIC:
            definition.symbol = NO_SYMBOL_MODIFICATION_SYMBOL
            valid = definition.target_residues in (N_TERMINAL_PEPTIDE_SYMBOL, C_TERMINAL_PEPTIDE_SYMBOL)
        elif definition.mod_type is ModificationType.PROTEIN_TERMINUS_STATIC:
            definition.symbol = NO_SYMBOL_MODIFICATION_SYMBOL
            valid = definition.target_residues in (N_TERMINAL_PROTEIN_SYMBOL, C_TERMINAL_PROTEIN_SYMBOL)
        elif definition.mod_type is ModificationType.STATIC:
            definition.symbol = NO_SYMBOL_MODIFICATION_SYMBOL
        elif definition.mod_type is ModificationType.UNKNOWN:
            definition.mod_type = ModificationType.DYNAMIC

        if not valid:
            logger.warning(f"Skipping invalid modification definition: {line!r}")
            return None

        if definition.mass_correction_tag in ("", INITIAL_UNKNOWN_MASS_CORRECTION_TAG_NAME):
            definition.mass_correction_tag = self.lookup_mass_correction_tag(definition.mass)

        return definition

    @classmethod
    def from_files(
        cls,
        modification_definitions_path: str = "",
        mass_correction_tags_path: str = "",
        consider_modification_symbol: bool = False,
    ) -> "ModificationRegistry":
        """
        Build a registry from a mass correction tags file and a modification definitions file.

        Missing files are logged and the defaults are used; check `error_message`
        on the returned registry.
        """
        registry = cls(consider_modification_symbol=consider_modification_symbol)
        if mass_correction_tags_path:
            registry.read_mass_correction_tags_file(mass_correction_tags_path)
        registry.read_modification_definitions_file(modification_definitions_path)
        return registry
