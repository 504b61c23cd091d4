"""Modification definition and the enums describing where a modification applies."""

from enum import Enum, IntEnum

from ..constants import (
    INITIAL_UNKNOWN_MASS_CORRECTION_TAG_NAME,
    MASS_DIGITS_OF_PRECISION,
    NO_AFFECTED_ATOM_SYMBOL,
    NO_SYMBOL_MODIFICATION_SYMBOL,
    TERMINUS_SYMBOLS,
)
from ..exceptions import ModificationTypeNotSupported


class ModificationType(Enum):
    """
    Kinds of residue modifications.

    Each member holds its numeric code and the one-letter code used in
    modification definition files. Use the `select` classmethod to go from
    a one-letter code to a member.

    Example
    -------
    >>> ModificationType.select('S')
    <ModificationType.STATIC: (2, 'S')>
    """

    UNKNOWN = (0, "?")
    DYNAMIC = (1, "D")
    STATIC = (2, "S")
    TERMINAL_PEPTIDE_STATIC = (3, "T")
    ISOTOPIC = (4, "I")
    PROTEIN_TERMINUS_STATIC = (5, "P")

    def __init__(self, code: int, letter: str) -> None:
        self.code = code
        self.letter = letter

    @property
    def is_static(self) -> bool:
        """True for every kind that is applied without a modification symbol."""
        return self in (
            ModificationType.STATIC,
            ModificationType.TERMINAL_PEPTIDE_STATIC,
            ModificationType.PROTEIN_TERMINUS_STATIC,
        )

    @classmethod
    def select(cls, letter: str, strict: bool = False):
        """
        Select a modification type by its one-letter code.

        Parameters
        ----------
        letter : str
            One of 'D', 'S', 'T', 'I', 'P'. Case-insensitive.
        strict : bool
            Raise when the code is not recognized instead of
            returning `ModificationType.UNKNOWN`.

        Returns
        -------
        ModificationType

        Raises
        ------
        ModificationTypeNotSupported
            If `strict` is set and the code is not recognized.
        """
        code = (letter or "").strip().upper()
        for mod_type in cls:
            if mod_type is not cls.UNKNOWN and mod_type.letter == code:
                return mod_type

        if strict:
            raise ModificationTypeNotSupported(
                letter, [m.letter for m in cls if m is not cls.UNKNOWN]
            )
        return cls.UNKNOWN


class ResidueTerminusState(IntEnum):
    """Location of a single residue relative to the peptide and protein termini."""

    NONE = 0
    PEPTIDE_N_TERMINUS = 1
    PEPTIDE_C_TERMINUS = 2
    PROTEIN_N_TERMINUS = 3
    PROTEIN_C_TERMINUS = 4
    PROTEIN_N_AND_C_TERMINUS = 5

    @property
    def is_n_terminal(self) -> bool:
        return self in (
            ResidueTerminusState.PEPTIDE_N_TERMINUS,
            ResidueTerminusState.PROTEIN_N_TERMINUS,
            ResidueTerminusState.PROTEIN_N_AND_C_TERMINUS,
        )

    @property
    def is_c_terminal(self) -> bool:
        return self in (
            ResidueTerminusState.PEPTIDE_C_TERMINUS,
            ResidueTerminusState.PROTEIN_C_TERMINUS,
            ResidueTerminusState.PROTEIN_N_AND_C_TERMINUS,
        )


def masses_match(mass_a: float, mass_b: float, precision: int = MASS_DIGITS_OF_PRECISION) -> bool:
    """
    Compare two masses at a given number of decimal digits.

    Two masses match when their absolute difference rounds to zero.
    """
    return round(abs(mass_a - mass_b), precision) == 0


class ModificationDefinition:
    """
    A single modification: its symbol, mass, target residues and kind.

    Parameters
    ----------
    symbol: str
        Single character used in peptide strings. Static kinds use '-'.
    mass: float
        Monoisotopic mass delta.
    target_residues: str
        Residues (and terminus sentinels '<', '>', '[', ']') the modification
        can be found on. An empty string means any residue.
    mod_type: ModificationType
        Kind of modification.
    mass_correction_tag: str
        Short name of the modification, e.g. 'Phosph'.
    affected_atom: str
        Element symbol for isotopic modifications, '-' otherwise.
    unknown_mod_auto_defined: bool
        Set when the definition was created for an unexpected mass.
    """

    def __init__(
        self,
        symbol: str = NO_SYMBOL_MODIFICATION_SYMBOL,
        mass: float = 0.0,
        target_residues: str = "",
        mod_type: ModificationType = ModificationType.UNKNOWN,
        mass_correction_tag: str = INITIAL_UNKNOWN_MASS_CORRECTION_TAG_NAME,
        affected_atom: str = NO_AFFECTED_ATOM_SYMBOL,
        unknown_mod_auto_defined: bool = False,
    ):
        self.symbol = symbol or NO_SYMBOL_MODIFICATION_SYMBOL
        self.mass = float(mass)
        self.target_residues = target_residues or ""
        self.mod_type = mod_type
        self.mass_correction_tag = (
            mass_correction_tag
            if mass_correction_tag is not None
            else INITIAL_UNKNOWN_MASS_CORRECTION_TAG_NAME
        )
        self.affected_atom = affected_atom or NO_AFFECTED_ATOM_SYMBOL
        self.unknown_mod_auto_defined = unknown_mod_auto_defined
        self.occurrence_count = 0

    def __repr__(self):
        return "{} {}, {:.4f}; {}".format(
            self.mod_type.name, self.mass_correction_tag, self.mass, self.target_residues
        )

    def copy(self) -> "ModificationDefinition":
        """Return an unregistered copy, with the occurrence count reset."""
        return ModificationDefinition(
            symbol=self.symbol,
            mass=self.mass,
            target_residues=self.target_residues,
            mod_type=self.mod_type,
            mass_correction_tag=self.mass_correction_tag,
            affected_atom=self.affected_atom,
            unknown_mod_auto_defined=self.unknown_mod_auto_defined,
        )

    @property
    def is_targeted(self) -> bool:
        return len(self.target_residues) > 0

    def target_residues_contain(self, residue: str) -> bool:
        if not residue:
            return False
        return residue in self.target_residues

    def add_target_residues(self, residues: str) -> None:
        """Append residues that are not yet targeted, preserving order."""
        for residue in residues:
            if residue not in self.target_residues:
                self.target_residues += residue

    def can_affect_peptide_residues(self) -> bool:
        """
        Return False for modifications that only target a peptide or protein terminus.
        """
        if self.mod_type in (
            ModificationType.PROTEIN_TERMINUS_STATIC,
            ModificationType.TERMINAL_PEPTIDE_STATIC,
        ):
            return False
        if not self.target_residues:
            return True
        return any(r not in TERMINUS_SYMBOLS for r in self.target_residues)

    def can_affect_peptide_or_protein_terminus(self) -> bool:
        if self.mod_type in (
            ModificationType.PROTEIN_TERMINUS_STATIC,
            ModificationType.TERMINAL_PEPTIDE_STATIC,
        ):
            return True
        return any(r in TERMINUS_SYMBOLS for r in self.target_residues)

    def equivalent_mass_type_tag_atom(
        self, other: "ModificationDefinition", precision: int = MASS_DIGITS_OF_PRECISION
    ) -> bool:
        """
        Compare mass (at `precision` digits), kind, mass correction tag and affected atom.

        Symbol and target residues are not considered.
        """
        return (
            masses_match(self.mass, other.mass, precision)
            and self.mod_type == other.mod_type
            and self.mass_correction_tag == other.mass_correction_tag
            and self.affected_atom == other.affected_atom
        )

    def is_equivalent(
        self,
        other: "ModificationDefinition",
        consider_symbol: bool = False,
        precision: int = MASS_DIGITS_OF_PRECISION,
    ) -> bool:
        """
        Whether `other` can be merged into this definition.

        Parameters
        ----------
        other: ModificationDefinition
            The candidate definition.
        consider_symbol: bool
            Also require identical symbols. Needed when one parameter file
            defines the same mass on different residues with different symbols.
        precision: int
            Number of decimal digits used for the mass comparison.
        """
        if not self.equivalent_mass_type_tag_atom(other, precision):
            return False
        if consider_symbol and self.symbol != other.symbol:
            return False
        return True
