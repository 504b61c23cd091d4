"""Cleavage state, terminus state and missed cleavages of peptides."""

import re
from enum import Enum, IntEnum
from typing import Optional, Tuple

from ..constants import (
    TERMINUS_SYMBOL_SEQUEST,
    TERMINUS_SYMBOL_XTANDEM_CTERMINUS,
    TERMINUS_SYMBOL_XTANDEM_NTERMINUS,
)
from ..exceptions import CleavageAgentNotSupported

GENERIC_RESIDUE_SYMBOL = "X"
TRYPSIN_LEFT_RESIDUE_REGEX = "[KR]"
TRYPSIN_RIGHT_RESIDUE_REGEX = "[^P]"

TERMINUS_SYMBOLS = {
    TERMINUS_SYMBOL_SEQUEST,
    TERMINUS_SYMBOL_XTANDEM_NTERMINUS,
    TERMINUS_SYMBOL_XTANDEM_CTERMINUS,
}

NOT_LETTER_PATTERN = re.compile(r"[^A-Za-z]")
DECIMAL_POINT_PATTERN = re.compile(r"(?<=\d)\.(?=\d)")


class PeptideCleavageState(IntEnum):
    UNKNOWN = -1
    NON_SPECIFIC = 0
    PARTIAL = 1
    FULL = 2


class PeptideTerminusState(IntEnum):
    """Location of a peptide relative to its protein's termini."""

    NONE = 0
    PROTEIN_N_TERMINUS = 1
    PROTEIN_C_TERMINUS = 2
    PROTEIN_N_AND_C_TERMINUS = 3

    @property
    def at_protein_n_terminus(self) -> bool:
        return self in (PeptideTerminusState.PROTEIN_N_TERMINUS, PeptideTerminusState.PROTEIN_N_AND_C_TERMINUS)

    @property
    def at_protein_c_terminus(self) -> bool:
        return self in (PeptideTerminusState.PROTEIN_C_TERMINUS, PeptideTerminusState.PROTEIN_N_AND_C_TERMINUS)


class CleavageAgent(Enum):
    """
    Enzymes (and chemical agents) with their cleavage rules.

    Each rule is a pair of regular expressions: the residue left of the
    cleavage site and the residue right of it.

    Example
    -------
    >>> agent = CleavageAgent.select('gluc')
    >>> agent.left_residue_regex
    '[ED]'
    """

    TRYPSIN = ("trypsin", TRYPSIN_LEFT_RESIDUE_REGEX, TRYPSIN_RIGHT_RESIDUE_REGEX)
    TRYPSIN_WITHOUT_PROLINE_RULE = ("trypsin_without_proline_rule", "[KR]", "[A-Z]")
    TRYPSIN_PLUS_FVLEY = ("trypsin_plus_fvley", "[KRFYVEL]", "[A-Z]")
    CHYMOTRYPSIN = ("chymotrypsin", "[FWYL]", "[A-Z]")
    CHYMOTRYPSIN_AND_TRYPSIN = ("chymotrypsin_and_trypsin", "[FWYLKR]", "[A-Z]")
    GLUC = ("gluc", "[ED]", "[A-Z]")
    CYANBR = ("cyanbr", "[M]", "[A-Z]")
    ENDO_ARGC = ("endo_argc", "[R]", "[A-Z]")
    ENDO_LYSC = ("endo_lysc", "[K]", "[A-Z]")
    ENDO_ASPN = ("endo_aspn", "[A-Z]", "[D]")
    NO_ENZYME = ("no_enzyme", "[A-Z]", "[A-Z]")

    def __init__(self, label: str, left_residue_regex: str, right_residue_regex: str) -> None:
        self.label = label
        self.left_residue_regex = left_residue_regex
        self.right_residue_regex = right_residue_regex

    @classmethod
    def select(cls, label: str):
        """
        Select a cleavage agent by its label.

        Parameters
        ----------
        label : str
            Case-insensitive label, e.g. 'trypsin', 'chymotrypsin' or 'endo_aspn'.

        Returns
        -------
        CleavageAgent

        Raises
        ------
        CleavageAgentNotSupported
            If the label does not match any known agent.
        """
        for agent in cls:
            if agent.label == label.strip().lower():
                return agent
        raise CleavageAgentNotSupported(label, [a.label for a in cls])


def split_prefix_and_suffix_from_sequence(sequence: str) -> Optional[Tuple[str, str, str]]:
    """
    Split a peptide such as 'K.PEPTIDE.R' into its parts.

    Handles '..' at either end, a single period at the start or end, and
    one-residue prefixes or suffixes (e.g. 'K.PEPTIDE' or 'PEPTIDE.R').

    Parameters
    ----------
    sequence: str
        Peptide string, possibly with modification symbols.

    Returns
    -------
    tuple or None
        (primary sequence, prefix, suffix), or None when the sequence does
        not hold prefix or suffix residues.
    """
    if not sequence:
        return None

    if sequence.startswith("..") and len(sequence) > 2:
        sequence = "." + sequence[2:]
    if sequence.endswith("..") and len(sequence) > 2:
        sequence = sequence[:-2] + "."

    # Decimal points of inline masses (PEPT+79.966IDE) are not separators
    masked = DECIMAL_POINT_PATTERN.sub(" ", sequence)
    period_loc1 = masked.find(".")
    if period_loc1 < 0:
        return None
    period_loc2 = masked.rfind(".")

    if period_loc2 > period_loc1 + 1:
        # Letters between the periods, e.g. R.PEPTIDEK.L or RPEP.TIDESEQK.L
        return (
            sequence[period_loc1 + 1:period_loc2],
            sequence[:period_loc1],
            sequence[period_loc2 + 1:],
        )

    if period_loc2 == period_loc1 + 1:
        # Two periods in a row
        if period_loc1 <= 1:
            return "", sequence[:period_loc1], sequence[period_loc2 + 1:]
        return None

    # Only one period
    if period_loc1 == 0:
        return sequence[1:], "", ""
    if period_loc1 == len(sequence) - 1:
        return sequence[:period_loc1], "", ""
    if period_loc1 == 1 and len(sequence) > 2:
        return sequence[period_loc1 + 1:], sequence[:period_loc1], ""
    if period_loc1 == len(sequence) - 2:
        return sequence[:period_loc1], "", sequence[period_loc1 + 1:]
    return None


def extract_clean_sequence_from_sequence_with_mods(
    sequence_with_mods: Optional[str], check_for_prefix_and_suffix: bool = True
) -> str:
    """Remove flanking residues (optionally) and every non-letter character."""
    if sequence_with_mods is None:
        return ""
    if check_for_prefix_and_suffix:
        parts = split_prefix_and_suffix_from_sequence(sequence_with_mods)
        if parts is not None:
            return NOT_LETTER_PATTERN.sub("", parts[0])
    return NOT_LETTER_PATTERN.sub("", sequence_with_mods)


def _is_letter(char: str) -> bool:
    return ("A" <= char <= "Z") or ("a" <= char <= "z")


def find_letter_nearest_end(text: str) -> str:
    """Last letter or terminus symbol in `text`; '-' when `text` is empty."""
    if not text:
        return TERMINUS_SYMBOL_SEQUEST
    for char in reversed(text):
        if _is_letter(char) or char in TERMINUS_SYMBOLS:
            return char
    return text[0]


def find_letter_nearest_start(text: str) -> str:
    """First letter or terminus symbol in `text`; '-' when `text` is empty."""
    if not text:
        return TERMINUS_SYMBOL_SEQUEST
    for char in text:
        if _is_letter(char) or char in TERMINUS_SYMBOLS:
            return char
    return text[-1]


class PeptideCleavageStateCalculator:
    """
    Classify peptides by their cleavage specificity and location in the protein.

    Parameters
    ----------
    agent: CleavageAgent
        Cleavage rules to test against. Trypsin when omitted.
    """

    def __init__(self, agent: CleavageAgent = CleavageAgent.TRYPSIN):
        self.left_residue_regex = TRYPSIN_LEFT_RESIDUE_REGEX
        self.right_residue_regex = TRYPSIN_RIGHT_RESIDUE_REGEX
        self._left_pattern = None
        self._right_pattern = None
        self._using_standard_trypsin_rules = True
        self.set_standard_enzyme_match_spec(agent)

    def set_standard_enzyme_match_spec(self, agent: CleavageAgent) -> None:
        self.set_enzyme_match_spec(agent.left_residue_regex, agent.right_residue_regex)

    def set_enzyme_match_spec(self, left_residue_regex: str, right_residue_regex: str) -> None:
        """
        Use custom cleavage rules. 'X' (or '[X]') means any residue; an empty rule means any residue.
        """
        left_residue_regex = self._normalize_rule(left_residue_regex)
        right_residue_regex = self._normalize_rule(right_residue_regex)

        self.left_residue_regex = left_residue_regex
        self.right_residue_regex = right_residue_regex
        self._left_pattern = re.compile(left_residue_regex, re.IGNORECASE)
        self._right_pattern = re.compile(right_residue_regex, re.IGNORECASE)
        self._using_standard_trypsin_rules = (
            left_residue_regex == TRYPSIN_LEFT_RESIDUE_REGEX
            and right_residue_regex == TRYPSIN_RIGHT_RESIDUE_REGEX
        )

    @staticmethod
    def _normalize_rule(rule: str) -> str:
        if not rule or rule in (GENERIC_RESIDUE_SYMBOL, f"[{GENERIC_RESIDUE_SYMBOL}]"):
            return "[A-Z]"
        if rule == f"[^{GENERIC_RESIDUE_SYMBOL}]":
            return "[^A-Z]"
        return rule

    def test_cleavage_rule(self, left_char: str, right_char: str) -> bool:
        if self._using_standard_trypsin_rules:
            return left_char in ("K", "R") and right_char != "P"
        return bool(self._left_pattern.match(left_char)) and bool(self._right_pattern.match(right_char))

    @staticmethod
    def compute_terminus_state_from_residues(prefix: str, suffix: str) -> PeptideTerminusState:
        """Terminus state from the residue before and after the peptide."""
        if prefix in TERMINUS_SYMBOLS:
            if suffix in TERMINUS_SYMBOLS:
                return PeptideTerminusState.PROTEIN_N_AND_C_TERMINUS
            return PeptideTerminusState.PROTEIN_N_TERMINUS
        if suffix in TERMINUS_SYMBOLS:
            return PeptideTerminusState.PROTEIN_C_TERMINUS
        return PeptideTerminusState.NONE

    def compute_terminus_state(
        self, clean_sequence: str, prefix_residues: str, suffix_residues: str
    ) -> PeptideTerminusState:
        if not clean_sequence:
            return PeptideTerminusState.NONE
        return self.compute_terminus_state_from_residues(
            find_letter_nearest_end(prefix_residues), find_letter_nearest_start(suffix_residues)
        )

    def compute_cleavage_state(
        self, clean_sequence: str, prefix_residues: str, suffix_residues: str
    ) -> PeptideCleavageState:
        """
        Determine whether a peptide is fully, partially or non-specifically cleaved.

        Peptides at a protein terminus can only be fully cleaved or non-specific.

        Parameters
        ----------
        clean_sequence: str
            Peptide residues.
        prefix_residues: str
            Residue(s) before the peptide; '-' at the protein N-terminus.
        suffix_residues: str
            Residue(s) after the peptide; '-' at the protein C-terminus.

        Returns
        -------
        PeptideCleavageState
        """
        if not clean_sequence:
            return PeptideCleavageState.NON_SPECIFIC

        prefix = find_letter_nearest_end(prefix_residues)
        suffix = find_letter_nearest_start(suffix_residues)
        sequence_start = find_letter_nearest_start(clean_sequence)
        sequence_end = find_letter_nearest_end(clean_sequence)

        terminus_state = self.compute_terminus_state_from_residues(prefix, suffix)

        if terminus_state == PeptideTerminusState.PROTEIN_N_AND_C_TERMINUS:
            # Spans the whole protein
            return PeptideCleavageState.FULL

        if terminus_state == PeptideTerminusState.PROTEIN_N_TERMINUS:
            if self.test_cleavage_rule(sequence_end, suffix):
                return PeptideCleavageState.FULL
            return PeptideCleavageState.NON_SPECIFIC

        if terminus_state == PeptideTerminusState.PROTEIN_C_TERMINUS:
            if self.test_cleavage_rule(prefix, sequence_start):
                return PeptideCleavageState.FULL
            return PeptideCleavageState.NON_SPECIFIC

        rule_match_start = self.test_cleavage_rule(prefix, sequence_start)
        rule_match_end = self.test_cleavage_rule(sequence_end, suffix)
        if rule_match_start and rule_match_end:
            return PeptideCleavageState.FULL
        if rule_match_start or rule_match_end:
            return PeptideCleavageState.PARTIAL
        return PeptideCleavageState.NON_SPECIFIC

    def compute_cleavage_state_from_sequence(self, sequence_with_prefix_and_suffix: str) -> PeptideCleavageState:
        parts = split_prefix_and_suffix_from_sequence(sequence_with_prefix_and_suffix)
        if parts is None:
            return PeptideCleavageState.NON_SPECIFIC
        primary, prefix, suffix = parts
        return self.compute_cleavage_state(
            extract_clean_sequence_from_sequence_with_mods(primary, False), prefix, suffix
        )

    def compute_number_of_missed_cleavages(self, sequence: str) -> int:
        """
        Count internal cleavage sites in a peptide.

        Flanking residues (e.g. 'K.PEPTIDER.A') are removed first; modification
        symbols are ignored.
        """
        parts = split_prefix_and_suffix_from_sequence(sequence)
        primary = parts[0] if parts is not None else sequence
        if not primary or not primary.strip():
            return 0

        missed_cleavages = 0
        previous_letter = ""
        for char in primary:
            if not _is_letter(char):
                continue
            if previous_letter and self.test_cleavage_rule(previous_letter, char):
                missed_cleavages += 1
            previous_letter = char
        return missed_cleavages
