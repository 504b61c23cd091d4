"""
Test cleavage state, terminus state and missed cleavage calculations.
"""

import pytest

from phrp_utils.exceptions import CleavageAgentNotSupported
from phrp_utils.peptide import (
    CleavageAgent,
    PeptideCleavageState,
    PeptideCleavageStateCalculator,
    PeptideTerminusState,
    extract_clean_sequence_from_sequence_with_mods,
    split_prefix_and_suffix_from_sequence,
)
from phrp_utils.peptide.cleavage import find_letter_nearest_end, find_letter_nearest_start


@pytest.fixture
def trypsin():
    return PeptideCleavageStateCalculator()


@pytest.mark.parametrize(
    "sequence,expected",
    [
        ("K.PEPTIDE.R", ("PEPTIDE", "K", "R")),
        ("-.PEPTIDE.-", ("PEPTIDE", "-", "-")),
        ("..PEPTIDE..", ("PEPTIDE", "", "")),
        ("K.PEPTIDE", ("PEPTIDE", "K", "")),
        ("PEPTIDE.R", ("PEPTIDE", "", "R")),
        ("RPEP.TIDESEQK.L", ("TIDESEQK", "RPEP", "L")),
        ("K.PEPT*IDE.R", ("PEPT*IDE", "K", "R")),
        ("PEPT+79.966IDE.R", ("PEPT+79.966IDE", "", "R")),
        ("K.PEPT+79.966IDE", ("PEPT+79.966IDE", "K", "")),
        ("K.PEPT+79.966IDE.R", ("PEPT+79.966IDE", "K", "R")),
    ],
)
def test_split_prefix_and_suffix(sequence, expected):
    assert split_prefix_and_suffix_from_sequence(sequence) == expected


def test_split_without_periods():
    assert split_prefix_and_suffix_from_sequence("PEPTIDE") is None
    assert split_prefix_and_suffix_from_sequence("") is None
    assert split_prefix_and_suffix_from_sequence("PEPT+79.966IDE") is None


def test_extract_clean_sequence():
    assert extract_clean_sequence_from_sequence_with_mods("K.PEP*TIDE#.R") == "PEPTIDE"
    assert extract_clean_sequence_from_sequence_with_mods("PEP*TIDE", False) == "PEPTIDE"
    assert extract_clean_sequence_from_sequence_with_mods(None) == ""


def test_find_letter_nearest():
    assert find_letter_nearest_end("") == "-"
    assert find_letter_nearest_end("AK*") == "K"
    assert find_letter_nearest_start("*R") == "R"
    assert find_letter_nearest_start("]") == "]"


@pytest.mark.parametrize(
    "clean,prefix,suffix,expected",
    [
        ("AEPTIDEK", "K", "A", PeptideCleavageState.FULL),
        ("PEPTIDEK", "K", "A", PeptideCleavageState.PARTIAL),
        ("AEPTIDEA", "G", "A", PeptideCleavageState.NON_SPECIFIC),
        ("PEPTIDEK", "-", "A", PeptideCleavageState.FULL),
        ("PEPTIDE", "-", "A", PeptideCleavageState.NON_SPECIFIC),
        ("AEPTIDE", "K", "-", PeptideCleavageState.FULL),
        ("PEPTIDE", "-", "-", PeptideCleavageState.FULL),
        ("", "K", "A", PeptideCleavageState.NON_SPECIFIC),
    ],
)
def test_trypsin_cleavage_state(trypsin, clean, prefix, suffix, expected):
    assert trypsin.compute_cleavage_state(clean, prefix, suffix) == expected


def test_cleavage_state_from_sequence(trypsin):
    assert trypsin.compute_cleavage_state_from_sequence("K.AEPTIDEK.A") == PeptideCleavageState.FULL
    assert trypsin.compute_cleavage_state_from_sequence("AEPTIDEK") == PeptideCleavageState.NON_SPECIFIC


@pytest.mark.parametrize(
    "prefix,suffix,expected",
    [
        ("-", "K", PeptideTerminusState.PROTEIN_N_TERMINUS),
        ("K", "]", PeptideTerminusState.PROTEIN_C_TERMINUS),
        ("[", "]", PeptideTerminusState.PROTEIN_N_AND_C_TERMINUS),
        ("K", "A", PeptideTerminusState.NONE),
    ],
)
def test_terminus_state(trypsin, prefix, suffix, expected):
    assert trypsin.compute_terminus_state("PEPTIDE", prefix, suffix) == expected


def test_terminus_state_empty_sequence(trypsin):
    assert trypsin.compute_terminus_state("", "-", "-") == PeptideTerminusState.NONE


def test_missed_cleavages(trypsin):
    assert trypsin.compute_number_of_missed_cleavages("K.PEPKTIDERK.A") == 2
    assert trypsin.compute_number_of_missed_cleavages("PEKPTIDE") == 0
    assert trypsin.compute_number_of_missed_cleavages("K.PEK*TIDE.R") == 1
    assert trypsin.compute_number_of_missed_cleavages("") == 0


def test_select_cleavage_agent():
    assert CleavageAgent.select("GluC") is CleavageAgent.GLUC
    assert CleavageAgent.select(" trypsin ") is CleavageAgent.TRYPSIN
    with pytest.raises(CleavageAgentNotSupported):
        CleavageAgent.select("pepsin")


def test_gluc_rules():
    calculator = PeptideCleavageStateCalculator(CleavageAgent.GLUC)
    assert calculator.compute_cleavage_state("AEPTIDE", "E", "A") == PeptideCleavageState.FULL
    assert calculator.compute_cleavage_state("AEPTIDEK", "K", "A") == PeptideCleavageState.NON_SPECIFIC


def test_endo_aspn_cuts_before_aspartate():
    calculator = PeptideCleavageStateCalculator(CleavageAgent.ENDO_ASPN)
    assert calculator.compute_cleavage_state("DAK", "A", "D") == PeptideCleavageState.FULL
    assert calculator.compute_cleavage_state("AAK", "A", "G") == PeptideCleavageState.NON_SPECIFIC


def test_trypsin_without_proline_rule():
    calculator = PeptideCleavageStateCalculator(CleavageAgent.TRYPSIN_WITHOUT_PROLINE_RULE)
    assert calculator.compute_cleavage_state("PEPTIDEK", "K", "P") == PeptideCleavageState.FULL


def test_generic_residue_rules():
    calculator = PeptideCleavageStateCalculator()
    calculator.set_enzyme_match_spec("X", "[^X]")
    assert calculator.left_residue_regex == "[A-Z]"
    assert calculator.right_residue_regex == "[^A-Z]"

    calculator.set_enzyme_match_spec("", "[X]")
    assert calculator.right_residue_regex == "[A-Z]"
    assert calculator.compute_cleavage_state("AAA", "G", "G") == PeptideCleavageState.FULL
