"""
Test peptide mass calculations.
"""

import pytest

from phrp_utils.constants import AMINO_ACID_MASSES, MASS_PROTON
from phrp_utils.peptide import PeptideMassCalculator, PeptideSequenceModInfo, mass_to_ppm, ppm_to_mass

PEPTIDE_RESIDUE_MASS = sum(AMINO_ACID_MASSES[r] for r in "PEPTIDE")


def test_unmodified_peptide_mass(calculator):
    calculator.peptide_n_terminus_mass = 1.0078246
    calculator.peptide_c_terminus_mass = 17.0027387

    mass = calculator.compute_sequence_mass("PEPTIDE")
    assert mass == pytest.approx(PEPTIDE_RESIDUE_MASS + 18.0105633, abs=1e-4)
    assert mass == pytest.approx(799.35993, abs=1e-4)


def test_terminus_mass_change_applies_to_later_calls(calculator):
    before = calculator.compute_sequence_mass("PEPTIDE")
    calculator.peptide_n_terminus_mass = 0.0
    after = calculator.compute_sequence_mass("PEPTIDE")

    assert before - after == pytest.approx(1.0078246)
    calculator.reset_terminus_masses()
    assert calculator.compute_sequence_mass("PEPTIDE") == pytest.approx(before)


def test_empty_sequence(calculator):
    assert calculator.compute_sequence_mass("") == 0.0


def test_unknown_residue(calculator):
    assert calculator.compute_sequence_mass("PEP1") == -1
    assert "Unknown symbol" in calculator.error_message


def test_positional_modification(calculator):
    base = calculator.compute_sequence_mass("PEPTIDE")
    mass = calculator.compute_sequence_mass("PEPTIDE", [PeptideSequenceModInfo(4, 79.9663)])
    assert mass == pytest.approx(base + 79.9663)


def test_isotopic_modification_counts_atoms(calculator):
    base = calculator.compute_sequence_mass("PEPTIDE")
    mass = calculator.compute_sequence_mass("PEPTIDE", [PeptideSequenceModInfo(0, 0.997035, "N")])
    # One nitrogen per residue of PEPTIDE
    assert mass == pytest.approx(base + 7 * 0.997035)


def test_isotopic_modification_unknown_element(calculator):
    assert calculator.compute_sequence_mass("PEPTIDE", [PeptideSequenceModInfo(0, 1.0, "Qq")]) == -1


def test_numeric_mods(calculator):
    base = calculator.compute_sequence_mass("PEPTIDE")
    assert calculator.compute_sequence_mass_numeric_mods("PEPT+79.9663IDE") == pytest.approx(base + 79.9663)
    assert calculator.compute_sequence_mass_numeric_mods("PEPTIDE-18.0106") == pytest.approx(base - 18.0106)


def test_strip_prefix_and_suffix(calculator):
    base = calculator.compute_sequence_mass("PEPTIDE")
    assert calculator.compute_sequence_mass("K.PEPTIDE.R", strip_prefix_suffix=True) == pytest.approx(base)

    stripping = PeptideMassCalculator(remove_prefix_and_suffix=True)
    assert stripping.compute_sequence_mass("-.PEPTIDE.-") == pytest.approx(base)


def test_amino_acid_mass_override(calculator):
    assert calculator.get_amino_acid_mass("C") == pytest.approx(103.00918)
    assert calculator.set_amino_acid_mass("C", 160.03065)
    assert calculator.get_amino_acid_mass("C") == pytest.approx(160.03065)
    assert not calculator.set_amino_acid_mass("1", 10.0)

    calculator.reset_amino_acid_masses()
    assert calculator.get_amino_acid_mass("C") == pytest.approx(103.00918)


def test_convolute_mass(calculator):
    mass = 1000.0
    mz = calculator.convolute_mass(mass, 0, 2)

    assert mz == pytest.approx((mass + 2 * MASS_PROTON) / 2)
    assert calculator.convolute_mass(mz, 2, 0) == pytest.approx(mass)
    assert calculator.mh_to_monoisotopic_mass(mass + MASS_PROTON) == pytest.approx(mass)
    assert calculator.monoisotopic_mass_to_mz(mass, 1) == pytest.approx(mass + MASS_PROTON)
    assert calculator.convolute_mass(mass, -1, 1) == 0.0


def test_ppm_conversion():
    assert mass_to_ppm(0.001, 1000.0) == pytest.approx(1.0)
    assert ppm_to_mass(1.0, 1000.0) == pytest.approx(0.001)
