"""
Test processing of peptide hit tables.
"""

import pandas as pd
import pytest

from phrp_utils.config import ProcessingOptions
from phrp_utils.constants import MASS_PROTON
from phrp_utils.exceptions import CleavageAgentNotSupported, RegistryNotInitialized
from phrp_utils.peptide import PeptideMassCalculator
from phrp_utils.processing import SYNOPSIS_COLUMNS, ResultProcessor


@pytest.fixture
def options():
    return ProcessingOptions(show_progress=False)


def test_process_symbol_table(phospho_registry, options):
    df = pd.DataFrame(
        {
            "peptide": ["K.PEPT*IDE.K", "R.AEPTIDEK.A"],
            "protein": ["PROT_1", "PROT_2"],
            "scan": [101, 102],
            "charge": [2, 3],
        }
    )
    outcome = ResultProcessor(phospho_registry, options).process(df)

    assert outcome.success
    assert list(outcome.table.columns) == SYNOPSIS_COLUMNS
    assert outcome.table["result_id"].tolist() == [1, 2]
    assert outcome.table.loc[0, "mod_description"] == "Phosph:4"
    assert outcome.table.loc[0, "peptide"] == "K.PEPT*IDE.K"
    assert outcome.table.loc[1, "cleavage_state"] == 2
    assert outcome.table.loc[1, "scan"] == "102"
    assert outcome.table.loc[1, "charge"] == "3"
    assert len(outcome.results) == 2
    assert outcome.error_log == []


def test_result_ids_from_table(phospho_registry, options):
    df = pd.DataFrame({"peptide": ["PEPTIDE", "PEPT*IDE"], "result_id": [10, 20]})
    outcome = ResultProcessor(phospho_registry, options).process(df)
    assert outcome.table["result_id"].tolist() == [10, 20]


def test_failed_rows_are_skipped(phospho_registry, options):
    df = pd.DataFrame({"peptide": ["K.PEPT+79.966IDE.R", "PEPtIDE", "PEPT*IDE"]})
    outcome = ResultProcessor(phospho_registry, options).process(df)

    assert not outcome.success
    assert outcome.failed_rows == 2
    assert len(outcome.table) == 1
    assert outcome.table.loc[0, "result_id"] == 3
    assert len(outcome.error_log) == 2


def test_error_log_is_capped(phospho_registry):
    options = ProcessingOptions(show_progress=False, max_error_log_entries=2)
    df = pd.DataFrame({"peptide": ["PEPtIDE"] * 5})
    outcome = ResultProcessor(phospho_registry, options).process(df)

    assert outcome.failed_rows == 5
    assert len(outcome.error_log) == 3
    assert "limit" in outcome.error_log[-1]


def test_unknown_symbol_is_logged_but_succeeds(phospho_registry, options):
    outcome = ResultProcessor(phospho_registry, options).process(pd.DataFrame({"peptide": ["PEPT#IDE"]}))

    assert outcome.success
    assert len(outcome.table) == 1
    assert len(outcome.error_log) == 1


def test_mass_format(phospho_registry):
    options = ProcessingOptions(show_progress=False, mod_format="mass")
    outcome = ResultProcessor(phospho_registry, options).process(pd.DataFrame({"peptide": ["K.PEPT+79.966IDE.R"]}))

    assert outcome.success
    assert outcome.table.loc[0, "peptide"] == "K.PEPT*IDE.R"
    assert outcome.table.loc[0, "mod_description"] == "Phosph:4"


def test_del_m_ppm(phospho_registry, options):
    peptide_mass = PeptideMassCalculator().compute_sequence_mass("AEPTIDEK")
    df = pd.DataFrame(
        {
            "peptide": ["R.AEPTIDEK.A", "R.AEPTIDEK.A"],
            "charge": [2, 2],
            "precursor_mz": [(peptide_mass + 2 * MASS_PROTON) / 2, None],
        }
    )
    outcome = ResultProcessor(phospho_registry, options).process(df)

    assert outcome.table.loc[0, "del_m_ppm"] == pytest.approx(0.0, abs=1e-6)
    assert pd.isna(outcome.table.loc[1, "del_m_ppm"])
    assert outcome.results[0].observed_mh == pytest.approx(peptide_mass + MASS_PROTON)


def test_from_options(mod_definitions_file):
    options = ProcessingOptions(modification_definitions_path=mod_definitions_file, show_progress=False)
    processor = ResultProcessor.from_options(options)
    outcome = processor.process(pd.DataFrame({"peptide": ["K.PEPT*IDE.R"]}))

    assert outcome.table.loc[0, "mod_description"] == "Acetyl:1,Phosph:4"
    assert len(processor.registry) == 5


def test_progress_bar(phospho_registry):
    options = ProcessingOptions(show_progress=True)
    outcome = ResultProcessor(phospho_registry, options).process(pd.DataFrame({"peptide": ["PEPT*IDE"]}))
    assert outcome.success


def test_empty_table(phospho_registry, options):
    outcome = ResultProcessor(phospho_registry, options).process(pd.DataFrame({"peptide": []}))

    assert outcome.success
    assert outcome.table.empty
    assert list(outcome.table.columns) == SYNOPSIS_COLUMNS


def test_missing_registry(options):
    with pytest.raises(RegistryNotInitialized):
        ResultProcessor(None, options).process(pd.DataFrame({"peptide": ["PEPTIDE"]}))


def test_missing_peptide_column(phospho_registry, options):
    with pytest.raises(ValueError):
        ResultProcessor(phospho_registry, options).process(pd.DataFrame({"sequence": ["PEPTIDE"]}))


def test_invalid_options():
    with pytest.raises(ValueError):
        ProcessingOptions(mod_format="xml")
    with pytest.raises(CleavageAgentNotSupported):
        ProcessingOptions(cleavage_agent="pepsin")


def test_options_build_calculators():
    options = ProcessingOptions(cleavage_agent="gluc", peptide_n_terminus_mass=0.0)

    assert options.build_cleavage_calculator().left_residue_regex == "[ED]"
    calculator = options.build_mass_calculator()
    assert calculator.peptide_n_terminus_mass == 0.0
    assert calculator.peptide_c_terminus_mass == pytest.approx(17.0027387)
