import logging
import os
from typing import Iterable, List, Optional

import pandas as pd
from psm_utils import PSM, PSMList

from ..data import SearchResult
from ..modifications import ModificationRegistry

logger = logging.getLogger(__name__)

MOD_SUMMARY_COLUMNS = [
    "Modification_Symbol",
    "Modification_Mass",
    "Target_Residues",
    "Modification_Type",
    "Mass_Correction_Tag",
    "Affected_Atom",
    "Occurrence_Count",
]

MOD_DETAILS_COLUMNS = [
    "ResultID",
    "Residue",
    "Residue_Location",
    "Mass_Correction_Tag",
    "Modification_Mass",
]


def _check_output_folder(path: str) -> None:
    folder = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(folder):
        raise FileNotFoundError(f"Output folder does not exist: {folder}")


def write_synopsis(table: pd.DataFrame, path: str) -> None:
    """Write the synopsis table as a tab-delimited file."""
    _check_output_folder(path)
    table.to_csv(path, sep="\t", index=False)
    logger.info(f"Wrote {len(table)} synopsis rows to {path}")


def mod_summary_table(registry: ModificationRegistry) -> pd.DataFrame:
    """
    Summarize the modifications that were found at least once.

    Parameters
    ----------
    registry: ModificationRegistry
        The registry used while processing the results.

    Returns
    -------
    pd.DataFrame
        One row per modification definition with an occurrence count above zero.
    """
    rows = [
        {
            "Modification_Symbol": definition.symbol,
            "Modification_Mass": round(definition.mass, 6),
            "Target_Residues": definition.target_residues,
            "Modification_Type": definition.mod_type.letter,
            "Mass_Correction_Tag": definition.mass_correction_tag,
            "Affected_Atom": definition.affected_atom,
            "Occurrence_Count": definition.occurrence_count,
        }
        for definition in registry
        if definition.occurrence_count > 0
    ]
    return pd.DataFrame(rows, columns=MOD_SUMMARY_COLUMNS)


def write_mod_summary(registry: ModificationRegistry, path: str) -> pd.DataFrame:
    _check_output_folder(path)
    summary = mod_summary_table(registry)
    summary.to_csv(path, sep="\t", index=False)
    return summary


def mod_details_table(results: Iterable[SearchResult]) -> pd.DataFrame:
    """One row per modification attached to a search result, sorted by location."""
    rows = []
    for result in results:
        for mod_info in result.sorted_modifications():
            rows.append(
                {
                    "ResultID": result.result_id,
                    "Residue": mod_info.residue,
                    "Residue_Location": mod_info.residue_loc_in_peptide,
                    "Mass_Correction_Tag": mod_info.definition.mass_correction_tag,
                    "Modification_Mass": round(mod_info.definition.mass, 6),
                }
            )
    return pd.DataFrame(rows, columns=MOD_DETAILS_COLUMNS)


def write_mod_details(results: Iterable[SearchResult], path: str) -> pd.DataFrame:
    _check_output_folder(path)
    details = mod_details_table(results)
    details.to_csv(path, sep="\t", index=False)
    return details


def to_psm_list(results: List[SearchResult], run: Optional[str] = None) -> PSMList:
    """
    Return a `PSMList` of processed search results.

    Modifications are written as ProForma mass deltas; the charge is added
    when known.

    Parameters
    ----------
    results: list
        Processed search results.
    run: str
        Name of the run the spectra come from.

    Return
    ------
    psm_utils.PSMList
    """
    psm_list = []
    for result in results:
        peptidoform = result.to_proforma()
        if result.charge:
            peptidoform += f"/{result.charge}"

        psm_list.append(
            PSM(
                peptidoform=peptidoform,
                spectrum_id=result.scan or str(result.result_id),
                run=run,
                precursor_mz=result.precursor_mz,
                protein_list=[result.protein_name] if result.protein_name else None,
                source="phrp_utils",
                metadata={
                    "result_id": str(result.result_id),
                    "mod_description": result.mod_description,
                    "monoisotopic_mass": f"{result.monoisotopic_mass:.6f}",
                    "cleavage_state": result.cleavage_state.name,
                },
            )
        )
    return PSMList(psm_list=psm_list)
