"""Process a table of peptide hits into synopsis rows."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from .config import ProcessingOptions
from .data import SearchResult
from .exceptions import RegistryNotInitialized
from .modifications import ModificationRegistry

tqdm.pandas()

logger = logging.getLogger(__name__)
logging.basicConfig(filename="phrp_processing.log", level=logging.INFO)

SYNOPSIS_COLUMNS = [
    "result_id",
    "scan",
    "charge",
    "peptide",
    "protein",
    "clean_sequence",
    "cleavage_state",
    "terminus_state",
    "missed_cleavages",
    "monoisotopic_mass",
    "mod_count",
    "mod_description",
    "del_m_ppm",
]


@dataclass
class ProcessingResult:
    """Output of `ResultProcessor.process`."""
    table: pd.DataFrame
    results: List[SearchResult] = field(default_factory=list)
    error_log: List[str] = field(default_factory=list)
    failed_rows: int = 0

    @property
    def success(self) -> bool:
        return self.failed_rows == 0


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class ResultProcessor:
    """
    Resolve modifications and compute peptide attributes for every row of a table.

    One registry is shared by all rows, so modifications found in earlier rows
    keep their symbol in later rows. A row that raises is logged, recorded in
    the error log and skipped.

    Parameters
    ----------
    registry: ModificationRegistry
        Modifications known in this run.
    options: ProcessingOptions
        Run configuration. Defaults are used when omitted.

    Example
    -------
    >>> processor = ResultProcessor.from_options(ProcessingOptions(modification_definitions_path='mods.txt'))
    >>> outcome = processor.process(pd.DataFrame({'peptide': ['K.PEPT*IDE.K']}))
    >>> outcome.table.loc[0, 'mod_description']
    'Phosph:4'
    """

    def __init__(self, registry: Optional[ModificationRegistry], options: Optional[ProcessingOptions] = None):
        self.registry = registry
        self.options = options if options is not None else ProcessingOptions()
        self.mass_calculator = self.options.build_mass_calculator()
        self.cleavage_calculator = self.options.build_cleavage_calculator()
        self.error_log: List[str] = []
        self._error_log_full = False
        self._failed_rows = 0
        self._results: List[SearchResult] = []

    @classmethod
    def from_options(cls, options: ProcessingOptions) -> "ResultProcessor":
        registry = options.build_registry()
        if registry.error_message:
            logger.warning(f"{registry.error_message}; continuing with default modifications")
        return cls(registry, options)

    def _record_error(self, message: str) -> None:
        logger.warning(message)
        if len(self.error_log) < self.options.max_error_log_entries:
            self.error_log.append(message)
        elif not self._error_log_full:
            self._error_log_full = True
            self.error_log.append(
                f"Error log limit of {self.options.max_error_log_entries} entries reached; further errors are not recorded"
            )

    def build_search_result(self, row: pd.Series, result_id: int) -> SearchResult:
        """Create the search result for one row and resolve its modifications."""
        result = SearchResult(self.registry, self.mass_calculator, self.cleavage_calculator)
        result.result_id = result_id
        if not _is_missing(row.get("scan")):
            result.scan = str(row["scan"])
        if not _is_missing(row.get("charge")):
            result.charge = str(int(row["charge"]))
        if not _is_missing(row.get("protein")):
            result.protein_name = str(row["protein"])
        if not _is_missing(row.get("precursor_mz")):
            result.precursor_mz = float(row["precursor_mz"])

        result.set_peptide_sequence_with_mods(str(row["peptide"]).strip())

        if self.options.mod_format == "mass":
            result.add_modifications_from_mass_string(
                update_counts=True,
                allow_duplicate_mod_on_terminus=self.options.allow_duplicate_terminus_mods,
                precision=self.options.mass_precision_digits,
                loose_precision=self.options.loose_precision_digits,
            )
        else:
            result.add_modifications_and_compute_mass(
                update_counts=True,
                allow_duplicate_mod_on_terminus=self.options.allow_duplicate_terminus_mods,
            )

        if result.monoisotopic_mass < 0:
            raise ValueError(result.error_message)
        if result.error_message:
            self._record_error(f"{result.error_message}; ResultID = {result_id}")
        return result

    def _del_m_ppm(self, result: SearchResult) -> float:
        if result.precursor_mz is None or not result.charge:
            return np.nan
        charge = int(result.charge)
        if charge < 1:
            return np.nan

        result.observed_mh = self.mass_calculator.convolute_mass(result.precursor_mz, charge, 1)
        precursor_mono_mass = self.mass_calculator.convolute_mass(result.precursor_mz, charge, 0)
        return SearchResult.compute_del_m_corrected_ppm(
            precursor_mono_mass - result.monoisotopic_mass,
            precursor_mono_mass,
            True,
            result.monoisotopic_mass,
        )

    def _process_row(self, row: pd.Series) -> Optional[dict]:
        result_id = row.get("result_id")
        if _is_missing(result_id):
            result_id = row.name + 1
        result_id = int(result_id)

        try:
            result = self.build_search_result(row, result_id)
            synopsis_row = {
                "result_id": result.result_id,
                "scan": result.scan,
                "charge": result.charge,
                "peptide": result.sequence_with_prefix_and_suffix(True),
                "protein": result.protein_name,
                "clean_sequence": result.clean_sequence,
                "cleavage_state": int(result.cleavage_state),
                "terminus_state": int(result.peptide_terminus_state),
                "missed_cleavages": result.missed_cleavages(),
                "monoisotopic_mass": result.monoisotopic_mass,
                "mod_count": result.modification_count,
                "mod_description": result.mod_description,
                "del_m_ppm": self._del_m_ppm(result),
            }
        except Exception as e:
            self._failed_rows += 1
            self._record_error(f"Error processing ResultID {result_id} ({row.get('peptide')}): {e}")
            return None

        self._results.append(result)
        return synopsis_row

    def process(self, df: pd.DataFrame) -> ProcessingResult:
        """
        Process every row of `df`.

        Parameters
        ----------
        df: pd.DataFrame
            Requires a 'peptide' column. Optional columns: 'protein', 'scan',
            'charge', 'precursor_mz' and 'result_id' (defaults to row number + 1).

        Returns
        -------
        ProcessingResult
            The synopsis table, the search results, the error log and whether
            every row was processed.

        Raises
        ------
        RegistryNotInitialized
            If no modification registry is available.
        """
        if self.registry is None:
            raise RegistryNotInitialized("no modification registry was provided")
        if "peptide" not in df.columns:
            raise ValueError("Input table is missing the required column 'peptide'")

        self.error_log = []
        self._error_log_full = False
        self._failed_rows = 0
        self._results = []

        df = df.reset_index(drop=True)
        rows = []
        if len(df) > 0 and self.options.show_progress:
            rows = df.progress_apply(self._process_row, axis=1).tolist()
        elif len(df) > 0:
            rows = df.apply(self._process_row, axis=1).tolist()

        records = [r for r in rows if r is not None]
        table = pd.DataFrame(records, columns=SYNOPSIS_COLUMNS)

        logger.info(
            f"Processed {len(df)} rows: {len(records)} succeeded, {self._failed_rows} failed; "
            f"{len(self.registry)} modification definitions in use"
        )
        return ProcessingResult(
            table=table,
            results=list(self._results),
            error_log=list(self.error_log),
            failed_rows=self._failed_rows,
        )
