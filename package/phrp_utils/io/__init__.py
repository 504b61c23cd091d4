from .writers import (
    mod_details_table,
    mod_summary_table,
    to_psm_list,
    write_mod_details,
    write_mod_summary,
    write_synopsis,
)

__all__ = [
    "mod_details_table",
    "mod_summary_table",
    "to_psm_list",
    "write_mod_details",
    "write_mod_summary",
    "write_synopsis",
]
