"""Input adapters that turn roster files into players."""

from .roster import (
    ImportReport,
    RosterRow,
    import_roster,
    load_roster_rows,
    row_to_candidate,
    rows_to_candidates,
)

__all__ = [
    "ImportReport",
    "RosterRow",
    "import_roster",
    "load_roster_rows",
    "row_to_candidate",
    "rows_to_candidates",
]
