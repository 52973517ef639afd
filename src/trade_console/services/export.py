"""Flat-file export of the filtered and sorted view (CSV download)."""

from __future__ import annotations

import csv
from datetime import date
from typing import Iterable, List, Optional, TextIO

from trade_console.models.core import ExportSpec, Record
from trade_console.services.fields import resolve_raw, stringify


def header_row(spec: ExportSpec) -> List[str]:
    """Return the header line for spec."""
    return [column.header for column in spec]


def export_rows(records: Iterable[Record], spec: ExportSpec) -> List[List[str]]:
    """
    Project every record onto the columns of spec as strings.

    Pass the full filtered+sorted sequence, not the current page: a download
    contains everything matching the active filters regardless of paging.
    Nested paths such as "userId.email" flatten embedded records into a column.
    """
    return [[stringify(resolve_raw(record, column.path)) for column in spec] for record in records]


def write_csv(stream: TextIO, spec: ExportSpec, records: Iterable[Record]) -> int:
    """Write header and rows to an open text stream. Returns the number of data rows."""
    writer = csv.writer(stream)
    writer.writerow(header_row(spec))
    rows = export_rows(records, spec)
    writer.writerows(rows)
    return len(rows)


def export_filename(entity: str, today: Optional[date] = None) -> str:
    """Default download name, e.g. deposits-2024-05-01.csv."""
    day = today or date.today()
    return f"{entity}-{day.isoformat()}.csv"
