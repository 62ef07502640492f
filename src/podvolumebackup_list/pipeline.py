from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .extract import record_name, row_from_record
from .filters import RowFilter
from .models import BackupRow, NameSelector

logger = logging.getLogger(__name__)


def build_rows(
    records: Iterable[Mapping[str, Any]],
    name_selector: NameSelector,
    row_filter: RowFilter | None = None,
) -> list[BackupRow]:
    row_filter = row_filter or RowFilter()
    rows: list[BackupRow] = []
    seen = 0
    for record in records:
        seen += 1
        if not name_selector.matches(record_name(record)):
            continue

        row = row_from_record(record)
        if not row_filter.matches(pod_name=row.pod_name, pod_namespace=row.pod_namespace, volume=row.volume):
            continue

        rows.append(row)

    logger.debug("kept %d of %d podvolumebackup records", len(rows), seen)
    return sort_rows(rows)


def sort_rows(rows: Iterable[BackupRow]) -> list[BackupRow]:
    return sorted(rows, key=lambda row: (row.pod_name, row.volume))
