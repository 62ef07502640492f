from __future__ import annotations

from datetime import datetime
import logging
import re
from typing import Any, Mapping

from .models import BackupRow
from .sizes import coerce_int64, human_bytes

BACKUP_NAME_LABEL = "velero.io/backup-name"
CREATED_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
SIZE_FIELDS = ("totalBytes", "bytesDone")

_RFC3339_PATTERN = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})"
)

logger = logging.getLogger(__name__)


def record_name(record: Mapping[str, Any]) -> str:
    return nested_string(record, "metadata", "name")


def row_from_record(record: Mapping[str, Any]) -> BackupRow:
    pod_name, pod_namespace, volume = extract_target(record)
    size_bytes = extract_size(record)
    created, created_rfc3339 = extract_created(record)
    return BackupRow(
        pod_name=pod_name,
        pod_namespace=pod_namespace,
        volume=volume,
        size_bytes=size_bytes,
        size_human=human_bytes(size_bytes) if size_bytes is not None else "",
        created=created,
        created_rfc3339=created_rfc3339,
        backup_name=extract_backup_name(record),
        resource_name=record_name(record),
    )


def extract_target(record: Mapping[str, Any]) -> tuple[str, str, str]:
    return (
        nested_string(record, "spec", "pod", "name"),
        nested_string(record, "spec", "pod", "namespace"),
        nested_string(record, "spec", "volume"),
    )


def extract_backup_name(record: Mapping[str, Any]) -> str:
    labels = nested_mapping(record, "metadata", "labels")
    if labels is None:
        return ""
    value = labels.get(BACKUP_NAME_LABEL)
    return value if isinstance(value, str) else ""


def extract_size(record: Mapping[str, Any]) -> int | None:
    # bytesDone is only consulted when totalBytes is missing, not when it is malformed.
    progress = nested_mapping(record, "status", "progress")
    if progress is None:
        return None
    logger.debug("name=%s, progress=%s", record_name(record), progress)
    for field_name in SIZE_FIELDS:
        if field_name in progress:
            return coerce_int64(progress[field_name])
    return None


def extract_created(record: Mapping[str, Any]) -> tuple[str, str]:
    timestamp = nested_string(record, "metadata", "creationTimestamp")
    if not timestamp:
        return "", ""
    return format_created(timestamp), timestamp


def format_created(timestamp: str) -> str:
    parsed = parse_rfc3339(timestamp)
    if parsed is None:
        return timestamp
    return parsed.strftime(CREATED_DISPLAY_FORMAT)


def parse_rfc3339(timestamp: str) -> datetime | None:
    match = _RFC3339_PATTERN.fullmatch(timestamp)
    if match is None:
        return None
    date_part, time_part, fraction, offset = match.groups()
    # datetime keeps microseconds only
    fraction = f".{fraction[1:7].ljust(6, '0')}" if fraction else ""
    offset = "+00:00" if offset in ("Z", "z") else offset
    try:
        return datetime.fromisoformat(f"{date_part}T{time_part}{fraction}{offset}")
    except ValueError:
        return None


def nested_mapping(record: Mapping[str, Any], *path: str) -> Mapping[str, Any] | None:
    current: Any = record
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current if isinstance(current, Mapping) else None


def nested_string(record: Mapping[str, Any], *path: str) -> str:
    parent = nested_mapping(record, *path[:-1]) if len(path) > 1 else record
    if parent is None:
        return ""
    value = parent.get(path[-1])
    return value if isinstance(value, str) else ""
