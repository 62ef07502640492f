from __future__ import annotations

import csv
import io
import json
from typing import Callable, Sequence

import yaml

from .config import (
    OUTPUT_CSV,
    OUTPUT_JSON,
    OUTPUT_PRETTY,
    OUTPUT_TABLE,
    OUTPUT_YAML,
    validate_output_mode,
)
from .models import BackupRow
from .theme import Theme

TABLE_HEADER = ("Pod name", "Pod namespace", "Volume", "Size", "Created")
TABLE_PADDING = 2
PRETTY_TITLE = "PodVolumeBackup"
PRETTY_DIVIDER_WIDTH = 72
PRETTY_LABEL_WIDTH = 11


class RenderError(RuntimeError):
    """Raised when rows cannot be encoded in the requested output mode."""

    def __init__(self, *, mode: str, reason: str) -> None:
        super().__init__(f"Failed to encode {mode.upper()}: {reason}")
        self.mode = mode


def render(rows: Sequence[BackupRow], mode: str, color_enabled: bool = False) -> str:
    normalized = validate_output_mode(mode)
    if normalized == OUTPUT_PRETTY:
        return render_pretty(rows, Theme(enabled=color_enabled))
    return _RENDERERS[normalized](rows)


def render_table(rows: Sequence[BackupRow]) -> str:
    lines = [TABLE_HEADER]
    lines.extend(_summary_cells(row) for row in rows)
    widths = [
        max(len(line[column]) for line in lines) + TABLE_PADDING
        for column in range(len(TABLE_HEADER) - 1)
    ]

    output = io.StringIO()
    for line in lines:
        padded = "".join(cell.ljust(width) for cell, width in zip(line, widths))
        output.write(f"{padded}{line[-1]}\n")
    return output.getvalue()


def render_json(rows: Sequence[BackupRow]) -> str:
    try:
        encoded = json.dumps([row.to_dict() for row in rows], indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as error:
        raise RenderError(mode=OUTPUT_JSON, reason=str(error)) from error
    return f"{encoded}\n"


def render_yaml(rows: Sequence[BackupRow]) -> str:
    try:
        return yaml.safe_dump(
            [row.to_dict() for row in rows],
            sort_keys=True,
            default_flow_style=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as error:
        raise RenderError(mode=OUTPUT_YAML, reason=str(error)) from error


def render_csv(rows: Sequence[BackupRow]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    try:
        writer.writerow(TABLE_HEADER)
        writer.writerows(_summary_cells(row) for row in rows)
    except csv.Error as error:
        raise RenderError(mode=OUTPUT_CSV, reason=str(error)) from error
    return output.getvalue()


def render_pretty(rows: Sequence[BackupRow], theme: Theme) -> str:
    divider = theme.secondary("─" * PRETTY_DIVIDER_WIDTH)
    lines = [f"{theme.title(PRETTY_TITLE)} {theme.secondary(f'({len(rows)} items)')}"]
    if rows:
        lines.append(divider)

    for index, row in enumerate(rows):
        lines.extend(_pretty_block(row, theme))
        if index < len(rows) - 1:
            lines.append(divider)
    return "".join(f"{line}\n" for line in lines)


def _pretty_block(row: BackupRow, theme: Theme) -> list[str]:
    def field(name: str, rendered_value: str) -> str:
        return f"{theme.label(f'{name}:'.ljust(PRETTY_LABEL_WIDTH))} {rendered_value}"

    size = theme.value(row.size_display)
    if row.size_bytes is not None:
        size = f"{size} {theme.secondary(f'({row.size_bytes} bytes)')}"

    return [
        field("Backup", theme.bold(theme.value(row.backup_name))),
        field("Pod", theme.value(row.pod_name)),
        field("Namespace", theme.value(row.pod_namespace)),
        field("Volume", theme.value(row.volume)),
        field("Size", size),
        field("Created", theme.value(row.created_display)),
        field("Resource", theme.secondary(row.resource_name)),
    ]


def _summary_cells(row: BackupRow) -> tuple[str, ...]:
    return (row.pod_name, row.pod_namespace, row.volume, row.size_display, row.created_display)


_RENDERERS: dict[str, Callable[[Sequence[BackupRow]], str]] = {
    OUTPUT_TABLE: render_table,
    OUTPUT_JSON: render_json,
    OUTPUT_YAML: render_yaml,
    OUTPUT_CSV: render_csv,
}
