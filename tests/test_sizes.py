from __future__ import annotations

import pytest

from podvolumebackup_list.sizes import INT64_MAX, coerce_int64, human_bytes


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 KiB"),
        (1536, "1.5 KiB"),
        (2048, "2.0 KiB"),
        (1048576, "1.0 MiB"),
        (1572864, "1.5 MiB"),
        (1024**3, "1.0 GiB"),
        (INT64_MAX, "8.0 EiB"),
    ],
)
def test_human_bytes_formats_binary_units(size: int, expected: str) -> None:
    assert human_bytes(size) == expected


def test_human_bytes_just_below_next_unit_stays_in_current_unit() -> None:
    assert human_bytes(1048575) == "1024.0 KiB"


def test_human_bytes_unit_label_advances_at_each_power_of_1024() -> None:
    labels = [human_bytes(1024**power).split(" ")[1] for power in range(0, 7)]

    assert labels == ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]
    assert all(human_bytes(1024**power - 1).split(" ")[1] == labels[power - 1] for power in range(1, 7))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (42, 42),
        (0, 0),
        (42.9, 42),
        (-3.7, -3),
        ("123", 123),
        (" 7 ", 7),
        ("1.5e3", 1500),
        (INT64_MAX, INT64_MAX),
    ],
)
def test_coerce_int64_accepts_int_float_and_numeric_strings(value: object, expected: int) -> None:
    assert coerce_int64(value) == expected


@pytest.mark.parametrize(
    "value",
    [None, True, False, "abc", "", "1_000", "0x10", "1e", "+", "12 34", [1], {"bytes": 1}, float("nan"), float("inf"), "inf", 2**63, "9223372036854775808"],
)
def test_coerce_int64_with_unsupported_values_returns_none(value: object) -> None:
    assert coerce_int64(value) is None
