from __future__ import annotations

from itertools import permutations

import pytest

from podvolumebackup_list.filters import RowFilter, contains_any_fold, equals_any, split_csv


def test_split_csv_trims_and_drops_empty_tokens() -> None:
    assert split_csv(" prod, ,staging ,") == ("prod", "staging")
    assert split_csv("") == ()
    assert split_csv(None) == ()
    assert split_csv(" , ") == ()


def test_contains_any_fold_matches_case_insensitive_substrings() -> None:
    assert contains_any_fold("nginx-app", ("ngi",))
    assert contains_any_fold("nginx-app", ("REDIS", "NGI"))
    assert not contains_any_fold("nginx-app", ("redis",))


def test_equals_any_requires_an_exact_value() -> None:
    assert equals_any("prod", ("staging", "prod"))
    assert not equals_any("prod", ("Prod", "production"))


def test_row_filter_with_pod_substring_includes_and_excludes() -> None:
    assert RowFilter.from_csv(pods="ngi").matches_pod("nginx-app")
    assert not RowFilter.from_csv(pods="redis").matches_pod("nginx-app")


def test_row_filter_with_pod_needles_rejects_empty_pod_name() -> None:
    assert not RowFilter.from_csv(pods="a").matches_pod("")


def test_row_filter_with_namespace_allow_set_excludes_other_namespaces() -> None:
    row_filter = RowFilter.from_csv(namespaces="prod,staging")

    assert row_filter.matches_namespace("staging")
    assert not row_filter.matches_namespace("dev")


def test_row_filter_with_volume_allow_set_requires_exact_volume() -> None:
    row_filter = RowFilter.from_csv(volumes="data")

    assert row_filter.matches_volume("data")
    assert not row_filter.matches_volume("data-2")


@pytest.mark.parametrize(
    ("pod_name", "pod_namespace", "volume"),
    [("", "", ""), ("nginx", "prod", "data"), ("redis", "dev", "cache")],
)
def test_row_filter_with_empty_sets_places_no_constraint(pod_name: str, pod_namespace: str, volume: str) -> None:
    assert RowFilter().matches(pod_name=pod_name, pod_namespace=pod_namespace, volume=volume)
    assert RowFilter.from_csv(pods=" , ", namespaces="", volumes=None).matches(
        pod_name=pod_name,
        pod_namespace=pod_namespace,
        volume=volume,
    )


def test_row_filter_predicates_are_order_independent() -> None:
    targets = [
        ("nginx-app", "prod", "data"),
        ("nginx-web", "dev", "data"),
        ("redis", "prod", "cache"),
        ("", "prod", "data"),
        ("NGINX-batch", "staging", "logs"),
    ]
    row_filter = RowFilter.from_csv(pods="nginx", namespaces="prod,staging", volumes="data,logs")
    predicates = [
        lambda target: row_filter.matches_pod(target[0]),
        lambda target: row_filter.matches_namespace(target[1]),
        lambda target: row_filter.matches_volume(target[2]),
    ]

    survivors = set()
    for ordering in permutations(predicates):
        remaining = list(targets)
        for predicate in ordering:
            remaining = [target for target in remaining if predicate(target)]
        survivors.add(tuple(remaining))

    assert survivors == {(("nginx-app", "prod", "data"), ("NGINX-batch", "staging", "logs"))}
