from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


def split_csv(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(token.strip() for token in value.split(",") if token.strip())


def contains_any_fold(haystack: str, needles: Iterable[str]) -> bool:
    lowered = haystack.lower()
    return any(needle.lower() in lowered for needle in needles)


def equals_any(value: str, allowed: Iterable[str]) -> bool:
    return any(value == candidate for candidate in allowed)


@dataclass(frozen=True)
class RowFilter:
    """Pod, namespace and volume predicates; an empty set places no constraint."""

    pod_needles: tuple[str, ...] = ()
    namespaces: tuple[str, ...] = ()
    volumes: tuple[str, ...] = ()

    @classmethod
    def from_csv(
        cls,
        *,
        pods: str | None = None,
        namespaces: str | None = None,
        volumes: str | None = None,
    ) -> RowFilter:
        return cls(
            pod_needles=split_csv(pods),
            namespaces=split_csv(namespaces),
            volumes=split_csv(volumes),
        )

    def matches_pod(self, pod_name: str) -> bool:
        if not self.pod_needles:
            return True
        return bool(pod_name) and contains_any_fold(pod_name, self.pod_needles)

    def matches_namespace(self, namespace: str) -> bool:
        return not self.namespaces or equals_any(namespace, self.namespaces)

    def matches_volume(self, volume: str) -> bool:
        return not self.volumes or equals_any(volume, self.volumes)

    def matches(self, *, pod_name: str, pod_namespace: str, volume: str) -> bool:
        return (
            self.matches_pod(pod_name)
            and self.matches_namespace(pod_namespace)
            and self.matches_volume(volume)
        )
