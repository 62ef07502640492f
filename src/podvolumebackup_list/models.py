from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .sizes import coerce_int64, human_bytes

MISSING_SIZE = "-"


@dataclass(frozen=True)
class BackupRow:
    pod_name: str
    pod_namespace: str
    volume: str
    size_bytes: int | None = None
    size_human: str = ""
    created: str = ""
    created_rfc3339: str = ""
    backup_name: str = ""
    resource_name: str = ""

    def __post_init__(self) -> None:
        # size_human is derived: empty exactly when size_bytes is absent
        if self.size_bytes is None:
            object.__setattr__(self, "size_human", "")
        elif not self.size_human:
            object.__setattr__(self, "size_human", human_bytes(self.size_bytes))

    @property
    def size_display(self) -> str:
        return self.size_human or MISSING_SIZE

    @property
    def created_display(self) -> str:
        return self.created or self.created_rfc3339

    def to_dict(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "podName": self.pod_name,
            "podNamespace": self.pod_namespace,
            "volume": self.volume,
        }
        if self.size_bytes is not None:
            document["sizeBytes"] = self.size_bytes
        optional_text = (
            ("sizeHuman", self.size_human),
            ("created", self.created),
            ("createdRFC3339", self.created_rfc3339),
            ("backupName", self.backup_name),
            ("resourceName", self.resource_name),
        )
        for key, value in optional_text:
            if value:
                document[key] = value
        return document

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BackupRow:
        return cls(
            pod_name=_text(data.get("podName")),
            pod_namespace=_text(data.get("podNamespace")),
            volume=_text(data.get("volume")),
            size_bytes=coerce_int64(data.get("sizeBytes")),
            size_human=_text(data.get("sizeHuman")),
            created=_text(data.get("created")),
            created_rfc3339=_text(data.get("createdRFC3339")),
            backup_name=_text(data.get("backupName")),
            resource_name=_text(data.get("resourceName")),
        )


@dataclass(frozen=True)
class NameSelector:
    """Selects records by name prefix, or every record when ``include_all`` is set."""

    prefix: str | None = None
    include_all: bool = False

    def __post_init__(self) -> None:
        if self.include_all == (self.prefix is not None):
            raise ValueError("NameSelector needs exactly one of prefix or include_all")

    @classmethod
    def everything(cls) -> NameSelector:
        return cls(include_all=True)

    @classmethod
    def with_prefix(cls, prefix: str) -> NameSelector:
        return cls(prefix=prefix)

    def matches(self, name: str) -> bool:
        if self.include_all:
            return True
        return name.startswith(self.prefix or "")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
