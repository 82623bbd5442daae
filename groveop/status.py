"""Phases, last-operation records and per-gang status of a PodGangSet."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, TypeVar

from .meta import Condition, format_time, parse_time


class PodGangPhase(str, Enum):
    """Phase of a PodGang."""

    PENDING = "Pending"
    STARTING = "Starting"
    RUNNING = "Running"
    FAILED = "Failed"
    SUCCEEDED = "Succeeded"


class LastOperationType(str, Enum):
    """Kind of operation last performed by a reconciler."""

    RECONCILE = "Reconcile"
    DELETE = "Delete"


class LastOperationState(str, Enum):
    """State of the operation last performed by a reconciler."""

    PROCESSING = "Processing"
    SUCCEEDED = "Succeeded"
    ERROR = "Error"


_E = TypeVar("_E", bound=Enum)


def _to_enum(enum_cls: type[_E], value: Any) -> _E | str:
    if value is None:
        return ""
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass
class LastOperation:
    """The last operation done by a reconciler on an object."""

    type: LastOperationType | str
    state: LastOperationState | str
    description: str = ""
    last_update_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": _plain(self.type),
            "state": _plain(self.state),
            "description": self.description,
            "lastTransitionTime": format_time(self.last_update_time),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LastOperation:
        return cls(
            type=_to_enum(LastOperationType, data.get("type")),
            state=_to_enum(LastOperationState, data.get("state")),
            description=data.get("description", "") or "",
            last_update_time=parse_time(data.get("lastTransitionTime")),
        )


@dataclass
class LastError:
    """The last error seen by a controller while reconciling an object."""

    code: str
    description: str = ""
    observed_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "description": self.description,
            "observedAt": format_time(self.observed_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LastError:
        return cls(
            code=data.get("code", "") or "",
            description=data.get("description", "") or "",
            observed_at=parse_time(data.get("observedAt")),
        )


@dataclass
class PodGangStatus:
    """Status of one PodGang within a PodGangSet."""

    name: str
    phase: PodGangPhase | str
    conditions: list[Condition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "phase": _plain(self.phase)}
        if self.conditions:
            data["conditions"] = [cond.to_dict() for cond in self.conditions]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PodGangStatus:
        return cls(
            name=data.get("name", "") or "",
            phase=_to_enum(PodGangPhase, data.get("phase")),
            conditions=[Condition.from_dict(item) for item in data.get("conditions") or []],
        )