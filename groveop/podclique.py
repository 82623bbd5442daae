"""The PodClique resource: a set of pods running the same image."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Mapping

from .meta import Condition, ObjectMeta
from .status import LastError, LastOperation


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


@dataclass
class AutoScalingConfig:
    """Horizontal pod autoscaler settings for a PodClique or scaling group."""

    max_replicas: int = 0
    min_replicas: int | None = None
    metrics: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.min_replicas is not None:
            data["minReplicas"] = self.min_replicas
        data["maxReplicas"] = self.max_replicas
        if self.metrics:
            data["metrics"] = copy.deepcopy(self.metrics)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AutoScalingConfig:
        data = data or {}
        return cls(
            max_replicas=int(data.get("maxReplicas", 0) or 0),
            min_replicas=_optional_int(data.get("minReplicas")),
            metrics=copy.deepcopy(list(data.get("metrics") or [])),
        )


@dataclass
class PodCliqueSpec:
    """Desired state of a PodClique."""

    pod_spec: dict[str, Any] = field(default_factory=dict)
    replicas: int = 0
    starts_after: list[str] = field(default_factory=list)
    scale_config: AutoScalingConfig | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "podSpec": copy.deepcopy(self.pod_spec),
            "replicas": self.replicas,
        }
        if self.starts_after:
            data["startsAfter"] = list(self.starts_after)
        if self.scale_config is not None:
            data["autoScalingConfig"] = self.scale_config.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodCliqueSpec:
        data = data or {}
        scale = data.get("autoScalingConfig")
        return cls(
            pod_spec=copy.deepcopy(dict(data.get("podSpec") or {})),
            replicas=int(data.get("replicas", 0) or 0),
            starts_after=list(data.get("startsAfter") or []),
            scale_config=None if scale is None else AutoScalingConfig.from_dict(scale),
        )


@dataclass
class PodCliqueStatus:
    """Observed state of a PodClique."""

    observed_generation: int | None = None
    last_operation: LastOperation | None = None
    last_errors: list[LastError] = field(default_factory=list)
    replicas: int = 0
    ready_replicas: int = 0
    updated_replicas: int = 0
    selector: str | None = None
    conditions: list[Condition] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.observed_generation is not None:
            data["observedGeneration"] = self.observed_generation
        if self.last_operation is not None:
            data["lastOperation"] = self.last_operation.to_dict()
        if self.last_errors:
            data["lastErrors"] = [err.to_dict() for err in self.last_errors]
        counts = (
            ("replicas", self.replicas),
            ("readyReplicas", self.ready_replicas),
            ("updatedReplicas", self.updated_replicas),
        )
        data.update((key, value) for key, value in counts if value)
        if self.selector is not None:
            data["hpaPodSelector"] = self.selector
        if self.conditions:
            data["conditions"] = [cond.to_dict() for cond in self.conditions]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodCliqueStatus:
        data = data or {}
        last_op = data.get("lastOperation")
        return cls(
            observed_generation=_optional_int(data.get("observedGeneration")),
            last_operation=None if last_op is None else LastOperation.from_dict(last_op),
            last_errors=[LastError.from_dict(item) for item in data.get("lastErrors") or []],
            replicas=int(data.get("replicas", 0) or 0),
            ready_replicas=int(data.get("readyReplicas", 0) or 0),
            updated_replicas=int(data.get("updatedReplicas", 0) or 0),
            selector=data.get("hpaPodSelector"),
            conditions=[Condition.from_dict(item) for item in data.get("conditions") or []],
        )


@dataclass
class PodClique:
    """A set of pods running the same image."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodCliqueSpec = field(default_factory=PodCliqueSpec)
    status: PodCliqueStatus = field(default_factory=PodCliqueStatus)
    api_version: str = ""
    kind: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.kind:
            data["kind"] = self.kind
        if self.api_version:
            data["apiVersion"] = self.api_version
        data["metadata"] = self.metadata.to_dict()
        data["spec"] = self.spec.to_dict()
        data["status"] = self.status.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodClique:
        data = data or {}
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=PodCliqueSpec.from_dict(data.get("spec")),
            status=PodCliqueStatus.from_dict(data.get("status")),
            api_version=data.get("apiVersion", "") or "",
            kind=data.get("kind", "") or "",
        )


@dataclass
class PodCliqueList:
    """A list of PodCliques."""

    items: list[PodClique] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    api_version: str = ""
    kind: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.kind:
            data["kind"] = self.kind
        if self.api_version:
            data["apiVersion"] = self.api_version
        data["metadata"] = dict(self.metadata)
        data["items"] = [item.to_dict() for item in self.items]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodCliqueList:
        data = data or {}
        return cls(
            items=[PodClique.from_dict(item) for item in data.get("items") or []],
            metadata=dict(data.get("metadata") or {}),
            api_version=data.get("apiVersion", "") or "",
            kind=data.get("kind", "") or "",
        )