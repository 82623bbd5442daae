"""The PodCliqueScalingGroup resource: PodCliques that are scaled together."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .meta import ObjectMeta

POD_CLIQUE_SCALING_GROUP_KIND = "PodCliqueScalingGroup"


@dataclass
class PodCliqueScalingGroupSpec:
    """Desired state of a PodCliqueScalingGroup."""

    replicas: int = 0

    def _to_dict(self) -> dict[str, Any]:
        return {"replicas": self.replicas}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> PodCliqueScalingGroupSpec:
        data = data or {}
        return cls(replicas=int(data.get("replicas", 0) or 0))


@dataclass
class PodCliqueScalingGroupStatus:
    """Observed state of a PodCliqueScalingGroup."""

    replicas: int = 0
    selector: str | None = None

    def _to_dict(self) -> dict[str, Any]:
        return {"replicas": self.replicas, "selector": self.selector}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> PodCliqueScalingGroupStatus:
        data = data or {}
        return cls(
            replicas=int(data.get("replicas", 0) or 0),
            selector=data.get("selector"),
        )


@dataclass
class PodCliqueScalingGroup:
    """A group of PodCliques of a PodGangSet that scale as one unit."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodCliqueScalingGroupSpec = field(default_factory=PodCliqueScalingGroupSpec)
    status: PodCliqueScalingGroupStatus = field(default_factory=PodCliqueScalingGroupStatus)
    api_version: str = ""
    kind: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.kind:
            data["kind"] = self.kind
        if self.api_version:
            data["apiVersion"] = self.api_version
        data["metadata"] = self.metadata.to_dict()
        data["spec"] = self.spec._to_dict()
        data["status"] = self.status._to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodCliqueScalingGroup:
        data = data or {}
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=PodCliqueScalingGroupSpec._from_dict(data.get("spec")),
            status=PodCliqueScalingGroupStatus._from_dict(data.get("status")),
            api_version=data.get("apiVersion", "") or "",
            kind=data.get("kind", "") or "",
        )