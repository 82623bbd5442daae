"""The PodGangSet resource: a set of PodGangs and how they are spread, updated and started."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Mapping, TypeVar, Union

from .meta import ObjectMeta, format_duration, parse_duration
from .podclique import AutoScalingConfig, PodCliqueSpec
from .status import LastError, LastOperation, PodGangStatus

IntOrString = Union[int, str]


class CliqueStartupType(str, Enum):
    """Order in which the PodCliques of a PodGang are started."""

    IN_ORDER = "CliqueStartupTypeInOrder"
    ANY_ORDER = "CliqueStartupTypeAnyOrder"
    EXPLICIT = "CliqueStartupTypeExplicit"


class NetworkPackStrategy(str, Enum):
    """Whether packing pods to minimise network hops is strict or best effort."""

    BEST_EFFORT = "BestEffort"
    STRICT = "Strict"


_E = TypeVar("_E", bound=Enum)


def _to_enum(enum_cls: type[_E], value: Any) -> _E | str:
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _check_int_or_string(name: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"{name} must be an int or a string, got {type(value).__name__}")


@dataclass
class PodCliqueTemplateSpec:
    """Template from which the PodCliques of each PodGang are created."""

    name: str
    spec: PodCliqueSpec = field(default_factory=PodCliqueSpec)
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.labels:
            data["labels"] = dict(self.labels)
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        data["spec"] = self.spec.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PodCliqueTemplateSpec:
        return cls(
            name=data.get("name", "") or "",
            spec=PodCliqueSpec.from_dict(data.get("spec")),
            labels=dict(data.get("labels") or {}),
            annotations=dict(data.get("annotations") or {}),
        )


@dataclass
class SchedulingPolicyConfig:
    """Scheduling policy for a PodGang."""

    network_pack_strategy: NetworkPackStrategy | str | None = None
    termination_delay: timedelta | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.network_pack_strategy is not None:
            data["networkPackStrategy"] = _plain(self.network_pack_strategy)
        if self.termination_delay is not None:
            data["terminationDelay"] = format_duration(self.termination_delay)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> SchedulingPolicyConfig:
        data = data or {}
        strategy = data.get("networkPackStrategy")
        delay = data.get("terminationDelay")
        return cls(
            network_pack_strategy=None
            if strategy is None
            else _to_enum(NetworkPackStrategy, strategy),
            termination_delay=None if delay is None else parse_duration(delay),
        )


@dataclass
class PodCliqueScalingGroupConfig:
    """A named group of PodCliques that are scaled together."""

    name: str
    clique_names: list[str] = field(default_factory=list)
    scale_config: AutoScalingConfig = field(default_factory=AutoScalingConfig)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "cliqueNames": list(self.clique_names),
            "scaleConfig": self.scale_config.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PodCliqueScalingGroupConfig:
        return cls(
            name=data.get("name", "") or "",
            clique_names=list(data.get("cliqueNames") or []),
            scale_config=AutoScalingConfig.from_dict(data.get("scaleConfig")),
        )


@dataclass
class HeadlessServiceConfig:
    """Options for the headless service created for each PodGang."""

    publish_not_ready_addresses: bool = False

    def _to_dict(self) -> dict[str, Any]:
        return {"publishNotReadyAddresses": self.publish_not_ready_addresses}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> HeadlessServiceConfig:
        data = data or {}
        return cls(publish_not_ready_addresses=bool(data.get("publishNotReadyAddresses", False)))


@dataclass
class RollingUpdateConfiguration:
    """Limits on unavailable and surplus PodGangs during a rolling update."""

    max_unavailable: IntOrString | None = None
    max_surge: IntOrString | None = None

    def __post_init__(self) -> None:
        _check_int_or_string("max_unavailable", self.max_unavailable)
        _check_int_or_string("max_surge", self.max_surge)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.max_unavailable is not None:
            data["maxUnavailable"] = self.max_unavailable
        if self.max_surge is not None:
            data["maxSurge"] = self.max_surge
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> RollingUpdateConfiguration:
        data = data or {}
        return cls(
            max_unavailable=data.get("maxUnavailable"),
            max_surge=data.get("maxSurge"),
        )


@dataclass
class GangUpdateStrategy:
    """Strategy used when updating PodGangs."""

    rolling_update_config: RollingUpdateConfiguration | None = None

    def _to_dict(self) -> dict[str, Any]:
        if self.rolling_update_config is None:
            return {}
        return {"rollingUpdateConfig": self.rolling_update_config.to_dict()}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> GangUpdateStrategy:
        data = data or {}
        rolling = data.get("rollingUpdateConfig")
        return cls(
            rolling_update_config=None
            if rolling is None
            else RollingUpdateConfiguration.from_dict(rolling)
        )


@dataclass
class PodGangTemplateSpec:
    """Template for the PodGangs of a PodGangSet."""

    cliques: list[PodCliqueTemplateSpec] = field(default_factory=list)
    startup_type: CliqueStartupType | str | None = None
    headless_service_config: HeadlessServiceConfig | None = None
    scheduling_policy_config: SchedulingPolicyConfig | None = None
    pod_clique_scaling_group_configs: list[PodCliqueScalingGroupConfig] = field(
        default_factory=list
    )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"cliques": [clique.to_dict() for clique in self.cliques]}
        if self.startup_type is not None:
            data["cliqueStartupType"] = _plain(self.startup_type)
        if self.headless_service_config is not None:
            data["headlessServiceConfig"] = self.headless_service_config._to_dict()
        if self.scheduling_policy_config is not None:
            data["schedulingPolicyConfig"] = self.scheduling_policy_config.to_dict()
        if self.pod_clique_scaling_group_configs:
            data["podCliqueScalingGroups"] = [
                group.to_dict() for group in self.pod_clique_scaling_group_configs
            ]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodGangTemplateSpec:
        data = data or {}
        startup = data.get("cliqueStartupType")
        headless = data.get("headlessServiceConfig")
        policy = data.get("schedulingPolicyConfig")
        return cls(
            cliques=[PodCliqueTemplateSpec.from_dict(item) for item in data.get("cliques") or []],
            startup_type=None if startup is None else _to_enum(CliqueStartupType, startup),
            headless_service_config=None
            if headless is None
            else HeadlessServiceConfig._from_dict(headless),
            scheduling_policy_config=None
            if policy is None
            else SchedulingPolicyConfig.from_dict(policy),
            pod_clique_scaling_group_configs=[
                PodCliqueScalingGroupConfig.from_dict(item)
                for item in data.get("podCliqueScalingGroups") or []
            ],
        )


@dataclass
class PodGangSetSpec:
    """Desired state of a PodGangSet."""

    replicas: int = 0
    template_spec: PodGangTemplateSpec = field(default_factory=PodGangTemplateSpec)
    update_strategy: GangUpdateStrategy | None = None
    replica_spread_constraints: list[dict[str, Any]] = field(default_factory=list)
    priority_class_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.replicas:
            data["replicas"] = self.replicas
        data["templateSpec"] = self.template_spec.to_dict()
        if self.update_strategy is not None:
            data["updateStrategy"] = self.update_strategy._to_dict()
        if self.replica_spread_constraints:
            data["replicaSpreadConstraints"] = copy.deepcopy(self.replica_spread_constraints)
        if self.priority_class_name:
            data["priorityClassName"] = self.priority_class_name
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodGangSetSpec:
        data = data or {}
        strategy = data.get("updateStrategy")
        return cls(
            replicas=int(data.get("replicas", 0) or 0),
            template_spec=PodGangTemplateSpec.from_dict(data.get("templateSpec")),
            update_strategy=None if strategy is None else GangUpdateStrategy._from_dict(strategy),
            replica_spread_constraints=copy.deepcopy(
                list(data.get("replicaSpreadConstraints") or [])
            ),
            priority_class_name=data.get("priorityClassName", "") or "",
        )


@dataclass
class PodGangSetStatus:
    """Observed state of a PodGangSet."""

    observed_generation: int | None = None
    last_operation: LastOperation | None = None
    last_errors: list[LastError] = field(default_factory=list)
    replicas: int = 0
    ready_replicas: int = 0
    updated_replicas: int = 0
    selector: str | None = None
    pod_gang_statuses: list[PodGangStatus] = field(default_factory=list)

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
        if self.pod_gang_statuses:
            data["podGangStatuses"] = [status.to_dict() for status in self.pod_gang_statuses]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodGangSetStatus:
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
            pod_gang_statuses=[
                PodGangStatus.from_dict(item) for item in data.get("podGangStatuses") or []
            ],
        )


@dataclass
class PodGangSet:
    """A set of PodGangs and how they are spread, updated and monitored."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodGangSetSpec = field(default_factory=PodGangSetSpec)
    status: PodGangSetStatus = field(default_factory=PodGangSetStatus)
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
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodGangSet:
        data = data or {}
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=PodGangSetSpec.from_dict(data.get("spec")),
            status=PodGangSetStatus.from_dict(data.get("status")),
            api_version=data.get("apiVersion", "") or "",
            kind=data.get("kind", "") or "",
        )


@dataclass
class PodGangSetList:
    """A list of PodGangSets."""

    items: list[PodGangSet] = field(default_factory=list)
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
    def from_dict(cls, data: Mapping[str, Any] | None) -> PodGangSetList:
        data = data or {}
        return cls(
            items=[PodGangSet.from_dict(item) for item in data.get("items") or []],
            metadata=dict(data.get("metadata") or {}),
            api_version=data.get("apiVersion", "") or "",
            kind=data.get("kind", "") or "",
        )