"""Operator configuration types, their wire form and their defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Mapping, TypeVar

from .meta import GroupVersion, format_duration, parse_duration

GROUP_NAME = "operator.config.grove.io"
VERSION = "v1alpha1"
SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, VERSION)
OPERATOR_CONFIGURATION_KIND = "OperatorConfiguration"

DEFAULT_LEADER_ELECTION_RESOURCE_LOCK = "leases"
DEFAULT_LEADER_ELECTION_RESOURCE_NAME = "grove-operator-leader-election"
DEFAULT_WEBHOOK_SERVER_TLS_SERVER_CERT_DIR = "/etc/grove-operator/webhook-certs"


class LogFormat(str, Enum):
    """Format of the operator's log output."""

    JSON = "json"
    TEXT = "text"


class LogLevel(str, Enum):
    """Verbosity of the operator's log output."""

    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"


ALL_LOG_LEVELS = (LogLevel.DEBUG, LogLevel.INFO, LogLevel.ERROR)
ALL_LOG_FORMATS = (LogFormat.JSON, LogFormat.TEXT)

_E = TypeVar("_E", bound=Enum)


def _to_enum(enum_cls: type[_E], value: Any) -> _E | str:
    """Convert to the enum when the value is a known member; keep it raw otherwise."""
    if value is None:
        return ""
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _duration(value: Any) -> timedelta:
    if value is None or value == "":
        return timedelta(0)
    if isinstance(value, timedelta):
        return value
    return parse_duration(value)


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


@dataclass
class ClientConnectionConfiguration:
    """Settings used to construct a client to the API server."""

    qps: float = 0.0
    burst: int = 0
    content_type: str = ""
    accept_content_types: str = ""

    def _to_dict(self) -> dict[str, Any]:
        return {
            "qps": self.qps,
            "burst": self.burst,
            "contentType": self.content_type,
            "acceptContentTypes": self.accept_content_types,
        }

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> ClientConnectionConfiguration:
        data = data or {}
        return cls(
            qps=float(data.get("qps", 0.0) or 0.0),
            burst=int(data.get("burst", 0) or 0),
            content_type=data.get("contentType", "") or "",
            accept_content_types=data.get("acceptContentTypes", "") or "",
        )


@dataclass
class LeaderElectionConfiguration:
    """Settings for leader election between replicated operator instances."""

    enabled: bool = False
    lease_duration: timedelta = timedelta(0)
    renew_deadline: timedelta = timedelta(0)
    retry_period: timedelta = timedelta(0)
    resource_lock: str = ""
    resource_name: str = ""
    resource_namespace: str = ""

    def _to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "leaseDuration": format_duration(self.lease_duration),
            "renewDeadline": format_duration(self.renew_deadline),
            "retryPeriod": format_duration(self.retry_period),
            "resourceLock": self.resource_lock,
            "resourceName": self.resource_name,
            "resourceNamespace": self.resource_namespace,
        }

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> LeaderElectionConfiguration:
        data = data or {}
        return cls(
            enabled=bool(data.get("enabled", False)),
            lease_duration=_duration(data.get("leaseDuration")),
            renew_deadline=_duration(data.get("renewDeadline")),
            retry_period=_duration(data.get("retryPeriod")),
            resource_lock=data.get("resourceLock", "") or "",
            resource_name=data.get("resourceName", "") or "",
            resource_namespace=data.get("resourceNamespace", "") or "",
        )


@dataclass
class DebuggingConfiguration:
    """Debugging switches."""

    enable_profiling: bool | None = None

    def _to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.enable_profiling is not None:
            data["enableProfiling"] = self.enable_profiling
        return data

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> DebuggingConfiguration:
        data = data or {}
        value = data.get("enableProfiling")
        return cls(enable_profiling=None if value is None else bool(value))


@dataclass
class Server:
    """Address and port of an HTTP(S) server."""

    bind_address: str = ""
    port: int = 0

    def _to_dict(self) -> dict[str, Any]:
        return {"bindAddress": self.bind_address, "port": self.port}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> Server:
        data = data or {}
        return cls(
            bind_address=data.get("bindAddress", "") or "",
            port=int(data.get("port", 0) or 0),
        )


@dataclass
class WebhookServer(Server):
    """The webhook server, with the directory holding its certificate and key."""

    server_cert_dir: str = ""

    def _to_dict(self) -> dict[str, Any]:
        data = super()._to_dict()
        data["serverCertDir"] = self.server_cert_dir
        return data

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> WebhookServer:
        data = data or {}
        base = Server._from_dict(data)
        return cls(
            bind_address=base.bind_address,
            port=base.port,
            server_cert_dir=data.get("serverCertDir", "") or "",
        )


@dataclass
class ServerConfiguration:
    """Configuration of the webhook, health probe and metrics servers."""

    webhooks: WebhookServer = field(default_factory=WebhookServer)
    health_probes: Server | None = None
    metrics: Server | None = None

    def _to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"webhooks": self.webhooks._to_dict()}
        if self.health_probes is not None:
            data["healthProbes"] = self.health_probes._to_dict()
        if self.metrics is not None:
            data["metrics"] = self.metrics._to_dict()
        return data

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> ServerConfiguration:
        data = data or {}
        probes = data.get("healthProbes")
        metrics = data.get("metrics")
        return cls(
            webhooks=WebhookServer._from_dict(data.get("webhooks")),
            health_probes=None if probes is None else Server._from_dict(probes),
            metrics=None if metrics is None else Server._from_dict(metrics),
        )


@dataclass
class PodGangSetControllerConfiguration:
    """Configuration of the PodGangSet controller."""

    concurrent_syncs: int | None = None

    def _to_dict(self) -> dict[str, Any]:
        if self.concurrent_syncs is None:
            return {}
        return {"concurrentSyncs": self.concurrent_syncs}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> PodGangSetControllerConfiguration:
        data = data or {}
        return cls(concurrent_syncs=_optional_int(data.get("concurrentSyncs")))


@dataclass
class PodCliqueControllerConfiguration:
    """Configuration of the PodClique controller."""

    concurrent_syncs: int | None = None

    def _to_dict(self) -> dict[str, Any]:
        if self.concurrent_syncs is None:
            return {}
        return {"concurrentSyncs": self.concurrent_syncs}

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> PodCliqueControllerConfiguration:
        data = data or {}
        return cls(concurrent_syncs=_optional_int(data.get("concurrentSyncs")))


@dataclass
class ControllerConfiguration:
    """Configuration of all controllers."""

    pod_gang_set: PodGangSetControllerConfiguration = field(
        default_factory=PodGangSetControllerConfiguration
    )
    pod_clique: PodCliqueControllerConfiguration = field(
        default_factory=PodCliqueControllerConfiguration
    )

    def _to_dict(self) -> dict[str, Any]:
        return {
            "podGangSet": self.pod_gang_set._to_dict(),
            "podClique": self.pod_clique._to_dict(),
        }

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> ControllerConfiguration:
        data = data or {}
        return cls(
            pod_gang_set=PodGangSetControllerConfiguration._from_dict(data.get("podGangSet")),
            pod_clique=PodCliqueControllerConfiguration._from_dict(data.get("podClique")),
        )


@dataclass
class AuthorizerConfig:
    """Configuration of the authorizer admission webhook."""

    enabled: bool = False
    exempt_service_accounts: list[str] = field(default_factory=list)

    def _to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"enabled": self.enabled}
        if self.exempt_service_accounts:
            data["exemptServiceAccounts"] = list(self.exempt_service_accounts)
        return data

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any] | None) -> AuthorizerConfig:
        data = data or {}
        return cls(
            enabled=bool(data.get("enabled", False)),
            exempt_service_accounts=list(data.get("exemptServiceAccounts") or []),
        )


@dataclass
class OperatorConfiguration:
    """Complete configuration of the operator."""

    api_version: str = ""
    kind: str = ""
    client_connection: ClientConnectionConfiguration = field(
        default_factory=ClientConnectionConfiguration
    )
    leader_election: LeaderElectionConfiguration = field(
        default_factory=LeaderElectionConfiguration
    )
    server: ServerConfiguration = field(default_factory=ServerConfiguration)
    debugging: DebuggingConfiguration | None = None
    controllers: ControllerConfiguration = field(default_factory=ControllerConfiguration)
    log_level: LogLevel | str = ""
    log_format: LogFormat | str = ""
    authorizer: AuthorizerConfig = field(default_factory=AuthorizerConfig)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.api_version:
            data["apiVersion"] = self.api_version
        if self.kind:
            data["kind"] = self.kind
        data["runtimeClientConnection"] = self.client_connection._to_dict()
        data["LeaderElection"] = self.leader_election._to_dict()
        data["server"] = self.server._to_dict()
        if self.debugging is not None:
            data["debugging"] = self.debugging._to_dict()
        data["controllers"] = self.controllers._to_dict()
        data["logLevel"] = _plain(self.log_level)
        data["logFormat"] = _plain(self.log_format)
        data["authorizer"] = self.authorizer._to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> OperatorConfiguration:
        data = data or {}
        debugging = data.get("debugging")
        return cls(
            api_version=data.get("apiVersion", "") or "",
            kind=data.get("kind", "") or "",
            client_connection=ClientConnectionConfiguration._from_dict(
                data.get("runtimeClientConnection")
            ),
            leader_election=LeaderElectionConfiguration._from_dict(data.get("LeaderElection")),
            server=ServerConfiguration._from_dict(data.get("server")),
            debugging=None if debugging is None else DebuggingConfiguration._from_dict(debugging),
            controllers=ControllerConfiguration._from_dict(data.get("controllers")),
            log_level=_to_enum(LogLevel, data.get("logLevel")),
            log_format=_to_enum(LogFormat, data.get("logFormat")),
            authorizer=AuthorizerConfig._from_dict(data.get("authorizer")),
        )


# ----------------------------------------------------------------- defaults


def set_defaults_client_connection(config: ClientConnectionConfiguration) -> None:
    """Fill in unset client connection limits."""
    if config.qps == 0.0:
        config.qps = 100.0
    if config.burst == 0:
        config.burst = 120


def set_defaults_leader_election(config: LeaderElectionConfiguration) -> None:
    """Fill in unset leader election timings and resource identity."""
    zero = timedelta(0)
    if config.lease_duration == zero:
        config.lease_duration = timedelta(seconds=15)
    if config.renew_deadline == zero:
        config.renew_deadline = timedelta(seconds=10)
    if config.retry_period == zero:
        config.retry_period = timedelta(seconds=2)
    if config.resource_lock == "":
        config.resource_lock = DEFAULT_LEADER_ELECTION_RESOURCE_LOCK
    if config.resource_name == "":
        config.resource_name = DEFAULT_LEADER_ELECTION_RESOURCE_NAME


def set_defaults_operator_configuration(config: OperatorConfiguration) -> None:
    """Fill in the unset log level and log format."""
    if config.log_level == "":
        config.log_level = LogLevel.INFO
    if config.log_format == "":
        config.log_format = LogFormat.JSON


def set_defaults_server(config: ServerConfiguration) -> None:
    """Fill in unset server ports, certificate directory and optional servers."""
    if config.webhooks.port == 0:
        config.webhooks.port = 2750
    if config.webhooks.server_cert_dir == "":
        config.webhooks.server_cert_dir = DEFAULT_WEBHOOK_SERVER_TLS_SERVER_CERT_DIR
    if config.health_probes is None:
        config.health_probes = Server()
    if config.health_probes.port == 0:
        config.health_probes.port = 2751
    if config.metrics is None:
        config.metrics = Server()
    if config.metrics.port == 0:
        config.metrics.port = 2752


def set_defaults_pod_gang_set_controller(config: PodGangSetControllerConfiguration) -> None:
    """Default the PodGangSet controller to a single worker."""
    if config.concurrent_syncs is None:
        config.concurrent_syncs = 1


def set_defaults_pod_clique_controller(config: PodCliqueControllerConfiguration) -> None:
    """Default the PodClique controller to a single worker."""
    if config.concurrent_syncs is None:
        config.concurrent_syncs = 1


def apply_defaults(config: OperatorConfiguration) -> OperatorConfiguration:
    """Apply every registered default to an operator configuration, in place."""
    set_defaults_operator_configuration(config)
    set_defaults_client_connection(config.client_connection)
    set_defaults_leader_election(config.leader_election)
    set_defaults_server(config.server)
    set_defaults_pod_gang_set_controller(config.controllers.pod_gang_set)
    set_defaults_pod_clique_controller(config.controllers.pod_clique)
    return config