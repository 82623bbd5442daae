"""Registry mapping API kinds to the classes that represent them."""

from __future__ import annotations

from typing import Any, Callable, Mapping

import yaml

from . import config as operator_config
from .meta import SCHEME_GROUP_VERSION, GroupVersion, GroupVersionKind
from .podclique import PodClique, PodCliqueList
from .podgangset import PodGangSet, PodGangSetList


class UnknownKindError(LookupError):
    """Raised when a kind or type is not registered with a scheme."""


def _split_api_version(api_version: str) -> GroupVersion:
    if "/" in api_version:
        group, version = api_version.split("/", 1)
        return GroupVersion(group, version)
    return GroupVersion("", api_version)


class Scheme:
    """Maps group/version/kind triples to classes and back."""

    def __init__(self) -> None:
        self._kinds: dict[GroupVersionKind, type] = {}
        self._type_kinds: dict[type, list[GroupVersionKind]] = {}
        self._defaulters: dict[type, Callable[[Any], Any]] = {}

    def add_known_types(self, group_version: GroupVersion, *args: Any) -> None:
        """Register classes (or instances of them) under the given group version."""
        for item in args:
            cls = item if isinstance(item, type) else type(item)
            gvk = group_version.with_kind(cls.__name__)
            existing = self._kinds.get(gvk)
            if existing is not None and existing is not cls:
                raise ValueError(
                    f"double registration of different types for {gvk}: "
                    f"{existing.__qualname__} and {cls.__qualname__}"
                )
            self._kinds[gvk] = cls
            registered = self._type_kinds.setdefault(cls, [])
            if gvk not in registered:
                registered.append(gvk)

    def _add_defaulting_func(self, cls: type, func: Callable[[Any], Any]) -> None:
        self._defaulters[cls] = func

    def object_kind(self, obj: Any) -> GroupVersionKind:
        """Return the group/version/kind under which the object's type is registered."""
        kinds = self._type_kinds.get(type(obj))
        if not kinds:
            raise UnknownKindError(f"no kind is registered for the type {type(obj).__name__}")
        return kinds[0]

    def new(self, gvk: GroupVersionKind) -> Any:
        """Create an empty object of the registered kind."""
        cls = self._kinds.get(gvk)
        if cls is None:
            raise UnknownKindError(
                f"no kind {gvk.kind!r} is registered for version "
                f"{str(GroupVersion(gvk.group, gvk.version))!r}"
            )
        return cls()

    def decode(self, data: Mapping[str, Any] | str | bytes) -> Any:
        """Decode a YAML/JSON document or mapping into its registered, defaulted type."""
        document: Any = data
        if isinstance(data, (str, bytes)):
            try:
                document = yaml.safe_load(data)
            except yaml.YAMLError as exc:
                raise ValueError(f"invalid document: {exc}") from exc
        if not isinstance(document, Mapping):
            raise ValueError("document is not an object")
        kind_name = document.get("kind") or ""
        api_version = document.get("apiVersion") or ""
        if not kind_name:
            raise UnknownKindError("Object 'Kind' is missing in document")
        gv = _split_api_version(api_version)
        gvk = gv.with_kind(kind_name)
        cls = self._kinds.get(gvk)
        if cls is None:
            raise UnknownKindError(
                f"no kind {kind_name!r} is registered for version {api_version!r}"
            )
        obj = cls.from_dict(document)
        if hasattr(obj, "api_version") and not obj.api_version:
            obj.api_version = api_version
        if hasattr(obj, "kind") and not obj.kind:
            obj.kind = kind_name
        defaulter = self._defaulters.get(cls)
        if defaulter is not None:
            defaulter(obj)
        return obj


def build_scheme() -> Scheme:
    """Build a scheme holding the operator configuration and the grove.io resource kinds."""
    scheme = Scheme()
    scheme.add_known_types(
        operator_config.SCHEME_GROUP_VERSION, operator_config.OperatorConfiguration
    )
    scheme._add_defaulting_func(
        operator_config.OperatorConfiguration, operator_config.apply_defaults
    )
    scheme.add_known_types(
        SCHEME_GROUP_VERSION, PodGangSet, PodGangSetList, PodClique, PodCliqueList
    )
    return scheme