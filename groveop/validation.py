"""Validation of the operator configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence

from .config import (
    ALL_LOG_FORMATS,
    ALL_LOG_LEVELS,
    ControllerConfiguration,
    OperatorConfiguration,
    PodGangSetControllerConfiguration,
)

NOT_SUPPORTED = "FieldValueNotSupported"
INVALID = "FieldValueInvalid"


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _render(value: Any) -> str:
    value = _plain(value)
    if value is None:
        return "null"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class FieldError:
    """A single problem found at one field of a configuration."""

    type: str
    field: str
    bad_value: Any
    detail: str = ""

    def __str__(self) -> str:
        if self.type == NOT_SUPPORTED:
            body = f"Unsupported value: {_render(self.bad_value)}"
        elif self.type == INVALID:
            body = f"Invalid value: {_render(self.bad_value)}"
        else:
            body = f"{self.type}: {_render(self.bad_value)}"
        if self.detail:
            body = f"{body}: {self.detail}"
        return f"{self.field}: {body}"


class ValidationError(ValueError):
    """Raised when a configuration has one or more field errors."""

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = str(self.errors[0])
        else:
            message = "[" + ", ".join(str(err) for err in self.errors) + "]"
        super().__init__(message)


def _not_supported(path: str, value: Any, valid: Sequence[Any]) -> FieldError:
    supported = ", ".join(_render(item) for item in valid)
    return FieldError(NOT_SUPPORTED, path, _plain(value), f"supported values: {supported}")


def _is_set(value: Any) -> bool:
    return len(str(_plain(value) or "").strip()) > 0


def _validate_log_configuration(config: OperatorConfiguration) -> list[FieldError]:
    errors: list[FieldError] = []
    level = _plain(config.log_level)
    if _is_set(level) and level not in {item.value for item in ALL_LOG_LEVELS}:
        errors.append(_not_supported("logLevel", level, ALL_LOG_LEVELS))
    log_format = _plain(config.log_format)
    if _is_set(log_format) and log_format not in {item.value for item in ALL_LOG_FORMATS}:
        errors.append(_not_supported("logFormat", log_format, ALL_LOG_FORMATS))
    return errors


def _validate_concurrent_syncs(value: int | None, path: str) -> list[FieldError]:
    if (value or 0) <= 0:
        return [FieldError(INVALID, f"{path}.concurrentSyncs", value, "must be greater than 0")]
    return []


def _validate_pod_gang_set_controller(
    config: PodGangSetControllerConfiguration, path: str
) -> list[FieldError]:
    return _validate_concurrent_syncs(config.concurrent_syncs, path)


def _validate_controllers(config: ControllerConfiguration, path: str) -> list[FieldError]:
    return _validate_pod_gang_set_controller(config.pod_gang_set, f"{path}.podGangSet")


def validate_operator_configuration(config: OperatorConfiguration) -> list[FieldError]:
    """Return every field error found in the operator configuration."""
    return [
        *_validate_log_configuration(config),
        *_validate_controllers(config.controllers, "controllers"),
    ]