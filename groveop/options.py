"""Command-line options that load and check the operator configuration."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .config import (
    OPERATOR_CONFIGURATION_KIND,
    SCHEME_GROUP_VERSION,
    OperatorConfiguration,
    apply_defaults,
)
from .validation import ValidationError, validate_operator_configuration


class ConfigError(ValueError):
    """Raised when the configuration file cannot be found, read or decoded."""


def decode_operator_configuration(data: bytes | str) -> OperatorConfiguration:
    """Decode a YAML or JSON document into a defaulted operator configuration."""
    try:
        document: Any = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid document: {exc}") from exc
    if not isinstance(document, dict):
        raise ConfigError("document is not an object")
    kind = document.get("kind") or ""
    api_version = document.get("apiVersion") or ""
    if not kind:
        raise ConfigError("Object 'Kind' is missing in document")
    if api_version != str(SCHEME_GROUP_VERSION) or kind != OPERATOR_CONFIGURATION_KIND:
        raise ConfigError(
            f"no kind {kind!r} is registered for version {api_version!r}"
        )
    try:
        config = OperatorConfiguration.from_dict(document)
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(str(exc)) from exc
    return apply_defaults(config)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser holding the operator's flags."""
    parser = argparse.ArgumentParser(prog="grove-operator")
    parser.add_argument("--config", default="", help="Path to configuration file.")
    return parser


@dataclass
class CLIOptions:
    """Loads the operator configuration from the file named on the command line."""

    config_file: str = ""
    config: OperatorConfiguration | None = None

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace) -> CLIOptions:
        return cls(config_file=getattr(namespace, "config", "") or "")

    def complete(self) -> OperatorConfiguration:
        """Read and decode the configuration file."""
        if not self.config_file:
            raise ConfigError("missing config file")
        try:
            data = Path(self.config_file).read_bytes()
        except OSError as exc:
            raise ConfigError(f"error reading config file: {exc}") from exc
        try:
            self.config = decode_operator_configuration(data)
        except ConfigError as exc:
            raise ConfigError(f"error decoding config: {exc}") from exc
        return self.config

    def validate(self) -> None:
        """Raise ValidationError if the loaded configuration is invalid."""
        if self.config is None:
            raise ConfigError("configuration has not been loaded")
        errors = validate_operator_configuration(self.config)
        if errors:
            raise ValidationError(errors)