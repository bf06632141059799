# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Configuration loaded from YAML/TOML files and env vars, bound onto dataclasses."""

from __future__ import annotations

import dataclasses
import os
import tomllib
import types
import typing
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

from corsgate.kernel.exceptions import InvalidPropertyException, UnboundPropertiesException

T = TypeVar("T")

ENV_PREFIX = "CORSGATE_"

_CONFIG_PROPERTIES_ATTR = "__corsgate_config_prefix__"

_TRUE_VALUES = ("true", "1", "yes", "on")


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="corsgate.cors")
        @dataclass
        class CorsProperties:
            origins: str = ""
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (CORSGATE_SECTION_KEY format)
    2. Configuration dict / file values
    3. Dataclass defaults
    """

    def __init__(self, data: dict[str, Any] | None = None, source: str | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._source = source

    @property
    def source(self) -> str | None:
        """Path of the file this config was loaded from, if any."""
        return self._source

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Load configuration from a YAML or TOML file.

        A missing file yields an empty configuration so that env vars alone
        can drive the settings.
        """
        path = Path(path)
        if not path.exists():
            return cls({}, source=None)
        return cls(cls._load_config_data(path), source=str(path))

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def env_key(key: str) -> str:
        """Map a dotted key to its env var: corsgate.cors.max_age -> CORSGATE_CORS_MAX_AGE."""
        base = key.removeprefix("corsgate.")
        return ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first."""
        env_val = os.environ.get(self.env_key(key))
        if env_val is not None:
            return env_val

        current: Any = self._data
        for part in key.split("."):
            if isinstance(current, dict):
                current = current.get(part)
                if current is None:
                    return default
            else:
                return default
        return current

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a dict (env vars are not applied)."""
        current: Any = self._data
        for part in prefix.split("."):
            if isinstance(current, dict):
                current = current.get(part, {})
            else:
                return {}
        return current if isinstance(current, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration onto a @config_properties dataclass.

        Each field is looked up with :meth:`get`, so env vars override file
        values. String values are coerced to the field's int, float or bool
        type, including optional variants such as ``int | None``.

        Raises:
            UnboundPropertiesException: If *config_cls* lacks @config_properties.
            InvalidPropertyException: If a string value cannot be coerced.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise UnboundPropertiesException(
                f"{config_cls.__name__} is not decorated with @config_properties",
                code="CONFIG_UNBOUND",
            )

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            key = f"{prefix}.{field.name}"
            value = self.get(key)
            if value is None:
                continue
            expected = hints.get(field.name)
            try:
                kwargs[field.name] = _coerce(value, expected)
            except ValueError as exc:
                raise InvalidPropertyException(key, value, _type_name(expected)) from exc

        return config_cls(**kwargs)


def _coerce(value: Any, expected: Any) -> Any:
    if not isinstance(value, str) or expected is None:
        return value

    if typing.get_origin(expected) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(expected) if a is not type(None)]
        if str in args:
            return value
        if type(None) in typing.get_args(expected) and value.strip().lower() in ("", "none", "null"):
            return None
        if len(args) == 1:
            expected = args[0]

    if expected is bool:
        return value.strip().lower() in _TRUE_VALUES
    if expected is int:
        return int(value)
    if expected is float:
        return float(value)
    return value


def _type_name(expected: Any) -> str:
    return getattr(expected, "__name__", None) or str(expected)
