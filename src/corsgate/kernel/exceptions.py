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
"""Exception hierarchy for corsgate.

Only configuration problems are exceptions. A request that fails CORS checks
is a normal outcome of the decision engine and never raises.

Categories:
- ConfigurationException: invalid or missing settings detected at startup
"""

from __future__ import annotations


class CorsGateException(Exception):
    """Base exception for all corsgate errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_ORIGINS_REQUIRED").
        context: Arbitrary key-value pairs describing the failure.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationException(CorsGateException):
    """Settings that make it impossible to install the middleware."""


class MissingOriginsException(ConfigurationException):
    """No allowed origin was configured."""

    def __init__(self) -> None:
        super().__init__(
            "You must set at least a single valid origin. "
            "If you don't want CORS to apply, remove the middleware.",
            code="CORS_ORIGINS_REQUIRED",
        )


class InvalidDurationException(ConfigurationException):
    """A duration setting could not be parsed or is negative."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Invalid duration {value!r}: expected seconds or a value like '90s', '10m', '1h30m'",
            code="CORS_INVALID_DURATION",
            context={"value": value},
        )


class InvalidPropertyException(ConfigurationException):
    """A configuration value has the wrong type for its setting."""

    def __init__(self, key: str, value: object, expected: str) -> None:
        super().__init__(
            f"Invalid value {value!r} for '{key}': expected {expected}",
            code="CONFIG_INVALID_VALUE",
            context={"key": key, "value": value, "expected": expected},
        )


class UnboundPropertiesException(ConfigurationException):
    """A class passed to Config.bind() lacks @config_properties."""
