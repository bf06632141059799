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
"""CorsPolicy — the normalized, immutable CORS configuration."""

from __future__ import annotations

from dataclasses import dataclass

from corsgate.cors.duration import parse_duration, render_seconds
from corsgate.cors.properties import CorsProperties
from corsgate.kernel.exceptions import InvalidPropertyException, MissingOriginsException

WILDCARD = "*"


def _text(properties: CorsProperties, name: str) -> str:
    value = getattr(properties, name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidPropertyException(f"corsgate.cors.{name}", value, "a comma separated string")
    return value


def split_list(raw: str) -> tuple[str, ...]:
    """Split a comma delimited setting into trimmed, non-empty tokens."""
    return tuple(token for token in (part.strip() for part in raw.split(",")) if token)


@dataclass(frozen=True)
class CorsPolicy:
    """Normalized CORS policy consumed by :class:`~corsgate.cors.engine.CorsEngine`.

    Built once at startup with :meth:`from_properties` and shared read-only
    across requests.

    Attributes:
        origins: Exact origins, compared case-sensitively.
        force_origin_match: ``True`` when origins were configured as ``"*"``.
        methods: Allowed methods, compared case-sensitively.
        allow_methods: Raw methods string for ``Access-Control-Allow-Methods``.
        request_headers: Allowed request headers, lower-cased.
        allow_headers: Raw headers string for ``Access-Control-Allow-Headers``.
        exposed_headers: Raw value for ``Access-Control-Expose-Headers``.
        max_age: Whole seconds for ``Access-Control-Max-Age``; ``"0"`` omits it.
        allow_credentials: Whether credentialed requests are allowed.
        credentials: ``"true"`` or ``"false"``.
        validate_headers: Check preflight method and headers against the policy.
    """

    origins: tuple[str, ...]
    force_origin_match: bool
    methods: tuple[str, ...]
    allow_methods: str
    request_headers: tuple[str, ...]
    allow_headers: str
    exposed_headers: str = ""
    max_age: str = "0"
    allow_credentials: bool = False
    credentials: str = "false"
    validate_headers: bool = False

    @classmethod
    def from_properties(cls, properties: CorsProperties) -> CorsPolicy:
        """Normalize raw properties.

        Raises:
            MissingOriginsException: If no origin is configured.
            InvalidDurationException: If ``max_age`` is not a valid duration.
            InvalidPropertyException: If a list setting is not a string.
        """
        raw_origins = _text(properties, "origins").strip()
        if not raw_origins:
            raise MissingOriginsException()

        methods = _text(properties, "methods")
        request_headers = _text(properties, "request_headers")

        return cls(
            origins=split_list(raw_origins),
            force_origin_match=raw_origins == WILDCARD,
            methods=split_list(methods),
            allow_methods=methods,
            request_headers=tuple(h.lower() for h in split_list(request_headers)),
            allow_headers=request_headers,
            exposed_headers=_text(properties, "exposed_headers"),
            max_age=render_seconds(parse_duration(properties.max_age)),
            allow_credentials=properties.credentials,
            credentials="true" if properties.credentials else "false",
            validate_headers=properties.validate_headers,
        )

    @classmethod
    def of(cls, origins: str, **settings: object) -> CorsPolicy:
        """Shortcut for ``from_properties(CorsProperties(origins=..., ...))``."""
        return cls.from_properties(CorsProperties(origins=origins, **settings))  # type: ignore[arg-type]

    @property
    def max_age_enabled(self) -> bool:
        return self.max_age != "0"
