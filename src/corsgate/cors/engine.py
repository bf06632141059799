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
"""CORS decision engine.

Implements the server side of the CORS protocol as a pure function of the
policy and the request method and headers:

    no Origin            -> FORWARD               (Vary only)
    Origin not allowed   -> REJECT                (Vary only)
    simple request       -> FORWARD_WITH_HEADERS
    valid preflight      -> PREFLIGHT_OK          (200, empty body)
    invalid preflight    -> REJECT                (Vary only)

The engine never touches the transport; adapters such as
:class:`~corsgate.web.adapters.starlette.middleware.CORSMiddleware` apply the
resulting :class:`CorsDecision`.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from corsgate.cors.policy import WILDCARD, CorsPolicy

logger = structlog.get_logger("corsgate.cors")

VARY = "Vary"
ORIGIN = "Origin"
REQUEST_METHOD = "Access-Control-Request-Method"
REQUEST_HEADERS = "Access-Control-Request-Headers"

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
MAX_AGE = "Access-Control-Max-Age"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"

OPTIONS = "OPTIONS"


class CorsAction(enum.Enum):
    """What the transport should do with a request."""

    FORWARD = "forward"
    FORWARD_WITH_HEADERS = "forward-with-headers"
    PREFLIGHT_OK = "respond-preflight-ok"
    REJECT = "reject"


class RejectReason(str, enum.Enum):
    ORIGIN_MISMATCH = "origin_mismatch"
    METHOD_NOT_ALLOWED = "preflight_method_not_allowed"
    HEADER_NOT_ALLOWED = "preflight_header_not_allowed"


@dataclass(frozen=True)
class CorsDecision:
    """Outcome of :meth:`CorsEngine.decide`.

    ``headers`` are the response headers to set, in order. ``Vary: Origin``
    is always first.
    """

    action: CorsAction
    headers: tuple[tuple[str, str], ...]
    origin: str | None = None
    reason: RejectReason | None = None

    @property
    def forwards(self) -> bool:
        return self.action in (CorsAction.FORWARD, CorsAction.FORWARD_WITH_HEADERS)

    @property
    def is_preflight(self) -> bool:
        return self.action is CorsAction.PREFLIGHT_OK

    @property
    def is_rejected(self) -> bool:
        return self.action is CorsAction.REJECT

    def header(self, name: str) -> str | None:
        """Return the value of header *name* (case-insensitive), or ``None``."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None


class CorsEngine:
    """Applies a :class:`CorsPolicy` to individual requests.

    Safe to share between concurrent requests: the policy is immutable and
    :meth:`decide` keeps no state.
    """

    def __init__(self, policy: CorsPolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> CorsPolicy:
        return self._policy

    def decide(self, method: str, headers: Mapping[str, str]) -> CorsDecision:
        """Decide how to handle a request with the given method and headers."""
        request_headers: dict[str, str] = {}
        for key, value in headers.items():
            request_headers.setdefault(key.lower(), value)
        response_headers: list[tuple[str, str]] = [(VARY, ORIGIN)]

        origin = request_headers.get("origin", "")
        if not origin:
            return CorsDecision(CorsAction.FORWARD, tuple(response_headers))

        if not self.match_origin(origin):
            return self._reject(origin, RejectReason.ORIGIN_MISMATCH)

        requested_method = request_headers.get(REQUEST_METHOD.lower(), "")
        preflight = method == OPTIONS and bool(requested_method)
        policy = self._policy

        if preflight:
            reason = self._validate_preflight(
                requested_method, request_headers.get(REQUEST_HEADERS.lower(), "")
            )
            if reason is not None:
                return self._reject(origin, reason)

            response_headers.append((ALLOW_METHODS, policy.allow_methods))
            response_headers.append((ALLOW_HEADERS, policy.allow_headers))
            if policy.max_age_enabled:
                response_headers.append((MAX_AGE, policy.max_age))
        elif policy.exposed_headers:
            response_headers.append((EXPOSE_HEADERS, policy.exposed_headers))

        # "*" must not be used for a resource that supports credentials.
        if policy.allow_credentials:
            response_headers.append((ALLOW_CREDENTIALS, policy.credentials))
            response_headers.append((ALLOW_ORIGIN, origin))
        elif policy.force_origin_match:
            response_headers.append((ALLOW_ORIGIN, WILDCARD))
        else:
            response_headers.append((ALLOW_ORIGIN, origin))

        action = CorsAction.PREFLIGHT_OK if preflight else CorsAction.FORWARD_WITH_HEADERS
        return CorsDecision(action, tuple(response_headers), origin=origin)

    def match_origin(self, origin: str) -> bool:
        """Case-sensitive match of *origin* against the policy."""
        return self._policy.force_origin_match or origin in self._policy.origins

    def match_method(self, method: str) -> bool:
        """Case-sensitive match of a requested method against the policy."""
        return bool(method) and method in self._policy.methods

    def match_headers(self, requested: str) -> bool:
        """Case-insensitive match of a comma delimited header list.

        An empty list, or one made only of blank tokens, requests no headers
        and always matches.
        """
        allowed = self._policy.request_headers
        for token in requested.split(","):
            header = token.strip().lower()
            if header and header not in allowed:
                return False
        return True

    def _validate_preflight(self, requested_method: str, requested_headers: str) -> RejectReason | None:
        if not self._policy.validate_headers:
            return None
        if not self.match_method(requested_method):
            return RejectReason.METHOD_NOT_ALLOWED
        if not self.match_headers(requested_headers):
            return RejectReason.HEADER_NOT_ALLOWED
        return None

    @staticmethod
    def _reject(origin: str, reason: RejectReason) -> CorsDecision:
        logger.debug("cors_request_rejected", origin=origin, reason=reason.value)
        return CorsDecision(CorsAction.REJECT, ((VARY, ORIGIN),), origin=origin, reason=reason)
