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
"""Responses for requests the CORS engine rejects.

A rejected request is never forwarded. Which response the client gets is a
host decision, so it is injectable: the default mirrors a server whose handler
wrote nothing (empty 200), and :func:`status_response` makes it explicit.
"""

from __future__ import annotations

from collections.abc import Callable

from starlette.responses import Response

from corsgate.cors.engine import CorsDecision

RejectionHandler = Callable[[CorsDecision], Response]


def empty_response(decision: CorsDecision) -> Response:
    """Leave the response at its defaults: status 200 and no body."""
    return Response(status_code=200)


def status_response(status_code: int) -> RejectionHandler:
    """Build a handler that answers every rejection with *status_code*."""

    def _handler(decision: CorsDecision) -> Response:
        return Response(status_code=status_code)

    _handler.__name__ = f"status_response_{status_code}"
    return _handler


def for_status(status_code: int | None) -> RejectionHandler:
    """Pick the handler for an optional configured status."""
    return empty_response if status_code is None else status_response(status_code)
