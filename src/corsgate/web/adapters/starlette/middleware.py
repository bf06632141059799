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
"""CORSMiddleware — pure ASGI middleware applying CORS decisions."""

from __future__ import annotations

import functools

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from corsgate.cors.engine import VARY, CorsAction, CorsDecision, CorsEngine
from corsgate.cors.policy import CorsPolicy
from corsgate.cors.rejection import RejectionHandler, empty_response


class CORSMiddleware:
    """Runs every HTTP request through a :class:`CorsEngine`.

    - Forwarded requests reach the inner app; CORS headers are set on its
      ``http.response.start`` message.
    - Valid preflights are answered with an empty 200 and never forwarded.
    - Rejected requests are answered by ``on_reject`` and never forwarded.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so streaming
    responses from the inner app are passed through unbuffered.
    """

    def __init__(
        self,
        app: ASGIApp,
        policy: CorsPolicy,
        on_reject: RejectionHandler | None = None,
    ) -> None:
        self.app = app
        self._engine = CorsEngine(policy)
        self._on_reject = on_reject or empty_response

    @property
    def engine(self) -> CorsEngine:
        return self._engine

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        decision = self._engine.decide(scope["method"], Headers(scope=scope))

        if decision.action is CorsAction.PREFLIGHT_OK:
            response = Response(status_code=200)
            _apply_headers(response.headers, decision)
            await response(scope, receive, send)
            return

        if decision.action is CorsAction.REJECT:
            response = self._on_reject(decision)
            _apply_headers(response.headers, decision)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, functools.partial(self._send, send, decision))

    @staticmethod
    async def _send(send: Send, decision: CorsDecision, message: Message) -> None:
        if message["type"] == "http.response.start":
            message.setdefault("headers", [])
            _apply_headers(MutableHeaders(scope=message), decision)
        await send(message)


def _apply_headers(headers: MutableHeaders, decision: CorsDecision) -> None:
    for name, value in decision.headers:
        if name == VARY:
            headers[VARY] = _merge_vary(headers.get(VARY), value)
        else:
            headers[name] = value


def _merge_vary(existing: str | None, value: str) -> str:
    if not existing:
        return value
    items = [item.strip() for item in existing.split(",") if item.strip()]
    if value.lower() not in (item.lower() for item in items):
        items.append(value)
    return ", ".join(items)
