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
"""Starlette application factory with the CORS middleware installed."""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from corsgate.core.config import Config
from corsgate.cors.policy import CorsPolicy
from corsgate.cors.properties import CorsProperties
from corsgate.cors.rejection import RejectionHandler, for_status
from corsgate.logging.port import LoggingPort
from corsgate.logging.structlog_adapter import StructlogAdapter
from corsgate.web.adapters.starlette.middleware import CORSMiddleware

logger = structlog.get_logger("corsgate.web")


def cors_middleware(
    properties: CorsProperties,
    on_reject: RejectionHandler | None = None,
) -> Middleware:
    """Normalize *properties* and wrap them in a Starlette ``Middleware`` entry.

    Raises:
        ConfigurationException: If the properties cannot form a valid policy.
    """
    policy = CorsPolicy.from_properties(properties)
    handler = on_reject or for_status(properties.reject_status)
    logger.info(
        "cors_policy_installed",
        origins="*" if policy.force_origin_match else list(policy.origins),
        methods=list(policy.methods),
        credentials=policy.allow_credentials,
        validate_headers=policy.validate_headers,
        max_age=policy.max_age,
        on_reject=getattr(handler, "__name__", repr(handler)),
    )
    return Middleware(CORSMiddleware, policy=policy, on_reject=handler)


def create_app(
    routes: Sequence[BaseRoute] | None = None,
    cors: CorsProperties | None = None,
    config: Config | None = None,
    on_reject: RejectionHandler | None = None,
    logging_port: LoggingPort | None = None,
    debug: bool = False,
) -> Starlette:
    """Create a Starlette application guarded by the CORS middleware.

    When ``config`` is provided, logging is configured from
    ``corsgate.logging`` through ``logging_port`` (a :class:`StructlogAdapter`
    by default) and, unless ``cors`` is given explicitly, the CORS
    settings are bound from ``corsgate.cors``.

    The policy is built before the application, so a missing origins setting
    fails here instead of on the first request.
    """
    if config is not None:
        (logging_port or StructlogAdapter()).configure(config)
        if cors is None:
            cors = config.bind(CorsProperties)

    middleware = [cors_middleware(cors or CorsProperties(), on_reject)]
    return Starlette(debug=debug, routes=list(routes or []), middleware=middleware)
