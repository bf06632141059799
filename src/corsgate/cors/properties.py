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
"""Raw CORS configuration properties (corsgate.cors.*)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from corsgate.core.config import config_properties


@config_properties(prefix="corsgate.cors")
@dataclass
class CorsProperties:
    """Unnormalized CORS settings as they appear in configuration.

    List-valued settings are comma delimited strings. ``origins`` is required;
    the literal ``"*"`` allows any origin. The raw ``methods`` and
    ``request_headers`` strings are echoed verbatim in preflight responses.
    """

    origins: str = ""
    methods: str = "GET, PUT, POST, DELETE"
    request_headers: str = "Origin, Authorization, Content-Type"
    exposed_headers: str = ""
    max_age: str | int | float | timedelta = "1m"
    credentials: bool = False
    validate_headers: bool = False
    reject_status: int | None = None
