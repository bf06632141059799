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
"""CORS policy, decision engine and rejection handling."""

from corsgate.cors.duration import parse_duration
from corsgate.cors.engine import CorsAction, CorsDecision, CorsEngine, RejectReason
from corsgate.cors.policy import CorsPolicy, split_list
from corsgate.cors.properties import CorsProperties
from corsgate.cors.rejection import RejectionHandler, empty_response, status_response

__all__ = [
    "CorsAction",
    "CorsDecision",
    "CorsEngine",
    "CorsPolicy",
    "CorsProperties",
    "RejectReason",
    "RejectionHandler",
    "empty_response",
    "parse_duration",
    "split_list",
    "status_response",
]
