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
"""Duration parsing for settings such as ``max_age``."""

from __future__ import annotations

import math
import re
from datetime import timedelta

from corsgate.kernel.exceptions import InvalidDurationException

_UNIT_SECONDS = {
    "h": 3600.0,
    "m": 60.0,
    "s": 1.0,
    "ms": 1e-3,
    "us": 1e-6,
    "µs": 1e-6,
    "ns": 1e-9,
}

_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ms|us|µs|ns|h|m|s)")
_FULL_RE = re.compile(r"(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ms|us|µs|ns|h|m|s))+")


def parse_duration(value: str | int | float | timedelta) -> float:
    """Return *value* as a non-negative number of seconds.

    Accepts a ``timedelta``, a number of seconds, a numeric string, or a
    unit string made of one or more ``<number><unit>`` parts where unit is
    one of ``h``, ``m``, ``s``, ``ms``, ``us`` or ``ns`` (``"1h30m"``, ``"90s"``).
    """
    if isinstance(value, bool):
        raise InvalidDurationException(value)
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)):
        try:
            seconds = float(value)
        except OverflowError as exc:
            raise InvalidDurationException(value) from exc
    elif isinstance(value, str):
        seconds = _parse_text(value)
    else:
        raise InvalidDurationException(value)

    if not math.isfinite(seconds) or seconds < 0:
        raise InvalidDurationException(value)
    return seconds


def render_seconds(seconds: float) -> str:
    """Render *seconds* as a whole-second header value."""
    return str(round(seconds))


def _parse_text(value: str) -> float:
    text = value.strip()
    if not text:
        raise InvalidDurationException(value)
    try:
        return float(text)
    except ValueError:
        pass
    if not _FULL_RE.fullmatch(text):
        raise InvalidDurationException(value)
    return sum(float(number) * _UNIT_SECONDS[unit] for number, unit in _PART_RE.findall(text))
