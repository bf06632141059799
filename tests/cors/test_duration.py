"""Tests for duration parsing."""

from __future__ import annotations

from datetime import timedelta

import pytest

from corsgate.cors.duration import parse_duration, render_seconds
from corsgate.kernel.exceptions import InvalidDurationException


class TestParseDuration:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, 0.0),
            (60, 60.0),
            (1.5, 1.5),
            ("120", 120.0),
            ("30s", 30.0),
            ("10m", 600.0),
            ("1h30m", 5400.0),
            ("1.5h", 5400.0),
            ("500ms", 0.5),
            (timedelta(minutes=2), 120.0),
        ],
    )
    def test_accepted_forms(self, value, expected):
        assert parse_duration(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["", "abc", "10 minutes", "5d", "m10", "-1s", -1, "nan", True, None])
    def test_rejected_forms(self, value):
        with pytest.raises(InvalidDurationException) as exc_info:
            parse_duration(value)

        assert exc_info.value.code == "CORS_INVALID_DURATION"

    def test_integer_too_large_for_float(self):
        with pytest.raises(InvalidDurationException) as exc_info:
            parse_duration(10**400)

        assert exc_info.value.context == {"value": 10**400}


class TestRenderSeconds:
    def test_rounds_to_whole_seconds(self):
        assert render_seconds(60.0) == "60"
        assert render_seconds(0.4) == "0"
        assert render_seconds(59.7) == "60"
