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
"""Tests for the CORS decision engine."""

from __future__ import annotations

import pytest

from corsgate.cors.engine import CorsAction, CorsEngine, RejectReason
from corsgate.cors.policy import CorsPolicy

CORS_RESPONSE_HEADERS = (
    "Access-Control-Allow-Origin",
    "Access-Control-Allow-Credentials",
    "Access-Control-Allow-Methods",
    "Access-Control-Allow-Headers",
    "Access-Control-Max-Age",
    "Access-Control-Expose-Headers",
)


def engine_for(origins: str = "http://a.com", **settings) -> CorsEngine:
    return CorsEngine(CorsPolicy.of(origins, **settings))


def preflight(origin: str, method: str, headers: str | None = None) -> dict[str, str]:
    request = {"Origin": origin, "Access-Control-Request-Method": method}
    if headers is not None:
        request["Access-Control-Request-Headers"] = headers
    return request


class TestNoOrigin:
    def test_forwards_with_vary_only(self):
        decision = engine_for().decide("GET", {})

        assert decision.action is CorsAction.FORWARD
        assert decision.headers == (("Vary", "Origin"),)
        assert decision.forwards

    def test_empty_origin_counts_as_absent(self):
        decision = engine_for().decide("GET", {"Origin": ""})

        assert decision.action is CorsAction.FORWARD

    def test_options_without_origin_is_forwarded(self):
        decision = engine_for().decide("OPTIONS", {"Access-Control-Request-Method": "GET"})

        assert decision.action is CorsAction.FORWARD


class TestOriginMatching:
    def test_unlisted_origin_rejected(self):
        decision = engine_for().decide("GET", {"Origin": "http://evil.com"})

        assert decision.action is CorsAction.REJECT
        assert decision.reason is RejectReason.ORIGIN_MISMATCH
        assert decision.headers == (("Vary", "Origin"),)
        assert not decision.forwards
        for name in CORS_RESPONSE_HEADERS:
            assert decision.header(name) is None

    def test_origin_match_is_case_sensitive(self):
        decision = engine_for("http://a.com").decide("GET", {"Origin": "http://A.com"})

        assert decision.is_rejected

    def test_any_listed_origin_matches(self):
        engine = engine_for("http://a.com, http://b.com")

        assert engine.match_origin("http://b.com")
        assert not engine.match_origin("http://c.com")

    @pytest.mark.parametrize("origin", ["http://a.com", "https://x.example:8443", "null"])
    def test_wildcard_matches_any_origin(self, origin):
        decision = engine_for("*").decide("GET", {"Origin": origin})

        assert decision.action is CorsAction.FORWARD_WITH_HEADERS
        assert decision.header("Access-Control-Allow-Origin") == "*"

    def test_header_lookup_is_case_insensitive(self):
        decision = engine_for().decide("GET", {"origin": "http://a.com"})

        assert decision.action is CorsAction.FORWARD_WITH_HEADERS


class TestSimpleRequest:
    def test_echoes_listed_origin(self):
        decision = engine_for().decide("GET", {"Origin": "http://a.com"})

        assert decision.action is CorsAction.FORWARD_WITH_HEADERS
        assert decision.header("Access-Control-Allow-Origin") == "http://a.com"
        assert decision.header("Access-Control-Allow-Credentials") is None
        assert decision.headers[0] == ("Vary", "Origin")

    def test_exposed_headers_emitted_when_configured(self):
        decision = engine_for(exposed_headers="X-Custom").decide("POST", {"Origin": "http://a.com"})

        assert decision.header("Access-Control-Expose-Headers") == "X-Custom"

    def test_exposed_headers_omitted_when_empty(self):
        decision = engine_for().decide("GET", {"Origin": "http://a.com"})

        assert decision.header("Access-Control-Expose-Headers") is None

    def test_simple_request_has_no_preflight_headers(self):
        decision = engine_for().decide("GET", {"Origin": "http://a.com"})

        assert decision.header("Access-Control-Allow-Methods") is None
        assert decision.header("Access-Control-Max-Age") is None

    def test_options_without_request_method_is_simple(self):
        decision = engine_for(exposed_headers="X-Custom").decide("OPTIONS", {"Origin": "http://a.com"})

        assert decision.action is CorsAction.FORWARD_WITH_HEADERS
        assert decision.header("Access-Control-Expose-Headers") == "X-Custom"

    def test_options_with_empty_request_method_is_simple(self):
        decision = engine_for().decide("OPTIONS", preflight("http://a.com", ""))

        assert decision.action is CorsAction.FORWARD_WITH_HEADERS


class TestCredentials:
    def test_credentials_echo_origin(self):
        engine = engine_for("http://a.com", methods="GET, POST", credentials=True)

        decision = engine.decide("GET", {"Origin": "http://a.com"})

        assert decision.action is CorsAction.FORWARD_WITH_HEADERS
        assert decision.header("Access-Control-Allow-Origin") == "http://a.com"
        assert decision.header("Access-Control-Allow-Credentials") == "true"

    def test_credentials_override_wildcard(self):
        decision = engine_for("*", credentials=True).decide("GET", {"Origin": "http://z.com"})

        assert decision.header("Access-Control-Allow-Origin") == "http://z.com"
        assert decision.header("Access-Control-Allow-Credentials") == "true"

    def test_credentials_on_preflight(self):
        decision = engine_for("*", credentials=True).decide("OPTIONS", preflight("http://z.com", "PUT"))

        assert decision.is_preflight
        assert decision.header("Access-Control-Allow-Origin") == "http://z.com"


class TestPreflightWithoutValidation:
    def test_always_succeeds(self):
        engine = engine_for(methods="GET", request_headers="Authorization", max_age="10m")

        decision = engine.decide("OPTIONS", preflight("http://a.com", "DELETE", "X-Unknown"))

        assert decision.action is CorsAction.PREFLIGHT_OK
        assert decision.is_preflight
        assert not decision.forwards
        assert decision.header("Access-Control-Allow-Methods") == "GET"
        assert decision.header("Access-Control-Allow-Headers") == "Authorization"
        assert decision.header("Access-Control-Max-Age") == "600"
        assert decision.header("Access-Control-Allow-Origin") == "http://a.com"

    def test_exposed_headers_not_sent_on_preflight(self):
        decision = engine_for(exposed_headers="X-Custom").decide("OPTIONS", preflight("http://a.com", "GET"))

        assert decision.header("Access-Control-Expose-Headers") is None

    def test_zero_max_age_omitted(self):
        decision = engine_for(max_age=0).decide("OPTIONS", preflight("http://a.com", "GET"))

        assert decision.is_preflight
        assert decision.header("Access-Control-Max-Age") is None

    def test_sixty_second_max_age(self):
        decision = engine_for(max_age=60).decide("OPTIONS", preflight("http://a.com", "GET"))

        assert decision.header("Access-Control-Max-Age") == "60"

    def test_preflight_from_unlisted_origin_rejected(self):
        decision = engine_for().decide("OPTIONS", preflight("http://evil.com", "GET"))

        assert decision.reason is RejectReason.ORIGIN_MISMATCH


class TestPreflightWithValidation:
    def engine(self, **settings) -> CorsEngine:
        settings.setdefault("methods", "GET, POST")
        settings.setdefault("request_headers", "X-Foo, X-Bar")
        return engine_for("http://a.com", validate_headers=True, **settings)

    def test_allowed_method_and_headers(self):
        decision = self.engine().decide("OPTIONS", preflight("http://a.com", "POST", "X-Foo, x-bar"))

        assert decision.action is CorsAction.PREFLIGHT_OK
        assert decision.header("Access-Control-Allow-Headers") == "X-Foo, X-Bar"

    def test_method_not_allowed(self):
        decision = self.engine().decide("OPTIONS", preflight("http://a.com", "DELETE"))

        assert decision.action is CorsAction.REJECT
        assert decision.reason is RejectReason.METHOD_NOT_ALLOWED
        assert decision.headers == (("Vary", "Origin"),)

    def test_method_match_is_case_sensitive(self):
        decision = self.engine().decide("OPTIONS", preflight("http://a.com", "post"))

        assert decision.reason is RejectReason.METHOD_NOT_ALLOWED

    def test_header_not_allowed(self):
        decision = self.engine().decide("OPTIONS", preflight("http://a.com", "GET", "X-Foo, X-Baz"))

        assert decision.action is CorsAction.REJECT
        assert decision.reason is RejectReason.HEADER_NOT_ALLOWED
        for name in CORS_RESPONSE_HEADERS:
            assert decision.header(name) is None

    def test_headers_trimmed_of_whitespace(self):
        decision = self.engine().decide("OPTIONS", preflight("http://a.com", "GET", " X-FOO ,\tx-bar "))

        assert decision.is_preflight

    def test_empty_request_headers_means_none_requested(self):
        decision = self.engine().decide("OPTIONS", preflight("http://a.com", "GET", ""))

        assert decision.is_preflight

    def test_absent_request_headers_means_none_requested(self):
        decision = self.engine().decide("OPTIONS", preflight("http://a.com", "GET"))

        assert decision.is_preflight

    def test_empty_header_policy_rejects_any_requested_header(self):
        engine = self.engine(request_headers="")

        assert engine.decide("OPTIONS", preflight("http://a.com", "GET", "")).is_preflight
        assert engine.decide("OPTIONS", preflight("http://a.com", "GET", "X-Foo")).is_rejected


class TestMatchHeaders:
    def test_blank_tokens_are_ignored(self):
        engine = engine_for(request_headers="x-foo")

        assert engine.match_headers("")
        assert engine.match_headers(" , ")
        assert engine.match_headers("X-Foo,")

    def test_every_token_must_match(self):
        engine = engine_for(request_headers="x-foo")

        assert not engine.match_headers("x-foo, x-bar")


class TestEngineReuse:
    def test_decisions_do_not_leak_between_requests(self):
        engine = engine_for("*", exposed_headers="X-Custom")

        first = engine.decide("GET", {"Origin": "http://one.com"})
        second = engine.decide("GET", {})

        assert first.header("Access-Control-Allow-Origin") == "*"
        assert second.headers == (("Vary", "Origin"),)
        assert engine.policy.exposed_headers == "X-Custom"
