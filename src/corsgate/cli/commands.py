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
"""'corsgate policy' and 'corsgate check' — inspect a CORS configuration."""

from __future__ import annotations

import sys

import click
from rich.markup import escape
from rich.table import Table

from corsgate.cli.console import console, print_error
from corsgate.core.config import Config
from corsgate.cors.engine import CorsAction, CorsEngine
from corsgate.cors.policy import CorsPolicy
from corsgate.cors.properties import CorsProperties
from corsgate.kernel.exceptions import ConfigurationException
from corsgate.logging.port import LoggingPort

EXIT_REJECTED = 1
EXIT_CONFIG_ERROR = 2

_ACTION_STYLES = {
    CorsAction.FORWARD: "info",
    CorsAction.FORWARD_WITH_HEADERS: "success",
    CorsAction.PREFLIGHT_OK: "success",
    CorsAction.REJECT: "error",
}

config_option = click.option(
    "--config",
    "config_path",
    default="corsgate.yaml",
    show_default=True,
    type=click.Path(dir_okay=False),
    help="YAML or TOML file holding the corsgate.cors section.",
)


def _load_config(logging_port: LoggingPort, config_path: str) -> Config:
    config = Config.from_file(config_path)
    logging_port.configure(config)
    return config


def _load_policy(config: Config) -> CorsPolicy:
    try:
        return CorsPolicy.from_properties(config.bind(CorsProperties))
    except ConfigurationException as exc:
        print_error(str(exc))
        sys.exit(EXIT_CONFIG_ERROR)


@click.command()
@config_option
@click.pass_obj
def policy_command(logging_port: LoggingPort, config_path: str) -> None:
    """Show the normalized CORS policy."""
    config = _load_config(logging_port, config_path)
    policy = _load_policy(config)

    table = Table(title="CORS Policy", show_header=False, border_style="dim")
    table.add_column("Setting", style="info")
    table.add_column("Value")
    table.add_row("Source", escape(config.source) if config.source else "[dim]environment only[/dim]")
    table.add_row("Origins", "* (any)" if policy.force_origin_match else ", ".join(policy.origins))
    table.add_row("Methods", ", ".join(policy.methods))
    table.add_row("Request headers", ", ".join(policy.request_headers))
    table.add_row("Exposed headers", policy.exposed_headers or "[dim]none[/dim]")
    table.add_row("Max age", f"{policy.max_age}s" if policy.max_age_enabled else "[dim]omitted[/dim]")
    table.add_row("Credentials", policy.credentials)
    table.add_row("Validate headers", str(policy.validate_headers).lower())
    console.print(table)


@click.command()
@click.argument("origin")
@click.option("--method", "-X", default="GET", show_default=True, help="HTTP method of the request.")
@click.option("--request-method", default=None, help="Access-Control-Request-Method value (preflight).")
@click.option(
    "--request-header",
    "request_headers",
    multiple=True,
    help="Header name for Access-Control-Request-Headers. Repeatable.",
)
@config_option
@click.pass_obj
def check_command(
    logging_port: LoggingPort,
    origin: str,
    method: str,
    request_method: str | None,
    request_headers: tuple[str, ...],
    config_path: str,
) -> None:
    """Evaluate a request from ORIGIN against the policy.

    Exits with status 1 when the request would be rejected.
    """
    engine = CorsEngine(_load_policy(_load_config(logging_port, config_path)))

    headers = {"Origin": origin}
    if request_method:
        headers["Access-Control-Request-Method"] = request_method
    if request_headers:
        headers["Access-Control-Request-Headers"] = ", ".join(request_headers)

    decision = engine.decide(method, headers)
    style = _ACTION_STYLES[decision.action]
    console.print(f"[{style}]{decision.action.value}[/{style}]")
    if decision.reason is not None:
        console.print(f"  [dim]reason:[/dim] {decision.reason.value}")

    table = Table(title="Response headers", border_style="dim")
    table.add_column("Header", style="info")
    table.add_column("Value")
    for name, value in decision.headers:
        table.add_row(name, value)
    console.print(table)

    if decision.is_rejected:
        sys.exit(EXIT_REJECTED)
