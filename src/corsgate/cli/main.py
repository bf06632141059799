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
"""corsgate CLI — inspect CORS policies from configuration files."""

from __future__ import annotations

import click

from corsgate.cli.commands import check_command, policy_command
from corsgate.logging.structlog_adapter import StructlogAdapter


@click.group()
@click.version_option(package_name="corsgate")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """corsgate — CORS middleware policy tools."""
    if ctx.obj is None:
        ctx.obj = StructlogAdapter()


cli.add_command(policy_command, name="policy")
cli.add_command(check_command, name="check")
