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
"""dynproxy CLI — dynamic proxy demonstration."""

from __future__ import annotations

from pathlib import Path

import click

from dynproxy.cli import LOGGING_PORT_KEY
from dynproxy.cli.console import print_banner
from dynproxy.core.config import Config
from dynproxy.logging import LoggingPort, StructlogAdapter


class DynProxyCLI(click.Group):
    """Click group that shows the dynproxy banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=DynProxyCLI)
@click.version_option(package_name="dynproxy")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML or TOML file merged over the packaged defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """dynproxy — intercept method calls with a dynamic proxy."""
    config = Config.from_file(config_path)
    logging_port: LoggingPort = StructlogAdapter()
    logging_port.configure(config)
    ctx.obj = config
    ctx.meta[LOGGING_PORT_KEY] = logging_port


from dynproxy.cli.demo import demo_command
from dynproxy.cli.operations import operations_command

cli.add_command(demo_command, name="demo")
cli.add_command(operations_command, name="operations")
