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
"""'dynproxy demo' — call a person through a proxy, then directly."""

from __future__ import annotations

from typing import cast

import click

from dynproxy.cli import LOGGING_PORT_KEY
from dynproxy.cli.console import console
from dynproxy.config.properties import PersonProperties, ProxyProperties
from dynproxy.core.config import Config
from dynproxy.logging import LoggingPort, StructlogAdapter
from dynproxy.proxy import AfterMarkerPolicy, MarkerInvocationHandler, new_proxy_instance
from dynproxy.subject import Man, Person


def run_demo(
    config: Config,
    after_marker: str | None = None,
    logging_port: LoggingPort | None = None,
) -> None:
    """Run the demonstration: three proxied calls, then the same three direct."""
    logging_port = logging_port if logging_port is not None else StructlogAdapter()
    person = config.bind(PersonProperties)
    policy = AfterMarkerPolicy.parse(after_marker or config.bind(ProxyProperties).after_marker)

    console.print("[dynproxy]=== DYNAMIC PROXY DEMO ===[/dynproxy]")

    mohan = Man(person.name, person.age, person.city, person.country)
    handler = MarkerInvocationHandler(after_policy=policy, logger=logging_port.get_logger("dynproxy.proxy"))
    proxy = cast(Person, new_proxy_instance(mohan, handler, interface=Person))

    console.print("\n[info]--- PROXY CALLS ---[/info]")
    proxy.introduce("test")
    proxy.say_age("test")
    proxy.say_where_from("test", "test")

    console.print("\n[info]--- DIRECT CALLS (NO PROXY) ---[/info]")
    mohan.introduce("direct")
    mohan.say_age("direct")
    mohan.say_where_from("direct", "direct")

    console.print("\n[success]=== DEMO COMPLETED ===[/success]")


@click.command()
@click.option(
    "--after-marker",
    type=click.Choice([p.value for p in AfterMarkerPolicy]),
    default=None,
    help="Override dynproxy.proxy.after_marker for this run.",
)
@click.pass_context
def demo_command(ctx: click.Context, after_marker: str | None) -> None:
    """Run the dynamic proxy demonstration."""
    try:
        run_demo(ctx.obj, after_marker, ctx.meta.get(LOGGING_PORT_KEY))
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
