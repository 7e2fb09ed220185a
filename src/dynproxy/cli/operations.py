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
"""'dynproxy operations' — list the person capability set."""

from __future__ import annotations

import inspect

import click
from rich.table import Table

from dynproxy.cli.console import console
from dynproxy.proxy import capability_set
from dynproxy.subject import Person


@click.command()
def operations_command() -> None:
    """List the operations a person proxy forwards."""
    table = Table(title="Person operations", border_style="dim")
    table.add_column("Operation", style="info", no_wrap=True)
    table.add_column("Signature")
    table.add_column("Description", style="dim")

    for name in sorted(capability_set(Person)):
        method = getattr(Person, name)
        signature = inspect.signature(method, eval_str=True)
        signature = signature.replace(parameters=list(signature.parameters.values())[1:])
        doc = inspect.getdoc(method) or ""
        table.add_row(name, str(signature), doc.splitlines()[0] if doc else "")

    console.print(table)
