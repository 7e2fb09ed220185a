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
"""Person capability set and its one concrete implementation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import click


@runtime_checkable
class Person(Protocol):
    """Operations every person subject must provide."""

    def introduce(self, name: str) -> None:
        """Say who this person is."""
        ...

    def say_age(self, age: str) -> None:
        """Say how old this person is."""
        ...

    def say_where_from(self, city: str, country: str) -> None:
        """Say where this person comes from."""
        ...


@dataclass(frozen=True)
class Man:
    """A :class:`Person` that prints facts from its own fields.

    The arguments each operation receives are ignored; the printed text
    always comes from the instance.
    """

    name: str
    age: int
    city: str
    country: str

    def introduce(self, name: str) -> None:
        click.echo(f"My name is {self.name}")

    def say_age(self, age: str) -> None:
        click.echo(f"I am {self.age} years old")

    def say_where_from(self, city: str, country: str) -> None:
        click.echo(f"I'm from {self.city}, {self.country}")
