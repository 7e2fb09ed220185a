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
"""Tests for InterceptionWrapper — name resolution and forwarding."""

from __future__ import annotations

from typing import Protocol

import pytest

from dynproxy.kernel.exceptions import InvalidSubjectException, UnsupportedOperationException
from dynproxy.proxy.handler import ForwardingHandler, MarkerInvocationHandler
from dynproxy.proxy.types import Invocation, InvocationState
from dynproxy.proxy.wrapper import InterceptionWrapper, capability_set
from dynproxy.subject import Man, Person


# ---------------------------------------------------------------------------
# Helper subjects and handlers
# ---------------------------------------------------------------------------


class Calculator:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def add(self, a, b):
        self.calls.append(("add", a, b))
        return a + b

    def record(self, *values, **options):
        self.calls.append(("record", values, options))
        return values

    def fail(self):
        raise KeyError("missing")

    def _hidden(self):
        return "hidden"


class Configurable:
    Error = ValueError

    class Options:
        verbose = False

    def apply(self):
        return "applied"

    @staticmethod
    def describe():
        return "configurable"

    @classmethod
    def create(cls):
        return cls()


class Adder(Protocol):
    def add(self, a, b): ...


class RecordingHandler:
    def __init__(self) -> None:
        self.invocations: list[Invocation] = []

    def handle(self, invocation: Invocation):
        self.invocations.append(invocation)
        return invocation.proceed()


# ---------------------------------------------------------------------------
# Capability set
# ---------------------------------------------------------------------------


class TestCapabilitySet:
    def test_from_protocol(self) -> None:
        assert capability_set(Person) == {"introduce", "say_age", "say_where_from"}

    def test_from_concrete_class_skips_private(self) -> None:
        assert capability_set(Calculator) == {"add", "record", "fail"}

    def test_callable_class_attributes_are_not_operations(self) -> None:
        assert capability_set(Configurable) == {"apply", "describe", "create"}

    def test_class_alias_cannot_be_invoked(self) -> None:
        proxy = InterceptionWrapper(Configurable(), ForwardingHandler())
        with pytest.raises(UnsupportedOperationException):
            proxy.invoke("Error", ["boom"])
        with pytest.raises(UnsupportedOperationException):
            proxy.invoke("Options")
        assert proxy.invoke("describe") == "configurable"

    def test_dataclass_fields_are_not_operations(self) -> None:
        assert capability_set(Man) == {"introduce", "say_age", "say_where_from"}


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_none_subject_rejected(self) -> None:
        with pytest.raises(InvalidSubjectException) as exc_info:
            InterceptionWrapper(None)
        assert exc_info.value.code == "PROXY_INVALID_SUBJECT"

    def test_subject_missing_interface_operations_rejected(self) -> None:
        with pytest.raises(InvalidSubjectException) as exc_info:
            InterceptionWrapper(Calculator(), interface=Person)
        assert exc_info.value.context["missing"] == ["introduce", "say_age", "say_where_from"]

    def test_interface_narrows_operations(self) -> None:
        proxy = InterceptionWrapper(Calculator(), interface=Adder)
        assert proxy.operations == {"add"}

    def test_default_handler_emits_markers(self, capsys: pytest.CaptureFixture[str]) -> None:
        InterceptionWrapper(Calculator()).invoke("add", [1, 2])
        assert "=== PROXY INTERCEPTED ===" in capsys.readouterr().out

    def test_repr(self) -> None:
        assert repr(InterceptionWrapper(Man("Mohan", 30, "Delhi", "India"))).startswith("<InterceptionWrapper for Man(")


# ---------------------------------------------------------------------------
# invoke()
# ---------------------------------------------------------------------------


class TestInvoke:
    def test_returns_same_value_as_direct_call(self) -> None:
        proxy = InterceptionWrapper(Calculator(), ForwardingHandler())
        assert proxy.invoke("add", [2, 3]) == Calculator().add(2, 3)

    def test_forwards_to_the_bound_subject_exactly_once(self) -> None:
        calc = Calculator()
        proxy = InterceptionWrapper(calc, ForwardingHandler())
        proxy.invoke("add", [1, 2])
        proxy.invoke("add", [3, 4])
        assert calc.calls == [("add", 1, 2), ("add", 3, 4)]

    def test_arguments_pass_through_unchanged(self) -> None:
        calc = Calculator()
        payload = {"k": [1, 2]}
        proxy = InterceptionWrapper(calc, ForwardingHandler())

        result = proxy.invoke("record", ["Alice", 3, payload], {"mode": "x"})

        assert result == ("Alice", 3, payload)
        assert result[2] is payload
        assert calc.calls == [("record", ("Alice", 3, payload), {"mode": "x"})]

    def test_invocation_record(self) -> None:
        calc = Calculator()
        handler = RecordingHandler()
        InterceptionWrapper(calc, handler).invoke("add", [5, 6])

        (inv,) = handler.invocations
        assert inv.target is calc
        assert inv.operation == "add"
        assert inv.args == (5, 6)
        assert inv.kwargs == {}
        assert inv.return_value == 11
        assert inv.state is InvocationState.COMPLETED

    def test_subject_failure_propagates_unchanged(self) -> None:
        calc = Calculator()
        handler = RecordingHandler()
        proxy = InterceptionWrapper(calc, handler)

        with pytest.raises(KeyError) as exc_info:
            proxy.invoke("fail")

        with pytest.raises(KeyError) as direct_info:
            calc.fail()
        assert type(exc_info.value) is type(direct_info.value)
        assert exc_info.value is handler.invocations[0].exception
        assert handler.invocations[0].state is InvocationState.FAILED

    def test_failing_marker_sink_keeps_subject_outcome(self) -> None:
        def sink(line: str) -> None:
            if line == "After method execution":
                raise BrokenPipeError("stdout closed")

        always = InterceptionWrapper(Calculator(), MarkerInvocationHandler(emit=sink, after_policy="always"))
        with pytest.raises(KeyError):
            always.invoke("fail")

        default = InterceptionWrapper(Calculator(), MarkerInvocationHandler(emit=sink))
        assert default.invoke("add", [40, 2]) == 42

    def test_unknown_operation_never_touches_subject(self) -> None:
        calc = Calculator()
        handler = RecordingHandler()
        proxy = InterceptionWrapper(calc, handler)

        with pytest.raises(UnsupportedOperationException) as exc_info:
            proxy.invoke("fly", [])

        assert exc_info.value.operation == "fly"
        assert handler.invocations == []
        assert calc.calls == []

    def test_private_names_are_not_operations(self) -> None:
        with pytest.raises(UnsupportedOperationException):
            InterceptionWrapper(Calculator(), ForwardingHandler()).invoke("_hidden")

    def test_operation_outside_interface_is_unsupported(self) -> None:
        proxy = InterceptionWrapper(Calculator(), ForwardingHandler(), interface=Adder)
        with pytest.raises(UnsupportedOperationException):
            proxy.invoke("record", [1])

    def test_camel_case_name_resolves(self) -> None:
        events: list[str] = []
        proxy = InterceptionWrapper(Man("Mohan", 30, "Delhi", "India"), MarkerInvocationHandler(emit=events.append))
        proxy.invoke("sayWhereFrom", ["x", "y"])
        assert "Method called: say_where_from" in events

    def test_arity_mismatch_is_type_error(self) -> None:
        proxy = InterceptionWrapper(Calculator(), ForwardingHandler())
        with pytest.raises(TypeError):
            proxy.invoke("add", [1])


# ---------------------------------------------------------------------------
# Attribute access
# ---------------------------------------------------------------------------


class TestAttributeAccess:
    def test_attribute_call_forwards(self) -> None:
        calc = Calculator()
        proxy = InterceptionWrapper(calc, ForwardingHandler())
        assert proxy.add(1, b=2) == 3
        assert calc.calls == [("add", 1, 2)]

    def test_attribute_call_goes_through_handler(self) -> None:
        handler = RecordingHandler()
        InterceptionWrapper(Calculator(), handler).add(1, 1)
        assert [inv.operation for inv in handler.invocations] == ["add"]

    def test_forwarder_keeps_operation_name(self) -> None:
        assert InterceptionWrapper(Calculator(), ForwardingHandler()).add.__name__ == "add"

    def test_unknown_attribute_raises_unsupported(self) -> None:
        proxy = InterceptionWrapper(Calculator(), ForwardingHandler())
        with pytest.raises(UnsupportedOperationException):
            proxy.fly()

    def test_hasattr_and_getattr_default(self) -> None:
        proxy = InterceptionWrapper(Calculator(), ForwardingHandler())
        assert hasattr(proxy, "add")
        assert not hasattr(proxy, "fly")
        assert getattr(proxy, "fly", None) is None

    def test_dir_lists_operations(self) -> None:
        proxy = InterceptionWrapper(Calculator(), ForwardingHandler())
        assert {"add", "record", "fail", "invoke"} <= set(dir(proxy))
