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
"""Proxy core types — Invocation record, its state and the after-marker policy."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dynproxy.kernel.exceptions import InvocationStateException


class InvocationState(str, Enum):
    """Lifecycle of a single intercepted call."""

    DISPATCHING = "dispatching"
    FORWARDING = "forwarding"
    COMPLETED = "completed"
    FAILED = "failed"


class AfterMarkerPolicy(str, Enum):
    """Whether the after marker is emitted when the subject raises."""

    SKIP_ON_FAILURE = "skip-on-failure"
    ALWAYS = "always"

    @classmethod
    def parse(cls, value: str | AfterMarkerPolicy) -> AfterMarkerPolicy:
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        for policy in cls:
            if policy.value == normalized:
                return policy
        choices = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown after-marker policy '{value}' (expected one of: {choices})")


@dataclass
class Invocation:
    """One call travelling through an interception wrapper.

    Attributes:
        target: The subject the call is forwarded to.
        operation: Resolved operation name.
        args: Positional arguments, exactly as supplied by the caller.
        kwargs: Keyword arguments, exactly as supplied by the caller.
        return_value: The subject's result (set after a successful proceed).
        exception: The failure the subject raised, if any.
        state: Current :class:`InvocationState`.
    """

    target: Any
    operation: str
    args: tuple
    kwargs: dict[str, Any]
    return_value: Any = None
    exception: BaseException | None = None
    state: InvocationState = InvocationState.DISPATCHING
    _delegate: Callable[..., Any] | None = field(default=None, repr=False, compare=False)

    def proceed(self) -> Any:
        """Invoke the subject's operation with the original arguments.

        May be called once. The subject's exception propagates unchanged.
        """
        if self.state is not InvocationState.DISPATCHING:
            raise InvocationStateException(
                f"Invocation of '{self.operation}' has already proceeded",
                code="PROXY_ALREADY_PROCEEDED",
                context={"operation": self.operation, "state": self.state.value},
            )
        if self._delegate is None:
            raise InvocationStateException(
                f"Invocation of '{self.operation}' has no delegate",
                code="PROXY_NO_DELEGATE",
                context={"operation": self.operation},
            )

        self.state = InvocationState.FORWARDING
        try:
            result = self._delegate(*self.args, **self.kwargs)
        except BaseException as exc:
            self.exception = exc
            self.state = InvocationState.FAILED
            raise
        self.return_value = result
        self.state = InvocationState.COMPLETED
        return result
