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
"""Invocation handlers — decide what happens around a forwarded call."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

import click

from dynproxy.logging import StructlogAdapter
from dynproxy.proxy.types import AfterMarkerPolicy, Invocation

BEFORE_MARKERS = ("=== PROXY INTERCEPTED ===", "Method called: {operation}", "Before method execution")
AFTER_MARKERS = ("After method execution", "=== END PROXY ===")


@runtime_checkable
class InvocationHandler(Protocol):
    """Port for the logic wrapped around every forwarded call.

    Implementations must call ``invocation.proceed()`` exactly once and
    return its result, or let its exception propagate.
    """

    def handle(self, invocation: Invocation) -> Any: ...


class ForwardingHandler:
    """Plain pass-through: forwards and returns, with no side effects."""

    def handle(self, invocation: Invocation) -> Any:
        return invocation.proceed()


class MarkerInvocationHandler:
    """Emits before/after marker lines around the forwarded call.

    Marker output is best effort: a sink that raises is logged and
    ignored, so the subject's result or exception always reaches the
    caller.

    Args:
        emit: Sink for marker lines. Defaults to :func:`click.echo`.
        after_policy: Whether the after marker is also emitted when the
            subject raises. With ``SKIP_ON_FAILURE`` the failure propagates
            straight after the subject's own output.
        logger: Structlog-style logger for debug events, usually from
            :meth:`LoggingPort.get_logger`.
    """

    def __init__(
        self,
        emit: Callable[[str], Any] | None = None,
        after_policy: AfterMarkerPolicy | str = AfterMarkerPolicy.SKIP_ON_FAILURE,
        logger: Any = None,
    ) -> None:
        self._emit = emit if emit is not None else click.echo
        self._after_policy = AfterMarkerPolicy.parse(after_policy)
        self._logger = logger if logger is not None else StructlogAdapter().get_logger(__name__)

    @property
    def after_policy(self) -> AfterMarkerPolicy:
        return self._after_policy

    def handle(self, invocation: Invocation) -> Any:
        self._logger.debug("proxy_invocation", operation=invocation.operation, arg_count=len(invocation.args))

        for line in BEFORE_MARKERS:
            self._emit_marker(line.format(operation=invocation.operation))

        if self._after_policy is AfterMarkerPolicy.ALWAYS:
            try:
                return self._forward(invocation)
            finally:
                self._emit_after()

        result = self._forward(invocation)
        self._emit_after()
        return result

    def _forward(self, invocation: Invocation) -> Any:
        try:
            return invocation.proceed()
        except Exception as exc:
            self._logger.debug("proxy_delegate_failed", operation=invocation.operation, error=type(exc).__name__)
            raise

    def _emit_after(self) -> None:
        for line in AFTER_MARKERS:
            self._emit_marker(line)

    def _emit_marker(self, line: str) -> None:
        try:
            self._emit(line)
        except Exception as exc:
            self._logger.debug("proxy_marker_failed", marker=line, error=type(exc).__name__)
