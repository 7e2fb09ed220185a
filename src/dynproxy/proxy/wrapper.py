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
"""InterceptionWrapper — forwards calls by name to a bound subject."""

from __future__ import annotations

import functools
import inspect
import re
from collections.abc import Iterable, Mapping
from typing import Any, Generic, Protocol

from dynproxy.kernel.exceptions import InvalidSubjectException, UnsupportedOperationException
from dynproxy.proxy.handler import InvocationHandler, MarkerInvocationHandler
from dynproxy.proxy.types import Invocation

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")

_SKIPPED_BASES = (object, Protocol, Generic)


def capability_set(source: type) -> frozenset[str]:
    """Return the public operation names declared by *source* and its bases.

    Works for Protocol classes (whose methods are only stubs) as well as
    concrete classes. Only functions, static methods and class methods
    count; other callables such as nested classes do not. Names starting
    with ``_`` are never operations.
    """
    names: set[str] = set()
    for cls in source.__mro__:
        if cls in _SKIPPED_BASES:
            continue
        for name, value in vars(cls).items():
            if name.startswith("_"):
                continue
            if inspect.isfunction(value) or isinstance(value, (staticmethod, classmethod)):
                names.add(name)
    return frozenset(names)


class InterceptionWrapper:
    """Proxy that routes every call on a subject through an invocation handler.

    Calls can be made by name::

        proxy = InterceptionWrapper(mohan)
        proxy.invoke("introduce", ["test"])

    or as attributes, ``proxy.introduce("test")``. Both paths resolve the
    name against the capability set, which is either *interface*'s public
    methods or, without one, the public methods of the subject's class.
    Java style camelCase names resolve to their snake_case operation.

    The wrapper adds no locking; calls from several threads reach the
    subject concurrently.
    """

    __slots__ = ("_subject", "_handler", "_operations")

    def __init__(
        self,
        subject: Any,
        handler: InvocationHandler | None = None,
        interface: type | None = None,
    ) -> None:
        if subject is None:
            raise InvalidSubjectException(
                "Cannot create a proxy for None",
                code="PROXY_INVALID_SUBJECT",
            )

        operations = capability_set(interface if interface is not None else type(subject))
        missing = sorted(op for op in operations if not callable(getattr(subject, op, None)))
        if missing:
            raise InvalidSubjectException(
                f"{type(subject).__name__} does not implement {interface.__name__ if interface else 'its'} "
                f"operations: {', '.join(missing)}",
                code="PROXY_INVALID_SUBJECT",
                context={"subject": type(subject).__name__, "missing": missing},
            )

        self._subject = subject
        self._handler: InvocationHandler = handler if handler is not None else MarkerInvocationHandler()
        self._operations = operations

    @property
    def operations(self) -> frozenset[str]:
        """The capability set this proxy forwards."""
        return self._operations

    def invoke(
        self,
        operation: str,
        args: Iterable[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Any:
        """Forward *operation* with *args* to the subject through the handler.

        Returns the subject's result or lets its exception propagate
        unchanged. Raises :class:`UnsupportedOperationException` when
        *operation* is not in the capability set; the subject is not
        touched in that case.
        """
        resolved = self._resolve(operation)
        invocation = Invocation(
            target=self._subject,
            operation=resolved,
            args=tuple(args),
            kwargs=dict(kwargs or {}),
            _delegate=getattr(self._subject, resolved),
        )
        return self._handler.handle(invocation)

    def _resolve(self, operation: str) -> str:
        if operation in self._operations:
            return operation
        snake = _CAMEL_BOUNDARY_RE.sub("_", operation).lower()
        if snake in self._operations:
            return snake
        raise UnsupportedOperationException(operation, self._subject)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not found on the wrapper itself.
        if name.startswith("_"):
            raise AttributeError(name)
        operation = self._resolve(name)
        target = getattr(self._subject, operation)

        @functools.wraps(target)
        def forward(*args: Any, **kwargs: Any) -> Any:
            return self.invoke(operation, args, kwargs)

        return forward

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | self._operations)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} for {self._subject!r}>"
