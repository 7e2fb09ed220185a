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
"""Proxy factory — builds wrapper classes that declare one method per operation."""

from __future__ import annotations

import functools
from typing import Any

from dynproxy.kernel.exceptions import InvalidSubjectException
from dynproxy.proxy.handler import InvocationHandler
from dynproxy.proxy.wrapper import InterceptionWrapper, capability_set

_RESERVED_NAMES = frozenset(name for name in dir(InterceptionWrapper) if not name.startswith("_"))


def new_proxy_instance(
    subject: Any,
    handler: InvocationHandler | None = None,
    interface: type | None = None,
) -> InterceptionWrapper:
    """Create a proxy for *subject* whose class declares every operation.

    Unlike a bare :class:`InterceptionWrapper`, the returned object has real
    methods for each operation of *interface* (or of the subject's class),
    so static attribute lookup sees them and ``isinstance`` checks against a
    runtime-checkable Protocol succeed.
    """
    if subject is None:
        raise InvalidSubjectException("Cannot create a proxy for None", code="PROXY_INVALID_SUBJECT")

    source = interface if interface is not None else type(subject)
    clashes = sorted(capability_set(source) & _RESERVED_NAMES)
    if clashes:
        raise InvalidSubjectException(
            f"{source.__name__} operations clash with the proxy API: {', '.join(clashes)}",
            code="PROXY_INVALID_SUBJECT",
            context={"interface": source.__name__, "clashes": clashes},
        )

    proxy_cls = _proxy_class(source)
    return proxy_cls(subject, handler=handler, interface=interface)


@functools.lru_cache(maxsize=None)
def _proxy_class(source: type) -> type[InterceptionWrapper]:
    """Build (once per *source*) an InterceptionWrapper subclass for its operations."""
    namespace: dict[str, Any] = {"__slots__": (), "__module__": __name__}
    for operation in sorted(capability_set(source)):
        namespace[operation] = _forwarding_method(operation, getattr(source, operation))
    return type(f"{source.__name__}Proxy", (InterceptionWrapper,), namespace)


def _forwarding_method(operation: str, declared: Any) -> Any:
    def method(self: InterceptionWrapper, *args: Any, **kwargs: Any) -> Any:
        return self.invoke(operation, args, kwargs)

    method.__name__ = operation
    method.__qualname__ = operation
    method.__doc__ = getattr(declared, "__doc__", None)
    return method
