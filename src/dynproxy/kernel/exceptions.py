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
"""Exception hierarchy for dynproxy.

All library exceptions inherit from DynProxyException. Proxy errors also
inherit from the builtin exception a caller would naturally catch, so
``hasattr`` keeps working on a proxy and construction errors look like
``TypeError`` to generic code.

Failures raised by a proxied subject are never wrapped in any of these.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class DynProxyException(Exception):
    """Base exception for all dynproxy errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "PROXY_INVALID_SUBJECT").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Proxy Exceptions
# =============================================================================


class ProxyException(DynProxyException):
    """Errors raised by the interception wrapper itself."""


class UnsupportedOperationException(ProxyException, AttributeError):
    """The requested operation is not part of the bound capability set."""

    def __init__(self, operation: str, subject: object | None = None) -> None:
        subject_name = type(subject).__name__ if subject is not None else None
        super().__init__(
            f"Unsupported operation '{operation}'"
            + (f" on {subject_name}" if subject_name else ""),
            code="PROXY_UNSUPPORTED_OPERATION",
            context={"operation": operation, "subject": subject_name},
        )
        self.operation = operation


class InvalidSubjectException(ProxyException, TypeError):
    """The subject handed to a proxy is absent or does not fit the interface."""


class InvocationStateException(ProxyException, RuntimeError):
    """An invocation was driven out of order (e.g. proceeded twice)."""
