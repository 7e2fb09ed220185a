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
"""Dynamic proxies — intercept, mark and forward calls to a bound subject."""

from dynproxy.proxy.factory import new_proxy_instance
from dynproxy.proxy.handler import ForwardingHandler, InvocationHandler, MarkerInvocationHandler
from dynproxy.proxy.types import AfterMarkerPolicy, Invocation, InvocationState
from dynproxy.proxy.wrapper import InterceptionWrapper, capability_set

__all__ = [
    "AfterMarkerPolicy",
    "ForwardingHandler",
    "InterceptionWrapper",
    "Invocation",
    "InvocationHandler",
    "InvocationState",
    "MarkerInvocationHandler",
    "capability_set",
    "new_proxy_instance",
]
