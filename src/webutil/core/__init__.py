"""Core layer — pure utility logic and the protocols it depends on.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* External collaborators (state store, event loop, browser location)
  are reached only through :mod:`webutil.core.protocols`.
"""

from webutil.core.auth import Authorizer, auth, need_auth, wic
from webutil.core.formatting import time_format, uppercase_first
from webutil.core.models import (
    ApiDescriptor,
    ResourceState,
    Route,
    RouteMeta,
    StoreState,
    UserState,
)
from webutil.core.objects import (
    bind_this,
    deep_clone,
    empty_or_default,
    initial_value,
    is_empty,
    merge_obj,
    reset_obj,
)
from webutil.core.protocols import Location, Scheduler, StateProvider, TimerHandle
from webutil.core.timing import (
    Debouncer,
    Poller,
    Throttler,
    debounce,
    throttle,
    wait_until_success,
)
from webutil.core.url import del_all_url_param, strip_url_params

__all__: list[str] = [
    "ApiDescriptor",
    "Authorizer",
    "Debouncer",
    "Location",
    "Poller",
    "ResourceState",
    "Route",
    "RouteMeta",
    "Scheduler",
    "StateProvider",
    "StoreState",
    "Throttler",
    "TimerHandle",
    "UserState",
    "auth",
    "bind_this",
    "debounce",
    "deep_clone",
    "del_all_url_param",
    "empty_or_default",
    "initial_value",
    "is_empty",
    "merge_obj",
    "need_auth",
    "reset_obj",
    "strip_url_params",
    "throttle",
    "time_format",
    "uppercase_first",
    "wait_until_success",
]
