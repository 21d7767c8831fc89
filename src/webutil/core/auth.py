"""Client-side permission predicates.

These checks only decide what the UI offers; the server remains the
authority.  State is read through an injected
:class:`~webutil.core.protocols.StateProvider` on every decision, so a
predicate never acts on a stale snapshot and can be tested without a
live store.

Policy
------
* Administrators may do everything.
* Resource paths missing from the resource map are **allowed**
  (fail-open): only registered resources are guarded.
* Otherwise the path must be among the user's granted resources.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping

from webutil.core.formatting import uppercase_first
from webutil.core.models import ApiDescriptor, Route
from webutil.core.objects import is_empty
from webutil.core.protocols import StateProvider
from webutil.exceptions import StateFormatError
from webutil.utils.constants import REDIRECT_PREFIX

log = logging.getLogger(__name__)


def need_auth(route: Route) -> bool:
    """Return True if *route* takes part in the permission check.

    A route is exempt when it lives under ``/redirect``, carries no
    metadata, has not set ``no_auth``, or has neither a title nor a
    dynamic title.
    """
    if route.path.startswith(REDIRECT_PREFIX):
        return False
    meta = route.meta
    if meta is None or not meta.no_auth:
        return False
    return not is_empty(meta.title) or not is_empty(meta.dynamic_title)


class Authorizer:
    """Evaluate resource permissions against the current application state.

    Parameters
    ----------
    state_provider:
        Any object satisfying the :class:`StateProvider` protocol.
    """

    def __init__(self, state_provider: StateProvider) -> None:
        self._state_provider: StateProvider = state_provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def auth(self, path: str) -> bool:
        """Return True if the signed-in user may use the resource *path*."""
        state = self._state_provider.get_state()
        if state.user.admin is True:
            return True

        if path not in state.resource.resource_map:
            log.debug("resource %s is not registered, allowing", path)
            return True

        resources = state.user.resources
        allowed = resources is not None and path in resources
        if not allowed:
            log.debug("resource %s denied", path)
        return allowed

    def wic(
        self,
        api_map: Mapping[str, ApiDescriptor | Mapping[str, object]],
    ) -> dict[str, Callable[[], bool]]:
        """Build ``can<Name>`` permission flags for every entry of *api_map*.

        Each flag is a zero-argument callable that re-evaluates
        :meth:`auth` for the API's URL whenever it is called.

        Raises
        ------
        StateFormatError
            If an entry has no string URL.
        """
        return {
            f"can{uppercase_first(name)}": functools.partial(
                self.auth, api_url(name, api),
            )
            for name, api in api_map.items()
        }


def api_url(name: str, api: ApiDescriptor | Mapping[str, object]) -> str:
    url = api.url if isinstance(api, ApiDescriptor) else api.get("url")
    if not isinstance(url, str):
        raise StateFormatError(f"API {name!r} has no 'url'.")
    return url


# ---------------------------------------------------------------------------
# Function-style conveniences
# ---------------------------------------------------------------------------

def auth(path: str, state_provider: StateProvider) -> bool:
    """Shorthand for ``Authorizer(state_provider).auth(path)``."""
    return Authorizer(state_provider).auth(path)


def wic(
    api_map: Mapping[str, ApiDescriptor | Mapping[str, object]],
    state_provider: StateProvider,
) -> dict[str, Callable[[], bool]]:
    """Shorthand for ``Authorizer(state_provider).wic(api_map)``."""
    return Authorizer(state_provider).wic(api_map)
