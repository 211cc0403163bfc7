"""Process environment adapter.

Purpose
-------
Bridge the live process environment and the immutable maps used by the loader:
take a point-in-time snapshot before a chain is applied, and commit a merged
map back afterwards.

Key behaviours
--------------
* Snapshots pass every ``KEY=VALUE`` pair through the dotenv line grammar so
  the initial layer obeys exactly the same rules as file layers. Environment
  entries are never locked.
* The mapping to read from or write to is injectable (``environ=``) so tests
  and embedding applications never have to touch :data:`os.environ`.
"""

from __future__ import annotations

import os
from typing import MutableMapping, Mapping

from ...domain.env import EnvMap
from ..dotenv.default import build_env_map
from ...observability import log_debug


class DefaultEnvLoader:
    """Snapshot an environment mapping into an :class:`EnvMap`."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    def snapshot(self) -> EnvMap:
        """Return the current contents of the environment as an :class:`EnvMap`.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'HOME': '/home/demo', 'SHELL': '/bin/sh'})
        >>> loader.snapshot().value('HOME')
        '/home/demo'
        """

        env_map = build_env_map(f"{key}={value}" for key, value in list(self._environ.items()))
        log_debug("environ_snapshot", stage="environ", path=None, keys=len(env_map))
        return env_map


def apply_environ(env_map: EnvMap, environ: MutableMapping[str, str] | None = None) -> None:
    """Write every entry of *env_map* into *environ* (default :data:`os.environ`).

    Why
    ----
    The loader never mutates the live environment; callers that want the
    merged result in-process commit it explicitly with this helper.

    Examples
    --------
    >>> from lib_dotenvx.domain.env import Entry
    >>> target: dict[str, str] = {}
    >>> apply_environ(EnvMap({'A': Entry('A', '1')}), target)
    >>> target
    {'A': '1'}
    """

    target = os.environ if environ is None else environ
    for key, entry in env_map.items():
        if not key:
            continue
        target[key] = entry.value
    log_debug("environ_applied", stage="environ", path=None, keys=len(env_map))
