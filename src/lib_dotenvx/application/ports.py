"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts that adapters must satisfy so the composition
root can orchestrate a chain load without depending on concrete
implementations.

Contents
--------
* :class:`ChainPlanner` – expands a dotted filename into its override chain.
* :class:`DotEnvLoader` – parses one chain file.
* :class:`EnvLoader` – snapshots the process environment.
* :class:`LoadReporter` – observes each chain file as it is applied.

System Role
-----------
These protocols enforce Dependency Inversion. Each adapter implements one
protocol; :func:`lib_dotenvx.core.load_chain` accepts any conforming object.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..domain.env import DiffEntry, EnvMap


@runtime_checkable
class ChainPlanner(Protocol):
    """Compute the ordered file chain for a dotenv path."""

    def plan(self, path: str) -> list[str]:
        """Return chain files least specific first or raise ``InvalidPath``."""


@runtime_checkable
class DotEnvLoader(Protocol):
    """Materialise one dotenv file as an :class:`EnvMap`."""

    def load(self, path: str) -> EnvMap:
        """Read *path* or raise ``FileReadError``."""


@runtime_checkable
class EnvLoader(Protocol):
    """Capture the process environment as the initial chain layer."""

    def snapshot(self) -> EnvMap:
        """Return a point-in-time copy of the environment."""


class LoadReporter(Protocol):
    """Callback invoked for every chain file before it is merged.

    ``diff`` holds the changes between the running map and the freshly parsed
    file when the load is verbose, otherwise ``None``.
    """

    def __call__(self, path: str, diff: tuple[DiffEntry, ...] | None) -> None: ...
