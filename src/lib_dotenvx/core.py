"""Composition root for ``lib_dotenvx``.

Purpose
-------
Provide the entry points that orchestrate chain planning, environment
snapshotting, dotenv parsing, diffing, and lock-respecting merges.

Contents
--------
* :func:`load_chain` – high-level API returning the merged :class:`EnvMap`.
* :func:`load_dotenv` – :func:`load_chain` followed by committing the result
  into the process environment.
* :func:`plan_chain` – re-exported planner for callers that only need paths.

System Role
-----------
This module connects the adapters (planner, dotenv files, environment) with
the pure merge and diff policies while emitting structured observability
signals. It never mutates the live environment itself; :func:`load_dotenv`
delegates that to :func:`apply_environ`.
"""

from __future__ import annotations

from typing import Mapping, MutableMapping

from .adapters.dotenv.default import DefaultDotEnvLoader, build_env_map, parse_line
from .adapters.env.default import DefaultEnvLoader, apply_environ
from .adapters.path_resolvers.default import DefaultChainPlanner, plan_chain
from .application.diff import diff_maps, format_diff
from .application.merge import merge_maps
from .application.merge import override as _override_layers
from .application.ports import ChainPlanner, DotEnvLoader, EnvLoader, LoadReporter
from .domain.env import EMPTY_ENV_MAP, DiffEntry, EnvMap, Entry
from .domain.errors import DotenvError, FileReadError, InvalidPath
from .observability import bind_trace_id, log_info, make_event


def load_chain(
    path: str,
    *,
    override: bool = False,
    verbose: bool = False,
    environ: Mapping[str, str] | None = None,
    reporter: LoadReporter | None = None,
    planner: ChainPlanner | None = None,
    dotenv_loader: DotEnvLoader | None = None,
    env_loader: EnvLoader | None = None,
) -> EnvMap:
    """Return the environment produced by applying the chain for *path*.

    Why
    ----
    Consumers need one call that plans the chain, starts from the current
    environment, and folds each file in while honouring ``# LOCK`` entries.

    Parameters
    ----------
    path:
        Dotenv file; dotted names containing an ``env`` segment expand into a
        chain (see :func:`plan_chain`).
    override:
        When ``False`` the chain is planned but not applied and the
        environment snapshot is returned unchanged.
    verbose:
        Compute the diff between the running map and every parsed file, log
        it, and hand it to *reporter*.
    environ:
        Environment to snapshot. Defaults to :data:`os.environ`.
    reporter:
        Optional callback invoked as ``reporter(path, diff)`` before each file
        is merged.
    planner / dotenv_loader / env_loader:
        Adapter overrides; default to the bundled implementations. A custom
        *env_loader* takes precedence over *environ*.

    Raises
    ------
    InvalidPath
        *path* is empty.
    FileReadError
        A chain file cannot be read; the remaining chain is abandoned.

    Examples
    --------
    >>> from pathlib import Path
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> root = Path(tmp.name)
    >>> _ = (root / 'app.env').write_text('# LOCK\\nMODE=base\\nPORT=80\\n', encoding='utf-8')
    >>> _ = (root / 'app.env.dev').write_text('MODE=dev\\nPORT=8080\\n', encoding='utf-8')
    >>> env = load_chain(str(root / 'app.env.dev'), override=True, environ={})
    >>> env.value('MODE'), env.value('PORT')
    ('base', '8080')
    >>> tmp.cleanup()
    """

    planner = planner or DefaultChainPlanner()
    dotenv_loader = dotenv_loader or DefaultDotEnvLoader()
    env_loader = env_loader or DefaultEnvLoader(environ=environ)

    bind_trace_id(None)
    chain = planner.plan(path)
    running = env_loader.snapshot()
    if not override:
        log_info("chain_override_skipped", **make_event("merge", path, {"chain": chain}))
        return running

    for chain_path in chain:
        parsed = dotenv_loader.load(chain_path)
        diff: tuple[DiffEntry, ...] | None = None
        if verbose:
            diff = diff_maps(running, parsed)
            log_info("chain_file_diff", **make_event("merge", chain_path, {"changes": format_diff(diff)}))
        if reporter is not None:
            reporter(chain_path, diff)
        running = _override_layers(running, parsed)

    log_info("chain_loaded", **make_event("merge", path, {"files": len(chain), "keys": len(running)}))
    return running


def load_dotenv(
    path: str = ".env",
    *,
    override: bool = False,
    verbose: bool = False,
    environ: MutableMapping[str, str] | None = None,
) -> EnvMap:
    """Load the chain for *path* and commit the result into *environ*.

    Examples
    --------
    >>> from pathlib import Path
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / '.env'
    >>> _ = target.write_text('GREETING=hello\\n', encoding='utf-8')
    >>> environ = {'USER': 'demo'}
    >>> _ = load_dotenv(str(target), override=True, environ=environ)
    >>> sorted(environ.items())
    [('GREETING', 'hello'), ('USER', 'demo')]
    >>> tmp.cleanup()
    """

    env_map = load_chain(path, override=override, verbose=verbose, environ=environ)
    apply_environ(env_map, environ)
    return env_map


__all__ = [
    "DiffEntry",
    "DotenvError",
    "EMPTY_ENV_MAP",
    "Entry",
    "EnvMap",
    "FileReadError",
    "InvalidPath",
    "apply_environ",
    "build_env_map",
    "diff_maps",
    "format_diff",
    "load_chain",
    "load_dotenv",
    "merge_maps",
    "parse_line",
    "plan_chain",
]
