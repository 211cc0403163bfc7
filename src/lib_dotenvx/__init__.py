"""Public package surface for layered dotenv chain loading.

``lib_dotenvx`` expands a dotted filename such as
``app.config.env.production.api`` into a chain of dotenv files, parses each
one, and folds them over a snapshot of the process environment. Entries
preceded by a ``# LOCK`` comment cannot be overridden by later files.
"""

from __future__ import annotations

from .application.merge import override
from .core import (
    EMPTY_ENV_MAP,
    DiffEntry,
    DotenvError,
    Entry,
    EnvMap,
    FileReadError,
    InvalidPath,
    apply_environ,
    build_env_map,
    diff_maps,
    format_diff,
    load_chain,
    load_dotenv,
    merge_maps,
    parse_line,
    plan_chain,
)
from .examples import generate_examples
from .observability import bind_trace_id, get_logger

__all__ = [
    "DiffEntry",
    "DotenvError",
    "EMPTY_ENV_MAP",
    "Entry",
    "EnvMap",
    "FileReadError",
    "InvalidPath",
    "apply_environ",
    "bind_trace_id",
    "build_env_map",
    "diff_maps",
    "format_diff",
    "generate_examples",
    "get_logger",
    "load_chain",
    "load_dotenv",
    "merge_maps",
    "override",
    "parse_line",
    "plan_chain",
]
