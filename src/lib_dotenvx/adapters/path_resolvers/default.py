"""Chain path planner.

Purpose
-------
Turn a single dotted dotenv filename into the ordered list of files that make
up its override chain, least specific first.

Contents
--------
* :func:`plan_chain` – pure planning function.
* :class:`DefaultChainPlanner` – implementation of the ``ChainPlanner`` port
  that adds structured logging.

Naming convention
-----------------
A base name with more than two ``.``-separated segments that contains a
segment equal to ``env`` expands into every prefix from that segment onward::

    /srv/app.config.env.production.api
        -> /srv/app.config.env
        -> /srv/app.config.env.production
        -> /srv/app.config.env.production.api

Anything else (``.env``, ``settings.ini``) is its own single-element chain.
"""

from __future__ import annotations

from pathlib import Path

from ...domain.errors import InvalidPath
from ...observability import log_debug, make_event

_ENV_SEGMENT = "env"


def plan_chain(path: str) -> list[str]:
    """Return the ordered chain of file paths implied by *path*.

    Raises
    ------
    InvalidPath
        When *path* is empty.

    Examples
    --------
    >>> plan_chain('/p/app.config.env.production.api')
    ['/p/app.config.env', '/p/app.config.env.production', '/p/app.config.env.production.api']
    >>> plan_chain('.env.production')
    ['.env', '.env.production']
    >>> plan_chain('/etc/app/.env')
    ['/etc/app/.env']
    """

    if not path:
        raise InvalidPath("empty file path")

    target = Path(path)
    parts = target.name.split(".")
    if len(parts) <= 2:
        return [path]

    chain: list[str] = []
    began = False
    for index, part in enumerate(parts):
        if part == _ENV_SEGMENT:
            began = True
        if began:
            chain.append(str(target.parent / ".".join(parts[: index + 1])))
    return chain or [path]


class DefaultChainPlanner:
    """Plan chains through :func:`plan_chain` and report them."""

    def plan(self, path: str) -> list[str]:
        """Return the chain for *path* and log it as a ``chain_planned`` event."""

        chain = plan_chain(path)
        log_debug("chain_planned", **make_event("plan", path, {"chain": chain}))
        return chain
