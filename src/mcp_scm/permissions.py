"""Heuristic repository permission resolution.

Some providers have no endpoint answering "what may the current user do with
this repository". For those, permissions are inferred by probing operations
in decreasing order of required privilege and taking the first success as a
lower bound. This is a best-effort approximation for display and routing
purposes; it is not a security boundary and can both under- and over-grant.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from .exceptions import ScmError
from .models.common import Perm

logger = logging.getLogger(__name__)

NO_ACCESS = Perm()
READ = Perm(pull=True)
WRITE = Perm(pull=True, push=True)
ADMIN = Perm(pull=True, push=True, admin=True)


@dataclass(frozen=True)
class Probe:
    """A privilege check; ``check`` returning True grants ``perm``."""

    name: str
    check: Callable[[], Awaitable[bool]]
    perm: Perm


async def _passes(probe: Probe) -> bool:
    # Vendor errors mean "insufficient privilege". Transport failures and
    # cancellation are not ScmError and propagate.
    try:
        ok = await probe.check()
    except ScmError as e:
        logger.debug("permission probe %s failed: %s", probe.name, e)
        return False
    logger.debug("permission probe %s -> %s", probe.name, ok)
    return ok


async def resolve_perm(find: Callable[[], Awaitable[object]], probes: Sequence[Probe]) -> Perm:
    """Resolve permissions from a readability check and ordered probes."""
    try:
        await find()
    except ScmError as e:
        logger.debug("repository not readable: %s", e)
        return NO_ACCESS.model_copy()

    for probe in probes:
        if await _passes(probe):
            return probe.perm.model_copy()
    return READ.model_copy()
