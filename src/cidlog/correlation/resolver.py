"""
Correlation tag resolution.

Turns the optional execution context of a log call into the ``[pid][cid] ``
tag that lets lines from concurrent units of work be told apart. The same
three-way rule drives both call styles (plain arguments and printf-style
formats, where the tag is put in front of the rendered message):

    ===========================  ===============
    context                      resolve_tag
    ===========================  ===============
    None                         ``[pid] ``
    implements CidContext        ``[pid][cid] ``
    anything else (passthrough)  None
    ===========================  ===============

Resolution never fails. A context whose ``cid()`` raises is treated as an
opaque value and falls back to passthrough.
"""

import os
from typing import Any, Optional

from cidlog.core.logging.logger import get_logger
from cidlog.correlation.context import CidContext

logger = get_logger(__name__)

_NO_CID = object()


def _context_cid(ctx: Any) -> Any:
    if not isinstance(ctx, CidContext):
        return _NO_CID
    try:
        return ctx.cid()
    except Exception as e:
        logger.debug(
            "Context cid() failed, passing through", context=repr(ctx), error=str(e)
        )
        return _NO_CID


def resolve_tag(ctx: Any, pid: Optional[int] = None) -> Optional[str]:
    """
    Build the correlation tag for a context.

    Returns:
        Optional[str]: ``"[pid] "``, ``"[pid][cid] "``, or None in
        passthrough mode
    """
    if pid is None:
        pid = os.getpid()
    if ctx is None:
        return f"[{pid}] "
    cid = _context_cid(ctx)
    if cid is _NO_CID:
        return None
    return f"[{pid}][{cid}] "

