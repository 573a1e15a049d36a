"""
Execution contexts that carry a correlation id.

Any object may be passed as the context of a log call. The ones that
implement :class:`CidContext` (a single ``cid()`` accessor returning an int)
get their id stamped on every line; ``None`` stamps only the process id; any
other object is passed through untouched.

Classes:
    - CidContext: The correlation capability, checked with isinstance()
    - Cid: Ready-made context holding an allocated or pinned id

Example:
    >>> conn = Cid()
    >>> conn.cid() >= CID_START
    True
    >>> Cid(7).cid()
    7
"""

import itertools
import threading
from typing import Optional, Protocol, runtime_checkable

CID_START = 100

_cid_counter = itertools.count(CID_START)
_cid_lock = threading.Lock()


@runtime_checkable
class CidContext(Protocol):
    """The context to get the correlation id of the current unit of work."""

    def cid(self) -> int:
        ...


def next_cid() -> int:
    """Allocate the next process-wide correlation id."""
    with _cid_lock:
        return next(_cid_counter)


class Cid:
    """
    Correlation context for one connection, request or session.

    ``Cid()`` allocates the next process-wide id; ``Cid(n)`` pins ``n``.
    Instances are immutable and hashable so they can key per-connection maps.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Optional[int] = None) -> None:
        self._value = next_cid() if value is None else int(value)

    def cid(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cid):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Cid({self._value})"
