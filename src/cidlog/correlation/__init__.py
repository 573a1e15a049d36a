from cidlog.correlation.context import Cid, CidContext, next_cid
from cidlog.correlation.resolver import resolve_tag

__all__ = [
    "Cid",
    "CidContext",
    "next_cid",
    "resolve_tag",
]
