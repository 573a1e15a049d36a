"""
Exception hierarchy for cidlog.

Logging must never fail the instrumented program, so almost nothing in this
package raises. The only runtime error kind is a failure to release the
tracked sink, and even that one is returned from ``close()`` rather than
raised.

Exception Hierarchy:
    CidLogError (base)
    ├── ConfigurationError: Invalid settings
    └── SinkReleaseError: The tracked sink's close() raised

Example:
    >>> err = cidlog.close()
    >>> if err is not None:
    ...     print(err.error_code, err.details["sink"])
"""

from typing import Any, Dict, Optional


class CidLogError(Exception):
    """
    Base exception class for all cidlog errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information

    The error_code defaults to the class name if not specified.

    Example:
        >>> raise CidLogError(
        ...     "Sink rejected the line",
        ...     error_code="SINK_WRITE_ERROR",
        ...     details={"sink": "BufferSink"}
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(CidLogError):
    """
    Raised when settings cannot be loaded or validated.

    Common scenarios:
        - Unknown CIDLOG_DIAGNOSTICS_LEVEL or CIDLOG_DIAGNOSTICS_FORMAT
        - Non-boolean CIDLOG_COLOR
    """

    pass


class SinkReleaseError(CidLogError):
    """
    Reports that the tracked sink raised while being released.

    Instances are returned by ``close()``, never raised by it. The original
    exception is chained as ``__cause__`` and the sink is kept in
    ``details["sink"]`` so callers can retry or inspect it.
    """

    def __init__(self, sink: Any, cause: BaseException) -> None:
        super().__init__(
            f"Failed to release sink {sink!r}: {cause}",
            error_code="SINK_RELEASE_ERROR",
            details={"sink": sink, "cause": repr(cause)},
        )
        self.__cause__ = cause
