"""
cidlog Diagnostics Module.

Internal logging for the package's own trouble reports, kept apart from the
severity channels that carry application lines.

Example:
    >>> from cidlog.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Destination switched", sink="BufferSink")
"""

from cidlog.core.logging.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
