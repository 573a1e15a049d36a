from cidlog.core.exceptions.custom_exceptions import (
    CidLogError,
    ConfigurationError,
    SinkReleaseError,
)

__all__ = ["CidLogError", "ConfigurationError", "SinkReleaseError"]
