"""Configuration exceptions with structured error codes.

Raised before a run starts when the supplied parameters cannot produce a
valid benchmark (bad address, non-positive amount, empty endpoint list).
"""


class ConfigurationError(Exception):
    """Structured configuration failure with error code metadata.

    Attributes:
        error_code: Machine-parseable error identifier.
        message: Human-readable error description.
    """

    def __init__(self, error_code: str, message: str) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.message = message


__all__ = ["ConfigurationError"]
