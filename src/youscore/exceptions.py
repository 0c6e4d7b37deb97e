"""Exception hierarchy for youscore.

All exceptions inherit from :class:`YouScoreError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`youscore.exit_codes`.
Library callers can catch ``YouScoreError`` as a whole; the CLI entry point
uses ``exit_code`` to pick the process status.

Transport failures raised by :mod:`httpx` are deliberately *not* wrapped by
the client: they reach the caller unchanged.

Subclass hierarchy::

    YouScoreError            (exit 1)
    +-- ConfigError          (exit 1)
    +-- InvalidUsageError    (exit 2)
    +-- BodyReadError        (exit 1)
    +-- RateLimitCheckError  (exit 5)
    +-- ConnectionError_     (exit 6)
"""

from youscore.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SERVER_ERROR,
)


class YouScoreError(Exception):
    """Base exception for all youscore errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(YouScoreError):
    """Raised for configuration problems (missing keys, conflicting auth modes, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(YouScoreError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class BodyReadError(YouScoreError):
    """Raised when a request body cannot be read for cache-key computation.

    The request is never dispatched when this is raised.
    """

    exit_code = EXIT_GENERIC_FAILURE


class RateLimitCheckError(YouScoreError):
    """Raised when the rate-limit query for one of the configured keys fails.

    Args:
        message: Description including the key category that failed.
        key_name: The :class:`~youscore.models.APIKeys` field name of the
            failing credential (e.g. ``"pdf_individuals"``).
    """

    exit_code = EXIT_SERVER_ERROR

    def __init__(self, message: str, key_name: str):
        super().__init__(message)
        self.key_name = key_name


class ConnectionError_(YouScoreError):
    """Raised by the CLI on network-level failures.

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR
