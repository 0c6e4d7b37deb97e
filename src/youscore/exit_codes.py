"""Numeric process exit codes used by the ``youscore`` command line tool.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~youscore.exceptions.YouScoreError` subclass.
Shell wrappers can inspect the exit code to tell a bad key from a network
outage without parsing stderr.

Example::

    $ youscore limits
    $ echo $?
    5   # EXIT_SERVER_ERROR -- a rate-limit query was rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SERVER_ERROR = 5
"""The remote API answered with an unexpected status or payload."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
