"""HTTP client for the YouScore API.

:class:`Client` wires the request editor chain (auth, usage tracking,
custom editors) in front of an :mod:`httpx` transport stack that optionally
includes the :class:`~youscore.cache.CachingTransport`.
"""

from youscore.client.sync_client import RATE_LIMITS_PATH, Client

__all__ = ["Client", "RATE_LIMITS_PATH"]
