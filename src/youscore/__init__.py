"""youscore -- client for the YouScore business-data API.

The client adds three layers on top of :mod:`httpx`:

* per-route API key selection (:mod:`youscore.auth`),
* a pluggable response cache that never sees secrets
  (:mod:`youscore.cache`),
* request usage classification for cost tracking (:mod:`youscore.usage`).

Typical use::

    from youscore import APIKeys, Client, MemoryCache

    keys = APIKeys(data_analytics="...", affiliates="...")
    with Client(api_keys=keys, cache=MemoryCache()) as client:
        response = client.get("/v1/usr/00032112")

Modules:
    client: :class:`Client`, the request pipeline.
    cache: cache protocol, caching transport, key and URL sanitization.
    auth: bearer and per-route key editors.
    usage: billing category classification.
    rate_limits: quota lookup across all keys.
    config: environment loading.
    app: ``youscore`` command line tool.
"""

__version__ = "0.1.0"

from youscore.cache import Cache, CachedResponse, CachingTransport, MemoryCache  # noqa: E402
from youscore.client import Client  # noqa: E402
from youscore.config import SERVER_URL  # noqa: E402
from youscore.models import APIKeys, RequestConfig  # noqa: E402
from youscore.rate_limits import check_rate_limits  # noqa: E402
from youscore.usage import APIType, UsageCounter  # noqa: E402

__all__ = [
    "APIKeys",
    "APIType",
    "Cache",
    "CachedResponse",
    "CachingTransport",
    "Client",
    "MemoryCache",
    "RequestConfig",
    "SERVER_URL",
    "UsageCounter",
    "check_rate_limits",
]
