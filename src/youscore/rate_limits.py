"""Rate-limit lookup for every configured key.

``GET /v1/rateLimits`` reports on whichever key authenticates the request,
and that endpoint always uses the default (data/analytics) key.  To query
the quota of the PDF or affiliate keys, :func:`check_rate_limits` builds a
separate client per key with that key in the default slot.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from youscore.client import Client
from youscore.config import SERVER_URL
from youscore.exceptions import RateLimitCheckError
from youscore.models import APIKeys, RateLimits, RateLimitsResponse

logger = logging.getLogger(__name__)

_KEY_LABELS: dict[str, str] = {
    "data_analytics": "data analytics",
    "pdf_legal_entities": "pdf legal entities",
    "pdf_individuals": "pdf individuals",
    "affiliates": "affiliates",
}


def _fetch_limits(
    key: str,
    base_url: str,
    transport: Optional[httpx.BaseTransport],
) -> RateLimits:
    with Client(base_url, api_keys=APIKeys(data_analytics=key), transport=transport) as client:
        response = client.get_rate_limits()
    if response.status_code != httpx.codes.OK:
        raise ValueError(f"bad status: {response.status_code}")
    return RateLimits.model_validate_json(response.content)


def check_rate_limits(
    keys: APIKeys,
    *,
    base_url: str = SERVER_URL,
    transport: Optional[httpx.BaseTransport] = None,
) -> RateLimitsResponse:
    """Return the rate limits of every non-blank key in *keys*.

    Keys are queried one at a time in declaration order.  The first failure
    stops the aggregation.

    Args:
        keys: The credentials to check.  Blank keys are skipped and map to
            ``None`` in the result.
        base_url: API root.
        transport: Inner transport for every per-key client.

    Raises:
        RateLimitCheckError: If a query fails at the transport level,
            returns a non-200 status, or returns an unparseable body.
    """
    results: dict[str, Optional[RateLimits]] = {}
    for name, key in keys.named():
        if not key:
            results[name] = None
            continue
        label = _KEY_LABELS[name]
        logger.debug("Checking rate limits for the %s key", label)
        try:
            results[name] = _fetch_limits(key, base_url, transport)
        except (httpx.HTTPError, ValueError, ValidationError) as exc:
            raise RateLimitCheckError(f"get {label} key limit: {exc}", key_name=name) from exc
    return RateLimitsResponse(**results)
