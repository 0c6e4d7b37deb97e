"""Usage classification for cost tracking.

YouScore prices requests by category.  :func:`api_type_for_path` maps a
request path to one of three :class:`APIType` values and
:func:`usage_tracking` turns a callback into a request editor that reports
every outgoing request.  The editor only observes: it never changes the
request and never fails it, even when the callback raises.

Example::

    counter = UsageCounter()
    client = Client(api_keys=keys, usage_tracker=counter)
    ...
    counter.totals()   # {APIType.DATA: 3, APIType.ANALYSIS: 1}
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from enum import Enum
from typing import Any, Callable

import httpx

from youscore.editors import RequestEditor

logger = logging.getLogger(__name__)


class APIType(str, Enum):
    """Billing category of an endpoint."""

    CUSTOM = "custom"
    ANALYSIS = "analysis"
    DATA = "data"


UsageCallback = Callable[[Any, APIType, str], None]
"""``callback(context, api_type, path)`` invoked once per request."""

CUSTOM_PREFIXES: tuple[str, ...] = (
    # PDF reports, affiliates, auctions
    "v1/contractors/pdf-file/",
    "v1/contractorsPdf/",
    "v1/individuals/pdf-reports",
    "v1/individualsPdfReports",
    "v1/affiliates",
    "v1/setam/",
)

ANALYSIS_PREFIXES: tuple[str, ...] = (
    "v1/history/",
    "v1/usrAdministrativeServicesResults/",
    "v1/usrDocuments/",
    "v1/expressAnalysis/",
    "v1/marketScoring/",
    "v1/financialScoring/",
    "v1/investigationsLegal",
    "v1/investigationsNatural",
    "v1/fig",
    "v1/individualsFigCompanies",
    "v1/courtCaseGroup/",
    "v1/encumbrances/details/",
    "v1/encumbrances/resultdetails/",
    "v1/realEstate/details/",
    "v1/realEstate/resultdetails/",
    "v1/tenders/risks/",
    "v1/sanctions",
)


def api_type_for_path(path: str) -> APIType:
    """Return the billing category for *path*.  Matching is case-sensitive."""
    path = path.removeprefix("/")
    if path.startswith(CUSTOM_PREFIXES):
        return APIType.CUSTOM
    if path.startswith(ANALYSIS_PREFIXES):
        return APIType.ANALYSIS
    return APIType.DATA


def usage_tracking(callback: UsageCallback) -> RequestEditor:
    """Build an editor that reports each request's category to *callback*."""

    def editor(context: Any, request: httpx.Request) -> None:
        path, _, _ = request.url.path.partition("?")
        api_type = api_type_for_path(path)
        try:
            callback(context, api_type, path)
        except Exception:
            logger.exception("Usage callback failed for %s (%s)", path, api_type.value)

    return editor


class UsageCounter:
    """Thread-safe usage callback that counts requests per category and path."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_type: Counter[APIType] = Counter()
        self._by_path: Counter[str] = Counter()

    def __call__(self, context: Any, api_type: APIType, path: str) -> None:
        with self._lock:
            self._by_type[api_type] += 1
            self._by_path[path] += 1

    def totals(self) -> dict[APIType, int]:
        """Request count per :class:`APIType`."""
        with self._lock:
            return dict(self._by_type)

    def paths(self) -> dict[str, int]:
        """Request count per path."""
        with self._lock:
            return dict(self._by_path)

    def total(self) -> int:
        with self._lock:
            return sum(self._by_type.values())
