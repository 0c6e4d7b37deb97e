"""Pydantic models shared across youscore.

**Configuration models**:
    :class:`APIKeys` -- the four per-category credentials, and
    :class:`RequestConfig` -- transport settings for :class:`~youscore.client.Client`.

**Payload models** for ``GET /v1/rateLimits``:
    :class:`RequestCount`, :class:`RateLimits` and the aggregate
    :class:`RateLimitsResponse` built by
    :func:`~youscore.rate_limits.check_rate_limits`.

Payload models accept the API's camelCase keys through aliases and keep
unknown fields so that additions on the server side are not lost.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Credentials ---


class APIKeys(BaseModel):
    """The API keys for the different endpoint billing categories.

    A key is *selected* per request by
    :func:`~youscore.auth.api_key_for_path`; the model itself is frozen and
    never changes after the client has been built.  Blank keys are allowed
    (for example when an account has no PDF subscription).

    Example::

        APIKeys(data_analytics="da-key", affiliates="aff-key")
    """

    model_config = ConfigDict(frozen=True)

    data_analytics: str = Field(
        default="", description="Data and analytics endpoints (default for most endpoints)"
    )
    pdf_legal_entities: str = Field(
        default="", description="Legal entity PDF reports (/v1/contractors/pdf-file/)"
    )
    pdf_individuals: str = Field(
        default="", description="Individual PDF reports (/v1/individuals/pdf-reports)"
    )
    affiliates: str = Field(
        default="", description="Affiliate queries (/v1/affiliates)"
    )

    def __repr__(self) -> str:
        # Keys are secrets; only show which ones are present.
        present = [name for name, value in self.named() if value]
        return f"APIKeys(present={present!r})"

    __str__ = __repr__

    def named(self) -> list[tuple[str, str]]:
        """Return ``(field_name, key)`` pairs in declaration order."""
        return [
            ("data_analytics", self.data_analytics),
            ("pdf_legal_entities", self.pdf_legal_entities),
            ("pdf_individuals", self.pdf_individuals),
            ("affiliates", self.affiliates),
        ]


class RequestConfig(BaseModel):
    """HTTP settings applied to every request made by a client."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")


# --- Rate limits ---


class RequestCount(BaseModel):
    """Number of requests made against one endpoint within the current period."""

    model_config = ConfigDict(extra="allow")

    api: str = ""
    count: int = 0
    endpoint: str = ""


class RateLimits(BaseModel):
    """Usage and remaining quota for a single API key."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    actual_date: Optional[datetime] = Field(default=None, alias="actualDate")
    requests_count: list[RequestCount] = Field(default_factory=list, alias="requestsCount")
    requests_left: int = Field(default=0, alias="requestsLeft")
    total_limits: int = Field(default=0, alias="totalLimits")


class RateLimitsResponse(BaseModel):
    """Rate limits for every configured key.  Blank keys map to ``None``."""

    model_config = ConfigDict(populate_by_name=True)

    data_analytics: Optional[RateLimits] = Field(default=None, alias="dataAnalytics")
    pdf_legal_entities: Optional[RateLimits] = Field(default=None, alias="PDFLegalEntities")
    pdf_individuals: Optional[RateLimits] = Field(default=None, alias="PDFIndividuals")
    affiliates: Optional[RateLimits] = Field(default=None, alias="affiliates")
