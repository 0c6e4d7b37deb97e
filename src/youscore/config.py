"""Configuration loading from the environment.

This module turns process environment variables into the models the client
needs:

* :func:`load_api_keys` -- the four per-category credentials
  (:class:`~youscore.models.APIKeys`).
* :func:`load_request_config` -- timeout and TLS settings
  (:class:`~youscore.models.RequestConfig`).
* :func:`resolve_credential` -- reads a key from ``env:VAR``,
  ``file:/path`` or a literal value; applied to every key variable.
* :func:`get_base_url` -- the API root, overridable for staging servers.

Every function accepts an optional ``environ`` mapping so callers and tests
can supply their own environment instead of :data:`os.environ`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from youscore.exceptions import ConfigError
from youscore.models import APIKeys, RequestConfig

SERVER_URL = "https://api.youscore.com.ua"
"""Production API root."""

ENV_BASE_URL = "YOUSCORE_BASE_URL"
ENV_TIMEOUT = "YOUSCORE_TIMEOUT"
ENV_VERIFY_SSL = "YOUSCORE_VERIFY_SSL"

API_KEY_ENV_VARS: dict[str, str] = {
    "data_analytics": "YOUSCORE_DATA_ANALYTICS_KEY",
    "pdf_legal_entities": "YOUSCORE_PDF_LEGAL_KEY",
    "pdf_individuals": "YOUSCORE_PDF_INDIVIDUALS_KEY",
    "affiliates": "YOUSCORE_AFFILIATES_KEY",
}
"""Maps :class:`~youscore.models.APIKeys` fields to environment variable names."""

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def resolve_credential(source: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``VAR_NAME`` from the environment
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - anything else -- used verbatim as the credential

    Args:
        source: The source descriptor string.
        environ: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        The resolved credential string.

    Raises:
        ConfigError: If the variable is unset or the file can't be read.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = _env(environ).get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    return source


def load_api_keys(environ: Optional[Mapping[str, str]] = None) -> APIKeys:
    """Build :class:`~youscore.models.APIKeys` from ``YOUSCORE_*_KEY`` variables.

    Each variable holds a source descriptor understood by
    :func:`resolve_credential`, so ``YOUSCORE_PDF_LEGAL_KEY=file:~/.pdf-key``
    works as well as a literal key.  Individual keys may be blank, but at
    least one must be set.

    Raises:
        ConfigError: If none of the four variables holds a value, or a
            descriptor cannot be resolved.
    """
    env = _env(environ)
    values: dict[str, str] = {}
    for field, var in API_KEY_ENV_VARS.items():
        source = env.get(var, "").strip()
        values[field] = resolve_credential(source, env).strip() if source else ""
    if not any(values.values()):
        names = ", ".join(API_KEY_ENV_VARS.values())
        raise ConfigError(f"No API keys configured; set at least one of: {names}")
    return APIKeys(**values)


def load_request_config(environ: Optional[Mapping[str, str]] = None) -> RequestConfig:
    """Build a :class:`~youscore.models.RequestConfig` from the environment.

    Raises:
        ConfigError: If ``YOUSCORE_TIMEOUT`` is not a positive number or
            ``YOUSCORE_VERIFY_SSL`` is not a recognised boolean.
    """
    env = _env(environ)
    config = RequestConfig()

    raw_timeout = env.get(ENV_TIMEOUT, "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ConfigError(f"{ENV_TIMEOUT} must be positive, got {raw_timeout!r}")
        config = config.model_copy(update={"timeout": timeout})

    raw_verify = env.get(ENV_VERIFY_SSL, "").strip().lower()
    if raw_verify:
        if raw_verify in _TRUE_VALUES:
            verify = True
        elif raw_verify in _FALSE_VALUES:
            verify = False
        else:
            raise ConfigError(f"{ENV_VERIFY_SSL} must be a boolean, got {raw_verify!r}")
        config = config.model_copy(update={"verify_ssl": verify})

    return config


def get_base_url(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the API root: ``YOUSCORE_BASE_URL`` or :data:`SERVER_URL`."""
    return _env(environ).get(ENV_BASE_URL, "").strip().rstrip("/") or SERVER_URL
