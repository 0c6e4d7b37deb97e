"""Authentication request editors.

Two mutually exclusive modes are supported:

* :func:`bearer_auth` -- one key for every request.
* :func:`api_keys_auth` -- the key is chosen per request from
  :class:`~youscore.models.APIKeys` by :func:`api_key_for_path`.
"""

from youscore.auth.selector import (
    AUTH_SCHEME,
    KEY_ROUTES,
    api_key_for_path,
    api_keys_auth,
    bearer_auth,
    key_name_for_path,
)

__all__ = [
    "AUTH_SCHEME",
    "KEY_ROUTES",
    "api_key_for_path",
    "api_keys_auth",
    "bearer_auth",
    "key_name_for_path",
]
