"""
HTTPS SSL helpers.

On some local Python installs (notably Homebrew Python on macOS), urllib can fail with:
  SSL: CERTIFICATE_VERIFY_FAILED (unable to get local issuer certificate)

Both outbound targets here (Tavus and n8n Cloud) are HTTPS, so every request goes
through create_ssl_context(), which pins certifi's CA bundle.
"""

from __future__ import annotations

import ssl
from functools import lru_cache

import certifi


@lru_cache(maxsize=1)
def create_ssl_context() -> ssl.SSLContext:
    """
    Returns an SSLContext configured with the certifi CA bundle.
    """
    return ssl.create_default_context(cafile=certifi.where())
