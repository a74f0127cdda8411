"""Synthetic web-request context for the Backdrop runtime.

Backdrop's APIs assume they run inside an HTTP request.  This module is
the only place that knows what that request has to look like; the rest
of bee treats the result as an opaque read-only mapping.

Rules
-----
* Values are fixed and deterministic: a loopback, non-HTTPS ``GET /``.
* When the *real* environment says ``HTTPS=on``, every URL-bearing
  value uses ``https://`` instead.
* No other environment variable leaks into the result.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

HOST = "localhost"
LOOPBACK = "127.0.0.1"
USER_AGENT = "Backdrop command line"


def _defaults(base_path: str) -> dict[str, str]:
    return {
        "HTTP_HOST": HOST,
        "REMOTE_ADDR": LOOPBACK,
        "SERVER_ADDR": LOOPBACK,
        "SERVER_SOFTWARE": "",
        "SERVER_NAME": HOST,
        "REQUEST_URI": base_path + "/",
        "REQUEST_METHOD": "GET",
        "SCRIPT_NAME": base_path + "/index.php",
        "PHP_SELF": base_path + "/index.php",
        "HTTP_USER_AGENT": USER_AGENT,
        "REQUEST_SCHEME": "http",
        "BASE_URL": f"http://{HOST}{base_path}",
    }


def is_https(environ: Mapping[str, str]) -> bool:
    """Return ``True`` when the real environment declares ``HTTPS=on``."""
    return environ.get("HTTPS", "").strip().lower() == "on"


def build_request_context(
    environ: Mapping[str, str],
    *,
    base_path: str = "",
) -> Mapping[str, str]:
    """Return the read-only request variables for this run."""
    context = _defaults(base_path)
    if is_https(environ):
        context = {key: value.replace("http://", "https://") for key, value in context.items()}
        context["REQUEST_SCHEME"] = "https"
        context["HTTPS"] = "on"
    return MappingProxyType(context)
