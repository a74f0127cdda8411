"""Infrastructure layer: integration with the process and the installation.

This layer owns every side effect outside the terminal: changing
directory, reading the real environment, importing legacy command
files and reading/writing installation state.

Rules
-----
* No imports from ``cli``.
* No user-facing output; status goes through the message buffer.
* Filesystem and decoding failures surface as
  :class:`~bee.exceptions.BeeError` subclasses.
"""

from bee.infra.bootstrap import bootstrap, resolve_root
from bee.infra.legacy_loader import LegacyDispatcher, load_legacy_registry
from bee.infra.request_shim import build_request_context
from bee.infra.runtime import BackdropRuntime, runtime_for

__all__: list[str] = [
    "BackdropRuntime",
    "LegacyDispatcher",
    "bootstrap",
    "build_request_context",
    "load_legacy_registry",
    "resolve_root",
    "runtime_for",
]
