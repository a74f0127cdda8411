"""bee: command line utility for Backdrop CMS.

Resolves an invocation against a declarative command registry, bootstraps
a synthetic request context and renders the handler's structured output.
"""

from bee.version import __version__

__all__: list[str] = ["__version__"]
