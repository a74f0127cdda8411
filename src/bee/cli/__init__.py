"""CLI layer: error boundary, exit codes, console, rendering and prompts.

This package is the outermost layer of the application.  It may import
from ``core``, ``infra`` and ``commands``, but no other layer may import
from ``cli``.
"""
