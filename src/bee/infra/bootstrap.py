"""Infrastructure: establish the :class:`ExecutionContext` for one run.

Steps
-----
1. Resolve the Backdrop root: an explicit ``--root`` wins when it holds
   the marker file; otherwise the current directory is checked.  Not
   finding one is not fatal; commands that need it say so themselves.
2. ``chdir`` into the root when one was found.
3. Build the synthetic request variables (see :mod:`bee.infra.request_shim`).
4. Apply the global flags, buffering one message per active mode.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from bee.core.messages import MessageBuffer
from bee.core.models import ExecutionContext, GlobalOptions
from bee.infra.request_shim import build_request_context
from bee.settings import MARKER_FILE

logger = logging.getLogger(__name__)


def is_installation(path: Path, marker_file: str = MARKER_FILE) -> bool:
    """Return ``True`` if *path* looks like a Backdrop root."""
    return (path / marker_file).is_file()


def resolve_root(
    explicit: Path | None,
    cwd: Path,
    messages: MessageBuffer,
    *,
    marker_file: str = MARKER_FILE,
) -> Path | None:
    """Return the installation root for this run, or ``None``.

    An explicit root that lacks the marker file resolves to ``None``
    (with a warning); it does not fall back to *cwd*.
    """
    if explicit is not None:
        candidate = (cwd / explicit.expanduser()).resolve()
        if is_installation(candidate, marker_file):
            return candidate
        messages.warning(f"No Backdrop installation found at {candidate}.")
        logger.debug("explicit root %s has no %s", candidate, marker_file)
        return None

    candidate = cwd.resolve()
    if is_installation(candidate, marker_file):
        return candidate
    logger.debug("no %s in %s; continuing without a root", marker_file, candidate)
    return None


def bootstrap(
    options: GlobalOptions,
    messages: MessageBuffer,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
    marker_file: str = MARKER_FILE,
) -> ExecutionContext:
    """Build the context for this run.  Side effect: may ``chdir``."""
    env = os.environ if environ is None else environ
    root = resolve_root(options.root, cwd or Path.cwd(), messages, marker_file=marker_file)

    if root is not None:
        os.chdir(root)
        logger.debug("changed directory to %s", root)

    request = build_request_context(env)

    if options.drush:
        messages.info("Drush mode on")
    if options.yes:
        messages.info("Yes mode on")
    if options.debug:
        messages.info("Debug mode on")

    return ExecutionContext(
        debug=options.debug,
        yes=options.yes,
        drush=options.drush,
        root=root,
        request=request,
    )
