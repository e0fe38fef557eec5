"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "BATCH_INTAKE_LOG_LEVEL"

log = logging.getLogger(__name__)


def resolve_log_level() -> int:
    """Return the level named by ``$BATCH_INTAKE_LOG_LEVEL`` (INFO when unset or unknown)."""

    name = os.getenv(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not name:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(name)
    if level is None:
        log.warning("Ignoring unknown log level %s=%s", LOG_LEVEL_ENV_VAR, name)
        return logging.INFO
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the
    level defaults to ``resolve_log_level()`` with a terse format suitable for
    CLI output. Pass ``force=True`` to reconfigure in specialised entry points.
    """

    logging.basicConfig(
        level=level if level is not None else resolve_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
