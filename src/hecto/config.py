"""Editor tunables.

There are no configuration files. Defaults live in :mod:`hecto.constants`
and can be overridden per process through the environment:

    HECTO_TAB_STOP        render width of a tab stop
    HECTO_QUIT_TIMES      extra Ctrl-Q presses needed to quit with unsaved changes
    HECTO_STATUS_TIMEOUT  seconds a status message stays visible
    HECTO_LOG             path of a debug log file
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import HECTO_LOG_ENV, HECTO_QUIT_TIMES, HECTO_STATUS_TIMEOUT, HECTO_TAB_STOP


@dataclass(frozen=True, slots=True)
class EditorOptions:
    """Immutable editor options, fixed for the lifetime of a session."""

    tab_stop: int = HECTO_TAB_STOP
    quit_times: int = HECTO_QUIT_TIMES
    status_timeout: float = HECTO_STATUS_TIMEOUT
    log_file: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EditorOptions":
        env = os.environ if environ is None else environ
        return cls(
            tab_stop=_positive(int, env.get("HECTO_TAB_STOP"), HECTO_TAB_STOP),
            quit_times=_positive(int, env.get("HECTO_QUIT_TIMES"), HECTO_QUIT_TIMES),
            status_timeout=_positive(
                float, env.get("HECTO_STATUS_TIMEOUT"), HECTO_STATUS_TIMEOUT
            ),
            log_file=env.get(HECTO_LOG_ENV) or None,
        )


def _positive(kind, raw: str | None, default):
    if raw is None:
        return default
    try:
        value = kind(raw)
    except ValueError:
        return default
    # NaN fails the comparison too.
    return value if value > 0 else default
