"""Editor configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "MODAL_EDIT_"


def _env_int(
    env: Mapping[str, str], key: str, fallback: int, *, minimum: int = 0
) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return max(minimum, int(value))
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables shared by the editor core and the host adapter."""

    # Lines kept visible above/below the cursor when scrolling.
    scroll_margin: int = 0
    # Rows the host reserves below the text area for the status line.
    status_rows: int = 1
    # Numeric verbosity, see ``telemetry.setup_logging``.
    log_level: int = 2

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            scroll_margin=_env_int(source, "SCROLL_MARGIN", defaults.scroll_margin),
            status_rows=_env_int(source, "STATUS_ROWS", defaults.status_rows),
            log_level=_env_int(source, "VERBOSITY", defaults.log_level),
        )


__all__ = ["EditorConfig", "ENV_PREFIX"]
