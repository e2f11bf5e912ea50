"""Environment-driven settings for smartfield."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MIN_CHANGE_THRESHOLD = 2
DEFAULT_TOUCHED_DELAY_MS = 1500


@dataclass
class SmartFieldSettings:
    """Process-wide defaults.

    Per-field AutofillConfig values always take precedence over these.
    """

    min_change_threshold: int = DEFAULT_MIN_CHANGE_THRESHOLD
    touched_delay_ms: int = DEFAULT_TOUCHED_DELAY_MS
    fields_path: Path | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> SmartFieldSettings:
        """Create settings from environment variables.

        Reads:
        1. SMARTFIELD_MIN_CHANGE_THRESHOLD (int)
        2. SMARTFIELD_TOUCHED_DELAY_MS (int, milliseconds)
        3. SMARTFIELD_FIELDS_PATH (YAML field configs loaded into the default service)
        4. SMARTFIELD_LOG_LEVEL (logging level name)

        Raises:
            ValueError: If a numeric variable is not an integer
        """
        fields_path = os.environ.get("SMARTFIELD_FIELDS_PATH")
        return cls(
            min_change_threshold=_int_env(
                "SMARTFIELD_MIN_CHANGE_THRESHOLD", DEFAULT_MIN_CHANGE_THRESHOLD
            ),
            touched_delay_ms=_int_env(
                "SMARTFIELD_TOUCHED_DELAY_MS", DEFAULT_TOUCHED_DELAY_MS
            ),
            fields_path=Path(fields_path) if fields_path else None,
            log_level=os.environ.get("SMARTFIELD_LOG_LEVEL", "WARNING").upper(),
        )

    @property
    def logging_level(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None
