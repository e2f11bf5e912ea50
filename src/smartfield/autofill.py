"""Autofill heuristic.

Decides, from one old/new value pair and the field's interaction flags,
whether a change looks like a bulk external fill (browser autofill, password
manager) rather than keystrokes. A change is treated as autofill when all of
these hold:

- the old value was empty or blank
- the new value is non-blank
- the value grew by more than min_change_threshold characters
- the field has not been touched and is not focused
- the new value matches every content pattern for the field type
"""

import logging
import re

from smartfield.settings import SmartFieldSettings
from smartfield.types import AutofillConfig, FieldType

logger = logging.getLogger(__name__)


DEFAULT_CONTENT_PATTERNS: dict[FieldType, tuple[re.Pattern[str], ...]] = {
    FieldType.EMAIL: (re.compile(r"@"), re.compile(r"\.")),
    FieldType.PASSWORD: (
        re.compile(r"[A-Z]"),
        re.compile(r"[a-z]"),
        re.compile(r"[0-9]"),
    ),
    FieldType.PHONE: (re.compile(r"^\+?[\d\s\-()]+\Z", re.ASCII),),
    FieldType.NAME: (re.compile(r"^[a-zA-Z\s'-]+\Z"),),
    FieldType.TEXT: (),
}


def resolve_autofill_config(
    field_type: FieldType,
    config: AutofillConfig | None = None,
    settings: SmartFieldSettings | None = None,
) -> AutofillConfig:
    """Fill unset AutofillConfig attributes from settings and the field type.

    Field types without default patterns get none, i.e. any content matches.
    """
    settings = settings or SmartFieldSettings()
    config = config or AutofillConfig()

    threshold = config.min_change_threshold
    if threshold is None:
        threshold = settings.min_change_threshold

    delay = config.touched_delay
    if delay is None:
        delay = settings.touched_delay_ms

    patterns = config.content_patterns
    if patterns is None:
        patterns = DEFAULT_CONTENT_PATTERNS.get(field_type, ())

    return AutofillConfig(
        min_change_threshold=threshold,
        touched_delay=delay,
        content_patterns=patterns,
    )
class AutofillDetector:
    """Applies the autofill heuristic with a fully resolved AutofillConfig.

    Raises:
        ValueError: If any attribute of config is unset; pass the config
            through resolve_autofill_config first
    """

    def __init__(self, config: AutofillConfig):
        unset = [
            name
            for name in ("min_change_threshold", "touched_delay", "content_patterns")
            if getattr(config, name) is None
        ]
        if unset:
            raise ValueError(
                f"AutofillConfig is not resolved; unset: {', '.join(unset)}"
            )
        self.config = config

    @property
    def touched_delay(self) -> int:
        return self.config.touched_delay

    def matches_content(self, value: str) -> bool:
        return all(p.search(value) for p in self.config.content_patterns)

    def is_likely_autofill(
        self,
        new_value: str | None,
        old_value: str | None,
        *,
        has_been_touched: bool,
        has_focus: bool,
    ) -> bool:
        new_value = new_value or ""
        old_value = old_value or ""

        was_empty = old_value.strip() == ""
        has_content = new_value.strip() != ""
        large_change = len(new_value) - len(old_value) > self.config.min_change_threshold
        no_user_interaction = not has_been_touched and not has_focus

        if not (was_empty and has_content and large_change and no_user_interaction):
            return False
        return self.matches_content(new_value)
