"""Tests for the autofill heuristic."""

import re

import pytest

from smartfield.autofill import (
    DEFAULT_CONTENT_PATTERNS,
    AutofillDetector,
    resolve_autofill_config,
)
from smartfield.settings import SmartFieldSettings
from smartfield.types import AutofillConfig, FieldType


def detector_for(field_type: FieldType, config: AutofillConfig | None = None) -> AutofillDetector:
    return AutofillDetector(resolve_autofill_config(field_type, config))


def untouched(detector: AutofillDetector, new: str, old: str = "") -> bool:
    return detector.is_likely_autofill(new, old, has_been_touched=False, has_focus=False)


# =============================================================================
# Config resolution
# =============================================================================


class TestResolveAutofillConfig:
    def test_defaults(self):
        config = resolve_autofill_config(FieldType.EMAIL)
        assert config.min_change_threshold == 2
        assert config.touched_delay == 1500
        assert config.content_patterns == DEFAULT_CONTENT_PATTERNS[FieldType.EMAIL]

    def test_explicit_values_win(self):
        config = resolve_autofill_config(
            FieldType.EMAIL,
            AutofillConfig(min_change_threshold=5, touched_delay=200, content_patterns=[r"x"]),
        )
        assert config.min_change_threshold == 5
        assert config.touched_delay == 200
        assert [p.pattern for p in config.content_patterns] == ["x"]

    def test_zero_values_are_respected(self):
        config = resolve_autofill_config(
            FieldType.TEXT, AutofillConfig(min_change_threshold=0, touched_delay=0)
        )
        assert config.min_change_threshold == 0
        assert config.touched_delay == 0

    def test_settings_supply_defaults(self):
        settings = SmartFieldSettings(min_change_threshold=7, touched_delay_ms=300)
        config = resolve_autofill_config(FieldType.TEXT, None, settings)
        assert config.min_change_threshold == 7
        assert config.touched_delay == 300

    def test_type_without_default_patterns_matches_anything(self):
        config = resolve_autofill_config(FieldType.POSTAL_CODE)
        assert config.content_patterns == ()

    def test_explicit_empty_patterns_kept(self):
        config = resolve_autofill_config(
            FieldType.EMAIL, AutofillConfig(content_patterns=())
        )
        assert config.content_patterns == ()

    def test_patterns_are_compiled(self):
        config = AutofillConfig(content_patterns=[r"\d"])
        assert isinstance(config.content_patterns[0], re.Pattern)


# =============================================================================
# Detection
# =============================================================================


class TestIsLikelyAutofill:
    def test_email_bulk_fill(self):
        assert untouched(detector_for(FieldType.EMAIL), "user@example.com") is True

    def test_old_value_not_empty(self):
        assert untouched(detector_for(FieldType.TEXT), "hello world", "hello") is False

    def test_blank_old_value_counts_as_empty(self):
        assert untouched(detector_for(FieldType.TEXT), "   hello", "   ") is True

    def test_blank_new_value(self):
        assert untouched(detector_for(FieldType.TEXT), "      ") is False

    def test_change_must_exceed_threshold(self):
        detector = detector_for(FieldType.TEXT)
        assert untouched(detector, "ab") is False
        assert untouched(detector, "abc") is True

    def test_single_keystroke_is_not_autofill(self):
        assert untouched(detector_for(FieldType.TEXT), "a") is False

    def test_focused_field_is_not_autofill(self):
        detector = detector_for(FieldType.EMAIL)
        assert detector.is_likely_autofill(
            "user@example.com", "", has_been_touched=False, has_focus=True
        ) is False

    def test_touched_field_is_not_autofill(self):
        detector = detector_for(FieldType.EMAIL)
        assert detector.is_likely_autofill(
            "user@example.com", "", has_been_touched=True, has_focus=False
        ) is False

    def test_email_patterns(self):
        detector = detector_for(FieldType.EMAIL)
        assert untouched(detector, "userexample.com") is False
        assert untouched(detector, "user@examplecom") is False

    def test_password_patterns(self):
        detector = detector_for(FieldType.PASSWORD)
        assert untouched(detector, "Secret123") is True
        assert untouched(detector, "secret123") is False

    def test_phone_pattern(self):
        detector = detector_for(FieldType.PHONE)
        assert untouched(detector, "+1 (555) 123-4567") is True
        assert untouched(detector, "call me") is False

    def test_name_pattern(self):
        detector = detector_for(FieldType.NAME)
        assert untouched(detector, "Mary-Jane O'Neil") is True
        assert untouched(detector, "R2D2 unit") is False

    def test_none_values_treated_as_empty(self):
        detector = detector_for(FieldType.TEXT)
        assert untouched(detector, "hello", None) is True
        assert untouched(detector, None, None) is False

    @pytest.mark.parametrize("threshold,expected", [(0, True), (4, True), (5, False)])
    def test_custom_threshold(self, threshold, expected):
        detector = detector_for(FieldType.TEXT, AutofillConfig(min_change_threshold=threshold))
        assert untouched(detector, "hello") is expected


class TestDetectorConfig:
    def test_unresolved_config_rejected(self):
        with pytest.raises(ValueError, match="min_change_threshold, touched_delay"):
            AutofillDetector(AutofillConfig(content_patterns=()))

    def test_resolved_values_used_as_is(self):
        detector = AutofillDetector(
            AutofillConfig(min_change_threshold=0, touched_delay=0, content_patterns=())
        )
        assert detector.touched_delay == 0
        assert untouched(detector, "a") is True
