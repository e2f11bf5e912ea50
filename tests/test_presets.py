"""Tests for the ready-made field presets."""

import pytest

from smartfield import presets
from smartfield.types import FieldType


def errors_for(service, config, value):
    return service.validate_field(config.field_name, value, config.to_field_config()).errors


class TestIdentityPresets:
    def test_email(self, service):
        config = presets.email()
        assert config.field_type == FieldType.EMAIL
        assert errors_for(service, config, "") == ("Email is required",)
        assert errors_for(service, config, "user@") == ("Email must be valid",)
        assert errors_for(service, config, "user@example.com") == ()

    def test_email_too_long(self, service):
        value = "a" * 95 + "@x.com"
        assert errors_for(service, presets.email(), value) == (
            "Email must not exceed 100 characters",
        )

    def test_optional_email_accepts_empty(self, service):
        config = presets.email(required=False)
        assert [r.name for r in config.validation_rules] == ["validEmail", "maxLength_100"]
        assert errors_for(service, config, "") == ()

    def test_signup_password_reports_every_failure(self, service):
        assert errors_for(service, presets.password(), "abc") == (
            "Password must be at least 8 characters long",
            "Password must contain at least one uppercase letter",
            "Password must contain at least one digit",
            "Password must contain at least one special character (@$!%*?&_)",
        )

    def test_signup_password_valid(self, service):
        assert errors_for(service, presets.password(), "Secret_123") == ()

    def test_signup_password_rejects_other_characters(self, service):
        assert errors_for(service, presets.password(), "Secret_123#") == (
            "Password can only contain letters, digits, and special characters (@$!%*?&_)",
        )

    def test_login_password_only_checks_length(self, service):
        config = presets.password(signup=False)
        assert errors_for(service, config, "lowercase") == ()
        assert errors_for(service, config, "short") == (
            "Password must be at least 8 characters long",
        )

    def test_username_trims_before_min_length(self, service):
        assert errors_for(service, presets.username(), " ab ") == (
            "Username must be at least 3 characters long",
        )
        assert errors_for(service, presets.username(), "bob") == ()

    @pytest.mark.parametrize(
        "field_name, message",
        [("firstName", "First name is required"), ("lastName", "Last name is required")],
    )
    def test_name(self, service, field_name, message):
        config = presets.name(field_name)
        assert config.field_type == FieldType.NAME
        assert errors_for(service, config, "  ") == (message,)

    def test_name_rejects_unknown_field(self):
        with pytest.raises(ValueError, match="middleName"):
            presets.name("middleName")

    def test_phone_digit_count(self, service):
        config = presets.phone()
        assert errors_for(service, config, "") == ()
        assert errors_for(service, config, "(555) 123-4567") == ()
        assert errors_for(service, config, "555-1234") == (
            "Phone number must be valid (10-15 digits)",
        )


class TestAddressPresets:
    def test_street_number_name(self, service):
        config = presets.street_number_name()
        assert errors_for(service, config, "123 Main St") == ()
        assert errors_for(service, config, "Main St") == (
            "Street address must contain a number",
            'Street address should start with a number (e.g., "123 Main St")',
        )
        assert errors_for(service, config, "Apt 5") == (
            'Street address should start with a number (e.g., "123 Main St")',
        )

    def test_state_province(self, service):
        config = presets.state_province()
        assert errors_for(service, config, "Ontario") == ()
        assert errors_for(service, config, "N.Y.") == ()
        assert errors_for(service, config, "Zone 9") == (
            "State/Province must contain only letters, spaces, hyphens, and periods",
        )

    @pytest.mark.parametrize("value", ["M5H 2N2", "m5h-2n2", "12345", "12345-6789"])
    def test_postal_code_accepts(self, service, value):
        assert errors_for(service, presets.postal_code(), value) == ()

    def test_postal_code_rejects(self, service):
        assert errors_for(service, presets.postal_code(), "ABCDE") == (
            "Postal code format is invalid (e.g., M5H 2N2 or 12345)",
        )

    def test_required_address_parts(self, service):
        assert errors_for(service, presets.city(), "") == ("City is required",)
        assert errors_for(service, presets.country(), "") == ("Country is required",)
        assert errors_for(service, presets.street_name(), "") == ("Street name is required",)

    def test_unit_number(self, service):
        config = presets.unit_number()
        assert errors_for(service, config, "12B") == ()
        assert errors_for(service, config, "12 B") == (
            "Unit number contains invalid characters",
        )

    def test_every_preset_has_explicit_rules(self):
        for factory in (
            presets.email,
            presets.password,
            presets.username,
            presets.name,
            presets.phone,
            presets.street_name,
            presets.street_number_name,
            presets.state_province,
            presets.postal_code,
            presets.city,
            presets.country,
            presets.unit_number,
        ):
            assert factory().validation_rules is not None


class TestPresetAnchoring:
    def test_email_trailing_newline(self, service):
        assert errors_for(service, presets.email(), "user@example.com\n") == (
            "Email must be valid",
        )

    def test_password_trailing_newline(self, service):
        assert errors_for(service, presets.password(), "Secret_123\n") == (
            "Password can only contain letters, digits, and special characters (@$!%*?&_)",
        )

    def test_phone_counts_ascii_digits_only(self, service):
        assert errors_for(service, presets.phone(), "５５５１２３４５６７") == (
            "Phone number must be valid (10-15 digits)",
        )

    def test_street_address_needs_ascii_digit(self, service):
        assert errors_for(service, presets.street_number_name(), "١٢ Main St") == (
            "Street address must contain a number",
            'Street address should start with a number (e.g., "123 Main St")',
        )
