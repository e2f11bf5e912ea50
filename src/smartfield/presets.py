"""Ready-made SmartFieldConfig presets for common form inputs.

Each preset carries field-specific messages and can be built in required or
optional mode; optional mode simply omits the `required` rule, since every
other rule is vacuous on empty input.
"""

import re
from typing import Any

from smartfield.rules import (
    EMAIL_PATTERN,
    PASSWORD_SPECIAL_CHARS,
    UNIT_NUMBER_PATTERN,
    custom,
    is_postal_code,
    max_length,
    min_length,
    pattern,
)
from smartfield.types import FieldType, Rule, SmartFieldConfig

EMAIL_MAX_LENGTH = 100
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 100
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15
PHONE_MAX_LENGTH = 20
NAME_MAX_LENGTH = 100

_NON_DIGIT = re.compile(r"[^0-9]")
_LEADING_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.escape(PASSWORD_SPECIAL_CHARS)

_NAME_MESSAGES = {
    "firstName": ("First name is required", "First name must not exceed 100 characters"),
    "lastName": ("Last name is required", "Last name must not exceed 100 characters"),
}


def _required(message: str) -> Rule:
    return custom(
        lambda v: v is not None and str(v).strip() != "",
        message,
        name="required",
    )


def _trimmed_min_length(n: int, message: str) -> Rule:
    def _validate(value: Any) -> bool:
        if not value:
            return True
        return len(value.strip()) >= n

    return custom(_validate, message, name=f"minLength_{n}")


def _with_required(required: bool, message: str, rules: list[Rule]) -> tuple[Rule, ...]:
    if required:
        return (_required(message), *rules)
    return tuple(rules)


# =============================================================================
# Identity
# =============================================================================


def email(required: bool = True) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="email",
        field_type=FieldType.EMAIL,
        required=required,
        validation_rules=_with_required(required, "Email is required", [
            pattern(
                EMAIL_PATTERN,
                "Email must be valid",
                name="validEmail",
            ),
            max_length(
                EMAIL_MAX_LENGTH,
                f"Email must not exceed {EMAIL_MAX_LENGTH} characters",
            ),
        ]),
    )


def password(required: bool = True, signup: bool = True) -> SmartFieldConfig:
    """Password preset.

    Login forms (signup=False) only bound the length; signup forms also
    require each character class and restrict the allowed characters.
    """
    rules = [
        min_length(
            PASSWORD_MIN_LENGTH,
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
        ),
        max_length(
            PASSWORD_MAX_LENGTH,
            f"Password must not exceed {PASSWORD_MAX_LENGTH} characters",
        ),
    ]
    if signup:
        rules += [
            pattern(
                r"[a-z]",
                "Password must contain at least one lowercase letter",
                name="hasLowercase",
            ),
            pattern(
                r"[A-Z]",
                "Password must contain at least one uppercase letter",
                name="hasUppercase",
            ),
            pattern(r"[0-9]", "Password must contain at least one digit", name="hasDigit"),
            pattern(
                f"[{_SPECIAL}]",
                f"Password must contain at least one special character ({PASSWORD_SPECIAL_CHARS})",
                name="hasSpecialChar",
            ),
            pattern(
                re.compile(rf"^[A-Za-z0-9{_SPECIAL}]+\Z"),
                "Password can only contain letters, digits, and special "
                f"characters ({PASSWORD_SPECIAL_CHARS})",
                name="validChars",
            ),
        ]
    return SmartFieldConfig(
        field_name="password",
        field_type=FieldType.PASSWORD,
        required=required,
        validation_rules=_with_required(required, "Password is required", rules),
    )


def username(required: bool = True) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="username",
        field_type=FieldType.TEXT,
        required=required,
        validation_rules=_with_required(required, "Username is required", [
            _trimmed_min_length(
                USERNAME_MIN_LENGTH,
                f"Username must be at least {USERNAME_MIN_LENGTH} characters long",
            ),
            max_length(
                USERNAME_MAX_LENGTH,
                f"Username must not exceed {USERNAME_MAX_LENGTH} characters",
            ),
        ]),
    )


def name(field_name: str = "firstName", required: bool = True) -> SmartFieldConfig:
    """First or last name preset.

    Raises:
        ValueError: If field_name is not "firstName" or "lastName"
    """
    if field_name not in _NAME_MESSAGES:
        raise ValueError(
            f"Unknown name field '{field_name}'. Expected one of: "
            + ", ".join(sorted(_NAME_MESSAGES))
        )
    required_message, max_message = _NAME_MESSAGES[field_name]
    return SmartFieldConfig(
        field_name=field_name,
        field_type=FieldType.NAME,
        required=required,
        validation_rules=_with_required(required, required_message, [
            max_length(NAME_MAX_LENGTH, max_message),
        ]),
    )


def _has_phone_digit_count(value: Any) -> bool:
    if not value:
        return True
    digits = _NON_DIGIT.sub("", value)
    return PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS


def phone(required: bool = False) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="phone",
        field_type=FieldType.PHONE,
        required=required,
        validation_rules=_with_required(required, "Phone number is required", [
            custom(
                _has_phone_digit_count,
                f"Phone number must be valid ({PHONE_MIN_DIGITS}-{PHONE_MAX_DIGITS} digits)",
                name="validPhone",
            ),
            max_length(
                PHONE_MAX_LENGTH,
                f"Phone number must not exceed {PHONE_MAX_LENGTH} characters",
            ),
        ]),
    )


# =============================================================================
# Address
# =============================================================================


def street_name(required: bool = True) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="streetName",
        field_type=FieldType.TEXT,
        required=required,
        validation_rules=_with_required(required, "Street name is required", [
            max_length(100, "Street name must not exceed 100 characters"),
            _trimmed_min_length(2, "Street name must be at least 2 characters long"),
        ]),
    )


def street_number_name(required: bool = False) -> SmartFieldConfig:
    """Combined "123 Main St" input.

    An address without any digit fails both the contains-a-number and the
    starts-with-a-number rules; both messages are reported.
    """
    return SmartFieldConfig(
        field_name="streetNumberName",
        field_type=FieldType.TEXT,
        required=required,
        validation_rules=_with_required(required, "Street number and name is required", [
            max_length(120, "Street number and name must not exceed 120 characters"),
            _trimmed_min_length(
                2, "Street number and name must be at least 2 characters long"
            ),
            pattern(r"[0-9]", "Street address must contain a number", name="mustContainNumber"),
            custom(
                lambda v: not v or _LEADING_DIGIT.match(v.strip()) is not None,
                'Street address should start with a number (e.g., "123 Main St")',
                name="validFormat",
            ),
        ]),
    )


def state_province(required: bool = False) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="stateOrProvince",
        field_type=FieldType.TEXT,
        required=required,
        validation_rules=_with_required(required, "State/Province is required", [
            max_length(50, "State/Province must not exceed 50 characters"),
            _trimmed_min_length(2, "State/Province must be at least 2 characters long"),
            custom(
                lambda v: not v or re.fullmatch(r"[a-zA-Z\s\-.]+", v.strip()) is not None,
                "State/Province must contain only letters, spaces, hyphens, and periods",
                name="validStateProvince",
            ),
        ]),
    )


def postal_code(required: bool = False) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="postalOrZipCode",
        field_type=FieldType.POSTAL_CODE,
        required=required,
        validation_rules=_with_required(required, "Postal code is required", [
            max_length(10, "Postal code must not exceed 10 characters"),
            _trimmed_min_length(5, "Postal code must be at least 5 characters long"),
            custom(
                is_postal_code,
                "Postal code format is invalid (e.g., M5H 2N2 or 12345)",
                name="validPostalCode",
            ),
        ]),
    )


def city(required: bool = True) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="city",
        field_type=FieldType.TEXT,
        required=required,
        validation_rules=_with_required(required, "City is required", [
            max_length(100, "City must not exceed 100 characters"),
        ]),
    )


def country(required: bool = True) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="country",
        field_type=FieldType.TEXT,
        required=required,
        validation_rules=_with_required(required, "Country is required", [
            max_length(100, "Country must not exceed 100 characters"),
        ]),
    )


def unit_number(required: bool = False) -> SmartFieldConfig:
    return SmartFieldConfig(
        field_name="unitNumber",
        field_type=FieldType.TEXT,
        required=required,
        validation_rules=_with_required(required, "Unit number is required", [
            pattern(
                UNIT_NUMBER_PATTERN,
                "Unit number contains invalid characters",
                name="unitNumber",
            ),
            max_length(20, "Unit number must not exceed 20 characters"),
        ]),
    )
