"""Validation rules and the rule registry.

Built-in rules:
- required: non-empty after trim for strings, not None otherwise
- email, phone, postalCode: format checks
- strongPassword: length >= 8 with lowercase, uppercase, digit and special
- streetNumber, unitNumber: permissive character-class checks

Every rule except `required` is vacuously true on empty input so that
emptiness is owned by `required` alone. The same holds for the
min_length / max_length / pattern factories.
"""

import logging
import re
from typing import Any

from smartfield.types import Rule, RuleNotFoundError, RuleValidator

logger = logging.getLogger(__name__)


# =============================================================================
# Patterns
# =============================================================================
#
# Anchored with \Z, since $ also matches before a trailing newline. Digit
# classes are ASCII only.

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z")

# Leading +, ( or digit, then digits and common separators
PHONE_PATTERN = re.compile(r"^[+(\d][\d\-\s().]{6,28}\Z", re.ASCII)

CANADIAN_POSTAL_PATTERN = re.compile(r"^[A-Z]\d[A-Z][ -]?\d[A-Z]\d\Z", re.ASCII)
US_ZIP_PATTERN = re.compile(r"^\d{5}(-\d{4})?\Z", re.ASCII)

STREET_NUMBER_PATTERN = re.compile(r"^[0-9A-Za-z\-/\s]*\Z")
UNIT_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9\-#]*\Z")

PASSWORD_SPECIAL_CHARS = "@$!%*?&_"
STRONG_PASSWORD_PATTERN = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&_])[A-Za-z\d@$!%*?&_]{8,}\Z",
    re.ASCII,
)


# =============================================================================
# Rule Registry
# =============================================================================


class RuleRegistry:
    """Registry of validation rules, keyed by name.

    Registration overwrites: registering a rule under a name already in use
    replaces the previous rule. Lookups of unknown names raise
    RuleNotFoundError, since they can only come from misconfiguration.

    Example:
        registry = RuleRegistry()
        register_builtin_rules(registry)
        registry.register(Rule("noSpaces", "Must not contain spaces", lambda v: " " not in v))
        rule = registry.get("noSpaces")
    """

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(self, rule: Rule) -> None:
        """Insert or replace a rule by name."""
        if rule.name in self._rules:
            logger.debug("Replacing validation rule '%s'", rule.name)
        self._rules[rule.name] = rule

    def get(self, name: str) -> Rule:
        """Get a registered rule by name.

        Raises:
            RuleNotFoundError: If no rule is registered under name
        """
        try:
            return self._rules[name]
        except KeyError:
            raise RuleNotFoundError(name) from None

    def is_registered(self, name: str) -> bool:
        return name in self._rules

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules.keys())

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._rules.clear()

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules


# =============================================================================
# Predicates
# =============================================================================


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _is_email(value: Any) -> bool:
    if not value:
        return True
    return EMAIL_PATTERN.match(value) is not None


def _is_phone(value: Any) -> bool:
    if not value:
        return True
    return PHONE_PATTERN.match(value) is not None


def _is_strong_password(value: Any) -> bool:
    if not value:
        return True
    return STRONG_PASSWORD_PATTERN.match(value) is not None


def _is_street_number(value: Any) -> bool:
    if not value:
        return True
    return STREET_NUMBER_PATTERN.match(value) is not None


def _is_unit_number(value: Any) -> bool:
    if not value:
        return True
    return UNIT_NUMBER_PATTERN.match(value) is not None


def is_postal_code(value: Any) -> bool:
    if not value:
        return True
    normalized = value.strip().upper()
    return bool(
        CANADIAN_POSTAL_PATTERN.match(normalized) or US_ZIP_PATTERN.match(normalized)
    )


# =============================================================================
# Rule Factories
# =============================================================================


def min_length(n: int, message: str | None = None) -> Rule:
    """Rule requiring at least n characters. Vacuous on empty input."""

    def _validate(value: Any) -> bool:
        if not value:
            return True
        return len(value) >= n

    return Rule(
        name=f"minLength_{n}",
        message=message or f"Must be at least {n} characters long",
        validator=_validate,
    )


def max_length(n: int, message: str | None = None) -> Rule:
    """Rule allowing at most n characters. Vacuous on empty input."""

    def _validate(value: Any) -> bool:
        if not value:
            return True
        return len(value) <= n

    return Rule(
        name=f"maxLength_{n}",
        message=message or f"Must not exceed {n} characters",
        validator=_validate,
    )


def pattern(regex: str | re.Pattern[str], message: str, name: str | None = None) -> Rule:
    """Rule requiring a regex search hit. Vacuous on empty input."""
    compiled = regex if isinstance(regex, re.Pattern) else re.compile(regex)

    def _validate(value: Any) -> bool:
        if not value:
            return True
        return compiled.search(value) is not None

    return Rule(
        name=name or f"pattern_{compiled.pattern}",
        message=message,
        validator=_validate,
    )


def custom(validator: RuleValidator, message: str, name: str = "custom") -> Rule:
    """Wrap an arbitrary predicate as a rule."""
    return Rule(name=name, message=message, validator=validator)


# =============================================================================
# Built-ins
# =============================================================================


def register_builtin_rules(registry: RuleRegistry) -> None:
    """Register all built-in rules with the given registry."""
    registry.register(Rule(
        name="required",
        message="This field is required",
        validator=_is_present,
    ))
    registry.register(Rule(
        name="email",
        message="Email must be valid",
        validator=_is_email,
    ))
    registry.register(Rule(
        name="phone",
        message="Phone number must be a valid format (e.g., +1-555-123-4567)",
        validator=_is_phone,
    ))
    registry.register(Rule(
        name="strongPassword",
        message=(
            "Password must contain at least 8 characters, including uppercase, "
            "lowercase, number, and special character"
        ),
        validator=_is_strong_password,
    ))
    registry.register(Rule(
        name="streetNumber",
        message="Street number contains invalid characters",
        validator=_is_street_number,
    ))
    registry.register(Rule(
        name="unitNumber",
        message="Unit number contains invalid characters",
        validator=_is_unit_number,
    ))
    registry.register(Rule(
        name="postalCode",
        message="Postal code format is invalid (e.g., M5H 2N2 or 12345)",
        validator=is_postal_code,
    ))
