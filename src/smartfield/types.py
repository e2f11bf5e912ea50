"""Core types for the smartfield validation engine.

This module defines the value objects shared by every layer:
- Rule: a named predicate plus the message reported when it fails
- FieldConfig: the rules and metadata for one logical input
- ValidationResult: the outcome of evaluating a FieldConfig
- AutofillConfig / SmartFieldConfig: per-instance settings for the field
  state machine
- FieldState: a snapshot of one field instance, as exposed to the UI layer
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

# Predicate signature: value -> bool. May raise; the evaluator contains it.
RuleValidator = Callable[[Any], bool]
ValueTransform = Callable[[Any], Any]


class FieldType(Enum):
    """Input field types, used to pick validation and autofill strategies."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    PHONE = "phone"
    NUMBER = "number"
    URL = "url"
    DATE = "date"
    ADDRESS = "address"
    NAME = "name"
    POSTAL_CODE = "postalCode"
    CUSTOM = "custom"


class RuleNotFoundError(ValueError):
    """Raised when a rule is requested by a name that was never registered.

    This is a configuration error: it surfaces while composing field
    configurations, never while validating user input.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Validation rule '{name}' not found")


@dataclass(frozen=True)
class Rule:
    """A named predicate and the message reported when it returns False.

    Attributes:
        name: Registry key (re-registering the same name replaces the rule)
        message: Static, human-readable failure message
        validator: Callable taking the (transformed) value and returning bool
    """

    name: str
    message: str
    validator: RuleValidator

    def __call__(self, value: Any) -> bool:
        return self.validator(value)


@dataclass(frozen=True)
class FieldConfig:
    """Validation configuration for one logical input.

    Attributes:
        field_name: Lookup key in the field configuration registry
        field_type: Enumerated field type tag
        required: Metadata flag; emptiness is enforced by the `required` rule
        rules: Rules evaluated in declaration order
        transform: Optional value transformation applied before the rules run
    """

    field_name: str
    field_type: FieldType = FieldType.TEXT
    required: bool = False
    rules: tuple[Rule, ...] = ()
    transform: ValueTransform | None = None

    def __post_init__(self) -> None:
        # Accept any iterable of rules but store an immutable tuple
        if not isinstance(self.rules, tuple):
            object.__setattr__(self, "rules", tuple(self.rules))
        if isinstance(self.field_type, str):
            object.__setattr__(self, "field_type", FieldType(self.field_type))


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one value.

    Attributes:
        is_valid: True when no rule failed
        errors: Failure messages, in rule declaration order
    """

    is_valid: bool = True
    errors: tuple[str, ...] = ()

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(is_valid=True, errors=())

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(is_valid=len(errors) == 0, errors=tuple(errors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class AutofillConfig:
    """Tuning for the autofill heuristic.

    Unset attributes fall back to defaults derived from the field type
    (see smartfield.autofill.resolve_autofill_config).

    Attributes:
        min_change_threshold: Length growth that must be exceeded in one change
        touched_delay: Milliseconds before an autofilled field counts as touched
        content_patterns: Patterns the new value must all match; an empty
            sequence means "always matches"
    """

    min_change_threshold: int | None = None
    touched_delay: int | None = None
    content_patterns: tuple[re.Pattern[str], ...] | None = None

    def __post_init__(self) -> None:
        if self.content_patterns is not None:
            compiled = tuple(
                p if isinstance(p, re.Pattern) else re.compile(p)
                for p in self.content_patterns
            )
            object.__setattr__(self, "content_patterns", compiled)


@dataclass(frozen=True)
class SmartFieldConfig:
    """Configuration for one field instance driven by SmartFieldValidator.

    Attributes:
        field_name: Logical field name (also the registry fallback key)
        field_type: Field type tag; picks default autofill patterns
        required: Whether the field is required
        validation_rules: Explicit rules. When None, the field configuration
            registered under field_name is used instead.
        autofill_config: Optional autofill tuning
    """

    field_name: str
    field_type: FieldType = FieldType.TEXT
    required: bool = False
    validation_rules: tuple[Rule, ...] | None = None
    autofill_config: AutofillConfig | None = None

    def __post_init__(self) -> None:
        if self.validation_rules is not None and not isinstance(
            self.validation_rules, tuple
        ):
            object.__setattr__(self, "validation_rules", tuple(self.validation_rules))
        if isinstance(self.field_type, str):
            object.__setattr__(self, "field_type", FieldType(self.field_type))

    def to_field_config(self) -> FieldConfig | None:
        """Build the explicit FieldConfig, or None to defer to the registry."""
        if self.validation_rules is None:
            return None
        return FieldConfig(
            field_name=self.field_name,
            field_type=self.field_type,
            required=self.required,
            rules=self.validation_rules,
        )


@dataclass(frozen=True)
class FieldState:
    """Snapshot of a field instance as seen by the UI layer.

    Only display_errors is meant for rendering; validation_result is for
    form-level gating.
    """

    validation_result: ValidationResult = field(default_factory=ValidationResult.valid)
    has_been_touched: bool = False
    was_autofilled: bool = False
    has_focus: bool = False
    display_errors: tuple[str, ...] = ()
