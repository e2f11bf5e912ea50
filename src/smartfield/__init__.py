"""smartfield: field-level validation with progressive-disclosure state.

This package provides:
- Rules and a rule registry (required, email, phone, strongPassword, ...)
- Field configurations and a field configuration registry
- ValidationService: evaluates a value against a field configuration
- SmartFieldValidator: per-input state machine that validates on every
  change but only displays errors once the field has been touched, with
  autofill detection for bulk-filled content

Usage:
    from smartfield import SmartFieldValidator, VirtualScheduler, presets

    field = SmartFieldValidator(
        "", presets.email(), on_validation_change=print, scheduler=VirtualScheduler()
    )
    field.handle_focus()
    field.handle_blur()
    field.display_errors  # ("Email is required",)
"""

from smartfield import presets
from smartfield.autofill import (
    DEFAULT_CONTENT_PATTERNS,
    AutofillDetector,
    resolve_autofill_config,
)
from smartfield.field_state import FieldHandlers, SmartFieldValidator
from smartfield.fields import (
    FieldConfigBuilder,
    FieldConfigRegistry,
    register_builtin_field_configs,
)
from smartfield.form import FormValidationTracker
from smartfield.loader import (
    ConfigIssue,
    FieldConfigError,
    check_field_config_file,
    load_field_configs,
)
from smartfield.rules import (
    RuleRegistry,
    custom,
    max_length,
    min_length,
    pattern,
    register_builtin_rules,
)
from smartfield.service import (
    ValidationService,
    get_default_service,
    get_field_config,
    get_rule,
    register_field_config,
    register_rule,
    reset_default_service,
    set_default_service,
    validate_field,
)
from smartfield.settings import SmartFieldSettings
from smartfield.timers import AsyncioScheduler, Scheduler, VirtualScheduler
from smartfield.types import (
    AutofillConfig,
    FieldConfig,
    FieldState,
    FieldType,
    Rule,
    RuleNotFoundError,
    SmartFieldConfig,
    ValidationResult,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "AutofillConfig",
    "FieldConfig",
    "FieldState",
    "FieldType",
    "Rule",
    "RuleNotFoundError",
    "SmartFieldConfig",
    "ValidationResult",
    # Rules
    "RuleRegistry",
    "custom",
    "max_length",
    "min_length",
    "pattern",
    "register_builtin_rules",
    # Field configs
    "FieldConfigBuilder",
    "FieldConfigRegistry",
    "register_builtin_field_configs",
    # Service
    "ValidationService",
    "get_default_service",
    "get_field_config",
    "get_rule",
    "register_field_config",
    "register_rule",
    "reset_default_service",
    "set_default_service",
    "validate_field",
    # Autofill
    "DEFAULT_CONTENT_PATTERNS",
    "AutofillDetector",
    "resolve_autofill_config",
    # Field state
    "FieldHandlers",
    "SmartFieldValidator",
    "FormValidationTracker",
    # Scheduling
    "AsyncioScheduler",
    "Scheduler",
    "VirtualScheduler",
    # Loading
    "ConfigIssue",
    "FieldConfigError",
    "check_field_config_file",
    "load_field_configs",
    # Settings
    "SmartFieldSettings",
    "presets",
]
