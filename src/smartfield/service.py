"""Validation service: the field validation evaluator and its registries.

ValidationService owns a RuleRegistry and a FieldConfigRegistry and
evaluates values against field configurations. A process-scoped default
instance is created on first use; tests replace or reset it via
set_default_service() / reset_default_service().

Usage:
    from smartfield.service import validate_field

    result = validate_field("email", "user@example.com")
    if not result.is_valid:
        print(result.errors)
"""

import logging
from typing import Any

from smartfield.fields import (
    FieldConfigBuilder,
    FieldConfigRegistry,
    register_builtin_field_configs,
)
from smartfield.rules import RuleRegistry, register_builtin_rules
from smartfield.settings import SmartFieldSettings
from smartfield.types import FieldConfig, Rule, ValidationResult

logger = logging.getLogger(__name__)


class ValidationService:
    """Evaluates field values against registered or explicit configurations.

    The registries are read-mostly: write to them at startup, then validate
    freely. Each service instance is fully independent of every other.
    """

    def __init__(
        self,
        rules: RuleRegistry | None = None,
        fields: FieldConfigRegistry | None = None,
        *,
        with_builtins: bool = True,
    ):
        self.rules = rules if rules is not None else RuleRegistry()
        self.fields = fields if fields is not None else FieldConfigRegistry()
        if with_builtins:
            register_builtin_rules(self.rules)
            register_builtin_field_configs(self.fields, self.rules)
        self.create_field_config = FieldConfigBuilder(self.fields, self.rules)

    # -------------------------------------------------------------------------
    # Registry API
    # -------------------------------------------------------------------------

    def register_rule(self, rule: Rule) -> None:
        self.rules.register(rule)

    def get_rule(self, name: str) -> Rule:
        """Get a rule by name.

        Raises:
            RuleNotFoundError: If the rule is not registered
        """
        return self.rules.get(name)

    def register_field_config(self, config: FieldConfig) -> None:
        self.fields.register(config)

    def get_field_config(self, field_name: str) -> FieldConfig | None:
        return self.fields.get(field_name)

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def resolve_config(
        self,
        field_name: str,
        config: FieldConfig | None = None,
    ) -> FieldConfig | None:
        """Explicit config wins over the registry; None means "no validation"."""
        if config is not None:
            return config
        return self.fields.get(field_name)

    def validate_field(
        self,
        field_name: str,
        value: Any,
        config: FieldConfig | None = None,
    ) -> ValidationResult:
        """Validate a single field value.

        Rules run in declaration order. A rule that raises contributes one
        "Validation error: ..." message and evaluation continues with the
        next rule; nothing is re-raised.

        Args:
            field_name: Registry lookup key (ignored when config is given)
            value: The value to validate, typically a string
            config: Optional explicit configuration overriding the registry

        Returns:
            A fresh ValidationResult. Valid with no errors when no
            configuration can be resolved.
        """
        resolved = self.resolve_config(field_name, config)
        if resolved is None:
            return ValidationResult.valid()

        transformed = resolved.transform(value) if resolved.transform else value

        errors: list[str] = []
        for rule in resolved.rules:
            try:
                passed = rule.validator(transformed)
            except Exception as e:
                logger.warning(
                    "Rule '%s' raised while validating field '%s': %s",
                    rule.name,
                    resolved.field_name,
                    e,
                )
                errors.append(f"Validation error: {str(e) or 'Unknown error'}")
                continue

            if not passed:
                errors.append(rule.message)

        return ValidationResult.from_errors(errors)


# =============================================================================
# Process-scoped default service
# =============================================================================

_default_service: ValidationService | None = None


def get_default_service() -> ValidationService:
    """Return the process-wide service, creating it on first use.

    When SMARTFIELD_FIELDS_PATH is set, the YAML field configs it points to
    are registered on creation.
    """
    global _default_service
    if _default_service is None:
        service = ValidationService()
        settings = SmartFieldSettings.from_env()
        if settings.fields_path is not None:
            from smartfield.loader import load_field_configs

            for field_config in load_field_configs(settings.fields_path, service.rules):
                service.register_field_config(field_config)
        _default_service = service
    return _default_service


def set_default_service(service: ValidationService) -> None:
    """Replace the process-wide service."""
    global _default_service
    _default_service = service


def reset_default_service() -> None:
    """Discard the process-wide service; the next access builds a fresh one."""
    global _default_service
    _default_service = None


def register_rule(rule: Rule) -> None:
    get_default_service().register_rule(rule)


def get_rule(name: str) -> Rule:
    return get_default_service().get_rule(name)


def register_field_config(config: FieldConfig) -> None:
    get_default_service().register_field_config(config)


def get_field_config(field_name: str) -> FieldConfig | None:
    return get_default_service().get_field_config(field_name)


def validate_field(
    field_name: str,
    value: Any,
    config: FieldConfig | None = None,
) -> ValidationResult:
    return get_default_service().validate_field(field_name, value, config)
