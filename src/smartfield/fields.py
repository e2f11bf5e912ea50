"""Field configuration registry.

Maps a field name to its FieldConfig. Unlike rules, an unknown field name is
not an error: it means "no validation configured" and the evaluator treats
the value as valid.
"""

import logging

from smartfield.rules import RuleRegistry, max_length, min_length
from smartfield.types import FieldConfig, FieldType

logger = logging.getLogger(__name__)


class FieldConfigRegistry:
    """Registry of field configurations, keyed by field name."""

    def __init__(self) -> None:
        self._configs: dict[str, FieldConfig] = {}

    def register(self, config: FieldConfig) -> None:
        """Insert or replace a field configuration by field name."""
        if config.field_name in self._configs:
            logger.debug("Replacing field config '%s'", config.field_name)
        self._configs[config.field_name] = config

    def get(self, field_name: str) -> FieldConfig | None:
        """Get the configuration for field_name, or None if not configured."""
        return self._configs.get(field_name)

    def is_registered(self, field_name: str) -> bool:
        return field_name in self._configs

    def list_registered(self) -> list[str]:
        return sorted(self._configs.keys())

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._configs.clear()

    def __len__(self) -> int:
        return len(self._configs)


def register_builtin_field_configs(
    fields: FieldConfigRegistry,
    rules: RuleRegistry,
) -> None:
    """Register the built-in identity, contact and address field configs.

    The rule registry must already hold the built-in rules.
    """
    required = rules.get("required")

    fields.register(FieldConfig(
        field_name="email",
        field_type=FieldType.EMAIL,
        required=True,
        rules=(required, rules.get("email"), max_length(100)),
    ))
    fields.register(FieldConfig(
        field_name="password",
        field_type=FieldType.PASSWORD,
        required=True,
        rules=(required, min_length(8), max_length(128), rules.get("strongPassword")),
    ))
    for name in ("firstName", "lastName"):
        fields.register(FieldConfig(
            field_name=name,
            field_type=FieldType.NAME,
            required=True,
            rules=(required, max_length(100)),
        ))
    fields.register(FieldConfig(
        field_name="phone",
        field_type=FieldType.PHONE,
        required=False,
        rules=(rules.get("phone"), max_length(30)),
    ))
    fields.register(FieldConfig(
        field_name="streetNumber",
        field_type=FieldType.TEXT,
        required=False,
        rules=(rules.get("streetNumber"), max_length(20)),
    ))
    fields.register(FieldConfig(
        field_name="streetName",
        field_type=FieldType.TEXT,
        required=True,
        rules=(required, max_length(200)),
    ))
    for name in ("city", "stateOrProvince", "country"):
        fields.register(FieldConfig(
            field_name=name,
            field_type=FieldType.TEXT,
            required=True,
            rules=(required, max_length(100)),
        ))
    fields.register(FieldConfig(
        field_name="postalOrZipCode",
        field_type=FieldType.POSTAL_CODE,
        required=False,
        rules=(max_length(20),),
    ))
    fields.register(FieldConfig(
        field_name="unitNumber",
        field_type=FieldType.TEXT,
        required=False,
        rules=(max_length(20),),
    ))


class FieldConfigBuilder:
    """Convenience builders for common field configurations.

    Each builder returns the registered configuration when one exists and
    otherwise composes a minimal one.

    Example:
        config = service.create_field_config.email(required=True)
        result = service.validate_field("email", value, config)
    """

    def __init__(self, fields: FieldConfigRegistry, rules: RuleRegistry):
        self._fields = fields
        self._rules = rules

    def email(self, required: bool = True) -> FieldConfig:
        return self._fields.get("email") or FieldConfig(
            field_name="email", field_type=FieldType.EMAIL, required=required
        )

    def password(self, required: bool = True) -> FieldConfig:
        return self._fields.get("password") or FieldConfig(
            field_name="password", field_type=FieldType.PASSWORD, required=required
        )

    def name(self, field_name: str, required: bool = True) -> FieldConfig:
        rules = [self._rules.get("required")] if required else []
        rules.append(max_length(100))
        return FieldConfig(
            field_name=field_name,
            field_type=FieldType.NAME,
            required=required,
            rules=rules,
        )

    def phone(self) -> FieldConfig:
        return self._fields.get("phone") or FieldConfig(
            field_name="phone", field_type=FieldType.PHONE, required=False
        )

    def address(self, field_name: str, required: bool = True) -> FieldConfig:
        registered = self._fields.get(field_name)
        if registered is not None:
            return registered
        return FieldConfig(
            field_name=field_name,
            field_type=FieldType.ADDRESS,
            required=required,
            rules=[self._rules.get("required")] if required else [],
        )
