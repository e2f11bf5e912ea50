"""Load field configurations from YAML files.

Documents are checked against schemas/fields.schema.json before they are
resolved into FieldConfig objects. Rule names are resolved against a
RuleRegistry at load time, so a misspelled rule fails here rather than when
a user types into the field.

Example document:

    fields:
      - name: nickname
        type: text
        required: true
        transform: strip
        rules:
          - required
          - {minLength: 2}
          - {maxLength: 30}
          - {pattern: "^[a-z]+$", message: "Lowercase letters only"}
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as SchemaError

from smartfield.rules import RuleRegistry, max_length, min_length, pattern
from smartfield.types import FieldConfig, FieldType, Rule, RuleNotFoundError, ValueTransform

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "fields.schema.json"


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


TRANSFORMS: dict[str, ValueTransform] = {
    "strip": _strip,
    "lower": _lower,
    "upper": _upper,
}


@dataclass
class ConfigIssue:
    """A single problem found in a field configuration file."""

    file: Path
    message: str
    path: str = ""  # location within the document, e.g. "fields[0]/rules[2]"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[ERROR] {self.file}{loc}: {self.message}"


class FieldConfigError(ValueError):
    """Raised when a field configuration file cannot be loaded."""

    def __init__(self, issues: list[ConfigIssue]):
        self.issues = issues
        super().__init__("; ".join(str(issue) for issue in issues))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(error: SchemaError) -> str:
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _read_yaml(path: Path) -> tuple[Any, list[ConfigIssue]]:
    try:
        with path.open() as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        return None, [ConfigIssue(file=path, message=f"Cannot read file: {exc}")]
    except yaml.YAMLError as exc:
        return None, [ConfigIssue(file=path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return None, [
            ConfigIssue(file=path, message="File is empty or contains only whitespace")
        ]
    return raw, []


def _resolve_rule(
    entry: str | dict[str, Any],
    rules: RuleRegistry,
) -> Rule:
    if isinstance(entry, str):
        return rules.get(entry)
    message = entry.get("message")
    if "minLength" in entry:
        return min_length(entry["minLength"], message)
    if "maxLength" in entry:
        return max_length(entry["maxLength"], message)
    return pattern(entry["pattern"], entry["message"], name=entry.get("name"))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def check_field_config_file(path: Path) -> list[ConfigIssue]:
    """Check a YAML file against the field configuration schema.

    Returns:
        A list of ConfigIssue objects (empty on success)
    """
    raw, issues = _read_yaml(path)
    if issues:
        return issues

    validator = Draft202012Validator(_load_schema())
    for error in sorted(validator.iter_errors(raw), key=_json_path):
        issues.append(
            ConfigIssue(file=path, message=error.message, path=_json_path(error))
        )
    return issues


def parse_field_configs(
    data: dict[str, Any],
    rules: RuleRegistry,
    *,
    source: Path | None = None,
) -> list[FieldConfig]:
    """Resolve an already-validated document into FieldConfig objects.

    Raises:
        FieldConfigError: If a rule name is unknown or a pattern is invalid
    """
    source = source or Path("<memory>")
    configs: list[FieldConfig] = []
    issues: list[ConfigIssue] = []

    for i, field_data in enumerate(data.get("fields", [])):
        resolved_rules: list[Rule] = []
        for j, entry in enumerate(field_data.get("rules", [])):
            try:
                resolved_rules.append(_resolve_rule(entry, rules))
            except RuleNotFoundError as exc:
                issues.append(ConfigIssue(
                    file=source, message=str(exc), path=f"fields[{i}]/rules[{j}]"
                ))
            except re.error as exc:
                issues.append(ConfigIssue(
                    file=source,
                    message=f"Invalid pattern: {exc}",
                    path=f"fields[{i}]/rules[{j}]",
                ))

        transform_name = field_data.get("transform")
        configs.append(FieldConfig(
            field_name=field_data["name"],
            field_type=FieldType(field_data.get("type", "text")),
            required=field_data.get("required", False),
            rules=resolved_rules,
            transform=TRANSFORMS[transform_name] if transform_name else None,
        ))

    if issues:
        raise FieldConfigError(issues)
    return configs


def load_field_configs(path: Path, rules: RuleRegistry) -> list[FieldConfig]:
    """Load and resolve field configurations from a YAML file.

    Args:
        path: YAML file to load
        rules: Registry used to resolve rules referenced by name

    Returns:
        FieldConfig objects in document order

    Raises:
        FieldConfigError: If the file is unreadable, violates the schema, or
            references unknown rules
    """
    path = Path(path)
    issues = check_field_config_file(path)
    if issues:
        raise FieldConfigError(issues)

    raw, _ = _read_yaml(path)
    configs = parse_field_configs(raw, rules, source=path)
    logger.info("Loaded %d field config(s) from %s", len(configs), path)
    return configs
