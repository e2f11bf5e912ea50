"""Form-level aggregation of field validation results.

A form enables its submit control only when every field it tracks reports a
valid result. Fields that have not reported yet count as invalid, so submit
stays disabled until each field has been validated at least once.
"""

from typing import Callable, Iterable

from smartfield.types import ValidationResult


class FormValidationTracker:
    """Collects the latest ValidationResult per field.

    Example:
        form = FormValidationTracker(["email", "password"])
        email = SmartFieldValidator("", email_config, on_validation_change=form.callback_for("email"))
        ...
        if form.is_valid:
            submit()
    """

    def __init__(
        self,
        field_names: Iterable[str] = (),
        on_change: Callable[[bool], None] | None = None,
    ):
        self._results: dict[str, ValidationResult | None] = {
            name: None for name in field_names
        }
        self.on_change = on_change

    def track(self, field_name: str) -> None:
        self._results.setdefault(field_name, None)

    def untrack(self, field_name: str) -> None:
        self._results.pop(field_name, None)

    def callback_for(self, field_name: str) -> Callable[[ValidationResult], None]:
        """Return an on_validation_change callback bound to field_name."""
        self.track(field_name)

        def _record(result: ValidationResult) -> None:
            self.record(field_name, result)

        return _record

    def record(self, field_name: str, result: ValidationResult) -> None:
        was_valid = self.is_valid
        self._results[field_name] = result
        if self.on_change is not None and self.is_valid != was_valid:
            self.on_change(self.is_valid)

    @property
    def is_valid(self) -> bool:
        if not self._results:
            return False
        return all(r is not None and r.is_valid for r in self._results.values())

    def result_for(self, field_name: str) -> ValidationResult | None:
        return self._results.get(field_name)

    @property
    def invalid_fields(self) -> list[str]:
        """Fields whose latest result is invalid or missing, in tracking order."""
        return [
            name
            for name, result in self._results.items()
            if result is None or not result.is_valid
        ]

    @property
    def errors(self) -> dict[str, list[str]]:
        return {
            name: list(result.errors)
            for name, result in self._results.items()
            if result is not None and result.errors
        }
