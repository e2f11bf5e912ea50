"""Per-field interactive state machine.

SmartFieldValidator drives progressive-disclosure validation for one input
instance:

- Validation runs on every value change, independent of touch, and the
  result is reported to on_validation_change immediately so a parent form
  always knows the true validity.
- Errors are only *displayed* once the field has been touched: by focus, or
  by the autofill confirmation timer for bulk-filled content.

State is held in independent flags:
- has_been_touched: monotonic, set by focus or autofill confirmation
- has_focus: toggled by focus / blur
- was_autofilled: monotonic, set by the autofill heuristic at most once

The host forwards events in order: handle_change(new, old) before
set_value(new), so autofill detection is settled before re-validation.
update(new) does both.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from smartfield.autofill import AutofillDetector, resolve_autofill_config
from smartfield.service import ValidationService, get_default_service
from smartfield.settings import SmartFieldSettings
from smartfield.timers import AsyncioScheduler, Scheduler, TimerHandle
from smartfield.types import FieldState, SmartFieldConfig, ValidationResult

logger = logging.getLogger(__name__)

ValidationCallback = Callable[[ValidationResult], None]
StateCallback = Callable[[FieldState], None]

_UNSET: Any = object()


@dataclass(frozen=True)
class FieldHandlers:
    """Event handlers the UI layer wires to native control events."""

    handle_change: Callable[[str, str], None]
    handle_focus: Callable[[], None]
    handle_blur: Callable[[], None]


def _default_scheduler(field_name: str) -> Scheduler:
    try:
        return AsyncioScheduler()
    except RuntimeError:
        raise RuntimeError(
            f"Field '{field_name}' needs a scheduler: pass scheduler= or "
            "create the field from within a running event loop"
        ) from None


class SmartFieldValidator:
    """Validation state for one mounted input.

    Args:
        value: Initial value; validated immediately
        config: Field configuration for this instance
        enable_validation: When False, results are always valid and no
            errors are ever displayed
        on_validation_change: Called with every fresh ValidationResult,
            regardless of touch state
        on_state_change: Called with a FieldState snapshot after every
            observable transition
        service: Validation service (defaults to the process-wide one)
        scheduler: Runs the autofill confirmation timer. Defaults to an
            AsyncioScheduler bound to the running loop; synchronous hosts
            must pass one explicitly.
        settings: Defaults for unset autofill tuning

    Example:
        field = SmartFieldValidator("", config, on_validation_change=form.callback_for("email"))
        field.handle_focus()
        field.update("user@example.com")
        field.handle_blur()
        field.display_errors
        field.dispose()
    """

    def __init__(
        self,
        value: Any,
        config: SmartFieldConfig,
        *,
        enable_validation: bool = True,
        on_validation_change: ValidationCallback | None = None,
        on_state_change: StateCallback | None = None,
        service: ValidationService | None = None,
        scheduler: Scheduler | None = None,
        settings: SmartFieldSettings | None = None,
    ):
        self.config = config
        self.enable_validation = enable_validation
        self.on_validation_change = on_validation_change
        self.on_state_change = on_state_change

        self._service = service or get_default_service()
        self._scheduler = scheduler or _default_scheduler(config.field_name)
        self._detector = AutofillDetector(
            resolve_autofill_config(
                config.field_type,
                config.autofill_config,
                settings or SmartFieldSettings.from_env(),
            )
        )
        self._field_config = config.to_field_config()

        self._value: Any = _UNSET
        self._validation_result = ValidationResult.valid()
        self._has_been_touched = False
        self._was_autofilled = False
        self._has_focus = False
        self._timer: TimerHandle | None = None
        self._disposed = False

        self.set_value(value)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Any:
        return None if self._value is _UNSET else self._value

    @property
    def validation_result(self) -> ValidationResult:
        return self._validation_result

    @property
    def has_been_touched(self) -> bool:
        return self._has_been_touched

    @property
    def was_autofilled(self) -> bool:
        return self._was_autofilled

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    @property
    def display_errors(self) -> tuple[str, ...]:
        """Errors the UI should render: empty until the field is touched."""
        if self.enable_validation and self._has_been_touched:
            return self._validation_result.errors
        return ()

    @property
    def state(self) -> FieldState:
        return FieldState(
            validation_result=self._validation_result,
            has_been_touched=self._has_been_touched,
            was_autofilled=self._was_autofilled,
            has_focus=self._has_focus,
            display_errors=self.display_errors,
        )

    @property
    def handlers(self) -> FieldHandlers:
        return FieldHandlers(
            handle_change=self.handle_change,
            handle_focus=self.handle_focus,
            handle_blur=self.handle_blur,
        )

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def autofill_pending(self) -> bool:
        """True while the autofill confirmation timer is armed."""
        return self._timer is not None

    # -------------------------------------------------------------------------
    # Value changes
    # -------------------------------------------------------------------------

    def set_value(self, value: Any) -> ValidationResult:
        """Observe the externally supplied value.

        Re-validates only when the value differs from the last observed one
        (the first observation always validates).
        """
        self._ensure_active()
        if self._value is not _UNSET and value == self._value:
            return self._validation_result
        self._value = value
        return self.validate_now()

    def validate_now(self) -> ValidationResult:
        """Validate the current value and report the result."""
        self._ensure_active()
        if not self.enable_validation:
            result = ValidationResult.valid()
        else:
            result = self._service.validate_field(
                self.config.field_name,
                self.value,
                self._field_config,
            )

        self._validation_result = result
        if self.on_validation_change is not None:
            self.on_validation_change(result)
        self._notify()
        return result

    def update(self, new_value: Any) -> ValidationResult:
        """Forward a change event and the new value in the required order."""
        old_value = self.value
        self.handle_change(new_value, "" if old_value is None else old_value)
        return self.set_value(new_value)

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def handle_change(self, new_value: str, old_value: str) -> None:
        """Run autofill detection for a change event.

        Only ever flips was_autofilled (and arms the touch confirmation); it
        does not re-validate.
        """
        self._ensure_active()
        if not self._was_autofilled:
            self.detect_autofill(new_value, old_value)

    def handle_focus(self) -> None:
        self._ensure_active()
        self._has_focus = True
        self._has_been_touched = True
        self._notify()

    def handle_blur(self) -> None:
        self._ensure_active()
        self._has_focus = False
        self._notify()

    def detect_autofill(self, new_value: str, old_value: str) -> bool:
        """Apply the autofill heuristic; arm the touch confirmation on a hit."""
        self._ensure_active()
        likely = self._detector.is_likely_autofill(
            new_value,
            old_value,
            has_been_touched=self._has_been_touched,
            has_focus=self._has_focus,
        )
        if not likely:
            return False

        logger.debug(
            "Autofill detected on field '%s'; confirming in %sms",
            self.config.field_name,
            self._detector.touched_delay,
        )
        # State changes only once the timer is armed
        timer = self._scheduler.call_later(
            self._detector.touched_delay, self._confirm_autofill
        )
        self._cancel_timer()
        self._timer = timer
        self._was_autofilled = True
        self._notify()
        return True

    def _confirm_autofill(self) -> None:
        if self._disposed:
            logger.debug(
                "Ignoring autofill confirmation for disposed field '%s'",
                self.config.field_name,
            )
            return
        self._timer = None
        if self._has_been_touched:
            return
        logger.debug("Autofill confirmed on field '%s'", self.config.field_name)
        self._has_been_touched = True
        self._notify()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def dispose(self) -> None:
        """Cancel any pending timer. Safe to call more than once."""
        if self._disposed:
            return
        self._cancel_timer()
        self._disposed = True

    def __enter__(self) -> "SmartFieldValidator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _ensure_active(self) -> None:
        if self._disposed:
            raise RuntimeError(
                f"Field '{self.config.field_name}' has been disposed"
            )

    def _notify(self) -> None:
        if self.on_state_change is not None:
            self.on_state_change(self.state)
