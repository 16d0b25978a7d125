"""Live editing state of a single form field."""

from collections.abc import Callable
from datetime import date
from typing import Any

from kycform.core.types import FieldDefinition, FieldKind, FieldType
from kycform.validation.dates import DISPLAY_FORMAT, INPUT_FORMATS, as_day, format_date, parse_date
from kycform.validation.rules import NOT_A_NUMBER_MESSAGE
from kycform.validation.types import ValidationError, ValidationRule, first_error

# Typed date text is read in the input formats and in the display format,
# so a value shown by the form can be typed back in.
_TYPED_DATE_FORMATS = INPUT_FORMATS + (DISPLAY_FORMAT,)


class FieldState:
    """Per-field state owned by a FormController.

    Holds the raw input text, the structured date captured by a date picker,
    and the current error message (None when valid or not yet validated).

    Attributes:
        id, label, type, read_only: Copied from the field definition
        placeholder, help_text: Copied from the definition, "" when absent
        value: Raw text as typed or displayed
        date_value: Calendar day chosen for DATE fields
        error_message: Message of the first failing rule after validation
    """

    def __init__(self, definition: FieldDefinition, prefilled_value: Any = None):
        self.id: str = definition.id
        self.label: str = definition.label
        self.type: FieldType = definition.type
        self.read_only: bool = definition.read_only
        self.placeholder: str = definition.placeholder or ""
        self.help_text: str = definition.help_text or ""

        self.value: str = ""
        self.date_value: date | None = None
        self.error_message: str | None = None

        self._rules: list[ValidationRule] = list(definition.rules)
        self._listener: Callable[["FieldState"], None] | None = None

        if prefilled_value is not None:
            self._apply_prefill(prefilled_value)

    def __repr__(self) -> str:
        return (
            f"FieldState(id={self.id!r}, value={self.value!r}, "
            f"read_only={self.read_only}, error_message={self.error_message!r})"
        )

    @property
    def rules(self) -> list[ValidationRule]:
        return list(self._rules)

    @property
    def is_valid(self) -> bool:
        """True if the current value passes every rule. Does not touch error_message."""
        return self._current_error() is None

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def set_value(self, text: str) -> None:
        """Update the raw text.

        On DATE fields the text also replaces `date_value`: it becomes the
        parsed day, or None when the text is empty or not a date.

        A visible error is cleared as soon as the new value passes all rules.
        """
        self.value = text
        if self.type.kind == FieldKind.DATE:
            self.date_value = parse_date(text, _TYPED_DATE_FORMATS)
        self._clear_error_if_valid()
        self._notify()

    def set_date(self, day: date | None) -> None:
        """Record the date picked by the editing surface."""
        if day is None:
            self.date_value = None
            self.value = ""
        else:
            self.date_value = as_day(day)
            self.value = format_date(day)
        self._clear_error_if_valid()
        self._notify()

    def validate(self) -> bool:
        """Run rules in order and record the first failure.

        Returns:
            True if the field is valid
        """
        error = self._current_error()
        self.error_message = error.message if error else None
        self._notify()
        return error is None

    def typed_value(self) -> Any:
        """The value in its domain type, as validated and submitted.

        - TEXT / EMAIL / PHONE: the raw string, None if empty
        - NUMBER: parsed float, None if empty or not a number
        - DATE: the structured date
        """
        kind = self.type.kind
        if kind == FieldKind.NUMBER:
            try:
                return float(self.value)
            except ValueError:
                return None
        if kind == FieldKind.DATE:
            return self.date_value
        return self.value or None

    def bind(self, listener: Callable[["FieldState"], None] | None) -> None:
        """Attach the owner notified after every change (None detaches)."""
        self._listener = listener

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _apply_prefill(self, prefilled_value: Any) -> None:
        if isinstance(prefilled_value, date):
            if self.type.kind == FieldKind.DATE:
                self.date_value = as_day(prefilled_value)
            self.value = format_date(prefilled_value)
        elif isinstance(prefilled_value, str):
            parsed = parse_date(prefilled_value) if self.type.kind == FieldKind.DATE else None
            if parsed is not None:
                self.date_value = parsed
                self.value = format_date(parsed)
            else:
                self.value = prefilled_value
        else:
            self.value = str(prefilled_value)

    def _current_error(self) -> ValidationError | None:
        # Text in a NUMBER field that is not a number fails before any rule runs
        if self.type.kind == FieldKind.NUMBER and self.value.strip() and self.typed_value() is None:
            return ValidationError(message=NOT_A_NUMBER_MESSAGE, code="NOT_A_NUMBER")
        return first_error(self._rules, self.typed_value())

    def _clear_error_if_valid(self) -> None:
        if self.error_message is not None and self.is_valid:
            self.error_message = None

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self)
