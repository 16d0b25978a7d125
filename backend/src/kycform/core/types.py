"""Core form model: field types, field definitions and country configurations."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Union

from kycform.validation.types import ValidationRule

# Values handed to validation rules: raw text, a parsed number, a calendar
# date (datetime included) or None when the field is empty.
FieldValue = Union[str, int, float, date, None]

# Mapping of field id -> value, used for both pre-fill data and the final
# submission payload.
FormData = dict[str, Any]


class FieldKind(Enum):
    """The input strategy of a field."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    PHONE = "phone"


@dataclass(frozen=True)
class FieldType:
    """Closed set of field types.

    Only NUMBER carries data (the number of decimal places); use the module
    constants and `number()` rather than building instances directly.
    """

    kind: FieldKind
    decimal_places: int = 0

    @property
    def is_text_like(self) -> bool:
        return self.kind in (FieldKind.TEXT, FieldKind.EMAIL, FieldKind.PHONE)

    def __str__(self) -> str:
        if self.kind == FieldKind.NUMBER:
            return f"number({self.decimal_places})"
        return self.kind.value


TEXT = FieldType(FieldKind.TEXT)
DATE = FieldType(FieldKind.DATE)
EMAIL = FieldType(FieldKind.EMAIL)
PHONE = FieldType(FieldKind.PHONE)


def number(decimal_places: int = 0) -> FieldType:
    """Build a NUMBER field type."""
    return FieldType(FieldKind.NUMBER, decimal_places)


class CountryCode(Enum):
    """Supported country codes (ISO 3166-1 alpha-2)."""

    NETHERLANDS = "NL"
    GERMANY = "DE"
    UNITED_STATES = "US"

    @property
    def code(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _COUNTRY_NAMES[self]

    @property
    def flag_emoji(self) -> str:
        # Regional indicator symbols for each letter of the code
        return "".join(chr(0x1F1E6 + ord(c) - ord("A")) for c in self.value)

    @classmethod
    def parse(cls, code: str) -> "CountryCode":
        """Resolve a code case-insensitively.

        Raises:
            ValueError: If the code is not supported
        """
        try:
            return cls(code.strip().upper())
        except ValueError:
            raise ValueError(
                f"Unsupported country code '{code}'. "
                "Supported codes: " + ", ".join(c.value for c in cls)
            ) from None


_COUNTRY_NAMES = {
    CountryCode.NETHERLANDS: "Netherlands",
    CountryCode.GERMANY: "Germany",
    CountryCode.UNITED_STATES: "United States",
}


@dataclass
class FieldDefinition:
    """Static description of one form field.

    Attributes:
        id: Unique key, used as the submission payload key
        label: User-visible caption
        type: Field type, decides how raw input is interpreted
        required: Whether the field must hold a value
        read_only: Whether the user may edit the field; country behaviors
            rewrite this after the configuration is loaded
        rules: Validation rules, evaluated in order
        placeholder: Hint text shown inside the input
        help_text: Supplementary text shown under the input

    Equality ignores `rules`: rules are behavior, not comparable data.
    """

    id: str
    label: str
    type: FieldType = TEXT
    required: bool = False
    read_only: bool = False
    rules: list[ValidationRule] = field(default_factory=list, compare=False)
    placeholder: str | None = None
    help_text: str | None = None


@dataclass(frozen=True)
class CountryConfiguration:
    """The parsed form configuration of one country."""

    country_code: CountryCode
    fields: tuple[FieldDefinition, ...] = ()

    def field_ids(self) -> list[str]:
        return [f.id for f in self.fields]

    def get_field(self, field_id: str) -> FieldDefinition | None:
        for f in self.fields:
            if f.id == field_id:
                return f
        return None
