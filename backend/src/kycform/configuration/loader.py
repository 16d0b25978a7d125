"""Load country form configurations from YAML documents.

One document per country, named after the lower-cased country code
(e.g. ``nl.yaml``)::

    country: NL
    fields:
      - id: bsn
        label: BSN
        type: text
        required: true
        validation:
          - type: regex
            value: "^\\d{9}$"
            message: BSN must be 9 digits
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import yaml

from kycform.config import BUNDLED_CONFIG_PATH
from kycform.configuration.validator import validate_document
from kycform.core.types import (
    DATE,
    TEXT,
    CountryCode,
    CountryConfiguration,
    FieldDefinition,
    FieldType,
    number,
)
from kycform.validation import (
    NotFutureDateRule,
    NotNilDateRule,
    RequiredRule,
    RuleDefinition,
    RuleRegistry,
    register_builtin_rules,
)

logger = logging.getLogger(__name__)

# Configuration `type` strings; anything else falls back to TEXT
_FIELD_TYPES: dict[str, FieldType] = {
    "text": TEXT,
    "date": DATE,
    "number": number(0),
}


# =============================================================================
# Errors
# =============================================================================


class ConfigurationError(Exception):
    """Base class for configuration loading failures."""


class ConfigurationFileNotFound(ConfigurationError):
    """No document exists for the requested country code."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"Configuration file '{file_name}' not found")


class ConfigurationDecodingError(ConfigurationError):
    """The document is malformed or does not map onto the form model."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to decode configuration file: {cause}")


class InvalidCountryCodeInFile(ConfigurationError):
    """The document declares a country that is not supported."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Configuration declares unsupported country code '{code}'")


# =============================================================================
# Loader protocol
# =============================================================================


class ConfigurationLoader(Protocol):
    """Resolves a country code to its form configuration."""

    async def load(self, country_code: str) -> CountryConfiguration:
        """Load the configuration for a country.

        Raises:
            ConfigurationError: If the configuration cannot be loaded
        """
        ...


# =============================================================================
# Transport records (1:1 with the document format)
# =============================================================================


@dataclass
class FieldDocument:
    id: str
    label: str
    type: str
    required: bool = False
    placeholder: str | None = None
    help_text: str | None = None
    validation: list[RuleDefinition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldDocument":
        return cls(
            id=data["id"],
            label=data["label"],
            type=data["type"],
            required=data.get("required", False),
            placeholder=data.get("placeholder"),
            help_text=data.get("helpText"),
            validation=[RuleDefinition.from_dict(r) for r in data.get("validation") or []],
        )


@dataclass
class ConfigurationDocument:
    country: str
    fields: list[FieldDocument] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConfigurationDocument":
        return cls(
            country=data["country"],
            fields=[FieldDocument.from_dict(f) for f in data.get("fields") or []],
        )


# =============================================================================
# YAML loader
# =============================================================================


class YamlConfigurationLoader:
    """Loads country configurations from a directory of YAML documents."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or BUNDLED_CONFIG_PATH
        register_builtin_rules()

    async def load(self, country_code: str) -> CountryConfiguration:
        """Load and map the document for `country_code`.

        Raises:
            ConfigurationFileNotFound: No <code>.yaml in the configuration directory
            ConfigurationDecodingError: Malformed document or failed mapping
            InvalidCountryCodeInFile: The document's country is not supported
        """
        file_name = f"{country_code.lower()}.yaml"
        yaml_file = self.config_path / file_name

        # Codes are bare identifiers; anything else cannot name a document
        if not country_code.isalnum() or not yaml_file.is_file():
            raise ConfigurationFileNotFound(file_name)

        # File I/O and YAML parsing run in a worker thread, off the event loop
        data = await asyncio.to_thread(self._read_document, yaml_file)
        document = self._parse_document(data)
        return self._resolve_configuration(document)

    def _read_document(self, yaml_file: Path) -> Any:
        try:
            with open(yaml_file) as f:
                return yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationDecodingError(e) from e

    def _parse_document(self, data: Any) -> ConfigurationDocument:
        """Check the raw document against the schema and build transport records."""
        issues = validate_document(data)
        if issues:
            raise ConfigurationDecodingError(ValueError(str(issues[0])))
        try:
            return ConfigurationDocument.from_dict(data)
        except (KeyError, TypeError) as e:
            raise ConfigurationDecodingError(e) from e

    def _resolve_configuration(self, document: ConfigurationDocument) -> CountryConfiguration:
        """Map transport records onto the domain model."""
        try:
            country_code = CountryCode.parse(document.country)
        except ValueError:
            raise InvalidCountryCodeInFile(document.country) from None

        try:
            fields = tuple(self._resolve_field(f) for f in document.fields)
        except ValueError as e:
            # e.g. an invalid regex pattern
            raise ConfigurationDecodingError(e) from e

        logger.debug("Loaded %s configuration with %d fields", country_code.code, len(fields))
        return CountryConfiguration(country_code=country_code, fields=fields)

    def _resolve_field(self, data: FieldDocument) -> FieldDefinition:
        """Convert a field record to a FieldDefinition."""
        field_type = _FIELD_TYPES.get(data.type)
        if field_type is None:
            logger.debug("Field '%s' has unknown type '%s', using text", data.id, data.type)
            field_type = TEXT

        rules = [RuleRegistry.create(r) for r in data.validation]
        if data.required:
            rules.insert(0, RequiredRule())

        # Date fields always check presence and reject future dates, even when
        # the document declares equivalent rules.
        if field_type == DATE:
            rules.append(NotNilDateRule())
            rules.append(NotFutureDateRule())

        return FieldDefinition(
            id=data.id,
            label=data.label,
            type=field_type,
            required=data.required,
            read_only=False,
            rules=rules,
            placeholder=data.placeholder,
            help_text=data.help_text,
        )
