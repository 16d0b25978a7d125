"""
configuration/validator.py: JSON Schema validation for country configuration documents.

Usage:
    from kycform.configuration.validator import validate_configuration_dir

    issues = validate_configuration_dir(Path("configurations"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "country.schema.json"


@dataclass
class ConfigurationIssue:
    """A single validation finding for a configuration document."""

    file: Path | None
    message: str
    path: str = ""  # location within the document, e.g. "fields[2]/validation[0]"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        where = str(self.file) if self.file else "<document>"
        return f"[ERROR] {where}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def _schema_validator() -> Draft202012Validator:
    with _SCHEMA_PATH.open() as fh:
        schema = json.load(fh)
    return Draft202012Validator(schema)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema error path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_document(doc: Any, file: Path | None = None) -> list[ConfigurationIssue]:
    """Validate an already parsed document against the country schema.

    Returns:
        A list of ConfigurationIssue objects (empty on success).
    """
    validator = _schema_validator()
    return [
        ConfigurationIssue(file=file, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.absolute_path])
    ]


def validate_configuration_file(yaml_path: Path) -> list[ConfigurationIssue]:
    """Parse and validate a single configuration YAML file."""
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [ConfigurationIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            ConfigurationIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    return validate_document(raw, file=yaml_path)


def validate_configuration_dir(config_dir: Path) -> list[ConfigurationIssue]:
    """Validate every *.yaml document in a configuration directory.

    Returns:
        A flat list of issues across all files. Empty list means all files are valid.
    """
    if not config_dir.is_dir():
        return [
            ConfigurationIssue(
                file=config_dir,
                message=f"Configuration directory does not exist: {config_dir}",
            )
        ]

    all_issues: list[ConfigurationIssue] = []
    for yaml_file in sorted(config_dir.glob("*.yaml")):
        file_issues = validate_configuration_file(yaml_file)
        if file_issues:
            logger.debug("%s: %d schema issue(s)", yaml_file.name, len(file_issues))
        all_issues.extend(file_issues)
    return all_issues
