"""Country configuration loading and schema checks."""

from kycform.configuration.loader import (
    ConfigurationDecodingError,
    ConfigurationError,
    ConfigurationFileNotFound,
    ConfigurationLoader,
    InvalidCountryCodeInFile,
    YamlConfigurationLoader,
)
from kycform.configuration.validator import (
    ConfigurationIssue,
    validate_configuration_dir,
    validate_configuration_file,
    validate_document,
)

__all__ = [
    "ConfigurationDecodingError",
    "ConfigurationError",
    "ConfigurationFileNotFound",
    "ConfigurationIssue",
    "ConfigurationLoader",
    "InvalidCountryCodeInFile",
    "YamlConfigurationLoader",
    "validate_configuration_dir",
    "validate_configuration_file",
    "validate_document",
]
