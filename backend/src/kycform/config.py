"""Runtime settings for the KYC form engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Country documents shipped with the package
BUNDLED_CONFIG_PATH = Path(__file__).parent / "configurations"


def _optional_float(value: str | None) -> float | None:
    if value is None or value.strip() == "":
        return None
    return float(value)


@dataclass
class FormSettings:
    """Form engine configuration.

    Attributes:
        config_path: Directory holding one <code>.yaml document per country
        default_country: Country selected when a form is first shown
        profile_url: Endpoint for the Netherlands profile pre-fill; when unset
            a fixed local profile is used instead
        prefill_delay: Simulated latency (seconds) of the local profile
        http_timeout: Timeout (seconds) for remote pre-fill; None waits forever
        log_level: Logging level used by the CLI
    """

    config_path: Path = field(default_factory=lambda: BUNDLED_CONFIG_PATH)
    default_country: str = "NL"
    profile_url: str | None = None
    prefill_delay: float = 1.0
    http_timeout: float | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> FormSettings:
        """Create settings from KYCFORM_* environment variables.

        Unset variables keep their defaults.
        """
        config_path = os.environ.get("KYCFORM_CONFIG_PATH")
        return cls(
            config_path=Path(config_path) if config_path else BUNDLED_CONFIG_PATH,
            default_country=os.environ.get("KYCFORM_DEFAULT_COUNTRY", "NL").upper(),
            profile_url=os.environ.get("KYCFORM_PROFILE_URL") or None,
            prefill_delay=float(os.environ.get("KYCFORM_PREFILL_DELAY", "1.0")),
            http_timeout=_optional_float(os.environ.get("KYCFORM_HTTP_TIMEOUT")),
            log_level=os.environ.get("KYCFORM_LOG_LEVEL", "WARNING").upper(),
        )
