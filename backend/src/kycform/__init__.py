"""KYC form engine: configuration-driven, per-country KYC forms."""

__version__ = "0.1.0"
