"""Domain models used across the project."""

from .alert import RawAlert, ExtractedHazard, DedupeKey  # noqa: F401
from .storm import (  # noqa: F401
    HAIL,
    WIND,
    CATEGORIES,
    DamageEstimate,
    QualifyingStorm,
    RegionDigest,
    Recipient,
    DeliveryResult,
)

__all__ = [
    "RawAlert",
    "ExtractedHazard",
    "DedupeKey",
    "HAIL",
    "WIND",
    "CATEGORIES",
    "DamageEstimate",
    "QualifyingStorm",
    "RegionDigest",
    "Recipient",
    "DeliveryResult",
]
