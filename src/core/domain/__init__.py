"""
Domain models and value objects.

Contains the primality classification result and its enums.
"""

from src.core.domain.verdict import (
    VERDICT_SCHEMA_VERSION,
    Primality,
    PrimalityVerdict,
    VerdictReason,
)

__all__ = [
    "VERDICT_SCHEMA_VERSION",
    "Primality",
    "PrimalityVerdict",
    "VerdictReason",
]
