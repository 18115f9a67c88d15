"""Shared types and helpers used across features."""

from app.shared.schemas import IsoTimestamp, Money, format_timestamp
from app.shared.utils import parse_timestamp, round_money, validate_identifier

__all__ = [
    "IsoTimestamp",
    "Money",
    "format_timestamp",
    "parse_timestamp",
    "round_money",
    "validate_identifier",
]
