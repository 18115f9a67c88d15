"""Shared helpers for parameter parsing and money rounding."""

import re
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal

from app.core.config import get_settings
from app.core.exceptions import BadInputError

CENTS = Decimal("0.01")

# Key format of every customer, product and order id, enforced by the store too
IDENTIFIER_REGEX = r"[A-Za-z0-9][A-Za-z0-9_-]*"
IDENTIFIER_PATTERN = re.compile(IDENTIFIER_REGEX)


def round_money(value: Decimal | float | int | None) -> Decimal:
    """Round a monetary amount half-up to two decimal places.

    ``None`` (an empty SQL ``SUM``) counts as zero.
    """
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def validate_identifier(value: str | None, field: str) -> str:
    """Check that an entity identifier is present and well formed.

    Args:
        value: Raw identifier from the caller.
        field: Parameter name, used in the error message.

    Returns:
        The identifier, stripped of surrounding whitespace.

    Raises:
        BadInputError: If the identifier is missing, blank or malformed.
    """
    if value is None or not value.strip():
        raise BadInputError(f"{field} is required", details={"field": field})

    value = value.strip()
    max_length = get_settings().identifier_max_length
    if len(value) > max_length or not IDENTIFIER_PATTERN.fullmatch(value):
        raise BadInputError(
            f"Invalid {field} format",
            details={"field": field, "max_length": max_length},
        )
    return value


def parse_timestamp(value: str | datetime | date | None, field: str) -> datetime:
    """Parse a caller-supplied point in time.

    Accepts ISO-8601 strings (``2024-01-05``, ``2024-01-05T10:00:00Z``,
    ``2024-01-05T10:00:00.000+02:00``) as well as ``date`` and ``datetime``
    values. Dates mean midnight UTC; naive timestamps are taken as UTC.

    Args:
        value: Raw value.
        field: Parameter name, used in the error message.

    Returns:
        Timezone-aware datetime.

    Raises:
        BadInputError: If the value is missing or cannot be parsed.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise BadInputError(f"{field} is required", details={"field": field})

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise BadInputError(
                f"Invalid {field} format. Use ISO 8601 (YYYY-MM-DDTHH:mm:ss.sssZ)",
                details={"field": field},
            ) from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
