"""Field rules shared by the store and the TUI book form."""

from __future__ import annotations

from datetime import date

from libro.errors import ValidationError

MIN_YEAR = 1000
YEAR_SLACK = 10


def max_year() -> int:
    return date.today().year + YEAR_SLACK


def validate_non_empty(value: str, field_name: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} cannot be empty")


def validate_rating(rating: int) -> None:
    if not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")


def validate_pages(pages: int) -> None:
    if pages < 0:
        raise ValidationError("Pages must be a non-negative number")


def validate_year(year: int) -> None:
    if not MIN_YEAR <= year <= max_year():
        raise ValidationError(f"Year must be between {MIN_YEAR} and {max_year()}")


def parse_optional_int(raw: str) -> int | None:
    """Parse an optional non-negative integer field.

    Empty (after trimming) means unset. Anything that is not a plain run of
    digits raises ValueError.
    """
    text = raw.strip()
    if not text:
        return None
    if not text.isdigit():
        raise ValueError(f"not a non-negative integer: {raw!r}")
    return int(text)
