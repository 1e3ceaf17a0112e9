"""Tests for gross salary input validation."""

from decimal import Decimal

import pytest

from ke_payroll.calculators.validation import (
    INVALID_SALARY_MESSAGE,
    MAX_GROSS_SALARY,
    InvalidInputError,
    parse_gross_salary,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("50000", Decimal("50000")),
        ("50,000", Decimal("50000")),
        ("  1234.50 ", Decimal("1234.50")),
        (50000, Decimal("50000")),
        (0.1, Decimal("0.1")),
        (Decimal("18000.01"), Decimal("18000.01")),
    ],
)
def test_valid_salaries(raw: object, expected: Decimal) -> None:
    assert parse_gross_salary(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "abc", "12abc", "0", "-5", 0, -1, -0.5, "nan", "inf", float("nan"), True, []],
)
def test_invalid_salaries(raw: object) -> None:
    with pytest.raises(InvalidInputError):
        parse_gross_salary(raw)


def test_error_message() -> None:
    with pytest.raises(InvalidInputError) as exc_info:
        parse_gross_salary("zero")
    assert str(exc_info.value) == INVALID_SALARY_MESSAGE
    assert exc_info.value.message == "Please enter a valid monthly gross salary."


def test_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_gross_salary(-100)


def test_maximum_salary_accepted() -> None:
    assert parse_gross_salary("1,000,000,000,000") == MAX_GROSS_SALARY


@pytest.mark.parametrize("raw", ["1e30", 1e27, "100000000000000000000000000000", "1000000000000.01"])
def test_salary_above_maximum_rejected(raw: object) -> None:
    """Amounts too large to round to cents are rejected, not crashed on."""
    with pytest.raises(InvalidInputError):
        parse_gross_salary(raw)
