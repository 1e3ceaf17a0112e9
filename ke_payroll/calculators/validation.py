"""Gross salary input validation."""

from decimal import Decimal, InvalidOperation

INVALID_SALARY_MESSAGE = "Please enter a valid monthly gross salary."

# Keeps every derived value within Decimal's default 28-digit context when
# quantized to cents.
MAX_GROSS_SALARY = Decimal("1000000000000")


class InvalidInputError(ValueError):
    """The supplied gross salary is missing, non-numeric, out of range or not positive."""

    def __init__(self, message: str = INVALID_SALARY_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


def parse_gross_salary(value: object) -> Decimal:
    """Parse a gross salary from form, CLI or JSON input.

    Strings may carry surrounding whitespace and thousands separators
    ("50,000"). Floats are converted through str() so 0.1 stays 0.1.

    Raises:
        InvalidInputError: Unless the value is a finite number > 0 and no
            greater than MAX_GROSS_SALARY.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError()

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            raise InvalidInputError()
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise InvalidInputError() from None
    else:
        raise InvalidInputError()

    if not amount.is_finite() or amount <= 0 or amount > MAX_GROSS_SALARY:
        raise InvalidInputError()
    return amount
