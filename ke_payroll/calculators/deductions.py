"""Deduction engine — NSSF, housing levy, SHIF and PAYE from monthly gross pay."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

from ke_payroll.calculators.rates import DEFAULT_RATES, PayeBand, StatutoryRates

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    """Round a money value half-up to two decimal places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class BandAllocation(NamedTuple):
    """Taxable income consumed by one PAYE band."""

    rate: Decimal
    amount_taxed: Decimal
    tax: Decimal


class DeductionResult(NamedTuple):
    """Full deduction breakdown for one monthly gross salary.

    Values are kept at full precision; call rounded() for output.
    """

    gross_salary: Decimal
    pension_contribution: Decimal
    housing_levy: Decimal
    health_levy: Decimal
    taxable_income: Decimal
    gross_tax: Decimal
    personal_relief: Decimal
    income_tax: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    band_breakdown: tuple[BandAllocation, ...]

    @property
    def effective_tax_rate(self) -> Decimal:
        """PAYE as a percentage of gross salary."""
        if self.gross_salary <= 0:
            return ZERO
        return self.income_tax / self.gross_salary * 100

    def rounded(self) -> "DeductionResult":
        """Copy with every money value independently rounded to cents."""
        return DeductionResult(
            gross_salary=to_cents(self.gross_salary),
            pension_contribution=to_cents(self.pension_contribution),
            housing_levy=to_cents(self.housing_levy),
            health_levy=to_cents(self.health_levy),
            taxable_income=to_cents(self.taxable_income),
            gross_tax=to_cents(self.gross_tax),
            personal_relief=to_cents(self.personal_relief),
            income_tax=to_cents(self.income_tax),
            total_deductions=to_cents(self.total_deductions),
            net_pay=to_cents(self.net_pay),
            band_breakdown=tuple(
                BandAllocation(band.rate, to_cents(band.amount_taxed), to_cents(band.tax))
                for band in self.band_breakdown
            ),
        )


def calculate_pension_contribution(gross_salary: Decimal, rates: StatutoryRates) -> Decimal:
    """Two-tier NSSF contribution.

    Tier I covers pay up to the first ceiling, Tier II the slice between the
    two ceilings. Pay above the second ceiling attracts no contribution.
    """
    tier1 = min(gross_salary, rates.pension_tier1_ceiling) * rates.pension_rate
    tier2_pay = max(ZERO, min(gross_salary, rates.pension_tier2_ceiling) - rates.pension_tier1_ceiling)
    return tier1 + tier2_pay * rates.pension_rate


def allocate_bands(
    taxable_income: Decimal,
    bands: tuple[PayeBand, ...],
) -> tuple[BandAllocation, ...]:
    """Walk the PAYE bands lowest first, slicing off taxable income.

    Bands are taken in the order given, never sorted: each band is a width
    of income stacked on top of the previous one. Only bands that receive
    income appear in the result.
    """
    breakdown: list[BandAllocation] = []
    remaining = taxable_income

    for band in bands:
        if remaining <= 0:
            break

        amount = remaining if band.width is None else min(remaining, band.width)
        if amount > 0:
            breakdown.append(BandAllocation(band.rate, amount, amount * band.rate))
        remaining -= amount

    return tuple(breakdown)


def compute(gross_salary: Decimal, rates: StatutoryRates = DEFAULT_RATES) -> DeductionResult:
    """Calculate statutory deductions and net pay for one month.

    NSSF, housing levy and SHIF are deducted before PAYE. Personal relief is
    subtracted once from the summed band tax and cannot make PAYE negative.
    Nothing is rounded here.

    Args:
        gross_salary: Monthly gross pay, already validated as > 0.
        rates: Statutory rate table.

    Returns:
        DeductionResult at full precision.
    """
    pension = calculate_pension_contribution(gross_salary, rates)
    housing_levy = gross_salary * rates.housing_levy_rate
    health_levy = gross_salary * rates.health_levy_rate

    taxable_income = max(ZERO, gross_salary - pension - housing_levy - health_levy)
    breakdown = allocate_bands(taxable_income, rates.paye_bands)
    gross_tax = sum((band.tax for band in breakdown), ZERO)
    income_tax = max(ZERO, gross_tax - rates.personal_relief)

    total_deductions = income_tax + pension + housing_levy + health_levy
    net_pay = gross_salary - total_deductions

    logger.debug(
        "Computed deductions for gross %s: PAYE %s, total %s, net %s",
        gross_salary,
        income_tax,
        total_deductions,
        net_pay,
    )

    return DeductionResult(
        gross_salary=gross_salary,
        pension_contribution=pension,
        housing_levy=housing_levy,
        health_levy=health_levy,
        taxable_income=taxable_income,
        gross_tax=gross_tax,
        personal_relief=rates.personal_relief,
        income_tax=income_tax,
        total_deductions=total_deductions,
        net_pay=net_pay,
        band_breakdown=breakdown,
    )
