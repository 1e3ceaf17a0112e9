"""Render a deduction breakdown as text or JSON-ready data."""

from decimal import Decimal
from typing import Any

from ke_payroll.calculators.deductions import BandAllocation, DeductionResult, to_cents

CURRENCY = "KSh"

_REPORT_LINES: tuple[tuple[str, str], ...] = (
    ("Gross salary", "gross_salary"),
    ("NSSF (pension)", "pension_contribution"),
    ("Housing levy", "housing_levy"),
    ("SHIF (health)", "health_levy"),
    ("Taxable income", "taxable_income"),
    ("Tax before relief", "gross_tax"),
    ("Personal relief", "personal_relief"),
    ("PAYE", "income_tax"),
    ("Total deductions", "total_deductions"),
    ("Net pay", "net_pay"),
)


def format_money(value: Decimal | float) -> str:
    """Two decimal places with thousands separators: 46795 -> '46,795.00'."""
    return f"{to_cents(Decimal(str(value))):,.2f}"


def format_rate(rate: Decimal) -> str:
    """Fraction as a percentage without trailing zeros: 0.325 -> '32.5%'."""
    return f"{(rate * 100).normalize():f}%"


def describe_bands(breakdown: tuple[BandAllocation, ...]) -> str:
    """e.g. '10% on 24,000.00 + 25% on 8,333.00 + 30% on 14,462.00'."""
    return " + ".join(
        f"{format_rate(band.rate)} on {format_money(band.amount_taxed)}"
        for band in breakdown
        if band.amount_taxed > 0
    )


def describe_paye(result: DeductionResult) -> str:
    """PAYE basis line: '(KSh 46,795.00 Taxable - KSh 2,400.00 Relief)'."""
    return (
        f"({CURRENCY} {format_money(result.taxable_income)} Taxable - "
        f"{CURRENCY} {format_money(result.personal_relief)} Relief)"
    )


def result_to_dict(result: DeductionResult) -> dict[str, Any]:
    """JSON-ready breakdown with every money value rounded to cents."""
    rounded = result.rounded()
    data: dict[str, Any] = {
        field: float(getattr(rounded, field)) for _, field in _REPORT_LINES
    }
    data["effective_tax_rate"] = float(round(result.effective_tax_rate, 2))
    data["band_breakdown"] = [
        {
            "rate": float(band.rate),
            "amount_taxed": float(band.amount_taxed),
            "tax": float(band.tax),
        }
        for band in rounded.band_breakdown
    ]
    data["band_description"] = describe_bands(result.band_breakdown)
    data["paye_description"] = describe_paye(result)
    return data


def render_text(result: DeductionResult) -> str:
    """Payslip-style plain text report."""
    width = max(len(label) for label, _ in _REPORT_LINES) + 2
    lines = [
        f"{label:<{width}}{CURRENCY} {format_money(getattr(result, field)):>14}"
        for label, field in _REPORT_LINES
    ]

    bands = describe_bands(result.band_breakdown)
    if bands:
        lines.append("")
        lines.append(f"PAYE bands: {bands}")
    lines.append(f"PAYE basis: {describe_paye(result)}")
    lines.append(f"Effective tax rate: {round(result.effective_tax_rate, 2)}%")
    return "\n".join(lines)
