"""Shared test fixtures."""

from decimal import Decimal

import pytest

from ke_payroll.calculators.rates import DEFAULT_RATES, PayeBand, StatutoryRates


@pytest.fixture
def default_rates() -> StatutoryRates:
    """Finance Act 2023 monthly rate table."""
    return DEFAULT_RATES


@pytest.fixture
def simple_rates() -> StatutoryRates:
    """Tax-only table: no pension, no levies, no relief, two bands."""
    return StatutoryRates(
        personal_relief=Decimal("0"),
        pension_tier1_ceiling=Decimal("0"),
        pension_tier2_ceiling=Decimal("0"),
        pension_rate=Decimal("0"),
        housing_levy_rate=Decimal("0"),
        health_levy_rate=Decimal("0"),
        paye_bands=(
            PayeBand(Decimal("1000"), Decimal("0.10")),
            PayeBand(None, Decimal("0.20")),
        ),
        name="simple",
    )


RATES_YAML = """\
name: test-regime
personal_relief: 1000
pension:
  tier1_ceiling: 5000
  tier2_ceiling: 10000
  rate: 0.05
housing_levy_rate: 0.01
health_levy_rate: 0.02
paye_bands:
  - {width: 10000, rate: 0.10}
  - {width: null, rate: 0.30}
"""


@pytest.fixture
def rates_file(tmp_path):  # type: ignore[no-untyped-def]
    """A small alternate rate table on disk."""
    path = tmp_path / "rates.yaml"
    path.write_text(RATES_YAML)
    return path
