"""Kenya statutory rates — NSSF tiers, levies, PAYE bands, personal relief.

Monthly figures under the Finance Act 2023. The default table is a plain
Python constant; an alternate table can be loaded from YAML so that a change
in the law never touches the deduction engine.
"""

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, NamedTuple

import yaml

from config import load_yaml_config, load_yaml_file

logger = logging.getLogger(__name__)

DEFAULT_RATES_FILE = "statutory_rates.yaml"


class InvalidRatesError(ValueError):
    """A rate table is missing a field or holds an impossible value."""


class PayeBand(NamedTuple):
    """A single PAYE band, defined by its width rather than its bounds."""

    width: Decimal | None  # None = unbounded, last band only
    rate: Decimal


class StatutoryRates(NamedTuple):
    """All statutory parameters for one monthly payroll regime."""

    personal_relief: Decimal
    pension_tier1_ceiling: Decimal
    pension_tier2_ceiling: Decimal
    pension_rate: Decimal
    housing_levy_rate: Decimal
    health_levy_rate: Decimal
    paye_bands: tuple[PayeBand, ...]
    name: str = "custom"

    @property
    def max_pension_contribution(self) -> Decimal:
        """Pension contribution once gross reaches the tier 2 ceiling."""
        return (
            self.pension_tier1_ceiling * self.pension_rate
            + (self.pension_tier2_ceiling - self.pension_tier1_ceiling) * self.pension_rate
        )


DEFAULT_RATES = StatutoryRates(
    personal_relief=Decimal("2400"),
    pension_tier1_ceiling=Decimal("6000"),  # NSSF lower earnings limit
    pension_tier2_ceiling=Decimal("18000"),  # NSSF upper earnings limit
    pension_rate=Decimal("0.06"),
    housing_levy_rate=Decimal("0.015"),
    health_levy_rate=Decimal("0.0275"),
    paye_bands=(
        PayeBand(Decimal("24000"), Decimal("0.10")),
        PayeBand(Decimal("8333"), Decimal("0.25")),
        PayeBand(Decimal("467667"), Decimal("0.30")),
        PayeBand(Decimal("300000"), Decimal("0.325")),
        PayeBand(None, Decimal("0.35")),
    ),
    name="finance-act-2023",
)


def validate_rates(rates: StatutoryRates) -> StatutoryRates:
    """Check a rate table for impossible values.

    Returns:
        The same table, so calls can be chained.

    Raises:
        InvalidRatesError: On any out-of-range rate, negative threshold,
            inverted pension tiers, or misplaced unbounded band.
    """
    for field in ("pension_rate", "housing_levy_rate", "health_levy_rate"):
        value = getattr(rates, field)
        if not 0 <= value <= 1:
            raise InvalidRatesError(f"{field} must be between 0 and 1, got {value}")

    for field in ("personal_relief", "pension_tier1_ceiling", "pension_tier2_ceiling"):
        if getattr(rates, field) < 0:
            raise InvalidRatesError(f"{field} must be non-negative")

    if rates.pension_tier2_ceiling < rates.pension_tier1_ceiling:
        raise InvalidRatesError("pension_tier2_ceiling must not be below pension_tier1_ceiling")

    last = len(rates.paye_bands) - 1
    for index, band in enumerate(rates.paye_bands):
        if not 0 <= band.rate <= 1:
            raise InvalidRatesError(f"PAYE band {index + 1} rate must be between 0 and 1")
        if band.width is None:
            if index != last:
                raise InvalidRatesError("Only the last PAYE band may be unbounded")
        elif band.width <= 0:
            raise InvalidRatesError(f"PAYE band {index + 1} width must be positive")
        elif index == last:
            raise InvalidRatesError("The last PAYE band must be unbounded")

    return rates


def _decimal(value: Any, field: str) -> Decimal:
    """Convert a YAML scalar to Decimal via str(), so 0.0275 stays exact."""
    if value is None or isinstance(value, bool):
        raise InvalidRatesError(f"{field} must be a number")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise InvalidRatesError(f"{field} must be a number, got {value!r}") from None
    if not result.is_finite():
        raise InvalidRatesError(f"{field} must be finite")
    return result


def rates_from_mapping(data: dict[str, Any]) -> StatutoryRates:
    """Build a validated rate table from the YAML/dict shape.

    Expected keys: name, personal_relief, pension.{tier1_ceiling,
    tier2_ceiling, rate}, housing_levy_rate, health_levy_rate and
    paye_bands (a list of {width, rate}; width null = unbounded).
    """
    try:
        pension = data["pension"]
        bands = tuple(
            PayeBand(
                width=None if band.get("width") is None else _decimal(band["width"], "width"),
                rate=_decimal(band.get("rate"), "rate"),
            )
            for band in data["paye_bands"]
        )
        rates = StatutoryRates(
            personal_relief=_decimal(data["personal_relief"], "personal_relief"),
            pension_tier1_ceiling=_decimal(pension["tier1_ceiling"], "pension.tier1_ceiling"),
            pension_tier2_ceiling=_decimal(pension["tier2_ceiling"], "pension.tier2_ceiling"),
            pension_rate=_decimal(pension["rate"], "pension.rate"),
            housing_levy_rate=_decimal(data["housing_levy_rate"], "housing_levy_rate"),
            health_levy_rate=_decimal(data["health_levy_rate"], "health_levy_rate"),
            paye_bands=bands,
            name=str(data.get("name", "custom")),
        )
    except KeyError as exc:
        raise InvalidRatesError(f"Missing rate table field: {exc.args[0]}") from None
    except (TypeError, AttributeError):
        raise InvalidRatesError("Malformed rate table") from None

    return validate_rates(rates)


def load_rates(path: str | Path | None = None) -> StatutoryRates:
    """Load a rate table from YAML.

    Args:
        path: A YAML rates file. Defaults to config/statutory_rates.yaml.

    Raises:
        InvalidRatesError: If the file is not valid YAML or not a valid table.
        OSError: If the file cannot be read.
    """
    try:
        if path is None:
            data = load_yaml_config(DEFAULT_RATES_FILE)
        else:
            data = load_yaml_file(path)
    except yaml.YAMLError as exc:
        raise InvalidRatesError(f"Rate table is not valid YAML: {exc}") from exc

    rates = rates_from_mapping(data)
    logger.info("Loaded rate table %s (%d PAYE bands)", rates.name, len(rates.paye_bands))
    return rates


def rates_to_dict(rates: StatutoryRates) -> dict[str, Any]:
    """JSON-ready view of a rate table."""
    return {
        "name": rates.name,
        "personal_relief": float(rates.personal_relief),
        "pension": {
            "tier1_ceiling": float(rates.pension_tier1_ceiling),
            "tier2_ceiling": float(rates.pension_tier2_ceiling),
            "rate": float(rates.pension_rate),
            "max_contribution": float(rates.max_pension_contribution),
        },
        "housing_levy_rate": float(rates.housing_levy_rate),
        "health_levy_rate": float(rates.health_levy_rate),
        "paye_bands": [
            {
                "width": float(band.width) if band.width is not None else None,
                "rate": float(band.rate),
            }
            for band in rates.paye_bands
        ],
    }
