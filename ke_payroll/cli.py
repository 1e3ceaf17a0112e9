"""Command-line payroll calculator.

Usage:
    # Text breakdown for a monthly gross salary
    ke-payroll 50000

    # JSON output
    ke-payroll 50,000 --json

    # Alternate rate table
    ke-payroll 50000 --rates path/to/rates.yaml
"""

import argparse
import json
import logging
import sys

from ke_payroll.calculators.deductions import compute
from ke_payroll.calculators.rates import InvalidRatesError, load_rates
from ke_payroll.calculators.validation import InvalidInputError, parse_gross_salary
from ke_payroll.formatting import render_text, result_to_dict

EXIT_INVALID_INPUT = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Kenya monthly payroll deductions calculator")
    parser.add_argument("gross_salary", help="Monthly gross salary in KSh, e.g. 50000 or 50,000")
    parser.add_argument("--rates", help="YAML rate table (default: bundled Finance Act 2023)")
    parser.add_argument("--json", action="store_true", help="Print the breakdown as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        gross_salary = parse_gross_salary(args.gross_salary)
        rates = load_rates(args.rates)
    except (InvalidInputError, InvalidRatesError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    result = compute(gross_salary, rates)
    if args.json:
        print(json.dumps(result_to_dict(result), indent=2))
    else:
        print(render_text(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
