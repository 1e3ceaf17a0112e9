"""API routes for the Kenya payroll deductions service."""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel

from ke_payroll.calculators.deductions import compute
from ke_payroll.calculators.rates import DEFAULT_RATES, StatutoryRates, rates_to_dict
from ke_payroll.calculators.validation import InvalidInputError, parse_gross_salary
from ke_payroll.formatting import result_to_dict

logger = logging.getLogger(__name__)

router = APIRouter()

STATIC_DIR = Path(__file__).resolve().parent.parent.parent / "static"


class CalculateRequest(BaseModel):
    """Request body for the /calculate endpoint."""

    gross_salary: float | str | None = None


def _active_rates(request: Request) -> StatutoryRates:
    return getattr(request.app.state, "rates", DEFAULT_RATES)


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    """Serve the calculator form."""
    return FileResponse(STATIC_DIR / "index.html")


@router.get("/health")
async def health(request: Request) -> dict[str, str]:
    """Health check with the active rate table name."""
    return {"status": "ok", "regime": _active_rates(request).name}


@router.get("/rates")
async def rates(request: Request) -> JSONResponse:
    """Return the statutory rate table in use."""
    return JSONResponse(rates_to_dict(_active_rates(request)))


@router.post("/calculate")
async def calculate(body: CalculateRequest, request: Request) -> JSONResponse:
    """Compute the deduction breakdown for a monthly gross salary."""
    try:
        gross_salary = parse_gross_salary(body.gross_salary)
    except InvalidInputError as exc:
        logger.warning("Rejected gross salary %r", body.gross_salary)
        return JSONResponse({"error": exc.message}, status_code=422)

    result = compute(gross_salary, _active_rates(request))
    return JSONResponse(result_to_dict(result))
