"""FastAPI application factory."""

import base64
import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from config.settings import settings
from ke_payroll.api.routes import STATIC_DIR, router
from ke_payroll.calculators.rates import load_rates

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: configure logging and load the rate table once."""
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Starting up...")

    app.state.rates = load_rates(settings.rates_file or None)

    yield

    logger.info("Shutting down...")


UNAUTHORIZED = Response(
    content="Unauthorized",
    status_code=401,
    headers={"WWW-Authenticate": "Basic"},
)


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Enforce HTTP Basic Auth when credentials are configured."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        if not settings.auth_enabled:
            return await call_next(request)

        auth = request.headers.get("Authorization")
        if auth and auth.startswith("Basic "):
            try:
                decoded = base64.b64decode(auth[6:]).decode()
                username, password = decoded.split(":", 1)
            except ValueError:
                return UNAUTHORIZED
            if secrets.compare_digest(
                username.encode(), settings.auth_username.encode()
            ) and secrets.compare_digest(password.encode(), settings.auth_password.encode()):
                return await call_next(request)
        return UNAUTHORIZED


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Kenya Payroll Deductions", lifespan=lifespan)
    app.add_middleware(BasicAuthMiddleware)
    app.include_router(router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    return app
