"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import select, text

from thanks.config import get_settings
from thanks.db.session import SessionLocal
from thanks.dispatch.errors import ThanksError, ThanksValidationError
from thanks.models.thanks_log_entry import ThanksLogEntry
from thanks.routers import affordances, special, thanks_log
from thanks.routers import thanks as thanks_router
from thanks.services.affordances import build_view_bus

logger = logging.getLogger(__name__)


def _warm_backend_state() -> None:
    """Prime the DB connection and the thanks log lookup at process start."""

    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
            db.execute(select(ThanksLogEntry.id).limit(1))
    except Exception:
        logger.exception("Backend warm-up failed; continuing without startup pre-warm.")


@asynccontextmanager
async def lifespan(_: FastAPI):
    _warm_backend_state()
    yield


app = FastAPI(title="Thanks API", version="0.1.0", lifespan=lifespan)
app.state.view_bus = build_view_bus(get_settings())


@app.exception_handler(ThanksError)
async def handle_thanks_error(_: Request, exc: ThanksError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = "; ".join(str(item.get("msg", "")) for item in errors) or "invalid parameters"
    error = ThanksValidationError("thanks-error-invalid-request", detail=detail)
    logger.info("thanks.request_invalid errors=%s", errors)
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


app.include_router(thanks_router.router, tags=["thanks"])
app.include_router(thanks_log.router, tags=["thanks-log"])
app.include_router(special.router, tags=["special"])
app.include_router(affordances.router, tags=["affordances"])


@app.get("/health")
def health() -> dict[str, str]:
    """Simple health check endpoint."""

    return {"status": "ok"}
