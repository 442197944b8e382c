from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from vice.core.config import settings
from vice.core.errors import (
    ViceException,
    vice_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)
from vice.core.logging import configure_logging
from vice.routers import scoring as scoring_router

configure_logging(log_level=settings.LOG_LEVEL)

app = FastAPI(
    title="Vice Scoring API",
    description=(
        "**Habit achievement scoring**\n\n"
        "Normalizes a recorded value for a habit's field type and evaluates it "
        "against simple or elastic (mini / midi / maxi) criteria.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(ViceException, vice_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(scoring_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health():
    """Returns `{"status": "ok"}` while the API is up. Used for liveness probes."""
    return {"status": "ok", "env": settings.APP_ENV}
