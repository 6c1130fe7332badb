import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from frameledger.config import get_settings
from frameledger.db import init_db
from frameledger.errors import LedgerError
from frameledger.routes import billing, dashboard, frames, health, inventory, sales, shops

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Frame Ledger API",
    version="1.0.0",
)


# ----------------------------
#  CORS
# ----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----------------------------
#  ERREURS MÉTIER
# ----------------------------
@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Erreurs métier -> payload d'erreur stable."""
    if exc.status_code >= 500:
        logger.error("[API] %s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
            }
        },
    )


# ----------------------------
#  ROUTES
# ----------------------------
app.include_router(shops.router)
app.include_router(frames.router)
app.include_router(inventory.router)
app.include_router(sales.router)
app.include_router(billing.router)
app.include_router(dashboard.router)
app.include_router(health.router)


# ----------------------------
#  STARTUP
# ----------------------------
@app.on_event("startup")
def on_startup() -> None:
    init_db()
