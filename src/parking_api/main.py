import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_cors_origins, load_settings
from .routers import charts, health, markers, records, summary
from .services.pipeline import build_dashboard

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    app.state.settings = settings

    # One load-and-aggregate cycle per process
    logger.info(f"Loading parking data from {settings.data_source}...")
    app.state.dashboard = await build_dashboard(
        settings.data_source,
        tz=settings.timezone,
        timeout=settings.fetch_timeout,
    )
    logger.info("✅ Dashboard data ready")

    yield

    logger.info("Clearing dashboard data...")
    app.state.dashboard = None
    app.state.settings = None


app = FastAPI(title="Parking Sessions Dashboard API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"An unexpected error occurred on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "An internal server error occurred."},
    )


# Include routers
app.include_router(health.router, prefix="/api")
app.include_router(summary.router, prefix="/api")
app.include_router(charts.router, prefix="/api")
app.include_router(records.router, prefix="/api")
app.include_router(markers.router, prefix="/api")


@app.get("/")
def read_root():
    return {"message": "Parking Sessions Dashboard API"}
