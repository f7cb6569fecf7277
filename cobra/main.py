"""COBRA Checklist web service."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cobra.core.config import settings
from cobra.core.database import create_db_and_tables
from cobra.core.errors import register_exception_handlers
from cobra.routes import checklists, events, items, operational_periods, templates

# Configure logging
log_dir = Path(settings.log_dir).expanduser()
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting COBRA Checklist service")
    create_db_and_tables()
    yield
    logger.info("COBRA Checklist service shut down")


app = FastAPI(
    title=settings.app_name,
    description="Checklist tracking for incident management, grouped by operational period",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for the single-page front end
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(events.router)
app.include_router(operational_periods.router)
app.include_router(templates.router)
app.include_router(checklists.router)
app.include_router(items.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
