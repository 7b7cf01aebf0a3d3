import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError

from . import models  # noqa: F401  (register tables on Base.metadata)
from .config import ALLOWED_ORIGINS, LOG_LEVEL, MIN_CELL_HEIGHT, SEED_DEFAULTS
from .database import Base, SessionLocal, engine
from .domain.assignments.router import router as assignments_router
from .domain.catalog.router import router as catalog_router
from .domain.grid.router import router as grid_router
from .domain.roster.router import router as roster_router
from .domain.stats.router import router as stats_router
from .domain.timegrid.router import router as timegrid_router
from .errors import StorageUnavailable, register_exception_handlers
from .seed import seed_defaults

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_tables() -> None:
    """Create missing tables; another worker creating them first is not an error"""
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("🗄️ Schedule board tables ready")
    except SQLAlchemyError as e:
        if "already exists" in str(e) or "duplicate key" in str(e):
            logger.info("🗄️ Schedule board tables already created by another worker")
        else:
            logger.error(f"❌ Could not create schedule board tables: {e}")


def seed_catalog_and_slots() -> None:
    db = SessionLocal()
    try:
        created = seed_defaults(db)
        if any(created.values()):
            logger.info(f"🌱 Seeded {created['activity_kinds']} activity kinds and {created['time_slots']} time slots")
    except SQLAlchemyError as e:
        logger.error(f"❌ Default seeding failed, starting with empty catalog: {e}")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Schedule board API starting (min cell height {MIN_CELL_HEIGHT}px)")
    create_tables()
    if SEED_DEFAULTS:
        seed_catalog_and_slots()
    yield
    logger.info("Schedule board API stopped")


app = FastAPI(title="Schedule Board API", version="1.0.0", lifespan=lifespan)

register_exception_handlers(app)


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may hold the raw ValueError raised by a field validator
    return [{k: v for k, v in error.items() if k != "ctx"} for error in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


@app.exception_handler(OperationalError)
@app.exception_handler(InterfaceError)
async def storage_exception_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} - Storage error: {exc}")
    error = StorageUnavailable()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.middleware("http")
async def log_unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"💥 Unhandled error on {request.method} {request.url.path}")
        raise


logger.info(f"🌐 CORS origins: {', '.join(ALLOWED_ORIGINS)}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(roster_router)
app.include_router(catalog_router)
app.include_router(timegrid_router)
app.include_router(grid_router)
app.include_router(assignments_router)
app.include_router(stats_router)


@app.get("/")
def root():
    return {"message": "Schedule Board API is running", "docs": "/docs"}


@app.get("/health")
def health():
    return {"status": "healthy"}
