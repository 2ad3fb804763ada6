import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from azport.config import DEFAULT_JWT_SECRET, settings
from azport.database import engine
from azport.logging_config import setup_logging
from azport.routers import auth, catalog, categories, job_openings, products, translations
from azport.services.schema_initializer import SchemaInitError, initialize_database

setup_logging()
logger = logging.getLogger(__name__)


def on_startup():
    logger.info("Starting AzPort site API")
    env = (settings.app_env or "development").lower()
    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        if env in {"production", "prod"}:
            raise RuntimeError("JWT_SECRET fallback is not allowed in production")
        logger.warning("JWT_SECRET is using the insecure fallback. Set JWT_SECRET in .env for secure deployments.")
    initialize_database()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    on_startup()
    yield
    engine.dispose()
    logger.info("AzPort site API stopped")


app = FastAPI(
    title="AzPort Site API",
    description="Product catalog, categories, job openings, catalog PDF and admin auth.",
    version="1.0.0",
    lifespan=lifespan,
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(products.router)
app.include_router(categories.router)
app.include_router(job_openings.router)
app.include_router(catalog.router)
app.include_router(translations.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    # Dict details (e.g. category-in-use conflicts) already carry a "message" key
    content = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    logger.info("Invalid request on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.post("/api/init-db")
def init_db_route():
    """Run the idempotent schema initializer on demand."""
    try:
        summary = initialize_database()
    except SchemaInitError:
        return JSONResponse(status_code=500, content={"message": "Failed to initialize database"})
    return {"message": "Database initialized successfully", "summary": summary}
