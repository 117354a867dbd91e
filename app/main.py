"""Human or AI? - FastAPI app entry point."""
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import GameError, ValidationError
from app.db.base import Base
from app.db.session import engine, AsyncSessionLocal
from app.routers import api
from app.services.seeding import seed_catalog

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_on_startup:
        async with AsyncSessionLocal() as db:
            await seed_catalog(db)

    logger.info(f"{settings.app_name} started (auth_policy={settings.auth_policy.value}, "
                f"exclusion_scope={settings.exclusion_scope.value})")
    yield
    await engine.dispose()


app = FastAPI(
    title="Human or AI?",
    description="Guess whether a passage was written by a human or generated by AI",
    lifespan=lifespan,
)


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.kind}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path}: {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed fields are caller mistakes: 400 with the offending fields."""
    logger.warning(f"Validation error: {exc.errors()}")
    fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) or str(err["loc"][0]) for err in exc.errors())
    content = ValidationError(f"Invalid or missing fields: {fields}").to_dict()
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http_error", "message": str(exc.detail)},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "message": "An unexpected error occurred. Please try again later."},
    )


app.include_router(api.router)


@app.get("/health")
async def health():
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        database = "up"
    except Exception as exc:
        logger.warning(f"Health check: database unreachable: {exc}")
        database = "down"
    return {"status": "ok" if database == "up" else "degraded", "database": database}
