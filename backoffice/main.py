from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse
import uvicorn

from backoffice import __version__
from backoffice.core.config import settings
from backoffice.core.redis import async_redis
from backoffice.db.session import engine
from backoffice.routers import customer_router, order_router, product_router, stats_router

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database connection successful")
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        raise

    if settings.REDLOCK_ENABLED:
        try:
            await async_redis.ping()
            logger.info("Redis connected, distributed order locks enabled")
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}")
            logger.warning("Orders will be rejected with 429 until Redis is reachable")

    yield

    logger.info("Shutting down application...")


app = FastAPI(
    title="Shop Back Office API",
    description="Products, customers and transactional multi-item order placement",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(product_router.router, prefix="/api")
app.include_router(customer_router.router, prefix="/api")
app.include_router(order_router.router, prefix="/api")
app.include_router(stats_router.router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error: {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Missing required fields",
            "details": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    logger.error(f"HTTP error: {exc.status_code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "shop-backoffice",
        "version": __version__
    }


@app.get("/")
async def read_root():
    return {
        "message": "Shop Back Office API",
        "docs": "/docs",
        "health": "/health"
    }


def run():
    uvicorn.run(
        "backoffice.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
    )


if __name__ == "__main__":
    run()
