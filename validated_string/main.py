"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from validated_string.api.routes import router
from validated_string.logging_config import setup_logging, get_logger
from validated_string.models import HealthResponse
from validated_string.registry import list_policies

setup_logging()
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load the policy registry so config errors surface early."""
    logger.info("startup_init")
    list_policies()
    yield
    logger.info("shutdown")


app = FastAPI(
    title="Validated String Service",
    description="Validate, normalize and order strings against named policies",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok"}
