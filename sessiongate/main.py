#!/usr/bin/env python3
"""
SessionGate - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Serves the gated inventory API

All business logic is in the modules, following black box principles.
"""

import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from typing import Optional

import redis.asyncio as redis
import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse

from sessiongate.config.provider import AuthConfig, ConfigProvider, EnvConfigProvider
from sessiongate.logging_config import get_logging_config
from sessiongate.modules.api import ApiResponse, ErrorResponse
from sessiongate.modules.auth import AuthFactory, Verifier
from sessiongate.modules.inventory import InventoryError, InventoryModule, parse_items_query
from sessiongate.modules.storage import StorageModule

# Configuration provider (centralized config access)
config_provider: ConfigProvider = EnvConfigProvider()
api_config = config_provider.get_api_config()

log_config.dictConfig(get_logging_config(api_config.log_level))
logger = logging.getLogger(__name__)

# Module instances (initialized at startup)
storage: Optional[StorageModule] = None
auth_config: Optional[AuthConfig] = None
verifier: Optional[Verifier] = None
inventory_module: Optional[InventoryModule] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - initialize and cleanup resources.
    """
    global storage, auth_config, verifier, inventory_module

    logger.info("Starting SessionGate API...")

    storage_config = config_provider.get_storage_config()
    storage = StorageModule(storage_config.redis_url, password=storage_config.redis_password)
    redis_client = await storage.connect()

    auth_config = config_provider.get_auth_config()
    verifier = AuthFactory.build(config_provider, redis_client)
    inventory_module = InventoryModule(redis_client)

    logger.info("SessionGate API started successfully")

    yield

    logger.info("Shutting down SessionGate API...")
    await storage.disconnect()
    logger.info("SessionGate API shutdown complete")


app = FastAPI(
    title="SessionGate API",
    description="Inventory API behind a shared-password and session-cookie gate",
    version="1.0.0",
    lifespan=lifespan,
)


async def handle_success(request: Request, response: Response, new_cookie: Optional[str]):
    """Send inventory data for the requested items."""
    target_ids = parse_items_query(request.query_params.get("items"))

    try:
        return await inventory_module.get_nested_inventory(target_ids)
    except InventoryError as e:
        logger.error(f"Database error fetching inventory: {e}")
        return None


def handle_error(response: Response, reason: str):
    """Reject the request with 401."""
    logger.warning(f"Authorization failed: {reason}")
    response.status_code = 401
    return ErrorResponse(reason=reason).model_dump()


@app.get("/api/data")
async def get_data(
    request: Request,
    response: Response,
    items: Optional[str] = Query(None, description='JSON array of item refs, e.g. [{"id": 1}]'),
):
    """
    Return nested inventory data.

    Returns:
        200: Inventory items (a session cookie is set after Basic auth)
        401: Unauthorized, with the rejection reason
    """
    if not verifier or not inventory_module:
        raise HTTPException(503, "Service not initialized")

    cookie_settings = {}
    if auth_config:
        cookie_settings = {"cookie_name": auth_config.cookie_name, "cookie_max_age": auth_config.cookie_max_age}

    api_response = ApiResponse(request, response, handle_success, handle_error, verifier, **cookie_settings)
    return await api_response.send()


@app.get("/healthz")
async def healthz():
    """
    Minimal health check endpoint for readiness and liveness checks.

    This endpoint is unauthenticated and returns a simple OK response.
    """
    return {"status": "ok"}


@app.exception_handler(redis.ConnectionError)
async def redis_error_handler(request, exc):
    """Handle Redis connection errors."""
    logger.error(f"Redis connection error: {exc}")
    return JSONResponse(status_code=503, content={"error": "Database connection failed"})


@app.exception_handler(ValueError)
async def validation_error_handler(request, exc):
    """Handle validation errors."""
    logger.error(f"Validation error: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


def run():
    """Run the API server with uvicorn."""
    uvicorn.run(
        "sessiongate.main:app",
        host=api_config.host,
        port=api_config.port,
        log_level=api_config.log_level.lower(),
        reload=api_config.debug,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    run()
