"""
FastAPI application factory for payload-returning routers.
"""

from fastapi import APIRouter, FastAPI

from .endpoints import register_exception_handlers
from .utils import logger


def create_app(*routers: APIRouter, instrument: bool = False, **fastapi_options) -> FastAPI:
    """
    Build a FastAPI app with payload exception handling.

    Args:
        *routers: Routers whose mutation endpoints use `build_payload`
        instrument: Set up Logfire instrumentation for the app
        **fastapi_options: Passed through to FastAPI()

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(**fastapi_options)

    for router in routers:
        app.include_router(router)

    # Register API exception handlers
    register_exception_handlers(app)

    if instrument:
        logger.setup_instrumentation(app)

    logger.info("Application created", routers=len(routers))
    return app
