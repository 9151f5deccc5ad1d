# model_router/main.py
import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from model_router import __version__
from model_router.api.endpoints import catalog, cost, generate, selection
from model_router.core.dependencies import app_state, publish_registry
from model_router.core.registry import ConfigurationError, load_registry
from model_router.services.dispatcher import Dispatcher
from model_router.shared import settings

log = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles application startup and shutdown events."""
    log.info("Application startup: Loading model catalog and dispatch clients...")

    try:
        registry = load_registry(settings.CATALOG_PATH)
    except ConfigurationError as e:
        log.critical(f"CRITICAL: Failed to load model catalog: {e}")
        raise
    publish_registry(registry)

    dispatcher = None
    try:
        dispatcher = Dispatcher.from_settings(settings)
        log.info("Dispatcher initialized successfully via lifespan.")
    except Exception as e:
        log.critical(f"CRITICAL: Failed to initialize dispatcher during startup: {e}")
    finally:
        app_state["dispatcher"] = dispatcher

    log.info("Catalog/dispatcher initialization process complete.")

    yield

    log.info("Application shutdown: Cleaning up resources...")
    dispatcher = app_state.pop("dispatcher", None)
    if dispatcher is not None:
        await dispatcher.aclose()
    app_state.pop("registry", None)


app = FastAPI(
    title="Intelligent Model Router API",
    description="API for prompt analysis, model selection and cost estimation across AI providers",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)
log.info(f"CORS middleware configured for origins: {settings.CORS_ORIGINS}")

app.include_router(selection.router, prefix="/api", tags=["selection"])
app.include_router(catalog.router, prefix="/api", tags=["catalog"])
app.include_router(cost.router, prefix="/api", tags=["cost"])
app.include_router(generate.router, prefix="/api", tags=["generate"])
