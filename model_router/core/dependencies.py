from fastapi import HTTPException
import logging

from model_router.core.registry import CandidateRegistry
from model_router.services.dispatcher import Dispatcher

log = logging.getLogger(__name__)

# Published once at startup. A catalog reload rebinds "registry" to a new
# immutable CandidateRegistry; requests keep whichever one they resolved.
app_state = {}


def get_registry() -> CandidateRegistry:
    registry = app_state.get("registry")
    if registry is None:
        log.error("Model registry requested but is not available (catalog failed to load?).")
        raise HTTPException(status_code=503, detail="Model catalog temporarily unavailable.")
    return registry


def get_dispatcher() -> Dispatcher:
    dispatcher = app_state.get("dispatcher")
    if dispatcher is None:
        log.error("Dispatcher requested but is not available (initialization failed?).")
        raise HTTPException(status_code=503, detail="Model dispatch service temporarily unavailable.")
    return dispatcher


def publish_registry(registry: CandidateRegistry) -> None:
    app_state["registry"] = registry
    log.info(f"Published model registry with {len(registry)} models.")
