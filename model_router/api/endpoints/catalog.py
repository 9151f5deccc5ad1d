from fastapi import APIRouter, Depends, HTTPException
from typing import Optional
from model_router.models.domain import Candidate
from model_router.models.schemas import ModelListResponse, ReloadResponse
from model_router.core.dependencies import get_registry, publish_registry
from model_router.core.registry import CandidateRegistry, ConfigurationError, load_registry
from model_router.services.catalog_browser import SortKey, browse_catalog
from model_router.shared import settings
import logging

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("/models", response_model=ModelListResponse)
async def list_models(
    search: Optional[str] = None,
    provider: Optional[str] = None,
    capability: Optional[str] = None,
    sort_by: Optional[SortKey] = None,
    registry: CandidateRegistry = Depends(get_registry),
):
    """
    Returns the model catalog, optionally filtered and sorted.
    This data is used by the frontend to compare models.
    """
    models = browse_catalog(
        registry, search=search, provider=provider, capability=capability, sort_by=sort_by
    )
    log.info(f"Listing {len(models)} of {len(registry)} models")
    return ModelListResponse(
        models=models,
        providers=registry.providers(),
        capabilities=registry.capabilities(),
    )


@router.get("/models/{model_id}", response_model=Candidate)
async def get_model(model_id: str, registry: CandidateRegistry = Depends(get_registry)):
    candidate = registry.get(model_id)
    if candidate is None:
        log.warning(f"Unknown model requested: '{model_id}'")
        raise HTTPException(status_code=404, detail=f"Model '{model_id}' not found")
    return candidate


@router.post("/models/reload", response_model=ReloadResponse)
async def reload_models():
    """
    Reloads the catalog from CATALOG_PATH (or the built-in catalog).
    On failure the previously published catalog stays in place.
    """
    source = settings.CATALOG_PATH or "built-in"
    try:
        registry = load_registry(settings.CATALOG_PATH)
    except ConfigurationError as e:
        log.error(f"Catalog reload from {source} failed, keeping current catalog: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to reload model catalog: {e}")

    publish_registry(registry)
    return ReloadResponse(model_count=len(registry), source=source)
