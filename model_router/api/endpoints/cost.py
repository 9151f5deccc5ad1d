from fastapi import APIRouter, Depends, HTTPException
from model_router.models.schemas import CostEstimateRequest, CostEstimateResponse
from model_router.core.dependencies import get_registry
from model_router.core.registry import CandidateRegistry
from model_router.services.cost import estimate_cost, estimate_tokens
import logging

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/cost/estimate", response_model=CostEstimateResponse)
async def estimate_exchange_cost(
    request: CostEstimateRequest, registry: CandidateRegistry = Depends(get_registry)
):
    """
    Prices an exchange with a catalog model.
    Explicit token counts win; otherwise they are estimated from the given texts.
    """
    candidate = registry.get(request.model_id)
    if candidate is None:
        log.warning(f"Cost estimate requested for unknown model '{request.model_id}'")
        raise HTTPException(status_code=404, detail=f"Model '{request.model_id}' not found")

    estimated = False
    input_tokens = request.input_tokens
    if input_tokens is None:
        input_tokens = estimate_tokens(request.input_text or "")
        estimated = True
    output_tokens = request.output_tokens
    if output_tokens is None:
        output_tokens = estimate_tokens(request.output_text or "")
        estimated = True

    cost = estimate_cost(candidate, input_tokens, output_tokens)
    log.info(
        f"Estimated cost for '{candidate.id}': {input_tokens} in / {output_tokens} out -> {cost:.6f}"
    )
    return CostEstimateResponse(
        model_id=candidate.id,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=input_tokens + output_tokens,
        cost=cost,
        estimated=estimated,
    )
