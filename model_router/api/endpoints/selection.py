from fastapi import APIRouter, Depends, HTTPException
from model_router.models.domain import Criteria
from model_router.models.schemas import AnalyzeRequest, SelectRequest, SelectionResponse
from model_router.core.dependencies import get_registry
from model_router.core.registry import CandidateRegistry, ConfigurationError
from model_router.services.analyzer import analyze
from model_router.services.cost import estimate_tokens
from model_router.services.selector import select
import logging

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/analyze", response_model=Criteria)
async def analyze_prompt(request: AnalyzeRequest):
    """
    Infers the selection criteria for a prompt without choosing a model.
    """
    log.info(f"Processing analysis request with prompt length: {len(request.prompt)}")
    criteria = analyze(request.prompt)
    log.info(f"Prompt analyzed as task type '{criteria.task_type}' ({criteria.complexity} complexity)")
    return criteria


@router.post("/select", response_model=SelectionResponse)
async def select_model(
    request: SelectRequest, registry: CandidateRegistry = Depends(get_registry)
):
    """
    Analyzes a prompt and picks the best catalog model for it.
    Returns the chosen model, confidence, reasoning and alternatives.
    """
    prompt = request.prompt
    log.info(f"Processing selection request with prompt length: {len(prompt)}")

    criteria = analyze(prompt)
    try:
        selection = select(criteria, registry)
    except ConfigurationError as e:
        log.error(f"Model selection failed: {e}")
        raise HTTPException(status_code=500, detail=f"Model catalog misconfigured: {e}")

    return SelectionResponse(
        criteria=criteria,
        selected_model=selection.selected_model,
        confidence=selection.confidence,
        reasoning=selection.reasoning,
        alternatives=list(selection.alternatives),
        estimated_input_tokens=estimate_tokens(prompt),
    )
