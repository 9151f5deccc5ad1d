from fastapi import APIRouter, Depends, Request, HTTPException
from typing import Dict, Any, AsyncGenerator, List, Mapping, Optional
from sse_starlette.sse import EventSourceResponse
from model_router.models.domain import Candidate
from model_router.models.schemas import ChatRequest, GenerateRequest
from model_router.core.dependencies import get_dispatcher, get_registry
from model_router.core.registry import CandidateRegistry
from model_router.services.analyzer import analyze
from model_router.services.dispatcher import Dispatcher, DispatchError
from model_router.services.selector import select
import json
import logging

router = APIRouter()
log = logging.getLogger(__name__)


async def completion_events(
    dispatcher: Dispatcher,
    candidate: Candidate,
    prompt: str,
    history: List[Mapping[str, str]],
    temperature: Optional[float] = None,
    top_p: Optional[float] = None,
    max_tokens: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
    request: Optional[Request] = None,
) -> AsyncGenerator[Dict[str, Any], None]:
    """
    SSE events for one completion: optional metadata, text chunks, usage with
    cost, then end_stream. A dispatch failure ends the stream with an error event;
    a client disconnect closes the provider stream with no further events.
    """
    try:
        if metadata is not None:
            log.info("Yielding metadata event")
            yield {"event": "metadata", "data": json.dumps(metadata)}

        stream = await dispatcher.open_stream(
            candidate,
            prompt,
            history=history,
            temperature=temperature,
            top_p=top_p,
            max_tokens=max_tokens,
        )

        chunk_count = 0
        async for content in stream:
            chunk_count += 1
            log.debug(f"Received chunk {chunk_count} from '{candidate.id}'")
            if request is not None and await request.is_disconnected():
                log.warning(f"Client disconnected, closing stream from '{candidate.id}'.")
                await stream.aclose()
                return
            yield {"event": "text_chunk", "data": content}
        log.info(f"Finished streaming from '{candidate.id}' after {chunk_count} chunks.")

        usage = stream.usage
        cost = usage.cost_for(candidate)
        log.info(
            f"Usage for '{candidate.id}': {usage.input_tokens} in / {usage.output_tokens} out, "
            f"cost {cost:.6f}{' (estimated)' if usage.estimated else ''}"
        )
        yield {
            "event": "usage",
            "data": json.dumps({
                "model_id": candidate.id,
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
                "total_tokens": usage.total_tokens,
                "estimated": usage.estimated,
                "cost": cost,
            }),
        }

        yield {"event": "end_stream", "data": "Stream finished"}

    except DispatchError as e:
        log.error(f"Error during generation with '{candidate.id}': {e}", exc_info=True)
        error_data = {
            "error": "An error occurred during generation.",
            "detail": str(e),
        }
        log.info("Yielding error event")
        yield {"event": "error", "data": json.dumps(error_data)}


@router.post("/chat")
async def stream_routed_chat(
    request_data: ChatRequest,
    request: Request,
    registry: CandidateRegistry = Depends(get_registry),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """
    Analyzes the prompt, selects the best catalog model and streams its
    completion using SSE. The first event carries the selection.
    """
    prompt = request_data.prompt
    log.info(
        f"Initiating routed chat for prompt length: {len(prompt)}, "
        f"history: {len(request_data.history)} messages"
    )

    criteria = analyze(prompt)
    selection = select(criteria, registry)
    metadata = {
        "criteria": criteria.model_dump(mode="json"),
        "selected_model": selection.selected_model.id,
        "confidence": selection.confidence,
        "reasoning": selection.reasoning,
        "alternatives": [alt.id for alt in selection.alternatives],
    }

    return EventSourceResponse(
        completion_events(
            dispatcher,
            selection.selected_model,
            prompt,
            [message.model_dump() for message in request_data.history],
            temperature=request_data.temperature,
            top_p=request_data.top_p,
            max_tokens=request_data.max_tokens,
            metadata=metadata,
            request=request,
        )
    )


@router.post("/generate")
async def stream_direct_generation(
    request_data: GenerateRequest,
    request: Request,
    registry: CandidateRegistry = Depends(get_registry),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Streams a completion directly from a specified catalog model using SSE."""
    candidate = registry.get(request_data.model)
    if candidate is None:
        log.warning(f"Generation requested for unknown model '{request_data.model}'")
        raise HTTPException(status_code=404, detail=f"Model '{request_data.model}' not found")

    log.info(
        f"Initiating direct generation stream. Model: {candidate.id}, "
        f"Prompt length: {len(request_data.prompt)}"
    )
    return EventSourceResponse(
        completion_events(
            dispatcher,
            candidate,
            request_data.prompt,
            [message.model_dump() for message in request_data.history],
            temperature=request_data.temperature,
            top_p=request_data.top_p,
            max_tokens=request_data.max_tokens,
            request=request,
        )
    )
