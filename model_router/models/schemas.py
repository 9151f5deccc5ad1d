from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field
from typing import List, Literal, Optional

from model_router.models.domain import Candidate, Criteria


class AnalyzeRequest(PydanticBaseModel):
    prompt: str = Field(
        ..., description="The prompt text to analyze"
    )


class SelectRequest(PydanticBaseModel):
    prompt: str = Field(
        ..., description="The prompt text to route to a model"
    )


class SelectionResponse(PydanticBaseModel):
    criteria: Criteria
    selected_model: Candidate
    confidence: int
    reasoning: str
    alternatives: List[Candidate]
    estimated_input_tokens: int


class ModelListResponse(PydanticBaseModel):
    models: List[Candidate]
    providers: List[str]
    capabilities: List[str]


class ReloadResponse(PydanticBaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_count: int
    source: str


class CostEstimateRequest(PydanticBaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str = Field(..., description="Catalog id of the model to price")
    input_tokens: Optional[int] = Field(default=None, ge=0, description="Prompt token count")
    output_tokens: Optional[int] = Field(default=None, ge=0, description="Completion token count")
    input_text: Optional[str] = Field(
        default=None, description="Prompt text, used to estimate input_tokens when they are not given"
    )
    output_text: Optional[str] = Field(
        default=None, description="Completion text, used to estimate output_tokens when they are not given"
    )


class CostEstimateResponse(PydanticBaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    input_tokens: int
    output_tokens: int
    total_tokens: int
    cost: float
    estimated: bool


class ChatMessage(PydanticBaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(PydanticBaseModel):
    prompt: str = Field(..., min_length=1, description="The prompt to route and send")
    history: List[ChatMessage] = Field(
        default_factory=list,
        description="Earlier messages of the conversation, oldest first",
    )
    temperature: Optional[float] = Field(
        default=None, ge=0.0, le=2.0, description="Temperature for model generation"
    )
    top_p: Optional[float] = Field(
        default=None, ge=0.0, le=1.0, description="Top-p for model generation"
    )
    max_tokens: Optional[int] = Field(default=None, gt=0, description="Maximum tokens to generate")


class GenerateRequest(ChatRequest):
    model: str = Field(
        ...,
        description="The catalog id of the model to use (e.g., 'gpt-4-turbo')",
    )
