from typing import Literal, Optional, Tuple

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field

TaskType = Literal["coding", "creative", "reasoning", "multimodal", "general"]
Complexity = Literal["low", "medium", "high"]
ResponseTime = Literal["fast", "medium", "slow"]


class Pricing(PydanticBaseModel):
    """Per-1000-token rates, in the catalog's currency."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    input_rate: float = Field(..., ge=0.0, alias="inputTokens")
    output_rate: float = Field(..., ge=0.0, alias="outputTokens")

    @property
    def average_rate(self) -> float:
        return (self.input_rate + self.output_rate) / 2


class Candidate(PydanticBaseModel):
    """One backend model in the catalog."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str
    provider: str
    description: str = ""
    capabilities: Tuple[str, ...] = ()
    strengths: Tuple[str, ...] = ()
    pricing: Pricing
    max_tokens: int = Field(..., gt=0, alias="maxTokens")
    response_time: ResponseTime = Field(..., alias="responseTime")
    accuracy: int = Field(..., ge=0, le=100)
    icon: str = ""
    backend_model: Optional[str] = Field(
        default=None,
        alias="backendModel",
        description="Model name sent to the provider; defaults to the catalog id",
    )

    @property
    def provider_model(self) -> str:
        return self.backend_model or self.id

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities


class Criteria(PydanticBaseModel):
    """Requirements inferred from a prompt."""
    model_config = ConfigDict(frozen=True)

    task_type: TaskType = "general"
    complexity: Complexity = "medium"
    requires_speed: bool = False
    requires_accuracy: bool = False
    budget_sensitive: bool = False
    requires_multimodal: bool = False
    requires_code: bool = False
    requires_creative: bool = False
    requires_reasoning: bool = False


class SelectionResult(PydanticBaseModel):
    model_config = ConfigDict(frozen=True)

    selected_model: Candidate
    confidence: int = Field(..., ge=60, le=95)
    reasoning: str
    alternatives: Tuple[Candidate, ...] = ()
