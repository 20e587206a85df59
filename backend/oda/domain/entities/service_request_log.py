"""Domain entity for LLM request logging — tracks usage and cost."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class ServiceRequestLog:
    """A logged call to an AI provider (query planning or recommendations)."""

    model: str
    provider: str  # e.g. "openrouter"
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    cost: float | None = None  # Cost in USD
    duration_ms: int | None = None
    status: str = "success"  # "success" | "error"
    error_message: str | None = None
    feature: str = "query_plan"  # "query_plan" | "utilization_full" | "utilization_single"
    request_context: str | None = None  # e.g. the dataset file name
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
