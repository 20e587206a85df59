"""Centralized LLM usage logger — single entry point for tracking all LLM requests.

Persists every LLM request (query planning, utilization recommendations)
with token usage, cost and timing.
"""

import logging

from oda.application.interfaces import ServiceRequestLogRepository
from oda.domain.entities import ServiceRequestLog, TokenUsage

logger = logging.getLogger(__name__)


class LLMUsageLogger:
    """Tracks and persists LLM usage across all features.

    Usage:
        usage_logger = LLMUsageLogger(log_repository)
        await usage_logger.log_request(
            model="google/gemini-2.0-flash-001",
            provider="openrouter",
            feature="query_plan",
            usage=result.usage,
            duration_ms=42,
        )
    """

    def __init__(self, log_repository: ServiceRequestLogRepository | None = None):
        self._repo = log_repository

    async def log_request(
        self,
        *,
        model: str,
        provider: str,
        feature: str,
        usage: TokenUsage,
        duration_ms: int,
        status: str = "success",
        error_message: str | None = None,
        request_context: str | None = None,
    ) -> ServiceRequestLog:
        """Persist and log an LLM request.

        Args:
            model: Model identifier.
            provider: Provider name (e.g. "openrouter").
            feature: Which subsystem triggered the call
                     ("query_plan", "utilization_full", "utilization_single").
            usage: Token usage from the completion result.
            duration_ms: Wall-clock time of the request in milliseconds.
            status: "success" or "error".
            error_message: Error details if status == "error".
            request_context: Additional context (e.g. the dataset file name).

        Returns:
            The log entry, persisted when a repository is configured.
        """
        entry = ServiceRequestLog(
            model=model,
            provider=provider,
            feature=feature,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            total_tokens=usage.total_tokens,
            cost=usage.cost,
            duration_ms=duration_ms,
            status=status,
            error_message=error_message,
            request_context=request_context,
        )

        saved = await self._repo.create(entry) if self._repo is not None else entry

        cost_str = f"${usage.cost:.6f}" if usage.cost else "n/a"
        ctx_str = f" ctx={request_context}" if request_context else ""

        logger.info(
            "LLM [%s] model=%s status=%s tokens=%d cost=%s %dms%s",
            feature,
            model,
            status,
            usage.total_tokens,
            cost_str,
            duration_ms,
            ctx_str,
        )

        return saved

    async def log_error(
        self,
        *,
        model: str,
        provider: str,
        feature: str,
        duration_ms: int,
        error: Exception,
        request_context: str | None = None,
    ) -> ServiceRequestLog:
        """Convenience method for logging failed LLM requests."""
        return await self.log_request(
            model=model,
            provider=provider,
            feature=feature,
            usage=TokenUsage(),
            duration_ms=duration_ms,
            status="error",
            error_message=str(error),
            request_context=request_context,
        )
