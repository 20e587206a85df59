"""Unit tests for the LLMUsageLogger."""

import pytest

from oda.application.services import LLMUsageLogger
from oda.domain.entities import TokenUsage

from fakes import FakeServiceRequestLogRepository


@pytest.mark.asyncio
async def test_log_request_persists_entry():
    repo = FakeServiceRequestLogRepository()
    usage_logger = LLMUsageLogger(repo)

    entry = await usage_logger.log_request(
        model="m",
        provider="openrouter",
        feature="utilization_full",
        usage=TokenUsage(prompt_tokens=3, completion_tokens=4, total_tokens=7, cost=0.001),
        duration_ms=12,
        request_context="제주_관광지_20240101",
    )

    assert entry.id == 1
    assert repo.logs == [entry]
    assert entry.total_tokens == 7
    assert entry.request_context == "제주_관광지_20240101"


@pytest.mark.asyncio
async def test_log_error_without_repository():
    entry = await LLMUsageLogger().log_error(
        model="m",
        provider="openrouter",
        feature="query_plan",
        duration_ms=5,
        error=RuntimeError("timeout"),
    )

    assert entry.id is None
    assert entry.status == "error"
    assert entry.error_message == "timeout"
    assert entry.total_tokens == 0
