"""AI utilization recommender — dataset usage ideas from a chat model."""

import json
import logging
import time
from typing import Any

from oda.application.interfaces import ChatProvider, UtilizationRecommender
from oda.application.services.llm_usage_logger import LLMUsageLogger
from oda.domain.entities import ChatMessage, PublicData
from oda.infrastructure.llm.json_response import parse_json_response

logger = logging.getLogger(__name__)

FULL_SECTIONS = (
    "businessApplications",
    "researchApplications",
    "policyApplications",
    "combinationSuggestions",
    "analysisTools",
)

_FULL_SYSTEM_PROMPT = """\
You advise Korean users on how to use a public dataset.
Respond ONLY with a JSON object with these keys, each a list of 3-5 short Korean strings:
businessApplications, researchApplications, policyApplications,
combinationSuggestions, analysisTools.
"""

_SINGLE_SYSTEM_PROMPT = """\
You advise Korean users on how to use a public dataset.
Answer the user's question about the dataset with concrete ideas.
Respond ONLY with a JSON array of short Korean strings.
"""


def describe_dataset(data: PublicData) -> str:
    """Dataset summary sent to the model."""
    return json.dumps(
        {
            "fileName": data.file_data_name,
            "title": data.title,
            "category": data.classification_system,
            "provider": data.provider_agency,
            "keywords": data.keywords,
            "description": data.description,
        },
        ensure_ascii=False,
    )


class OpenRouterUtilizationRecommender(UtilizationRecommender):
    """UtilizationRecommender backed by a ChatProvider."""

    def __init__(
        self,
        chat_provider: ChatProvider,
        *,
        model: str,
        usage_logger: LLMUsageLogger | None = None,
    ):
        self._chat_provider = chat_provider
        self._model = model
        self._usage_logger = usage_logger or LLMUsageLogger()

    async def recommend_full(self, data: PublicData) -> dict[str, Any]:
        content = await self._complete(
            _FULL_SYSTEM_PROMPT,
            describe_dataset(data),
            feature="utilization_full",
            context=data.file_data_name,
        )
        parsed = parse_json_response(content)
        if not isinstance(parsed, dict):
            raise ValueError("recommendations must be a JSON object")
        # Accept both the bare sections and an already wrapped payload.
        sections = parsed.get("data", parsed)
        return {
            "success": True,
            "data": {key: _as_list(sections.get(key)) for key in FULL_SECTIONS},
        }

    async def recommend_single(self, data: PublicData, user_prompt: str) -> list[str]:
        content = await self._complete(
            _SINGLE_SYSTEM_PROMPT,
            f"Dataset: {describe_dataset(data)}\nQuestion: {user_prompt}",
            feature="utilization_single",
            context=data.file_data_name,
        )
        try:
            parsed = parse_json_response(content)
        except ValueError:
            # Plain prose: one recommendation per line.
            return [line.strip("-• ").strip() for line in content.splitlines() if line.strip()]
        if isinstance(parsed, dict):
            parsed = next((v for v in parsed.values() if isinstance(v, list)), [])
        return _as_list(parsed)

    async def _complete(self, system_prompt: str, user_content: str, *, feature: str, context: str | None) -> str:
        messages = [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_content),
        ]
        start = time.monotonic()
        try:
            result = await self._chat_provider.complete(
                messages=messages,
                model=self._model,
                temperature=0.7,
                max_tokens=1500,
            )
        except Exception as exc:
            await self._usage_logger.log_error(
                model=self._model,
                provider=self._chat_provider.provider_name,
                feature=feature,
                duration_ms=int((time.monotonic() - start) * 1000),
                error=exc,
                request_context=context,
            )
            raise

        await self._usage_logger.log_request(
            model=result.model or self._model,
            provider=result.provider or self._chat_provider.provider_name,
            feature=feature,
            usage=result.usage,
            duration_ms=int((time.monotonic() - start) * 1000),
            request_context=context,
        )
        return result.content


def _as_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(v) for v in value if str(v).strip()]
    if isinstance(value, str) and value.strip():
        return [value.strip()]
    return []
