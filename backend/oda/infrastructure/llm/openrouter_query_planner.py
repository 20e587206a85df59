"""AI query planner — asks a chat model for the search plan.

The model returns ``{"majorCategory", "keywords", "limit"}``. Any failure
(provider error, unparseable output, no keywords) falls back to the local
rule-based planner, so planning never fails for a non-empty prompt.
"""

import logging
import time

from oda.application.interfaces import ChatProvider, QueryPlanner
from oda.application.services.llm_usage_logger import LLMUsageLogger
from oda.domain.entities import ChatMessage, QueryPlan
from oda.domain.vocabulary import GENERAL_CATEGORY, REGION_KEYWORDS
from oda.infrastructure.llm.json_response import parse_json_response
from oda.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("OpenRouterQueryPlanner")

_FEATURE = "query_plan"

_PLAN_SYSTEM_PROMPT = """\
You turn a Korean user's request for public datasets into a search plan.

Respond ONLY with JSON, no markdown:
{{"majorCategory": "<category or {general}>", "keywords": ["..."], "limit": <integer or null>}}

Rules:
1. keywords are short Korean search terms taken from the request.
2. If the request names a region, put its short form first. Short forms: {regions}.
3. majorCategory is a classification such as 교통, 환경, 교육, 보건, 복지, 관광;
   use "{general}" when unsure.
4. limit is the number of datasets the user asked for ("5개" → 5), else null.
"""


class OpenRouterQueryPlanner(QueryPlanner):
    """QueryPlanner backed by a ChatProvider, with a local fallback planner."""

    def __init__(
        self,
        chat_provider: ChatProvider,
        fallback: QueryPlanner,
        *,
        model: str,
        usage_logger: LLMUsageLogger | None = None,
        general_category: str = GENERAL_CATEGORY,
    ):
        self._chat_provider = chat_provider
        self._fallback = fallback
        self._model = model
        self._usage_logger = usage_logger or LLMUsageLogger()
        self._general_category = general_category

    async def create_plan(self, prompt: str) -> QueryPlan:
        try:
            return await self._plan_with_model(prompt)
        except Exception as exc:
            plog.step_error(PipelineStage.PLAN, "AI planning failed, using rule-based plan", error=exc)
            return await self._fallback.create_plan(prompt)

    async def _plan_with_model(self, prompt: str) -> QueryPlan:
        system_prompt = _PLAN_SYSTEM_PROMPT.format(
            general=self._general_category,
            regions=" ".join(sorted(REGION_KEYWORDS)),
        )
        messages = [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=prompt),
        ]

        start = time.monotonic()
        try:
            result = await self._chat_provider.complete(
                messages=messages,
                model=self._model,
                temperature=0.1,
                max_tokens=512,
            )
        except Exception as exc:
            await self._usage_logger.log_error(
                model=self._model,
                provider=self._chat_provider.provider_name,
                feature=_FEATURE,
                duration_ms=int((time.monotonic() - start) * 1000),
                error=exc,
                request_context=prompt,
            )
            raise

        await self._usage_logger.log_request(
            model=result.model or self._model,
            provider=result.provider or self._chat_provider.provider_name,
            feature=_FEATURE,
            usage=result.usage,
            duration_ms=int((time.monotonic() - start) * 1000),
            request_context=prompt,
        )

        plan = self.parse_plan(result.content)
        if not plan.keywords:
            raise ValueError("model returned no keywords")
        logger.info(
            "AI plan: category=%s keywords=%s limit=%s",
            plan.major_category,
            list(plan.keywords),
            plan.limit,
        )
        return plan

    @staticmethod
    def parse_plan(content: str) -> QueryPlan:
        """Build a plan from the model's JSON answer."""
        data = parse_json_response(content)
        if not isinstance(data, dict):
            raise ValueError("plan must be a JSON object")

        keywords = data.get("keywords") or []
        if isinstance(keywords, str):
            keywords = keywords.split(",")

        limit = data.get("limit")
        try:
            limit = int(limit) if limit is not None else None
        except (TypeError, ValueError):
            limit = None

        return QueryPlan.build(
            major_category=data.get("majorCategory"),
            keywords=keywords,
            limit=limit,
        )
