"""Prompt service — answers a chat prompt from the dataset catalog.

Two flows:
  1. Detail lookup: extract a file name, resolve it exactly, by partial match
     (closest by edit distance) or report it missing, then format the record.
  2. Search: plan keywords → multi-field search per keyword → deduplicate
     → score and rank → truncate to the requested count.
"""

import logging
from datetime import datetime

from oda.application.interfaces import PublicDataRepository, QueryPlanner
from oda.application.services.detail_formatter import format_data_details
from oda.application.services.prompt_analysis import (
    DEFAULT_RESULT_LIMIT,
    MAX_RESULT_LIMIT,
    extract_file_name,
    is_detail_request,
    resolve_limit,
)
from oda.application.services.relevance_scorer import RelevanceScorer
from oda.application.services.search_executor import MultiFieldSearchExecutor
from oda.application.services.similarity import closest_match
from oda.domain.entities import PublicData, QueryPlan, ScoredCandidate
from oda.domain.vocabulary import GENERAL_CATEGORY, find_region
from oda.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("PromptService")

PIPELINE_ERROR_MESSAGE = "데이터를 조회하는 중 오류가 발생했습니다."
NO_RESULTS_MESSAGE = "해당 조건에 맞는 데이터를 찾을 수 없습니다."
MISSING_FILE_NAME_MESSAGE = "❌ 파일명을 찾을 수 없습니다. 정확한 파일명을 입력해주세요."
DETAIL_HINT_LINES = (
    "💡 특정 데이터에 대한 자세한 정보가 필요하시면",
    "'[파일명] 상세정보' 또는 '[파일명] 자세히'라고 말씀하세요.",
)
_HINT_MIN_RESULTS = 3
_TOP_LOGGED = 5


def file_not_found_message(file_name: str) -> str:
    return f"❌ 해당 파일명을 찾을 수 없습니다: {file_name}"


def region_shortage_messages(region: str, category: str) -> list[str]:
    return [
        f"해당 지역({region})의 데이터가 부족합니다.",
        "다른 지역의 유사한 데이터를 참고하거나",
        f"상위 카테고리({category})로 검색해보세요.",
    ]


class PromptService:
    """Application service behind the chat prompt endpoint."""

    def __init__(
        self,
        repository: PublicDataRepository,
        planner: QueryPlanner,
        *,
        scorer: RelevanceScorer | None = None,
        general_category: str = GENERAL_CATEGORY,
        default_limit: int = DEFAULT_RESULT_LIMIT,
        max_limit: int = MAX_RESULT_LIMIT,
        region_sufficient_hits: int = 10,
    ):
        self._repository = repository
        self._planner = planner
        self._scorer = scorer or RelevanceScorer()
        self._executor = MultiFieldSearchExecutor(
            repository,
            general_category=general_category,
            region_sufficient_hits=region_sufficient_hits,
        )
        self._general_category = general_category
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def process_prompt(self, prompt: str, *, now: datetime | None = None) -> list[str]:
        """Answer a prompt with either one detail report or a list of file names.

        Never raises: an unexpected failure becomes a single error line.
        """
        plog.separator(f"prompt: {prompt[:40]}")
        try:
            detail = is_detail_request(prompt)
            plog.step_complete(PipelineStage.CLASSIFY, "detail" if detail else "search")
            if detail:
                return [await self.get_data_details(prompt)]
            return await self.search(prompt, now=now)
        except Exception as exc:
            plog.step_error(PipelineStage.PIPELINE, "Prompt processing failed", error=exc)
            logger.exception("Prompt processing failed for %r", prompt)
            return [PIPELINE_ERROR_MESSAGE]

    async def get_data_details(self, prompt: str) -> str:
        """Detail report for the dataset named in a free-text prompt."""
        file_name = extract_file_name(prompt)
        if not file_name:
            logger.info("No file name found in detail prompt %r", prompt)
            return MISSING_FILE_NAME_MESSAGE
        return await self.lookup_details(file_name)

    async def lookup_details(self, file_name: str) -> str:
        """Exact match, else the closest partial match, else a not-found message."""
        plog.step_start(PipelineStage.DETAIL, "Looking up dataset", file_name=file_name)

        record = await self._repository.find_by_file_data_name(file_name)
        if record is not None:
            plog.step_complete(PipelineStage.DETAIL, "Exact match")
            return format_data_details(record)

        candidates = await self._repository.find_by_file_data_name_containing(file_name)
        named = [c for c in candidates if c.has_name]
        if named:
            best = closest_match(file_name, named)
            plog.step_complete(
                PipelineStage.DETAIL,
                "Closest partial match",
                candidates=len(named),
                chosen=best.file_data_name,
            )
            return format_data_details(best)

        plog.step_complete(PipelineStage.DETAIL, "No match")
        return file_not_found_message(file_name)

    async def search(self, prompt: str, *, now: datetime | None = None) -> list[str]:
        """Search flow. Keyword, filter and scoring failures degrade to partial results; planner errors propagate."""
        plog.step_start(PipelineStage.PLAN, "Planning query")
        plan = await self._planner.create_plan(prompt)
        limit = resolve_limit(
            prompt,
            plan.limit,
            default=self._default_limit,
            max_limit=self._max_limit,
        )
        plog.step_complete(
            PipelineStage.PLAN,
            "Plan ready",
            category=plan.major_category,
            keywords=list(plan.keywords),
            limit=limit,
        )

        ranked = await self.rank_candidates(plan, prompt, now=now)
        return self.assemble_results(ranked, plan, limit)

    async def rank_candidates(
        self,
        plan: QueryPlan,
        prompt: str = "",
        *,
        now: datetime | None = None,
    ) -> list[ScoredCandidate]:
        plog.step_start(PipelineStage.SEARCH, f"Searching {len(plan.keywords)} keywords")
        outcomes = await self._executor.search(plan.keywords, plan.major_category)
        combined: list[PublicData] = []
        for outcome in outcomes:
            if outcome.failed:
                plog.step_error(PipelineStage.SEARCH, f"Skipped {outcome.keyword!r}", error=outcome.error)
                continue
            if outcome.dropped_by_filter:
                plog.step_complete(
                    PipelineStage.FILTER,
                    f"{outcome.keyword}: {outcome.dropped_by_filter} dropped",
                    category=plan.major_category,
                )
            combined.extend(outcome.records)
        plog.step_complete(PipelineStage.SEARCH, f"{len(combined)} candidates")

        deduped = self._executor.deduplicate(combined)
        if deduped.fallback_error is not None:
            plog.step_error(PipelineStage.DEDUP, "Fell back to identity", error=deduped.fallback_error)
        plog.step_complete(PipelineStage.DEDUP, f"{len(deduped.records)} unique datasets")

        ranked = self._scorer.rank(deduped.records, plan.keywords, prompt, now=now)
        for position, candidate in enumerate(ranked[:_TOP_LOGGED], start=1):
            plog.detail(f"#{position} {candidate.record.file_data_name}", score=candidate.score)
        plog.step_complete(PipelineStage.RANK, f"{len(ranked)} ranked")
        return ranked

    def assemble_results(
        self,
        ranked: list[ScoredCandidate],
        plan: QueryPlan,
        limit: int,
    ) -> list[str]:
        if not ranked:
            region = find_region(plan.keywords)
            if region is not None:
                return region_shortage_messages(region, plan.major_category or self._general_category)
            return [NO_RESULTS_MESSAGE]

        names = [
            c.record.file_data_name
            for c in ranked
            if c.record.file_data_name and c.record.file_data_name.strip()
        ][:limit]
        if len(names) >= _HINT_MIN_RESULTS:
            names.extend(DETAIL_HINT_LINES)
        plog.step_complete(PipelineStage.COMPLETE, f"Returning {len(names)} lines")
        return names
