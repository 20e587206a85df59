"""Utilization service — how could a dataset be used?

Looks the dataset up in the catalog and asks the AI recommender. When no
recommender is configured or the call fails, category-based default
recommendations are returned instead.
"""

import logging
from typing import Any

from oda.application.interfaces import PublicDataRepository, UtilizationRecommender
from oda.domain.entities import PublicData
from oda.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("UtilizationService")

SINGLE_FAILURE_MESSAGE = "단일 활용 방안을 가져오는 데 실패했습니다."
NO_ITEMS = "관련 데이터 없음"

_HEADER = "💡 데이터 활용 추천"
_RULE = "═" * 50

_AI_SECTIONS = (
    ("🏢 비즈니스 활용 방안", "businessApplications"),
    ("🔬 연구 활용 방안", "researchApplications"),
    ("🏛️ 정책 활용 방안", "policyApplications"),
)

_DEFAULT_BUSINESS: dict[str, list[str]] = {
    "환경": ["환경 컨설팅 서비스 개발", "환경 모니터링 솔루션 구축", "친환경 제품 개발 근거 자료"],
    "교통": ["교통 최적화 서비스 개발", "스마트 시티 솔루션 구축", "교통 안전 컨설팅 서비스"],
}
_DEFAULT_BUSINESS_OTHER = ["데이터 기반 서비스 개발", "관련 분야 컨설팅 서비스", "정부 사업 입찰 시 활용"]

_DEFAULT_TEXT_SECTIONS = (
    ("🔬 연구 활용 방안", ["현황 분석 및 트렌드 연구", "정책 효과성 분석 연구", "지역별 비교 연구"]),
    ("🏛️ 정책 활용 방안", ["정책 수립 근거 자료로 활용", "예산 배분 참고 자료", "성과 평가 지표 개발"]),
    ("🔗 데이터 결합 제안", ["인구 통계 데이터와 결합", "경제 지표와 상관관계 분석", "지리 정보와 공간 분석"]),
    ("🛠️ 추천 분석 도구", ["Excel 및 Google Sheets", "Python pandas 및 matplotlib", "R 통계 분석 및 시각화"]),
)


def not_found_message(file_name: str) -> str:
    return f"❌ 해당 파일명을 찾을 수 없습니다: {file_name}"


def default_full_recommendations() -> dict[str, Any]:
    """Dashboard payload used when the AI recommender is unavailable."""
    return {
        "success": True,
        "data": {
            "businessApplications": ["데이터 기반 비즈니스 서비스 개발", "관련 분야 컨설팅 사업", "정부 사업 입찰 참여"],
            "researchApplications": ["현황 분석 및 트렌드 연구", "정책 효과성 분석", "지역별 비교 연구"],
            "policyApplications": ["정책 수립 근거 자료", "예산 배분 참고", "성과 평가 지표"],
            "combinationSuggestions": ["인구 통계 데이터", "경제 지표 데이터", "지리 정보 데이터"],
            "analysisTools": ["Excel/Google Sheets", "Python pandas", "R 통계 분석"],
        },
    }


def _section(title: str, items: Any) -> list[str]:
    lines = [f"{title}:"]
    if isinstance(items, list):
        lines += [f"  • {item}" for item in items]
    else:
        lines.append(f"  • {NO_ITEMS}")
    lines.append("")
    return lines


def format_recommendations(response: dict[str, Any]) -> str:
    """Render the business/research/policy sections of an AI payload."""
    lines = [_HEADER, _RULE, ""]
    data = response.get("data")
    if isinstance(data, dict):
        for title, key in _AI_SECTIONS:
            lines += _section(title, data.get(key))
    return "\n".join(lines) + "\n"


def default_recommendations_text(data: PublicData) -> str:
    """Text recommendations chosen by the dataset's classification."""
    category = (data.classification_system or "").lower()
    business = next(
        (items for hint, items in _DEFAULT_BUSINESS.items() if hint in category),
        _DEFAULT_BUSINESS_OTHER,
    )
    lines = [_HEADER, _RULE, ""]
    lines += _section("🏢 비즈니스 활용 방안", business)
    for title, items in _DEFAULT_TEXT_SECTIONS:
        lines += _section(title, items)
    # No blank line after the last section.
    return "\n".join(lines[:-1]) + "\n"


class UtilizationService:
    """Application service for dataset utilization recommendations."""

    def __init__(
        self,
        repository: PublicDataRepository,
        recommender: UtilizationRecommender | None = None,
    ):
        self._repository = repository
        self._recommender = recommender

    async def get_utilization_recommendations(self, file_data_name: str) -> str:
        """Formatted recommendations; falls back to the first partial name match."""
        logger.info("Utilization recommendations requested for %r", file_data_name)
        data = await self._repository.find_by_file_data_name(file_data_name)
        if data is None:
            partial = await self._repository.find_by_file_data_name_containing(file_data_name)
            if not partial:
                return not_found_message(file_data_name)
            data = partial[0]

        try:
            response = await self._recommend_full(data)
        except Exception as exc:
            plog.step_error(PipelineStage.RECOMMEND, "AI recommendation failed, using defaults", error=exc)
            return default_recommendations_text(data)
        return format_recommendations(response)

    async def get_single_utilization_recommendation(
        self, file_data_name: str, user_prompt: str
    ) -> list[str]:
        logger.info("Single utilization requested: file=%r prompt=%r", file_data_name, user_prompt)
        data = await self._repository.find_by_file_data_name(file_data_name)
        if data is None:
            return [not_found_message(file_data_name)]

        try:
            if self._recommender is None:
                raise RuntimeError("no utilization recommender configured")
            plog.step_start(PipelineStage.RECOMMEND, "Single recommendation", file=file_data_name)
            recommendations = await self._recommender.recommend_single(data, user_prompt)
        except Exception as exc:
            plog.step_error(PipelineStage.RECOMMEND, "Single recommendation failed", error=exc)
            return [SINGLE_FAILURE_MESSAGE]
        plog.step_complete(PipelineStage.RECOMMEND, f"{len(recommendations)} recommendations")
        return recommendations

    async def get_full_utilization_recommendations(self, file_data_name: str) -> dict[str, Any]:
        """Dashboard payload; exact name match only."""
        logger.info("Full utilization requested for %r", file_data_name)
        data = await self._repository.find_by_file_data_name(file_data_name)
        if data is None:
            return {"error": f"파일을 찾을 수 없습니다: {file_data_name}"}

        try:
            return await self._recommend_full(data)
        except Exception as exc:
            plog.step_error(PipelineStage.RECOMMEND, "Full recommendation failed, using defaults", error=exc)
            return default_full_recommendations()

    async def _recommend_full(self, data: PublicData) -> dict[str, Any]:
        if self._recommender is None:
            raise RuntimeError("no utilization recommender configured")
        plog.step_start(PipelineStage.RECOMMEND, "Full recommendation", file=data.file_data_name)
        response = await self._recommender.recommend_full(data)
        plog.step_complete(PipelineStage.RECOMMEND, "Recommendations received")
        return response
