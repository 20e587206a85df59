"""Unit tests for the rule-based and AI query planners."""

import pytest

from oda.application.services import LLMUsageLogger, RuleBasedQueryPlanner
from oda.domain.entities import QueryPlan
from oda.domain.exceptions import ChatProviderError, QueryPlanningError
from oda.infrastructure.llm.openrouter_query_planner import OpenRouterQueryPlanner

from fakes import FakeChatProvider, FakeServiceRequestLogRepository, FixedPlanner


# ── Rule-based ──


@pytest.mark.asyncio
async def test_rule_based_plan_puts_region_first():
    plan = await RuleBasedQueryPlanner().create_plan("교통 서울 데이터 5개")

    assert plan.keywords == ("서울", "교통")
    assert plan.major_category == "교통"
    assert plan.limit == 5


@pytest.mark.asyncio
async def test_rule_based_plan_normalizes_long_region_names():
    plan = await RuleBasedQueryPlanner().create_plan("경상남도 창원시 버스 정류장 위치를 알려줘")

    assert plan.keywords[0] == "경남"
    assert "위치" in plan.keywords
    assert "알려줘" not in plan.keywords
    assert plan.major_category == "교통"
    assert plan.limit is None


@pytest.mark.asyncio
async def test_rule_based_plan_strips_particles_before_region_lookup():
    plan = await RuleBasedQueryPlanner().create_plan("서울특별시의 미세먼지")

    assert plan.keywords == ("서울", "미세먼지")
    assert plan.major_category == "환경"


@pytest.mark.asyncio
async def test_rule_based_plan_keeps_nouns_ending_in_particle_syllables():
    plan = await RuleBasedQueryPlanner().create_plan("어린이 보호구역 자전거도로 데이터")

    assert plan.keywords == ("어린이", "보호구역", "자전거도로")
    assert plan.major_category == "교통"


@pytest.mark.asyncio
async def test_rule_based_plan_drops_filler_words():
    plan = await RuleBasedQueryPlanner().create_plan("대전 상수도 현황")
    assert plan.keywords == ("대전", "상수도")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("prompt", "keyword"),
    [
        ("환경영향평가", "환경영향평가"),
        ("건강검진결과", "건강검진결과"),
        ("미세먼지농도", "미세먼지농도"),
        ("부산항만", "부산항만"),
        ("주차장이", "주차장"),
        ("자전거도로를", "자전거도로"),
    ],
)
async def test_rule_based_plan_particle_stripping(prompt, keyword):
    plan = await RuleBasedQueryPlanner().create_plan(prompt)
    assert plan.keywords == (keyword,)


@pytest.mark.asyncio
async def test_rule_based_plan_defaults_to_general_category():
    plan = await RuleBasedQueryPlanner().create_plan("인구 통계")
    assert plan.major_category == "일반공공행정"


@pytest.mark.asyncio
async def test_rule_based_plan_rejects_empty_prompt():
    with pytest.raises(QueryPlanningError):
        await RuleBasedQueryPlanner().create_plan("   ")


def test_query_plan_build_cleans_keywords():
    plan = QueryPlan.build(" 교통 ", ["서울", " ", "서울", " 버스 "], 0)
    assert plan == QueryPlan(major_category="교통", keywords=("서울", "버스"), limit=None)
    assert plan.primary_keyword == "서울"


# ── OpenRouter planner ──


@pytest.mark.asyncio
async def test_ai_plan_is_parsed_and_logged():
    provider = FakeChatProvider({"majorCategory": "교통", "keywords": ["서울", "교통"], "limit": 5})
    log_repo = FakeServiceRequestLogRepository()
    fallback = FixedPlanner()
    planner = OpenRouterQueryPlanner(
        provider, fallback, model="test-model", usage_logger=LLMUsageLogger(log_repo)
    )

    plan = await planner.create_plan("서울 교통 5개")

    assert plan == QueryPlan(major_category="교통", keywords=("서울", "교통"), limit=5)
    assert fallback.prompts == []
    assert len(log_repo.logs) == 1
    assert log_repo.logs[0].feature == "query_plan"
    assert log_repo.logs[0].status == "success"
    assert log_repo.logs[0].total_tokens == 30


@pytest.mark.asyncio
async def test_ai_plan_tolerates_fences_and_prose():
    content = 'Here you go:\n{"majorCategory": "환경", "keywords": ["부산", "대기"], "limit": null}\nDone.'
    planner = OpenRouterQueryPlanner(FakeChatProvider(content), FixedPlanner(), model="m")
    plan = await planner.create_plan("부산 대기")
    assert plan.keywords == ("부산", "대기")

    fenced = '```json\n{"majorCategory": "환경", "keywords": "부산, 수질", "limit": "3"}\n```'
    plan = OpenRouterQueryPlanner.parse_plan(fenced)
    assert plan.keywords == ("부산", "수질")
    assert plan.limit == 3


@pytest.mark.asyncio
async def test_ai_planner_falls_back_on_provider_error():
    provider = FakeChatProvider(error=ChatProviderError("fake", 500, "boom"))
    log_repo = FakeServiceRequestLogRepository()
    fallback = FixedPlanner(QueryPlan.build(None, ["대체"], None))
    planner = OpenRouterQueryPlanner(provider, fallback, model="m", usage_logger=LLMUsageLogger(log_repo))

    plan = await planner.create_plan("아무거나")

    assert plan.keywords == ("대체",)
    assert fallback.prompts == ["아무거나"]
    assert log_repo.logs[0].status == "error"
    assert "boom" in log_repo.logs[0].error_message


@pytest.mark.asyncio
async def test_ai_planner_falls_back_on_unusable_answer():
    for content in ("not json at all", '{"majorCategory": "교통", "keywords": []}'):
        fallback = FixedPlanner(QueryPlan.build(None, ["대체"], None))
        planner = OpenRouterQueryPlanner(FakeChatProvider(content), fallback, model="m")
        assert (await planner.create_plan("교통")).keywords == ("대체",)
