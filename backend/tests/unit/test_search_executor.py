"""Unit tests for the MultiFieldSearchExecutor."""

import pytest

from oda.application.services.search_executor import MultiFieldSearchExecutor
from oda.domain.entities import PublicData

from fakes import FakePublicDataRepository, make_data


def _fields_called(repo: FakePublicDataRepository, keyword: str) -> list[str]:
    return [field for field, text in repo.calls if text == keyword]


@pytest.mark.asyncio
async def test_region_keyword_with_enough_hits_skips_other_fields():
    records = [make_data(f"서울특별시_데이터{i}_20240101", agency="서울특별시") for i in range(10)]
    repo = FakePublicDataRepository(records)
    executor = MultiFieldSearchExecutor(repo)

    outcome = await executor.search_keyword("서울")

    assert len(outcome.records) == 10
    assert _fields_called(repo, "서울") == ["provider_agency", "file_data_name"]


@pytest.mark.asyncio
async def test_region_keyword_with_few_hits_searches_remaining_fields():
    repo = FakePublicDataRepository([
        make_data("a", agency="제주특별자치도"),
        make_data("b", title="제주 관광지"),
    ])
    executor = MultiFieldSearchExecutor(repo)

    outcome = await executor.search_keyword("제주")

    assert [r.file_data_name for r in outcome.records] == ["a", "b"]
    assert _fields_called(repo, "제주") == [
        "provider_agency", "file_data_name", "keywords", "title", "description",
    ]


@pytest.mark.asyncio
async def test_non_region_keyword_searches_all_fields_once_per_record():
    repo = FakePublicDataRepository([
        make_data("교통량", title="교통량", keywords="교통", description="교통 통계"),
    ])
    executor = MultiFieldSearchExecutor(repo)

    outcome = await executor.search_keyword("교통")

    assert len(outcome.records) == 1
    assert _fields_called(repo, "교통") == [
        "keywords", "title", "provider_agency", "file_data_name", "description",
    ]


@pytest.mark.asyncio
async def test_unnamed_records_are_excluded():
    repo = FakePublicDataRepository([make_data(None, title="교통"), make_data("  ", title="교통")])
    outcome = await MultiFieldSearchExecutor(repo).search_keyword("교통")
    assert outcome.records == []


@pytest.mark.asyncio
async def test_failing_keyword_is_reported_and_others_continue():
    records = [make_data("환경_현황", title="환경")]
    records += [make_data(f"부산_{i}", agency="부산광역시") for i in range(10)]
    repo = FakePublicDataRepository(records, failing_fields={"title"})
    executor = MultiFieldSearchExecutor(repo)

    outcomes = await executor.search(["환경", "부산"])

    assert outcomes[0].failed
    assert outcomes[0].records == []
    assert not outcomes[1].failed
    assert len(outcomes[1].records) == 10


@pytest.mark.asyncio
async def test_region_keyword_short_circuit_avoids_failing_field():
    records = [make_data(f"부산_{i}", agency="부산광역시") for i in range(12)]
    repo = FakePublicDataRepository(records, failing_fields={"description"})
    outcomes = await MultiFieldSearchExecutor(repo).search(["부산"])
    assert not outcomes[0].failed
    assert len(outcomes[0].records) == 12


@pytest.mark.asyncio
async def test_category_filter_is_case_insensitive_substring():
    repo = FakePublicDataRepository([
        make_data("a", title="버스", classification="교통및물류 - 도로"),
        make_data("b", title="버스", classification="환경"),
        make_data("c", title="버스", classification="IT - Transport"),
    ])
    executor = MultiFieldSearchExecutor(repo)

    outcome = await executor.search_keyword("버스", "교통")
    assert [r.file_data_name for r in outcome.records] == ["a"]
    assert outcome.dropped_by_filter == 2

    outcome = await executor.search_keyword("버스", "transport")
    assert [r.file_data_name for r in outcome.records] == ["c"]


@pytest.mark.asyncio
async def test_general_category_disables_filter():
    repo = FakePublicDataRepository([make_data("a", title="버스", classification="환경")])
    executor = MultiFieldSearchExecutor(repo)
    for category in (None, "일반공공행정"):
        outcome = await executor.search_keyword("버스", category)
        assert len(outcome.records) == 1


def test_filter_drops_record_whose_check_raises():
    executor = MultiFieldSearchExecutor(FakePublicDataRepository())
    broken = PublicData(file_data_name="broken", classification_system=42)
    kept, dropped = executor.filter_by_category([broken, make_data("ok", classification="교통")], "교통")
    assert [r.file_data_name for r in kept] == ["ok"]
    assert dropped == 1


def test_deduplicate_keeps_first_occurrence():
    first = make_data("same", title="first")
    second = make_data("same", title="second")
    other = make_data("other")

    outcome = MultiFieldSearchExecutor.deduplicate([first, other, second])

    assert outcome.records == [first, other]
    assert outcome.records[0].title == "first"
    assert outcome.fallback_error is None


def test_deduplicate_drops_unnamed():
    outcome = MultiFieldSearchExecutor.deduplicate([make_data(None), make_data("a")])
    assert [r.file_data_name for r in outcome.records] == ["a"]


def test_deduplicate_falls_back_to_identity_when_names_are_unhashable():
    odd = PublicData(file_data_name=["x"])
    named = make_data("a")

    outcome = MultiFieldSearchExecutor.deduplicate([odd, make_data(None), odd, named, named])

    assert isinstance(outcome.fallback_error, TypeError)
    assert outcome.records == [odd, named]
    assert outcome.records[0] is odd
