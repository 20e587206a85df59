"""Unit tests for prompt classification, file name and count extraction."""

import pytest

from oda.application.services.prompt_analysis import (
    extract_count_from_prompt,
    extract_file_name,
    find_count_in_prompt,
    is_detail_request,
    resolve_limit,
)


# ── Classifier ──


@pytest.mark.parametrize(
    "prompt",
    [
        "XYZ_20230101 상세정보",
        "서울시 교통량 자세히",
        "이 파일에 대해 더 알고 싶어요",
        "부산광역시 해운대구_관광지_20240101 상세",
    ],
)
def test_detail_markers_are_detail_requests(prompt):
    assert is_detail_request(prompt) is True


@pytest.mark.parametrize("veto", ["검색", "제공", "보여", "찾아", "3개"])
def test_veto_marker_flips_detail_request(veto):
    assert is_detail_request("XYZ_20230101 상세정보") is True
    assert is_detail_request(f"XYZ_20230101 상세정보 {veto}") is False


def test_generic_detail_marker_with_data_word_is_search():
    assert is_detail_request("서울 상세 데이터") is False


def test_plain_search_prompt_is_not_detail():
    assert is_detail_request("서울 교통 데이터 5개") is False


# ── File name extraction ──


def test_extract_full_metropolitan_pattern():
    prompt = "대구광역시 가구_인구통계_20231231 상세정보 알려줘"
    assert extract_file_name(prompt) == "대구광역시 가구_인구통계_20231231"


def test_extract_partial_pattern():
    assert extract_file_name("XYZ_20230101 상세정보") == "XYZ_20230101"


def test_extract_partial_pattern_keeps_underscored_prefix():
    assert extract_file_name("서울특별시_교통량_20240101 자세히") == "서울특별시_교통량_20240101"


def test_extract_falls_back_to_phrase_stripping():
    assert extract_file_name("버스정류장 현황 상세정보") == "버스정류장 현황"


def test_extract_fallback_may_be_empty():
    assert extract_file_name("상세정보") == ""


# ── Counts and limits ──


@pytest.mark.parametrize(
    ("prompt", "expected"),
    [
        ("서울 교통 데이터 5개", 5),
        ("환경 데이터 30개", 30),
        ("환경 데이터 100개 보여줘", 30),
        ("환경 데이터 보여줘", 12),
    ],
)
def test_extract_count_from_prompt(prompt, expected):
    assert extract_count_from_prompt(prompt) == expected


def test_find_count_absent_is_none():
    assert find_count_in_prompt("교통 데이터") is None


def test_resolve_limit_prefers_smaller_of_prompt_and_plan():
    assert resolve_limit("교통 5개", 3) == 3
    assert resolve_limit("교통 5개", 8) == 5


def test_resolve_limit_plan_only_is_capped():
    assert resolve_limit("교통", 7) == 7
    assert resolve_limit("교통", 50) == 30


def test_resolve_limit_defaults():
    assert resolve_limit("교통", None) == 12
    assert resolve_limit("교통 4개", None) == 4
    assert resolve_limit("교통", 0) == 12
