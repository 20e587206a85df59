"""Unit tests for edit-distance matching."""

import pytest

from oda.application.services.similarity import closest_match, levenshtein_distance

from fakes import make_data


@pytest.mark.parametrize(
    ("a", "b", "expected"),
    [
        ("", "abc", 3),
        ("abc", "", 3),
        ("kitten", "sitting", 3),
        ("교통량_2023", "교통량_2024", 1),
        ("flaw", "lawn", 2),
    ],
)
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected


@pytest.mark.parametrize("a, b", [("서울시 버스", "서울 버스노선"), ("abc", "yabd"), ("", "x")])
def test_distance_is_symmetric(a, b):
    assert levenshtein_distance(a, b) == levenshtein_distance(b, a)


def test_distance_to_self_is_zero():
    assert levenshtein_distance("부산광역시_관광지_20240101", "부산광역시_관광지_20240101") == 0


def test_closest_match_picks_minimum_distance():
    candidates = [
        make_data("서울특별시_교통량_통계_20230101"),
        make_data("서울특별시_교통량_20230101"),
    ]
    best = closest_match("서울특별시_교통량", candidates)
    assert best.file_data_name == "서울특별시_교통량_20230101"


def test_closest_match_tie_keeps_first():
    candidates = [make_data("ab1"), make_data("ab2")]
    assert closest_match("ab", candidates) is candidates[0]


def test_closest_match_empty():
    assert closest_match("anything", []) is None
