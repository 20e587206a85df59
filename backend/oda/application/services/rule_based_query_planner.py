"""Local query planner — keyword and category extraction without an AI call."""

import logging
import re

from oda.application.interfaces import QueryPlanner
from oda.application.services.prompt_analysis import MAX_RESULT_LIMIT, find_count_in_prompt
from oda.domain.entities import QueryPlan
from oda.domain.exceptions import QueryPlanningError
from oda.domain.vocabulary import GENERAL_CATEGORY, normalize_region

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"[가-힣A-Za-z0-9]+")
_COUNT_TOKEN = re.compile(r"^[0-9]+개")

# Trailing particles that rarely end a catalog noun, longest first.
_PARTICLES = (
    "에서", "으로", "에게", "까지", "부터", "이나",
    "의", "을", "를", "은", "는", "에", "와", "랑",
)

# Also the last syllable of common nouns (어린이, 평가, 결과). Stripped only from
# longer tokens that do not end in a known noun. 도/로/만 are never stripped
# (상수도, 도로, 항만).
_AMBIGUOUS_PARTICLES = ("이", "가", "과")
_AMBIGUOUS_MIN_LENGTH = 4
_NOUN_ENDINGS = (
    "어린이", "놀이", "높이", "길이", "넓이",
    "평가", "물가", "지가", "주가", "국가", "휴가",
    "결과", "효과", "성과", "학과", "교과",
)

_STOP_WORDS = frozenset({
    "데이터", "자료", "정보", "관련", "관한", "대한", "목록", "리스트", "공공", "공공데이터",
    "보여줘", "보여주세요", "찾아줘", "찾아주세요", "알려줘", "알려주세요",
    "검색", "검색해줘", "조회", "조회해줘", "제공", "제공해줘", "해줘", "주세요", "줘",
    "좀", "그리고", "및", "등", "있는", "있나요", "어떤", "싶어", "싶어요", "모든", "전체", "최신", "개",
    "현황", "내역", "자료들", "파일", "데이터셋",
})

# (hint contained in a keyword, category substring of the classification system)
_CATEGORY_HINTS: tuple[tuple[str, str], ...] = (
    ("교통", "교통"), ("버스", "교통"), ("지하철", "교통"), ("도로", "교통"),
    ("주차", "교통"), ("택시", "교통"), ("물류", "교통"),
    ("환경", "환경"), ("대기", "환경"), ("미세먼지", "환경"), ("수질", "환경"),
    ("폐기물", "환경"), ("오염", "환경"), ("기상", "환경"),
    ("교육", "교육"), ("학교", "교육"), ("학원", "교육"), ("도서관", "교육"),
    ("관광", "관광"), ("문화", "관광"), ("축제", "관광"), ("체육", "관광"), ("공연", "관광"),
    ("보건", "보건"), ("의료", "보건"), ("병원", "보건"), ("약국", "보건"),
    ("복지", "복지"), ("노인", "복지"), ("장애", "복지"), ("아동", "복지"),
    ("재난", "안전"), ("안전", "안전"), ("소방", "안전"), ("범죄", "안전"),
    ("농업", "농"), ("농산", "농"), ("축산", "농"), ("수산", "농"),
    ("산업", "산업"), ("기업", "산업"), ("고용", "산업"), ("일자리", "산업"),
    ("도시", "국토"), ("토지", "국토"), ("건축", "국토"), ("주택", "국토"),
    ("재정", "재정"), ("세금", "재정"), ("예산", "재정"),
)


class RuleBasedQueryPlanner(QueryPlanner):
    """Tokenizes the prompt, puts region keywords first and guesses the category."""

    def __init__(
        self,
        *,
        general_category: str = GENERAL_CATEGORY,
        max_limit: int = MAX_RESULT_LIMIT,
    ):
        self._general_category = general_category
        self._max_limit = max_limit

    async def create_plan(self, prompt: str) -> QueryPlan:
        if not prompt.strip():
            raise QueryPlanningError(prompt, "empty prompt")

        regions, others = self.extract_keywords(prompt)
        keywords = regions + others
        plan = QueryPlan.build(
            major_category=self.infer_category(others),
            keywords=keywords,
            limit=find_count_in_prompt(prompt, self._max_limit),
        )
        logger.info(
            "Rule-based plan: category=%s keywords=%s limit=%s",
            plan.major_category,
            list(plan.keywords),
            plan.limit,
        )
        return plan

    @staticmethod
    def extract_keywords(prompt: str) -> tuple[list[str], list[str]]:
        """Split prompt tokens into (region keywords, other keywords), each in prompt order."""
        regions: list[str] = []
        others: list[str] = []
        for token in _TOKEN_PATTERN.findall(prompt):
            if _COUNT_TOKEN.match(token) or token.isdigit():
                continue

            region = normalize_region(token)
            if region is None:
                token = _strip_particle(token)
                region = normalize_region(token)

            if region is not None:
                if region not in regions:
                    regions.append(region)
            elif token not in _STOP_WORDS and len(token) >= 2 and token not in others:
                others.append(token)
        return regions, others

    def infer_category(self, keywords: list[str]) -> str:
        for keyword in keywords:
            for hint, category in _CATEGORY_HINTS:
                if hint in keyword:
                    return category
        return self._general_category


def _strip_particle(token: str) -> str:
    for particle in _PARTICLES:
        if token.endswith(particle) and len(token) - len(particle) >= 2:
            return token[: -len(particle)]
    if len(token) >= _AMBIGUOUS_MIN_LENGTH and not token.endswith(_NOUN_ENDINGS):
        for particle in _AMBIGUOUS_PARTICLES:
            if token.endswith(particle):
                return token[: -len(particle)]
    return token
