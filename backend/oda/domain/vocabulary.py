"""Static keyword tables shared by the planner, search executor and scorer."""

# First-level administrative divisions, short form.
REGION_KEYWORDS: frozenset[str] = frozenset({
    "서울", "부산", "대구", "인천", "광주", "대전", "울산", "세종",
    "경기", "강원", "충북", "충남", "전북", "전남", "경북", "경남", "제주",
})

# Long forms that normalize to a region keyword.
REGION_ALIASES: dict[str, str] = {
    "충청북도": "충북",
    "충청남도": "충남",
    "전라북도": "전북",
    "전북특별자치도": "전북",
    "전라남도": "전남",
    "경상북도": "경북",
    "경상남도": "경남",
    "강원도": "강원",
    "강원특별자치도": "강원",
    "경기도": "경기",
    "제주도": "제주",
    "제주특별자치도": "제주",
    "세종특별자치시": "세종",
}

# Administrative suffixes stripped from "서울특별시", "부산광역시", "대구시", ...
REGION_SUFFIXES: tuple[str, ...] = ("특별자치시", "특별자치도", "특별시", "광역시", "시", "도")

# Domain terms that mark a description as substantive.
SPECIAL_TERMS: tuple[str, ...] = (
    "도시개발", "토지구획", "재개발", "재정비", "환지", "감보율", "시행인가",
    "대기오염", "수질오염", "폐기물", "배출시설", "환경영향", "오염물질",
    "교통사고", "교통위반", "교통체계", "대중교통", "교통량", "신호체계",
    "교육과정", "학습", "연구", "교육시설", "교육프로그램",
    "문화재", "관광지", "문화시설", "예술", "공연", "축제",
)

GENERAL_CATEGORY = "일반공공행정"


def is_region_keyword(keyword: str | None) -> bool:
    return keyword in REGION_KEYWORDS


def normalize_region(token: str) -> str | None:
    """Map a region spelling to its short keyword, or None if it is not a region."""
    if token in REGION_KEYWORDS:
        return token
    if token in REGION_ALIASES:
        return REGION_ALIASES[token]
    for suffix in REGION_SUFFIXES:
        if token.endswith(suffix):
            stem = token[: -len(suffix)]
            if stem in REGION_KEYWORDS:
                return stem
    return None


def find_region(keywords: list[str] | tuple[str, ...]) -> str | None:
    """First region keyword in the list, if any."""
    return next((k for k in keywords if is_region_keyword(k)), None)
