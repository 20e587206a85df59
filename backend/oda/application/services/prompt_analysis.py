"""Prompt heuristics — detail/search classification, file name and count extraction.

Detail requests ask for the full metadata of one dataset and are rare; any
sign of general-search phrasing overrides a detail marker. File names follow
the portal's ``<기관>_<설명>_<YYYYMMDD>`` convention, so the extractor prefers
structural matches over guessing from the residual text.
"""

import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_RESULT_LIMIT = 12
MAX_RESULT_LIMIT = 30

_DETAIL_MARKERS = ("상세정보", "자세히", "더 알고")
_GENERIC_DETAIL_MARKER = "상세"
_DATA_MARKER = "데이터"  # "상세 데이터" is search phrasing
_SEARCH_MARKERS = ("제공", "보여", "검색", "찾아")

_COUNT_PATTERN = re.compile(r"(\d+)개")

# Tier 1: "<...>광역시 <구>_<설명>_<YYYYMMDD>"
_FULL_FILE_PATTERN = re.compile(
    r"([가-힣a-zA-Z0-9]+광역시\s[가-구]+_[가-힣a-zA-Z0-9\s]+_[0-9]{8})"
)
# Tier 2: anything ending in "_<YYYYMMDD>"
_PARTIAL_FILE_PATTERN = re.compile(r"([가-힣a-zA-Z0-9_\s]+_[0-9]{8})")
# Tier 3: phrases and particles removed from the raw prompt
_STRIP_PATTERN = re.compile(
    r"(상세정보|자세히|더 알고|상세|에 대해|에 대한|의|을|를)", re.IGNORECASE
)


def is_detail_request(prompt: str) -> bool:
    """Decide whether the prompt asks for one dataset's details."""
    text = prompt.lower().strip()

    has_detail_marker = any(marker in text for marker in _DETAIL_MARKERS) or (
        _GENERIC_DETAIL_MARKER in text and _DATA_MARKER not in text
    )
    if not has_detail_marker:
        return False

    if _COUNT_PATTERN.search(text):
        return False
    return not any(marker in text for marker in _SEARCH_MARKERS)


def extract_file_name(prompt: str) -> str:
    """Best-effort file name from free text; never None, possibly empty."""
    match = _FULL_FILE_PATTERN.search(prompt)
    if match:
        file_name = match.group(1).strip()
        logger.info("File name from full pattern: %r", file_name)
        return file_name

    match = _PARTIAL_FILE_PATTERN.search(prompt)
    if match:
        file_name = match.group(1).strip()
        logger.info("File name from partial pattern: %r", file_name)
        return file_name

    file_name = _STRIP_PATTERN.sub("", prompt).strip()
    logger.info("File name from phrase stripping: %r", file_name)
    return file_name


def find_count_in_prompt(prompt: str, max_limit: int = MAX_RESULT_LIMIT) -> int | None:
    """Requested result count ("5개"), capped at ``max_limit``; None when absent."""
    match = _COUNT_PATTERN.search(prompt)
    if not match:
        return None
    count = min(int(match.group(1)), max_limit)
    logger.info("Result count from prompt: %d", count)
    return count


def extract_count_from_prompt(
    prompt: str,
    *,
    default: int = DEFAULT_RESULT_LIMIT,
    max_limit: int = MAX_RESULT_LIMIT,
) -> int:
    count = find_count_in_prompt(prompt, max_limit)
    return default if count is None else count


def resolve_limit(
    prompt: str,
    plan_limit: int | None,
    *,
    default: int = DEFAULT_RESULT_LIMIT,
    max_limit: int = MAX_RESULT_LIMIT,
) -> int:
    """Combine the prompt's explicit count with the planner's suggestion.

    Both present → the smaller one; only one → that one; neither → default.
    """
    count = find_count_in_prompt(prompt, max_limit)
    if plan_limit is not None and plan_limit > 0:
        plan_limit = min(plan_limit, max_limit)
        return plan_limit if count is None else min(count, plan_limit)
    return default if count is None else count
