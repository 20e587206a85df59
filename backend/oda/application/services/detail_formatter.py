"""Human-readable detail report for a single dataset."""

from datetime import datetime

from oda.domain.entities import PublicData

MISSING = "정보 없음"

_HEADER = "📋 데이터 상세 정보"
_RULE = "═" * 50
_DESCRIPTION_RULE = "-" * 30


def _or_missing(value: str | datetime | None) -> str:
    if value is None:
        return MISSING
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def format_data_details(data: PublicData) -> str:
    """Render every catalog field; absent values show as "정보 없음"."""
    lines = [
        _HEADER,
        _RULE,
        "",
        f"📄 파일명: {_or_missing(data.file_data_name)}",
        "",
        f"🏷️ 제목: {_or_missing(data.title)}",
        "",
        f"📂 분류체계: {_or_missing(data.classification_system)}",
        "",
        f"🏢 제공기관: {_or_missing(data.provider_agency)}",
        "",
        f"📅 수정일: {_or_missing(data.modified_date)}",
        "",
        f"📎 확장자: {_or_missing(data.file_extension)}",
        "",
        f"🔑 키워드: {_or_missing(data.keywords)}",
        "",
    ]
    if data.description and data.description.strip():
        lines += ["📝 상세 설명:", _DESCRIPTION_RULE, data.description]
    else:
        lines.append(f"📝 상세 설명: {MISSING}")
    return "\n".join(lines) + "\n"
