"""Heuristic relevance scoring for catalog search results.

Signals are additive integers. Provider-agency hits dominate because most
prompts name a region and regional datasets are published by that region's
agencies; the primary (first) keyword earns an extra bonus on top.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable

from oda.domain.entities import PublicData, ScoredCandidate
from oda.domain.vocabulary import SPECIAL_TERMS, is_region_keyword

logger = logging.getLogger(__name__)

# Per-keyword signals
_W_AGENCY = 200
_W_NAME_PREFIX = 150
_W_TAG_EXACT = 100
_W_TAG_PARTIAL = 60
_W_NAME = 40
_W_TITLE = 25
_W_DESCRIPTION = 30
_W_CLASSIFICATION = 20

# Once per record
_W_PHRASE_IN_DESCRIPTION = 50
_W_SPECIAL_TERM = 25
_W_DENSITY = 20
_DENSITY_THRESHOLD = 2
_W_RECENT = 20

# Primary keyword, region
_W_PRIMARY_REGION_AGENCY = 100
_W_PRIMARY_REGION_NAME_PREFIX = 80
_W_PRIMARY_REGION_NAME = 50
_W_PRIMARY_REGION_DESCRIPTION = 40

# Primary keyword, anything else
_W_PRIMARY_AGENCY = 30
_W_PRIMARY_NAME = 20
_W_PRIMARY_DESCRIPTION = 25


def _lower(value: str | None) -> str:
    return value.lower() if value else ""


def _has_exact_tag(tags: str, keyword: str) -> bool:
    return any(tag.strip() == keyword for tag in tags.split(","))


def _occurrences(text: str, keyword: str) -> int:
    """Occurrences of ``keyword`` in ``text``, measured by removed length."""
    return (len(text) - len(text.replace(keyword, ""))) // max(len(keyword), 1)


def _one_year_before(now: datetime) -> datetime:
    try:
        return now.replace(year=now.year - 1)
    except ValueError:  # Feb 29
        return now - timedelta(days=365)


class RelevanceScorer:
    """Scores and ranks datasets against an ordered keyword list."""

    def __init__(self, special_terms: Iterable[str] = SPECIAL_TERMS):
        self._special_terms = tuple(special_terms)

    def score(
        self,
        data: PublicData,
        keywords: list[str] | tuple[str, ...],
        prompt: str = "",
        *,
        now: datetime | None = None,
    ) -> int:
        """Relevance of one record against the ordered keyword list; never negative."""
        name = _lower(data.file_data_name)
        tags = _lower(data.keywords)
        title = _lower(data.title)
        agency = _lower(data.provider_agency)
        description = _lower(data.description)
        classification = _lower(data.classification_system)
        lowered = [k.lower() for k in keywords]

        score = 0
        for keyword in lowered:
            if keyword in agency:
                score += _W_AGENCY
            if name.startswith(keyword):
                score += _W_NAME_PREFIX
            if tags and _has_exact_tag(tags, keyword):
                score += _W_TAG_EXACT
            elif keyword in tags:
                score += _W_TAG_PARTIAL
            if keyword in name:
                score += _W_NAME
            if keyword in title:
                score += _W_TITLE
            if keyword in description:
                score += _W_DESCRIPTION
            if classification and keyword in classification:
                score += _W_CLASSIFICATION

        if len(lowered) >= 2 and " ".join(lowered) in description:
            score += _W_PHRASE_IN_DESCRIPTION

        if lowered:
            score += self._primary_keyword_score(lowered[0], name, agency, description)

        score += self._description_score(description, lowered)

        if data.modified_date is not None:
            reference = now or datetime.now(data.modified_date.tzinfo)
            if (reference.tzinfo is None) != (data.modified_date.tzinfo is None):
                reference = reference.replace(tzinfo=data.modified_date.tzinfo)
            if data.modified_date > _one_year_before(reference):
                score += _W_RECENT

        return max(0, score)

    def rank(
        self,
        records: list[PublicData],
        keywords: list[str] | tuple[str, ...],
        prompt: str = "",
        *,
        now: datetime | None = None,
    ) -> list[ScoredCandidate]:
        """Score every record and sort by descending score, ties in input order."""
        scored = [self._safe_score(r, keywords, prompt, now) for r in records]
        return sorted(scored, key=lambda c: c.score, reverse=True)

    def _safe_score(
        self,
        record: PublicData,
        keywords: list[str] | tuple[str, ...],
        prompt: str,
        now: datetime | None,
    ) -> ScoredCandidate:
        try:
            return ScoredCandidate(record=record, score=self.score(record, keywords, prompt, now=now))
        except Exception as exc:
            logger.warning(
                "Scoring failed for %r, ranking it with score 0: %s",
                record.file_data_name,
                exc,
            )
            return ScoredCandidate(record=record, score=0, error=exc)

    @staticmethod
    def _primary_keyword_score(primary: str, name: str, agency: str, description: str) -> int:
        score = 0
        if is_region_keyword(primary):
            if primary in agency:
                score += _W_PRIMARY_REGION_AGENCY
            if name.startswith(primary):
                score += _W_PRIMARY_REGION_NAME_PREFIX
            if primary in name:
                score += _W_PRIMARY_REGION_NAME
            if primary in description:
                score += _W_PRIMARY_REGION_DESCRIPTION
        else:
            if primary in agency:
                score += _W_PRIMARY_AGENCY
            if primary in name:
                score += _W_PRIMARY_NAME
            if primary in description:
                score += _W_PRIMARY_DESCRIPTION
        return score

    def _description_score(self, description: str, keywords: list[str]) -> int:
        if not description:
            return 0
        score = sum(_W_SPECIAL_TERM for term in self._special_terms if term in description)
        density = sum(_occurrences(description, k) for k in keywords if k)
        if density > _DENSITY_THRESHOLD:
            score += _W_DENSITY
        return score
