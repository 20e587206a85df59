"""Multi-field catalog search — one keyword at a time, region-aware.

For a region keyword the agency and file-name columns are searched first and
the remaining columns only when those produce too few hits. Every other
keyword is searched in all five columns. Keywords are processed sequentially;
a failing keyword is reported in its outcome and does not affect the others.
"""

import logging
from collections.abc import Awaitable, Callable

from oda.application.interfaces import PublicDataRepository
from oda.domain.entities import DeduplicationOutcome, KeywordSearchOutcome, PublicData
from oda.domain.vocabulary import GENERAL_CATEGORY, is_region_keyword

logger = logging.getLogger(__name__)

_Lookup = Callable[[str], Awaitable[list[PublicData]]]

_ALL_FIELDS = ("keywords", "title", "provider_agency", "file_data_name", "description")
_REGION_FIELDS = ("provider_agency", "file_data_name")
_REGION_FALLBACK_FIELDS = ("keywords", "title", "description")


class MultiFieldSearchExecutor:
    """Runs the per-keyword, per-field repository lookups for a query plan."""

    def __init__(
        self,
        repository: PublicDataRepository,
        *,
        general_category: str = GENERAL_CATEGORY,
        region_sufficient_hits: int = 10,
    ):
        self._repository = repository
        self._general_category = general_category
        self._region_sufficient_hits = region_sufficient_hits
        self._lookups: dict[str, _Lookup] = {
            "keywords": repository.find_by_keywords_containing,
            "title": repository.find_by_title_containing,
            "provider_agency": repository.find_by_provider_agency_containing,
            "file_data_name": repository.find_by_file_data_name_containing,
            "description": repository.find_by_description_containing,
        }

    async def search(
        self,
        keywords: list[str] | tuple[str, ...],
        major_category: str | None = None,
    ) -> list[KeywordSearchOutcome]:
        """Search every keyword in order and return one outcome per keyword."""
        outcomes = []
        for keyword in keywords:
            outcome = await self.search_keyword(keyword, major_category)
            if outcome.failed:
                logger.error("Search for keyword %r failed: %s", keyword, outcome.error)
            else:
                logger.info("Keyword %r matched %d datasets", keyword, len(outcome.records))
            outcomes.append(outcome)
        return outcomes

    async def search_keyword(
        self, keyword: str, major_category: str | None = None
    ) -> KeywordSearchOutcome:
        hits: dict[str, PublicData] = {}
        try:
            if is_region_keyword(keyword):
                await self._collect(keyword, _REGION_FIELDS, hits)
                if len(hits) >= self._region_sufficient_hits:
                    logger.info(
                        "Region keyword %r has %d hits; skipping remaining fields",
                        keyword,
                        len(hits),
                    )
                else:
                    await self._collect(keyword, _REGION_FALLBACK_FIELDS, hits)
            else:
                await self._collect(keyword, _ALL_FIELDS, hits)
        except Exception as exc:
            return KeywordSearchOutcome(keyword=keyword, error=exc)

        records = list(hits.values())
        dropped = 0
        if self._filters_by(major_category):
            records, dropped = self.filter_by_category(records, major_category)
        return KeywordSearchOutcome(keyword=keyword, records=records, dropped_by_filter=dropped)

    def filter_by_category(
        self, records: list[PublicData], major_category: str
    ) -> tuple[list[PublicData], int]:
        """Keep records whose classification contains the category; report how many were dropped."""
        needle = major_category.upper()
        kept = []
        for record in records:
            try:
                matches = bool(record.classification_system) and needle in record.classification_system.upper()
            except Exception as exc:
                logger.warning(
                    "Category filter failed for %r, dropping it: %s",
                    record.file_data_name,
                    exc,
                )
                matches = False
            if matches:
                kept.append(record)
        return kept, len(records) - len(kept)

    @staticmethod
    def deduplicate(records: list[PublicData]) -> DeduplicationOutcome:
        """One record per file name, first occurrence wins, unnamed records removed."""
        named = [r for r in records if r is not None and r.file_data_name is not None]
        try:
            unique: dict[str, PublicData] = {}
            for record in named:
                unique.setdefault(record.file_data_name, record)
            return DeduplicationOutcome(records=list(unique.values()))
        except Exception as exc:
            logger.warning("Name-based deduplication failed, using identity: %s", exc)
            by_identity = {id(r): r for r in named}
            return DeduplicationOutcome(records=list(by_identity.values()), fallback_error=exc)

    def _filters_by(self, major_category: str | None) -> bool:
        return bool(major_category) and major_category != self._general_category

    async def _collect(
        self, keyword: str, fields: tuple[str, ...], hits: dict[str, PublicData]
    ) -> None:
        for field_name in fields:
            for record in await self._lookups[field_name](keyword):
                if record.has_name:
                    hits.setdefault(record.file_data_name, record)
