"""Catalog loader — seeds the public_data table from a portal CSV export.

Column headers may be the portal's Korean names or the snake_case field
names. Rows without a file name, and names already in the catalog, are
skipped, so loading the same file twice is a no-op.
"""

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from oda.application.interfaces import PublicDataRepository
from oda.domain.entities import PublicData

logger = logging.getLogger(__name__)

COLUMN_ALIASES: dict[str, str] = {
    "파일데이터명": "file_data_name",
    "제목": "title",
    "분류체계": "classification_system",
    "제공기관": "provider_agency",
    "설명": "description",
    "키워드": "keywords",
    "수정일": "modified_date",
    "확장자": "file_extension",
}

_FIELDS = (
    "file_data_name",
    "title",
    "classification_system",
    "provider_agency",
    "description",
    "keywords",
    "file_extension",
)


def _text(value: object) -> str | None:
    text = str(value).strip() if value is not None else ""
    return text or None


def _parse_date(value: object) -> datetime | None:
    text = _text(value)
    if text is None:
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        logger.debug("Unparseable modified date %r", text)
        return None
    return parsed.to_pydatetime()


def read_catalog(path: str | Path) -> list[PublicData]:
    """Parse a catalog CSV into entities (no persistence)."""
    df = pd.read_csv(path, dtype=str, encoding="utf-8-sig").fillna("")
    df = df.rename(columns={c: COLUMN_ALIASES.get(c.strip(), c.strip()) for c in df.columns})

    records = []
    for row in df.to_dict(orient="records"):
        record = PublicData(
            **{name: _text(row.get(name)) for name in _FIELDS},
            modified_date=_parse_date(row.get("modified_date")),
        )
        if record.has_name:
            records.append(record)
    return records


class CatalogLoader:
    """Loads catalog rows into the repository, skipping names already present."""

    def __init__(self, repository: PublicDataRepository):
        self._repository = repository

    async def load(self, path: str | Path) -> int:
        """Import the CSV at ``path``; returns the number of new records."""
        path = Path(path)
        if not path.is_file():
            logger.warning("Catalog file not found: %s", path)
            return 0

        created = 0
        seen: set[str] = set()
        for record in read_catalog(path):
            if record.file_data_name in seen:
                continue
            seen.add(record.file_data_name)
            if await self._repository.find_by_file_data_name(record.file_data_name) is not None:
                continue
            await self._repository.create(record)
            created += 1

        total = await self._repository.count()
        logger.info("Catalog %s: %d new datasets loaded, %d in total", path.name, created, total)
        return created
