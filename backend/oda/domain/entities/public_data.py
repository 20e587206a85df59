"""Domain entity for one dataset in the public-data catalog."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PublicData:
    """Metadata of a single published dataset.

    Every descriptive field is optional: the catalog is imported from an
    external portal and rows are frequently incomplete. ``file_data_name``
    is the display and lookup key.
    """

    file_data_name: str | None
    title: str | None = None
    classification_system: str | None = None  # e.g. "교통및물류 - 도로"
    provider_agency: str | None = None
    description: str | None = None
    keywords: str | None = None  # comma-separated tags
    modified_date: datetime | None = None
    file_extension: str | None = None
    id: int | None = None

    @property
    def has_name(self) -> bool:
        """True when the record can appear in a result set."""
        return bool(self.file_data_name and self.file_data_name.strip())
