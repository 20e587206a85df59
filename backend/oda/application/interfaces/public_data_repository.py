"""Abstract repository interface (port) for the dataset catalog."""

from abc import ABC, abstractmethod

from oda.domain.entities import PublicData


class PublicDataRepository(ABC):
    """Port for catalog lookups — implemented in the infrastructure layer.

    Every ``*_containing`` lookup is a case-insensitive substring match and
    returns records in repository order.
    """

    @abstractmethod
    async def find_by_file_data_name(self, file_data_name: str) -> PublicData | None:
        """Exact lookup by display name."""
        ...

    @abstractmethod
    async def find_by_file_data_name_containing(self, text: str) -> list[PublicData]:
        ...

    @abstractmethod
    async def find_by_keywords_containing(self, text: str) -> list[PublicData]:
        ...

    @abstractmethod
    async def find_by_title_containing(self, text: str) -> list[PublicData]:
        ...

    @abstractmethod
    async def find_by_provider_agency_containing(self, text: str) -> list[PublicData]:
        ...

    @abstractmethod
    async def find_by_description_containing(self, text: str) -> list[PublicData]:
        ...

    @abstractmethod
    async def create(self, record: PublicData) -> PublicData:
        """Persist a new record and return it with the generated ID."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Return the total number of records."""
        ...
