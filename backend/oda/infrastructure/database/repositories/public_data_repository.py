"""Concrete catalog repository backed by SQLAlchemy."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from oda.application.interfaces import PublicDataRepository
from oda.domain.entities import PublicData
from oda.infrastructure.database.models import PublicDataModel


class SQLAlchemyPublicDataRepository(PublicDataRepository):
    """Implements the PublicDataRepository port using SQLAlchemy async sessions.

    Contains-lookups use ``ILIKE`` and return rows in primary-key order.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: PublicDataModel) -> PublicData:
        """Map ORM model → domain entity."""
        return PublicData(
            id=model.id,
            file_data_name=model.file_data_name,
            title=model.title,
            classification_system=model.classification_system,
            provider_agency=model.provider_agency,
            description=model.description,
            keywords=model.keywords,
            modified_date=model.modified_date,
            file_extension=model.file_extension,
        )

    def _to_model(self, entity: PublicData) -> PublicDataModel:
        """Map domain entity → ORM model (for creation)."""
        return PublicDataModel(
            file_data_name=entity.file_data_name,
            title=entity.title,
            classification_system=entity.classification_system,
            provider_agency=entity.provider_agency,
            description=entity.description,
            keywords=entity.keywords,
            modified_date=entity.modified_date,
            file_extension=entity.file_extension,
        )

    async def find_by_file_data_name(self, file_data_name: str) -> PublicData | None:
        stmt = (
            select(PublicDataModel)
            .where(PublicDataModel.file_data_name == file_data_name)
            .order_by(PublicDataModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def find_by_file_data_name_containing(self, text: str) -> list[PublicData]:
        return await self._find_containing(PublicDataModel.file_data_name, text)

    async def find_by_keywords_containing(self, text: str) -> list[PublicData]:
        return await self._find_containing(PublicDataModel.keywords, text)

    async def find_by_title_containing(self, text: str) -> list[PublicData]:
        return await self._find_containing(PublicDataModel.title, text)

    async def find_by_provider_agency_containing(self, text: str) -> list[PublicData]:
        return await self._find_containing(PublicDataModel.provider_agency, text)

    async def find_by_description_containing(self, text: str) -> list[PublicData]:
        return await self._find_containing(PublicDataModel.description, text)

    async def create(self, record: PublicData) -> PublicData:
        model = self._to_model(record)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def count(self) -> int:
        result = await self._session.execute(select(func.count(PublicDataModel.id)))
        return result.scalar_one()

    async def _find_containing(self, column: InstrumentedAttribute, text: str) -> list[PublicData]:
        stmt = (
            select(PublicDataModel)
            .where(column.ilike(f"%{_escape_like(text)}%", escape="\\"))
            .order_by(PublicDataModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
