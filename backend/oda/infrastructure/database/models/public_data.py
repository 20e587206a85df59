"""SQLAlchemy ORM model for catalog datasets."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from oda.infrastructure.database.base import Base


class PublicDataModel(Base):
    """ORM model — maps to the 'public_data' table."""

    __tablename__ = "public_data"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    file_data_name: Mapped[str | None] = mapped_column(String(500), nullable=True, index=True)
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    classification_system: Mapped[str | None] = mapped_column(String(255), nullable=True)
    provider_agency: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    keywords: Mapped[str | None] = mapped_column(Text, nullable=True)
    modified_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    file_extension: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<PublicDataModel(id={self.id}, file_data_name='{self.file_data_name}')>"
