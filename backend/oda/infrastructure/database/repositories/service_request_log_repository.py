"""Concrete repository for LLM request logs backed by SQLAlchemy."""

from sqlalchemy.ext.asyncio import AsyncSession

from oda.application.interfaces import ServiceRequestLogRepository
from oda.domain.entities import ServiceRequestLog
from oda.infrastructure.database.models import ServiceRequestLogModel


class SQLAlchemyServiceRequestLogRepository(ServiceRequestLogRepository):
    """Implements the ServiceRequestLogRepository port using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ServiceRequestLogModel) -> ServiceRequestLog:
        """Map ORM model → domain entity."""
        return ServiceRequestLog(
            id=model.id,
            model=model.model,
            provider=model.provider,
            prompt_tokens=model.prompt_tokens,
            completion_tokens=model.completion_tokens,
            total_tokens=model.total_tokens,
            cost=model.cost,
            duration_ms=model.duration_ms,
            status=model.status,
            error_message=model.error_message,
            feature=model.feature,
            request_context=model.request_context,
            created_at=model.created_at,
        )

    def _to_model(self, entity: ServiceRequestLog) -> ServiceRequestLogModel:
        """Map domain entity → ORM model."""
        return ServiceRequestLogModel(
            model=entity.model,
            provider=entity.provider,
            prompt_tokens=entity.prompt_tokens,
            completion_tokens=entity.completion_tokens,
            total_tokens=entity.total_tokens,
            cost=entity.cost,
            duration_ms=entity.duration_ms,
            status=entity.status,
            error_message=entity.error_message,
            feature=entity.feature,
            request_context=entity.request_context,
            created_at=entity.created_at,
        )

    async def create(self, log: ServiceRequestLog) -> ServiceRequestLog:
        model = self._to_model(log)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)
