"""Abstract repository interface for service request logs."""

from abc import ABC, abstractmethod

from oda.domain.entities import ServiceRequestLog


class ServiceRequestLogRepository(ABC):
    """Port — defines persistence operations for service request logs."""

    @abstractmethod
    async def create(self, log: ServiceRequestLog) -> ServiceRequestLog:
        """Persist a new service request log entry.

        Returns:
            The created log with its assigned ID.
        """
        ...
