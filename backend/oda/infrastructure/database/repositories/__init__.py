from .public_data_repository import SQLAlchemyPublicDataRepository
from .service_request_log_repository import SQLAlchemyServiceRequestLogRepository

__all__ = [
    "SQLAlchemyPublicDataRepository",
    "SQLAlchemyServiceRequestLogRepository",
]
