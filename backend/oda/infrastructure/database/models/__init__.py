from .public_data import PublicDataModel
from .service_request_log import ServiceRequestLogModel

__all__ = [
    "PublicDataModel",
    "ServiceRequestLogModel",
]
