from .chat_provider import ChatProvider
from .public_data_repository import PublicDataRepository
from .query_planner import QueryPlanner
from .service_request_log_repository import ServiceRequestLogRepository
from .utilization_recommender import UtilizationRecommender

__all__ = [
    "ChatProvider",
    "PublicDataRepository",
    "QueryPlanner",
    "ServiceRequestLogRepository",
    "UtilizationRecommender",
]
