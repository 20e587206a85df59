from .public_data import PublicData
from .chat_message import ChatMessage, TokenUsage, ChatCompletionResult
from .service_request_log import ServiceRequestLog
from .query_plan import (
    QueryPlan,
    ScoredCandidate,
    KeywordSearchOutcome,
    DeduplicationOutcome,
)

__all__ = [
    "PublicData",
    "ChatMessage",
    "TokenUsage",
    "ChatCompletionResult",
    "ServiceRequestLog",
    "QueryPlan",
    "ScoredCandidate",
    "KeywordSearchOutcome",
    "DeduplicationOutcome",
]
