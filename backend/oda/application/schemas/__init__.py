from .prompt import DetailRequest, PromptRequest, PromptResponse
from .utilization import (
    DataInfo,
    FullUtilizationRequest,
    SingleUtilizationRequest,
    UtilizationTextResponse,
)

__all__ = [
    "DetailRequest",
    "PromptRequest",
    "PromptResponse",
    "DataInfo",
    "FullUtilizationRequest",
    "SingleUtilizationRequest",
    "UtilizationTextResponse",
]
