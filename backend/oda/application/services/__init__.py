from .catalog_loader import CatalogLoader
from .llm_usage_logger import LLMUsageLogger
from .relevance_scorer import RelevanceScorer
from .rule_based_query_planner import RuleBasedQueryPlanner
from .search_executor import MultiFieldSearchExecutor
from .prompt_service import PromptService
from .utilization_service import UtilizationService

__all__ = [
    "CatalogLoader",
    "LLMUsageLogger",
    "RelevanceScorer",
    "RuleBasedQueryPlanner",
    "MultiFieldSearchExecutor",
    "PromptService",
    "UtilizationService",
]
