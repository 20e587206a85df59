"""LLM infrastructure module — AI-backed planners and recommenders."""

from .openrouter_query_planner import OpenRouterQueryPlanner
from .openrouter_utilization_recommender import OpenRouterUtilizationRecommender

__all__ = [
    "OpenRouterQueryPlanner",
    "OpenRouterUtilizationRecommender",
]
