"""Port for AI-generated dataset utilization recommendations."""

from abc import ABC, abstractmethod
from typing import Any

from oda.domain.entities import PublicData


class UtilizationRecommender(ABC):
    """Asks an AI model how a dataset could be used."""

    @abstractmethod
    async def recommend_full(self, data: PublicData) -> dict[str, Any]:
        """Return the dashboard payload.

        Shape: ``{"success": True, "data": {"businessApplications": [...],
        "researchApplications": [...], "policyApplications": [...],
        "combinationSuggestions": [...], "analysisTools": [...]}}``.
        """
        ...

    @abstractmethod
    async def recommend_single(self, data: PublicData, user_prompt: str) -> list[str]:
        """Return free-form recommendations answering the user's own question."""
        ...
