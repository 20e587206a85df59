"""Port for turning a search prompt into a QueryPlan."""

from abc import ABC, abstractmethod

from oda.domain.entities import QueryPlan


class QueryPlanner(ABC):
    """Produces the category / keyword / limit plan for a search prompt."""

    @abstractmethod
    async def create_plan(self, prompt: str) -> QueryPlan:
        """Plan a search.

        The first keyword of the returned plan is treated as the primary
        keyword; planners should put the most salient term (usually a region)
        first.

        Raises:
            QueryPlanningError: If no plan can be produced.
        """
        ...
