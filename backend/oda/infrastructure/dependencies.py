"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from oda.config import Settings, get_settings
from oda.application.interfaces import ChatProvider, QueryPlanner
from oda.application.services import (
    LLMUsageLogger,
    PromptService,
    RuleBasedQueryPlanner,
    UtilizationService,
)
from oda.infrastructure.database.session import get_db_session
from oda.infrastructure.database.repositories import (
    SQLAlchemyPublicDataRepository,
    SQLAlchemyServiceRequestLogRepository,
)
from oda.infrastructure.llm import OpenRouterQueryPlanner, OpenRouterUtilizationRecommender
from oda.infrastructure.openrouter import OpenRouterClient

logger = logging.getLogger(__name__)


def _build_chat_provider(settings: Settings) -> ChatProvider | None:
    """OpenRouter client, or None when no API key is configured."""
    if not settings.openrouter_api_key.strip():
        return None
    return OpenRouterClient(
        api_key=settings.openrouter_api_key,
        base_url=settings.openrouter_base_url,
        app_name=settings.openrouter_app_name,
    )


def build_query_planner(
    settings: Settings,
    provider: ChatProvider | None,
    usage_logger: LLMUsageLogger,
) -> QueryPlanner:
    rule_based = RuleBasedQueryPlanner(
        general_category=settings.general_category,
        max_limit=settings.max_result_limit,
    )
    if not settings.use_ai_planner:
        return rule_based
    if provider is None:
        logger.warning("USE_AI_PLANNER is set but OPENROUTER_API_KEY is empty; using rule-based planner.")
        return rule_based
    return OpenRouterQueryPlanner(
        chat_provider=provider,
        fallback=rule_based,
        model=settings.planner_model,
        usage_logger=usage_logger,
        general_category=settings.general_category,
    )


async def get_prompt_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PromptService, None]:
    """Provides a PromptService with the catalog repository and query planner."""
    settings = get_settings()
    usage_logger = LLMUsageLogger(SQLAlchemyServiceRequestLogRepository(session))
    planner = build_query_planner(settings, _build_chat_provider(settings), usage_logger)

    yield PromptService(
        repository=SQLAlchemyPublicDataRepository(session),
        planner=planner,
        general_category=settings.general_category,
        default_limit=settings.default_result_limit,
        max_limit=settings.max_result_limit,
        region_sufficient_hits=settings.region_sufficient_hits,
    )


async def get_utilization_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UtilizationService, None]:
    """Provides a UtilizationService; recommendations fall back to defaults without an API key."""
    settings = get_settings()
    provider = _build_chat_provider(settings)

    recommender = None
    if provider is not None:
        recommender = OpenRouterUtilizationRecommender(
            chat_provider=provider,
            model=settings.recommendation_model,
            usage_logger=LLMUsageLogger(SQLAlchemyServiceRequestLogRepository(session)),
        )

    yield UtilizationService(
        repository=SQLAlchemyPublicDataRepository(session),
        recommender=recommender,
    )
