"""
Admin analytics endpoints.
"""

from fastapi import APIRouter

from app.api.deps import AdminUser, ClientRepo
from app.core.config import get_settings
from app.models.analytics import AnalyticsSummary
from app.services.client_analytics import build_analytics_summary
from app.utils.datetime_utils import now_utc

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary", response_model=AnalyticsSummary)
async def get_analytics_summary(user: AdminUser, repo: ClientRepo) -> AnalyticsSummary:
    """Portfolio totals, average progress, at-risk count and upcoming due dates."""
    clients = await repo.list_with_milestones()
    return build_analytics_summary(
        clients,
        now_utc(),
        window_days=get_settings().UPCOMING_DUE_WINDOW_DAYS,
    )
