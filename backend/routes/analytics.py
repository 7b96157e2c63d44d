# backend/routes/analytics.py
from typing import List

from fastapi import APIRouter, Depends, Query

from schemas.analytics import AnalyticsResponse, TeamMember
from services.analytics import AnalyticsAggregator, get_analytics

router = APIRouter(tags=["Analytics"])


# === Dashboard summary, top performers and recent completions ===

@router.get("/analytics", response_model=AnalyticsResponse)
def get_dashboard(
    top: int = Query(3, ge=1, le=50, description="Number of top performers"),
    recent: int = Query(3, ge=1, le=50, description="Number of recent completions"),
    analytics: AnalyticsAggregator = Depends(get_analytics),
):
    return analytics.analytics(top=top, recent=recent)


# === Per-user workload and performance ===

@router.get("/team", response_model=List[TeamMember])
def get_team(analytics: AnalyticsAggregator = Depends(get_analytics)):
    return analytics.team_report()
