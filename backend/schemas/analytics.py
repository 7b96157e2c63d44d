# schemas/analytics.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Serialized with camelCase keys
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Schemas for the dashboard summary
class TopPerformer(CamelModel):
    name: str
    completed: int


class RecentActivityItem(CamelModel):
    task: str
    user: str
    date: Optional[datetime] = None


class AnalyticsResponse(CamelModel):
    total_delegations: int
    completed_delegations: int
    pending_delegations: int
    overdue_delegations: int
    top_performers: List[TopPerformer]
    recent_activity: List[RecentActivityItem]


# Per-user workload and performance row for GET /team
class TeamMember(CamelModel):
    id: str
    name: str
    email: str
    role: Optional[str] = None
    department: Optional[str] = None
    phone: Optional[str] = None
    status: str = "Active"
    tasks_assigned: int
    tasks_completed: int
    tasks_in_progress: int
    tasks_pending: int
    tasks_overdue: int
    performance_score: int
