# services/analytics.py
from typing import Dict, List, Optional

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_db
from models.delegation import Delegation, DelegationStatus
from models.users import User
from schemas.analytics import AnalyticsResponse, RecentActivityItem, TeamMember, TopPerformer

COMPLETED = DelegationStatus.COMPLETED.value
IN_PROGRESS = DelegationStatus.IN_PROGRESS.value
PENDING = DelegationStatus.PENDING.value
OVERDUE = DelegationStatus.OVERDUE.value


def performance_score(assigned: int, completed: int) -> int:
    if assigned <= 0:
        return 0
    # Half-up rounding, so 2.5 becomes 3
    return (completed * 200 + assigned) // (2 * assigned)


# Summary counts and per-user reports built from independent queries.
# No snapshot is held across the queries, so concurrent writes may make
# one report slightly inconsistent with itself.
class AnalyticsAggregator:
    def __init__(self, db: Session):
        self.db = db

    def _count(self, status: Optional[str] = None, assigned_to: Optional[str] = None) -> int:
        query = self.db.query(func.count(Delegation.id))
        if status is not None:
            query = query.filter(Delegation.status == status)
        if assigned_to is not None:
            query = query.filter(Delegation.assigned_to == assigned_to)
        return query.scalar() or 0

    def _display_names(self, emails: List[str]) -> Dict[str, str]:
        # Full name when one is stored, raw email otherwise
        names = {email: email for email in emails}
        if emails:
            for user in self.db.query(User).filter(User.email.in_(emails)).all():
                names[user.email] = user.display_name
        return names

    def summary(self) -> Dict[str, int]:
        # In Progress is deliberately not part of this summary; /team reports it
        return {
            "total_delegations": self._count(),
            "completed_delegations": self._count(COMPLETED),
            "pending_delegations": self._count(PENDING),
            "overdue_delegations": self._count(OVERDUE),
        }

    def top_performers(self, limit: int = 3) -> List[TopPerformer]:
        completed = func.count(Delegation.id).label("completed")
        rows = (
            self.db.query(Delegation.assigned_to, completed)
            .filter(Delegation.status == COMPLETED)
            .group_by(Delegation.assigned_to)
            # Equal counts fall back to email order
            .order_by(completed.desc(), Delegation.assigned_to.asc())
            .limit(limit)
            .all()
        )
        names = self._display_names([row.assigned_to for row in rows])
        return [TopPerformer(name=names[row.assigned_to], completed=int(row.completed)) for row in rows]

    def recent_activity(self, limit: int = 3) -> List[RecentActivityItem]:
        rows = (
            self.db.query(Delegation.task_name, Delegation.assigned_to, Delegation.completed_at)
            .filter(Delegation.status == COMPLETED)
            .order_by(Delegation.completed_at.desc().nullslast(), Delegation.id.desc())
            .limit(limit)
            .all()
        )
        names = self._display_names(list({row.assigned_to for row in rows}))
        return [
            RecentActivityItem(task=row.task_name, user=names[row.assigned_to], date=row.completed_at)
            for row in rows
        ]

    def analytics(self, top: int = 3, recent: int = 3) -> AnalyticsResponse:
        return AnalyticsResponse(
            **self.summary(),
            top_performers=self.top_performers(top),
            recent_activity=self.recent_activity(recent),
        )

    def team_report(self) -> List[TeamMember]:
        members = []
        for user in self.db.query(User).order_by(User.id).all():
            assigned = self._count(assigned_to=user.email)
            completed = self._count(COMPLETED, user.email)
            members.append(TeamMember(
                id=user.email,
                name=user.display_name,
                email=user.email,
                role=user.role,
                department=user.department,
                phone=user.phone,
                tasks_assigned=assigned,
                tasks_completed=completed,
                tasks_in_progress=self._count(IN_PROGRESS, user.email),
                tasks_pending=self._count(PENDING, user.email),
                tasks_overdue=self._count(OVERDUE, user.email),
                performance_score=performance_score(assigned, completed),
            ))
        return members


def get_analytics(db: Session = Depends(get_db)) -> AnalyticsAggregator:
    return AnalyticsAggregator(db)
