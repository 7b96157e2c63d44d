# services/delegations.py
"""
Delegation repository.

Create and update are specified independently, each with its own column
list: update additionally writes ``completed_at``. Both accept participants
either as plain email strings or as user-shaped objects, and attachments as
plain filenames or upload descriptors; everything is normalized to scalars
before it reaches the table.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from database import get_db
from exceptions import NotFound, ValidationFailed
from models.delegation import Delegation, DelegationStatus
from schemas.delegation import (
    AttachmentEntry,
    AttachmentRef,
    DelegationCreate,
    DelegationUpdate,
    ParticipantRef,
    RichReference,
)

logger = logging.getLogger(__name__)

PARTICIPANT_FIELDS = ("assigned_by", "assigned_to", "notify_to", "auditor")
REQUIRED_FIELDS = ("task_name", "assigned_by", "assigned_to")

CREATE_COLUMNS = (
    "task_name", "assigned_by", "assigned_to", "planned_date", "priority", "message",
    "attachments", "assigned_pc", "group_name", "notify_to", "auditor",
    "make_attachment_mandatory", "make_note_mandatory", "notify_doer", "set_reminder",
    "reminder_mode", "reminder_frequency", "reminder_before_days", "reminder_starting_time",
    "status", "notes",
)

UPDATE_COLUMNS = (
    "task_name", "assigned_by", "assigned_to", "planned_date", "priority", "message",
    "attachments", "assigned_pc", "group_name", "notify_to", "auditor",
    "make_attachment_mandatory", "make_note_mandatory", "notify_doer", "set_reminder",
    "reminder_mode", "reminder_frequency", "reminder_before_days", "reminder_starting_time",
    "status", "completed_at", "notes",
)


def participant_email(ref: Optional[ParticipantRef]) -> Optional[str]:
    if isinstance(ref, RichReference):
        return ref.email or None
    return ref or None


def attachment_names(entries: Optional[List[AttachmentEntry]]) -> List[str]:
    names = []
    for entry in entries or []:
        name = entry.name if isinstance(entry, AttachmentRef) else entry
        if name:
            names.append(name)
    return names


def resolve_completed_at(
    status: Optional[str],
    requested: Optional[datetime],
    stored: Optional[datetime] = None,
) -> Optional[datetime]:
    """completed_at is set exactly when the status is Completed.

    Offset-aware timestamps are stored in UTC; SQLite drops the offset.
    """
    if status != DelegationStatus.COMPLETED.value:
        return None
    if requested is not None and requested.tzinfo is not None:
        requested = requested.astimezone(timezone.utc)
    return requested or stored or datetime.now(timezone.utc)


def _normalize(payload: DelegationCreate, columns) -> Dict[str, Any]:
    raw = payload.model_dump()
    values = {}
    for column in columns:
        value = raw.get(column)
        if column in PARTICIPANT_FIELDS:
            # model_dump turned RichReference into a dict; read the model attribute instead
            value = participant_email(getattr(payload, column))
        elif column == "attachments":
            value = attachment_names(payload.attachments)
        elif column == "status":
            value = (payload.status or DelegationStatus.PENDING).value
        values[column] = value

    fields = type(payload).model_fields
    missing = [fields[column].alias or column for column in REQUIRED_FIELDS if not values.get(column)]
    if missing:
        raise ValidationFailed(missing)
    return values


class DelegationRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Delegation]:
        return (
            self.db.query(Delegation)
            .order_by(Delegation.created_at.desc(), Delegation.id.desc())
            .all()
        )

    def get(self, delegation_id: int) -> Delegation:
        delegation = self.db.get(Delegation, delegation_id)
        if delegation is None:
            raise NotFound("Delegation")
        return delegation

    def create(self, payload: DelegationCreate) -> Delegation:
        values = _normalize(payload, CREATE_COLUMNS)
        values["completed_at"] = resolve_completed_at(values["status"], None)

        delegation = Delegation(**values)
        self.db.add(delegation)
        self.db.commit()
        self.db.refresh(delegation)

        logger.info(f"Created delegation {delegation.id} for {delegation.assigned_to}")
        return delegation

    def update(self, delegation_id: int, payload: DelegationUpdate) -> Delegation:
        delegation = self.get(delegation_id)
        values = _normalize(payload, UPDATE_COLUMNS)
        values["completed_at"] = resolve_completed_at(
            values["status"], values["completed_at"], delegation.completed_at
        )

        for column, value in values.items():
            setattr(delegation, column, value)
        self.db.commit()
        self.db.refresh(delegation)

        logger.info(f"Updated delegation {delegation_id} (status={delegation.status})")
        return delegation

    def delete(self, delegation_id: int) -> bool:
        """Delete by id; a missing id is not an error. Returns whether a row went away."""
        deleted = (
            self.db.query(Delegation)
            .filter(Delegation.id == delegation_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info(f"Deleted delegation {delegation_id}")
        return bool(deleted)


def get_delegation_repository(db: Session = Depends(get_db)) -> DelegationRepository:
    return DelegationRepository(db)
