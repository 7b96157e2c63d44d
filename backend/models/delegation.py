# backend/models/delegation.py
import enum
from sqlalchemy import Boolean, Column, Date, DateTime, Integer, JSON, String, Text, func
from sqlalchemy.dialects import postgresql
from database import Base


# Recognised delegation states; the column itself stays a plain string
class DelegationStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


# TEXT[] on PostgreSQL, JSON list everywhere else
AttachmentList = JSON().with_variant(postgresql.ARRAY(Text), "postgresql")


# Represents a delegated task: who assigned what to whom, and its reminder setup
class Delegation(Base):
    __tablename__ = "delegations"

    id = Column(Integer, primary_key=True, index=True)
    task_name = Column(String(255), nullable=False)

    # Participants are stored as plain email strings (no foreign keys)
    assigned_by = Column(String(255), nullable=False)
    assigned_to = Column(String(255), nullable=False, index=True)
    notify_to = Column(String(255), nullable=True)
    auditor = Column(String(255), nullable=True)

    planned_date = Column(Date, nullable=True)
    priority = Column(String(20), nullable=True)
    message = Column(Text, nullable=True)
    attachments = Column(AttachmentList, nullable=True)
    assigned_pc = Column(String(100), nullable=True)
    group_name = Column(String(100), nullable=True)

    # Compliance flags
    make_attachment_mandatory = Column(Boolean, nullable=True)
    make_note_mandatory = Column(Boolean, nullable=True)
    notify_doer = Column(Boolean, nullable=True)

    # Reminder settings, only meaningful when set_reminder is true
    set_reminder = Column(Boolean, nullable=True)
    reminder_mode = Column(String(20), nullable=True)
    reminder_frequency = Column(String(20), nullable=True)
    reminder_before_days = Column(Integer, nullable=True)
    reminder_starting_time = Column(String(10), nullable=True)

    status = Column(String(20), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
