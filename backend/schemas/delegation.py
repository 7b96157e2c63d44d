# schemas/delegation.py
from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.delegation import DelegationStatus


# A participant given as a user-shaped object; only the email is kept
class RichReference(BaseModel):
    email: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


# An attachment given as an upload descriptor; only the name is kept
class AttachmentRef(BaseModel):
    name: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


# Either a plain email string or an object exposing .email
ParticipantRef = Union[str, RichReference]
# Either a plain filename or an object exposing .name
AttachmentEntry = Union[str, AttachmentRef]


# Incoming delegation payload (camelCase keys, snake_case also accepted)
class DelegationCreate(BaseModel):
    task_name: Optional[str] = None
    assigned_by: Optional[ParticipantRef] = None
    assigned_to: Optional[ParticipantRef] = None
    planned_date: Optional[date] = None
    priority: Optional[str] = None
    message: Optional[str] = None
    attachments: Optional[List[AttachmentEntry]] = None
    assigned_pc: Optional[str] = Field(None, alias="assignedPC")
    group_name: Optional[str] = None
    notify_to: Optional[ParticipantRef] = None
    auditor: Optional[ParticipantRef] = None
    make_attachment_mandatory: Optional[bool] = None
    make_note_mandatory: Optional[bool] = None
    notify_doer: Optional[bool] = None
    set_reminder: Optional[bool] = None
    reminder_mode: Optional[str] = None
    reminder_frequency: Optional[str] = None
    reminder_before_days: Optional[int] = None
    reminder_starting_time: Optional[str] = None
    status: Optional[DelegationStatus] = None
    notes: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Full replace of a delegation; additionally carries the completion time
class DelegationUpdate(DelegationCreate):
    completed_at: Optional[datetime] = None


# Stored delegation row, returned with its column names
class DelegationOut(BaseModel):
    id: int
    task_name: str
    assigned_by: str
    assigned_to: str
    planned_date: Optional[date] = None
    priority: Optional[str] = None
    message: Optional[str] = None
    attachments: List[str] = []
    assigned_pc: Optional[str] = None
    group_name: Optional[str] = None
    notify_to: Optional[str] = None
    auditor: Optional[str] = None
    make_attachment_mandatory: Optional[bool] = None
    make_note_mandatory: Optional[bool] = None
    notify_doer: Optional[bool] = None
    set_reminder: Optional[bool] = None
    reminder_mode: Optional[str] = None
    reminder_frequency: Optional[str] = None
    reminder_before_days: Optional[int] = None
    reminder_starting_time: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("attachments", mode="before")
    @classmethod
    def null_attachments(cls, v):
        return v or []
