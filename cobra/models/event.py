"""Event model for incidents and planned events.

An event is the top-level container for operational periods and the
checklists worked during the response.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from cobra.models.checklist import ChecklistInstance
    from cobra.models.operational_period import OperationalPeriod


class EventBase(SQLModel):
    name: str
    category: str | None = None
    is_active: bool = True


class Event(EventBase, table=True):
    """An incident or planned event.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name, e.g. "Hurricane Milton Response".
        category: Event category used to suggest templates.
        is_active: False once the event is closed out.
        is_archived: Soft-delete flag; archived events are hidden.
        created_by: Email of the user who created the event.
        created_at: Creation timestamp (UTC).
        operational_periods: Shifts defined for this event.
        checklists: Checklist instances worked during this event.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    is_archived: bool = Field(default=False)
    archived_by: str | None = None
    archived_at: datetime | None = None
    created_by: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationships
    operational_periods: list["OperationalPeriod"] = Relationship(back_populates="event")
    checklists: list["ChecklistInstance"] = Relationship(back_populates="event")


class EventCreate(EventBase):
    pass


class EventRead(EventBase):
    id: UUID
    is_archived: bool
    created_by: str
    created_at: datetime
