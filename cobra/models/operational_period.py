"""Operational period model.

Operational periods divide an incident response into shifts, e.g.
"OP 1 - 12/20 0600-1800". They are optional: events without periods only
have incident-level checklists. At most one period per event is current.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from cobra.models.checklist import ChecklistInstance
    from cobra.models.event import Event


class OperationalPeriodBase(SQLModel):
    name: str
    start_time: datetime
    end_time: datetime | None = None  # None = still running
    is_current: bool = False
    description: str | None = None


class OperationalPeriod(OperationalPeriodBase, table=True):
    """A time-boxed shift within an event.

    Checklists reference a period by id only. Archiving or deleting a period
    detaches its checklists, which then show as incident-level.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    event_id: UUID = Field(foreign_key="event.id", index=True)
    is_archived: bool = Field(default=False)
    archived_by: str | None = None
    archived_at: datetime | None = None
    created_by: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_modified_by: str | None = None
    last_modified_at: datetime | None = None

    # Relationships
    event: Optional["Event"] = Relationship(back_populates="operational_periods")
    checklists: list["ChecklistInstance"] = Relationship(back_populates="operational_period")


class OperationalPeriodCreate(OperationalPeriodBase):
    pass


class OperationalPeriodRead(OperationalPeriodBase):
    id: UUID
    event_id: UUID
    is_archived: bool
    created_by: str
    created_at: datetime
