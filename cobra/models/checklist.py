"""Checklist instance model.

A checklist instance is a live checklist created from a template. It
carries cached progress counters which are recalculated whenever one of its
items changes.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlmodel import Field, Relationship, SQLModel

from cobra.checklist.grouping import SectionType
from cobra.models.item import ChecklistItem, ChecklistItemRead

if TYPE_CHECKING:
    from cobra.models.event import Event
    from cobra.models.operational_period import OperationalPeriod
    from cobra.models.template import Template


class ChecklistInstance(SQLModel, table=True):
    """A checklist being worked during an event.

    Attributes:
        id: Unique identifier (UUID).
        name: Display name.
        template_id: Template the checklist was created from.
        event_id: Owning event.
        event_name: Denormalized event name for list views.
        operational_period_id: Period the checklist belongs to. None means
            an incident-level checklist.
        operational_period_name: Denormalized period name.
        assigned_positions: Comma-separated positions that see the
            checklist; None = everyone.
        progress_percentage: 0-100, two decimals.
        total_items, completed_items, required_items,
        required_items_completed: Cached progress counters.
        is_archived: Soft-delete flag. Archived checklists are read-only
            and left out of active views.
        items: Checklist items, in display order.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    template_id: UUID | None = Field(default=None, foreign_key="template.id")

    # Event context
    event_id: UUID = Field(foreign_key="event.id", index=True)
    event_name: str = ""
    operational_period_id: UUID | None = Field(
        default=None,
        foreign_key="operationalperiod.id",
        index=True,
        ondelete="SET NULL",
    )
    operational_period_name: str | None = None
    assigned_positions: str | None = None

    # Progress tracking
    progress_percentage: float = Field(default=0.0)
    total_items: int = Field(default=0)
    completed_items: int = Field(default=0)
    required_items: int = Field(default=0)
    required_items_completed: int = Field(default=0)

    is_archived: bool = Field(default=False, index=True)
    archived_by: str | None = None
    archived_at: datetime | None = None

    # Audit
    created_by: str = ""
    created_by_position: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_modified_by: str | None = None
    last_modified_by_position: str | None = None
    last_modified_at: datetime | None = None

    # Relationships
    items: list[ChecklistItem] = Relationship(
        back_populates="checklist",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": [ChecklistItem.display_order, ChecklistItem.created_at],
        },
    )
    event: Optional["Event"] = Relationship(back_populates="checklists")
    operational_period: Optional["OperationalPeriod"] = Relationship(
        back_populates="checklists"
    )
    template: Optional["Template"] = Relationship()


class ChecklistCreate(SQLModel):
    """Request body for creating a checklist from a template."""
    template_id: UUID
    event_id: UUID
    name: str | None = None
    operational_period_id: UUID | None = None
    assigned_positions: str | None = None


class ChecklistUpdate(SQLModel):
    name: str
    operational_period_id: UUID | None = None
    assigned_positions: str | None = None


class ChecklistClone(SQLModel):
    name: str
    preserve_status: bool = False


class ChecklistRead(SQLModel):
    id: UUID
    name: str
    template_id: UUID | None = None
    event_id: UUID
    event_name: str
    operational_period_id: UUID | None = None
    operational_period_name: str | None = None
    assigned_positions: str | None = None
    progress_percentage: float
    total_items: int
    completed_items: int
    required_items: int
    required_items_completed: int
    is_archived: bool
    archived_by: str | None = None
    archived_at: datetime | None = None
    created_by: str
    created_by_position: str
    created_at: datetime
    last_modified_by: str | None = None
    last_modified_by_position: str | None = None
    last_modified_at: datetime | None = None
    items: list[ChecklistItemRead] = []


class ChecklistSectionRead(SQLModel):
    type: SectionType
    operational_period_id: UUID | None = None
    operational_period_name: str | None = None
    checklists: list[ChecklistRead]
    sort_order: int
    average_progress: int


class ChecklistGroupingRead(SQLModel):
    event_id: UUID
    current_operational_period_id: UUID | None = None
    total_checklists: int
    has_current_period: bool
    sections: list[ChecklistSectionRead]
