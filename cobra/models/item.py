"""Checklist item model.

Items belong to exactly one checklist instance and are deleted with it.
Only the fields of an item's own type carry meaning: ``is_completed`` and
the completion actor for checkbox items, ``current_status`` and
``status_options`` for status items.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlmodel import Field, Relationship, SQLModel

from cobra.checklist.items import ItemType
from cobra.checklist.status_options import StatusOption, StatusOptionsType

if TYPE_CHECKING:
    from cobra.models.checklist import ChecklistInstance


class ChecklistItem(SQLModel, table=True):
    """A single line of a checklist instance.

    Attributes:
        id: Unique identifier (UUID).
        checklist_instance_id: Owning checklist.
        template_item_id: Template item this was copied from, if any.
        item_text: What needs doing.
        item_type: "checkbox" or "status".
        display_order: Ascending presentation order.
        is_required: Counted separately in required-item progress.
        is_completed: None = untouched, False = explicitly incomplete,
            True = complete. Checkbox items only.
        current_status: Selected status label. Status items only.
        status_options: Allowed statuses, deserialized when loaded.
        allowed_positions: Comma-separated positions expected to work the
            item, copied from the template.
        notes: Free text.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    checklist_instance_id: UUID = Field(
        foreign_key="checklistinstance.id", index=True, ondelete="CASCADE"
    )
    template_item_id: UUID | None = None
    item_text: str
    item_type: str = Field(default=ItemType.CHECKBOX.value)
    display_order: int = 0
    is_required: bool = False

    # Checkbox fields
    is_completed: bool | None = None
    completed_by: str | None = None
    completed_by_position: str | None = None
    completed_at: datetime | None = None

    # Status fields
    current_status: str | None = None
    status_options: list[StatusOption] | None = Field(
        default=None, sa_column=Column(StatusOptionsType)
    )

    allowed_positions: str | None = None
    notes: str | None = None

    # Audit
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_modified_by: str | None = None
    last_modified_by_position: str | None = None
    last_modified_at: datetime | None = None

    # Relationship
    checklist: Optional["ChecklistInstance"] = Relationship(back_populates="items")


class ChecklistItemRead(SQLModel):
    id: UUID
    checklist_instance_id: UUID
    template_item_id: UUID | None = None
    item_text: str
    item_type: str
    display_order: int
    is_required: bool
    is_completed: bool | None = None
    completed_by: str | None = None
    completed_by_position: str | None = None
    completed_at: datetime | None = None
    current_status: str | None = None
    status_options: list[StatusOption] | None = None
    allowed_positions: str | None = None
    notes: str | None = None
    created_at: datetime
    last_modified_by: str | None = None
    last_modified_by_position: str | None = None
    last_modified_at: datetime | None = None


class ItemCompletionUpdate(SQLModel):
    is_completed: bool
    notes: str | None = None


class ItemStatusUpdate(SQLModel):
    status: str
    notes: str | None = None


class ItemNotesUpdate(SQLModel):
    notes: str | None = None
