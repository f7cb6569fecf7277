"""Checklist template models.

Templates are reusable checklist definitions. Creating a checklist copies
the template's items by value, so later template edits never change
existing checklists.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlmodel import Field, Relationship, SQLModel

from cobra.checklist.items import ItemType
from cobra.checklist.status_options import StatusOption, StatusOptionsType


class TemplateItem(SQLModel, table=True):
    """One item definition within a template."""
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    template_id: UUID = Field(foreign_key="template.id", index=True, ondelete="CASCADE")
    item_text: str
    item_type: str = Field(default=ItemType.CHECKBOX.value)
    display_order: int = 0
    is_required: bool = False
    status_options: list[StatusOption] | None = Field(
        default=None, sa_column=Column(StatusOptionsType)
    )
    allowed_positions: str | None = None  # Comma-separated
    default_notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Relationship
    template: Optional["Template"] = Relationship(back_populates="items")


class Template(SQLModel, table=True):
    """A reusable checklist definition.

    Attributes:
        id: Unique identifier (UUID).
        name: Template name, also the default prefix of checklist names.
        description: What the checklist is for.
        category: Grouping used in the template library.
        is_active: Inactive templates cannot be instantiated.
        is_archived: Soft-delete flag.
        items: Item definitions copied into each new checklist.
    """
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    description: str = ""
    category: str = ""
    is_active: bool = Field(default=True)
    is_archived: bool = Field(default=False)
    archived_by: str | None = None
    archived_at: datetime | None = None
    created_by: str = ""
    created_by_position: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    last_modified_by: str | None = None
    last_modified_by_position: str | None = None
    last_modified_at: datetime | None = None

    # Relationship
    items: list[TemplateItem] = Relationship(
        back_populates="template",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": [TemplateItem.display_order, TemplateItem.created_at],
        },
    )


class TemplateItemCreate(SQLModel):
    item_text: str
    item_type: str = ItemType.CHECKBOX.value
    display_order: int | None = None
    is_required: bool = False
    status_options: list[StatusOption] | None = None
    allowed_positions: str | None = None
    default_notes: str | None = None


class TemplateCreate(SQLModel):
    name: str
    description: str = ""
    category: str = ""
    items: list[TemplateItemCreate] = []


class TemplateUpdate(TemplateCreate):
    """Full replacement of a template, items included."""
    is_active: bool = True


class TemplateDuplicate(SQLModel):
    name: str


class TemplateItemRead(SQLModel):
    id: UUID
    item_text: str
    item_type: str
    display_order: int
    is_required: bool
    status_options: list[StatusOption] | None = None
    allowed_positions: str | None = None
    default_notes: str | None = None


class TemplateRead(SQLModel):
    id: UUID
    name: str
    description: str
    category: str
    is_active: bool
    is_archived: bool
    archived_by: str | None = None
    archived_at: datetime | None = None
    created_by: str
    created_at: datetime
    last_modified_by: str | None = None
    last_modified_at: datetime | None = None
    items: list[TemplateItemRead] = []
