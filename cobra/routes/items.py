"""Item routes for updating checklist items.

Completion and status changes recalculate the owning checklist's progress
in the same transaction. Notes changes do not.
"""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlmodel import Session

from cobra.checklist import service
from cobra.core.database import get_session
from cobra.core.user import UserContext, get_user_context
from cobra.models.item import (
    ChecklistItemRead,
    ItemCompletionUpdate,
    ItemNotesUpdate,
    ItemStatusUpdate,
)

router = APIRouter(prefix="/checklists/{checklist_id}/items", tags=["items"])


@router.get("/{item_id}", response_model=ChecklistItemRead)
async def get_item(checklist_id: UUID, item_id: UUID, session: Session = Depends(get_session)):
    return service.get_item(session, checklist_id, item_id)


@router.patch("/{item_id}/completion", response_model=ChecklistItemRead)
async def update_item_completion(
    checklist_id: UUID,
    item_id: UUID,
    data: ItemCompletionUpdate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """
    Mark a checkbox item complete or incomplete.

    Returns 400 for status items or archived checklists.
    """
    return service.update_item_completion(
        session, checklist_id, item_id, data.is_completed, data.notes, user
    )


@router.patch("/{item_id}/status", response_model=ChecklistItemRead)
async def update_item_status(
    checklist_id: UUID,
    item_id: UUID,
    data: ItemStatusUpdate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    """
    Set a status item's status.

    The status must be one of the item's configured options, otherwise 400.
    """
    return service.update_item_status(
        session, checklist_id, item_id, data.status, data.notes, user
    )


@router.patch("/{item_id}/notes", response_model=ChecklistItemRead)
async def update_item_notes(
    checklist_id: UUID,
    item_id: UUID,
    data: ItemNotesUpdate,
    session: Session = Depends(get_session),
    user: UserContext = Depends(get_user_context),
):
    return service.update_item_notes(session, checklist_id, item_id, data.notes, user)
